"""Execution environment: chain configuration, block and transaction data."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from .bits import B160, B256
from .result import InvalidTransaction, InvalidTransactionKind, PrevrandaoNotSetError
from .specification import SpecId, spec_enabled
from .state import Account
from .utilities import KECCAK_EMPTY, MAX_INITCODE_SIZE

U256_MAX = 2**256 - 1
U64_MAX = 2**64 - 1


@dataclass(frozen=True)
class CreateScheme:
    """How a contract address is derived: CREATE without a salt, CREATE2 with one."""

    salt: int | None = None

    @property
    def is_create2(self) -> bool:
        return self.salt is not None


@dataclass(frozen=True)
class TransactTo:
    """Target of a transaction: a call to an address or a contract creation."""

    address: B160 | None = None
    scheme: CreateScheme | None = None

    def __post_init__(self) -> None:
        if (self.address is None) == (self.scheme is None):
            raise ValueError("a transaction either calls an address or creates a contract")

    @classmethod
    def call(cls, address: B160) -> "TransactTo":
        return cls(address=address)

    @classmethod
    def create(cls, salt: int | None = None) -> "TransactTo":
        """Creation with CREATE, or with CREATE2 when ``salt`` is given."""
        return cls(scheme=CreateScheme(salt))

    def is_create(self) -> bool:
        return self.scheme is not None


class AnalysisKind(Enum):
    """How bytecode created by CREATE/CREATE2 is processed."""

    RAW = "Raw"
    CHECK = "Check"
    ANALYSE = "Analyse"


@dataclass
class CfgEnv:
    """Chain configuration and switches that relax validation."""

    chain_id: int = 1
    spec_id: SpecId = SpecId.LATEST
    perf_analyse_created_bytecodes: AnalysisKind = AnalysisKind.ANALYSE
    limit_contract_code_size: int | None = None
    memory_limit: int = 2**32 - 1
    disable_balance_check: bool = False
    disable_block_gas_limit: bool = False
    disable_eip3607: bool = False
    disable_gas_refund: bool = False
    disable_base_fee: bool = False


@dataclass
class BlockEnv:
    """Data of the block the transaction runs in."""

    number: int = 0
    coinbase: B160 = field(default_factory=B160.zero)
    timestamp: int = 1
    difficulty: int = 0
    prevrandao: B256 | None = field(default_factory=B256.zero)
    basefee: int = 0
    gas_limit: int = U256_MAX


@dataclass
class TxEnv:
    """Data of the transaction being executed."""

    caller: B160 = field(default_factory=B160.zero)
    gas_limit: int = U64_MAX
    gas_price: int = 0
    gas_priority_fee: int | None = None
    transact_to: TransactTo = field(default_factory=lambda: TransactTo.call(B160.zero()))
    value: int = 0
    data: bytes = b""
    chain_id: int | None = None
    nonce: int | None = None
    access_list: list[tuple[B160, list[int]]] = field(default_factory=list)


@dataclass
class Env:
    """Configuration, block and transaction together."""

    cfg: CfgEnv = field(default_factory=CfgEnv)
    block: BlockEnv = field(default_factory=BlockEnv)
    tx: TxEnv = field(default_factory=TxEnv)

    def effective_gas_price(self) -> int:
        """Gas price actually paid, capped by base fee plus priority fee."""
        if self.tx.gas_priority_fee is None:
            return self.tx.gas_price
        return min(self.tx.gas_price, self.block.basefee + self.tx.gas_priority_fee)

    def validate_block_env(self, spec_id: SpecId) -> None:
        """Raise PrevrandaoNotSetError if prevrandao is missing after the merge."""
        if spec_enabled(SpecId(spec_id), SpecId.MERGE) and self.block.prevrandao is None:
            raise PrevrandaoNotSetError()

    def validate_tx(self, spec_id: SpecId) -> None:
        """Check transaction fields against the block and configuration."""
        spec = SpecId(spec_id)
        tx = self.tx

        if spec_enabled(spec, SpecId.LONDON):
            if tx.gas_priority_fee is not None and tx.gas_priority_fee > tx.gas_price:
                raise InvalidTransaction(
                    InvalidTransactionKind.GAS_MAX_FEE_GREATER_THAN_PRIORITY_FEE
                )
            if (
                not self.cfg.disable_base_fee
                and self.effective_gas_price() < self.block.basefee
            ):
                raise InvalidTransaction(InvalidTransactionKind.GAS_PRICE_LESS_THAN_BASEFEE)

        if not self.cfg.disable_block_gas_limit and tx.gas_limit > self.block.gas_limit:
            raise InvalidTransaction(InvalidTransactionKind.CALLER_GAS_LIMIT_MORE_THAN_BLOCK)

        if spec_enabled(spec, SpecId.SHANGHAI) and tx.transact_to.is_create():
            limit = self.cfg.limit_contract_code_size
            max_initcode_size = (
                MAX_INITCODE_SIZE if limit is None else min(limit * 2, U64_MAX)
            )
            if len(tx.data) > max_initcode_size:
                raise InvalidTransaction(InvalidTransactionKind.CREATE_INITCODE_SIZE_LIMIT)

        if tx.chain_id is not None and tx.chain_id != self.cfg.chain_id:
            raise InvalidTransaction(InvalidTransactionKind.INVALID_CHAIN_ID)

        if not spec_enabled(spec, SpecId.BERLIN) and tx.access_list:
            raise InvalidTransaction(InvalidTransactionKind.ACCESS_LIST_NOT_SUPPORTED)

    def validate_tx_against_state(self, account: Account) -> None:
        """Check the transaction against the sender's account."""
        if not self.cfg.disable_eip3607 and account.info.code_hash != KECCAK_EMPTY:
            raise InvalidTransaction(InvalidTransactionKind.REJECT_CALLER_WITH_CODE)

        if self.tx.nonce is not None:
            tx_nonce, state_nonce = self.tx.nonce, account.info.nonce
            if tx_nonce > state_nonce:
                raise InvalidTransaction(
                    InvalidTransactionKind.NONCE_TOO_HIGH, tx=tx_nonce, state=state_nonce
                )
            if tx_nonce < state_nonce:
                raise InvalidTransaction(
                    InvalidTransactionKind.NONCE_TOO_LOW, tx=tx_nonce, state=state_nonce
                )

        gas_cost = self.tx.gas_limit * self.tx.gas_price
        if gas_cost > U256_MAX:
            raise InvalidTransaction(InvalidTransactionKind.OVERFLOW_PAYMENT_IN_TRANSACTION)
        balance_check = gas_cost + self.tx.value
        if balance_check > U256_MAX:
            raise InvalidTransaction(InvalidTransactionKind.OVERFLOW_PAYMENT_IN_TRANSACTION)

        if not self.cfg.disable_balance_check and balance_check > account.info.balance:
            raise InvalidTransaction(
                InvalidTransactionKind.LACK_OF_FUND_FOR_MAX_FEE,
                fee=self.tx.gas_limit,
                balance=account.info.balance,
            )