"""Execution outcomes, logs and the errors a transaction can end in."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from .bits import B160, B256
from .state import Account


@dataclass(frozen=True)
class Log:
    """A log entry emitted by a contract."""

    address: B160
    topics: tuple[B256, ...] = ()
    data: bytes = b""

    def __post_init__(self) -> None:
        object.__setattr__(self, "topics", tuple(self.topics))
        object.__setattr__(self, "data", bytes(self.data))


class Eval(Enum):
    """Ways a transaction can end successfully."""

    STOP = "Stop"
    RETURN = "Return"
    SELF_DESTRUCT = "SelfDestruct"


class OutOfGasError(Enum):
    """Causes of running out of gas."""

    BASIC_OUT_OF_GAS = "BasicOutOfGas"
    MEMORY_LIMIT = "MemoryLimit"
    MEMORY = "Memory"
    PRECOMPILE = "Precompile"
    INVALID_OPERAND = "InvalidOperand"


class Halt(Enum):
    """Exceptional halts, which consume all gas."""

    OUT_OF_GAS = "OutOfGas"
    OPCODE_NOT_FOUND = "OpcodeNotFound"
    INVALID_FE_OPCODE = "InvalidFEOpcode"
    INVALID_JUMP = "InvalidJump"
    NOT_ACTIVATED = "NotActivated"
    STACK_UNDERFLOW = "StackUnderflow"
    STACK_OVERFLOW = "StackOverflow"
    OUT_OF_OFFSET = "OutOfOffset"
    CREATE_COLLISION = "CreateCollision"
    PRECOMPILE_ERROR = "PrecompileError"
    NONCE_OVERFLOW = "NonceOverflow"
    CREATE_CONTRACT_SIZE_LIMIT = "CreateContractSizeLimit"
    CREATE_CONTRACT_STARTING_WITH_EF = "CreateContractStartingWithEF"
    CREATE_INITCODE_SIZE_LIMIT = "CreateInitcodeSizeLimit"
    OVERFLOW_PAYMENT = "OverflowPayment"
    STATE_CHANGE_DURING_STATIC_CALL = "StateChangeDuringStaticCall"
    CALL_NOT_ALLOWED_INSIDE_STATIC = "CallNotAllowedInsideStatic"
    OUT_OF_FUND = "OutOfFund"
    CALL_TOO_DEEP = "CallTooDeep"


class OutputKind(Enum):
    CALL = "Call"
    CREATE = "Create"


@dataclass(frozen=True)
class Output:
    """Returned data of a call, or of a create with the new contract's address."""

    kind: OutputKind
    data: bytes = b""
    address: B160 | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "data", bytes(self.data))
        if self.kind is OutputKind.CALL and self.address is not None:
            raise ValueError("call output carries no address")

    @classmethod
    def call(cls, data: bytes) -> "Output":
        return cls(OutputKind.CALL, data)

    @classmethod
    def create(cls, data: bytes, address: B160 | None = None) -> "Output":
        return cls(OutputKind.CREATE, data, address)


class ExecutionResult:
    """Common interface of the three possible execution outcomes."""

    gas_used: int

    def is_success(self) -> bool:
        return False

    def logs(self) -> list[Log]:
        """Emitted logs; empty unless execution succeeded."""
        return []

    def output(self) -> bytes | None:
        """Output data, or None if execution halted."""
        return None


@dataclass(frozen=True)
class SuccessResult(ExecutionResult):
    reason: Eval
    gas_used: int
    gas_refunded: int
    emitted_logs: tuple[Log, ...]
    outcome: Output

    def __post_init__(self) -> None:
        object.__setattr__(self, "emitted_logs", tuple(self.emitted_logs))

    def is_success(self) -> bool:
        return True

    def logs(self) -> list[Log]:
        return list(self.emitted_logs)

    def output(self) -> bytes | None:
        return self.outcome.data


@dataclass(frozen=True)
class RevertResult(ExecutionResult):
    """Reverted by REVERT without spending all gas."""

    gas_used: int
    revert_data: bytes = b""

    def __post_init__(self) -> None:
        object.__setattr__(self, "revert_data", bytes(self.revert_data))

    def output(self) -> bytes | None:
        return self.revert_data


@dataclass(frozen=True)
class HaltResult(ExecutionResult):
    """Halted exceptionally; ``out_of_gas`` is set exactly when the reason is OUT_OF_GAS."""

    reason: Halt
    gas_used: int
    out_of_gas: OutOfGasError | None = None

    def __post_init__(self) -> None:
        if (self.reason is Halt.OUT_OF_GAS) != (self.out_of_gas is not None):
            raise ValueError("out_of_gas is required for OUT_OF_GAS and only for it")


@dataclass
class ResultAndState:
    """Execution result and the accounts it changed."""

    result: ExecutionResult
    state: dict[B160, Account] = field(default_factory=dict)


class InvalidTransactionKind(Enum):
    GAS_MAX_FEE_GREATER_THAN_PRIORITY_FEE = "GasMaxFeeGreaterThanPriorityFee"
    GAS_PRICE_LESS_THAN_BASEFEE = "GasPriceLessThanBasefee"
    CALLER_GAS_LIMIT_MORE_THAN_BLOCK = "CallerGasLimitMoreThanBlock"
    CALL_GAS_COST_MORE_THAN_GAS_LIMIT = "CallGasCostMoreThanGasLimit"
    REJECT_CALLER_WITH_CODE = "RejectCallerWithCode"
    LACK_OF_FUND_FOR_MAX_FEE = "LackOfFundForMaxFee"
    OVERFLOW_PAYMENT_IN_TRANSACTION = "OverflowPaymentInTransaction"
    NONCE_OVERFLOW_IN_TRANSACTION = "NonceOverflowInTransaction"
    NONCE_TOO_HIGH = "NonceTooHigh"
    NONCE_TOO_LOW = "NonceTooLow"
    CREATE_INITCODE_SIZE_LIMIT = "CreateInitcodeSizeLimit"
    INVALID_CHAIN_ID = "InvalidChainId"
    ACCESS_LIST_NOT_SUPPORTED = "AccessListNotSupported"


_DETAIL_FIELDS = {
    InvalidTransactionKind.LACK_OF_FUND_FOR_MAX_FEE: ("fee", "balance"),
    InvalidTransactionKind.NONCE_TOO_HIGH: ("tx", "state"),
    InvalidTransactionKind.NONCE_TOO_LOW: ("tx", "state"),
}


class InvalidTransaction(Exception):
    """A transaction failed validation."""

    def __init__(
        self,
        kind: InvalidTransactionKind,
        *,
        fee: int | None = None,
        balance: int | None = None,
        tx: int | None = None,
        state: int | None = None,
    ) -> None:
        given = {"fee": fee, "balance": balance, "tx": tx, "state": state}
        required = _DETAIL_FIELDS.get(kind, ())
        supplied = tuple(name for name, value in given.items() if value is not None)
        if set(supplied) != set(required):
            raise TypeError(
                f"{kind.value} takes details {required or 'none'}, got {supplied or 'none'}"
            )
        self.kind = kind
        self.fee = fee
        self.balance = balance
        self.tx = tx
        self.state = state
        self._details = tuple((name, given[name]) for name in required)
        super().__init__(self._describe())

    def _describe(self) -> str:
        if not self._details:
            return self.kind.value
        inner = ", ".join(f"{name}: {value}" for name, value in self._details)
        return f"{self.kind.value} {{ {inner} }}"

    def __repr__(self) -> str:
        return f"InvalidTransaction({self._describe()})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, InvalidTransaction):
            return NotImplemented
        return self.kind is other.kind and self._details == other._details

    def __hash__(self) -> int:
        return hash((self.kind, self._details))


class EVMError(Exception):
    """Base class of errors that stop a transaction from being executed."""


class TransactionError(EVMError):
    """The transaction is invalid."""

    def __init__(self, invalid: InvalidTransaction) -> None:
        super().__init__(f"Transaction error: {invalid._describe()}")
        self.invalid = invalid


class PrevrandaoNotSetError(EVMError):
    """The block environment lacks prevrandao after the merge."""

    def __init__(self) -> None:
        super().__init__("Prevrandao not set")


class DatabaseError(EVMError):
    """The database backend failed."""

    def __init__(self, error: object) -> None:
        super().__init__(f"Database error: {error}")
        self.error = error