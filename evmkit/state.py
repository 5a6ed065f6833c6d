"""Account state: balances, nonces, code, storage and status flags."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntFlag

from .bits import B160, B256
from .bytecode import Bytecode
from .utilities import KECCAK_EMPTY


class AccountStatus(IntFlag):
    """Status flags of an account during execution."""

    LOADED = 0
    CREATED = 0b0001
    SELF_DESTRUCTED = 0b0010
    TOUCHED = 0b0100
    LOADED_AS_NOT_EXISTING = 0b1000


@dataclass
class StorageSlot:
    """A storage value with the value it had before the transaction."""

    previous_or_original_value: int = 0
    present_value: int = 0

    @classmethod
    def new(cls, original: int) -> "StorageSlot":
        return cls(original, original)

    @classmethod
    def new_changed(
        cls, previous_or_original_value: int, present_value: int
    ) -> "StorageSlot":
        return cls(previous_or_original_value, present_value)

    def is_changed(self) -> bool:
        """True if the present value differs from the original one."""
        return self.previous_or_original_value != self.present_value

    def original_value(self) -> int:
        return self.previous_or_original_value


@dataclass
class AccountInfo:
    """Balance, nonce and code of an account; code is not compared for equality."""

    balance: int = 0
    nonce: int = 0
    code_hash: B256 = KECCAK_EMPTY
    code: Bytecode | None = field(default_factory=Bytecode, compare=False)

    @classmethod
    def from_balance(cls, balance: int) -> "AccountInfo":
        return cls(balance=balance)

    def is_empty(self) -> bool:
        """True when balance and nonce are zero and there is no code."""
        code_empty = self.code_hash == KECCAK_EMPTY or self.code_hash == B256.zero()
        return self.balance == 0 and self.nonce == 0 and code_empty

    def exists(self) -> bool:
        return not self.is_empty()

    def take_bytecode(self) -> Bytecode | None:
        """Remove the code from the account and return it."""
        code, self.code = self.code, None
        return code


@dataclass
class Account:
    """An account with its cached storage and status flags."""

    info: AccountInfo = field(default_factory=AccountInfo)
    storage: dict[int, StorageSlot] = field(default_factory=dict)
    status: AccountStatus = AccountStatus.LOADED

    @classmethod
    def from_info(cls, info: AccountInfo) -> "Account":
        return cls(info=info, storage={}, status=AccountStatus.LOADED)

    @classmethod
    def new_not_existing(cls) -> "Account":
        return cls(status=AccountStatus.LOADED_AS_NOT_EXISTING)

    def _set(self, flag: AccountStatus) -> None:
        self.status = AccountStatus(self.status | flag)

    def _clear(self, flag: AccountStatus) -> None:
        self.status = AccountStatus(int(self.status) & ~int(flag))

    def _has(self, flag: AccountStatus) -> bool:
        return (self.status & flag) == flag

    def mark_selfdestruct(self) -> None:
        self._set(AccountStatus.SELF_DESTRUCTED)

    def unmark_selfdestruct(self) -> None:
        self._clear(AccountStatus.SELF_DESTRUCTED)

    def is_selfdestructed(self) -> bool:
        return self._has(AccountStatus.SELF_DESTRUCTED)

    def mark_touch(self) -> None:
        self._set(AccountStatus.TOUCHED)

    def unmark_touch(self) -> None:
        self._clear(AccountStatus.TOUCHED)

    def is_touched(self) -> bool:
        return self._has(AccountStatus.TOUCHED)

    def mark_created(self) -> None:
        self._set(AccountStatus.CREATED)

    def unmark_created(self) -> None:
        self._clear(AccountStatus.CREATED)

    def is_created(self) -> bool:
        return self._has(AccountStatus.CREATED)

    def is_loaded_as_not_existing(self) -> bool:
        return self._has(AccountStatus.LOADED_AS_NOT_EXISTING)

    def is_empty(self) -> bool:
        return self.info.is_empty()


State = dict[B160, Account]
"""Changed accounts by address."""
Storage = dict[int, StorageSlot]
"""Storage slots by index."""