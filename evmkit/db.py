"""Database interfaces the EVM reads state from, and a component-based database."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from .bits import B160, B256
from .bytecode import Bytecode
from .state import Account, AccountInfo


class Database(ABC):
    """Source of account, code, storage and block hash data."""

    @abstractmethod
    def basic(self, address: B160) -> AccountInfo | None:
        """Basic account information, or None if the account does not exist."""

    @abstractmethod
    def code_by_hash(self, code_hash: B256) -> Bytecode:
        """Account code by its hash."""

    @abstractmethod
    def storage(self, address: B160, index: int) -> int:
        """Storage value of ``address`` at ``index``."""

    @abstractmethod
    def block_hash(self, number: int) -> B256:
        """Hash of the block with this number."""


class DatabaseCommit(ABC):
    """A database that changed accounts can be written back to."""

    @abstractmethod
    def commit(self, changes: dict[B160, Account]) -> None:
        """Apply the changed accounts."""


class StateComponent(ABC):
    """State part of a database: accounts, code and storage."""

    @abstractmethod
    def basic(self, address: B160) -> AccountInfo | None:
        """Basic account information, or None if the account does not exist."""

    @abstractmethod
    def code_by_hash(self, code_hash: B256) -> Bytecode:
        """Account code by its hash."""

    @abstractmethod
    def storage(self, address: B160, index: int) -> int:
        """Storage value of ``address`` at ``index``."""


class BlockHashComponent(ABC):
    """Block hash part of a database."""

    @abstractmethod
    def block_hash(self, number: int) -> B256:
        """Hash of the block with this number."""


class WrapDatabaseRef(Database):
    """Presents any object with the database methods as a Database."""

    def __init__(self, inner: Any) -> None:
        self.inner = inner

    def basic(self, address: B160) -> AccountInfo | None:
        return self.inner.basic(address)

    def code_by_hash(self, code_hash: B256) -> Bytecode:
        return self.inner.code_by_hash(code_hash)

    def storage(self, address: B160, index: int) -> int:
        return self.inner.storage(address, index)

    def block_hash(self, number: int) -> B256:
        return self.inner.block_hash(number)


class DatabaseComponentError(Exception):
    """A component of a DatabaseComponents failed; the cause is in ``error``."""

    def __init__(self, error: Exception) -> None:
        super().__init__(str(error))
        self.error = error


class StateComponentError(DatabaseComponentError):
    """The state component failed."""


class BlockHashComponentError(DatabaseComponentError):
    """The block hash component failed."""


class DatabaseComponents(Database):
    """Database assembled from a state component and a block hash component."""

    def __init__(self, state: StateComponent, block_hash: BlockHashComponent) -> None:
        self.state = state
        self.block_hash_source = block_hash

    def basic(self, address: B160) -> AccountInfo | None:
        try:
            return self.state.basic(address)
        except Exception as exc:
            raise StateComponentError(exc) from exc

    def code_by_hash(self, code_hash: B256) -> Bytecode:
        try:
            return self.state.code_by_hash(code_hash)
        except Exception as exc:
            raise StateComponentError(exc) from exc

    def storage(self, address: B160, index: int) -> int:
        try:
            return self.state.storage(address, index)
        except Exception as exc:
            raise StateComponentError(exc) from exc

    def block_hash(self, number: int) -> B256:
        try:
            return self.block_hash_source.block_hash(number)
        except Exception as exc:
            raise BlockHashComponentError(exc) from exc