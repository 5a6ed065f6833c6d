"""Contract bytecode together with its analysis state."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from .bits import B256
from .utilities import KECCAK_EMPTY, keccak256


@dataclass(frozen=True)
class JumpMap:
    """Bit set of valid jump destinations, least significant bit first in each byte."""

    data: bytes = b""
    bit_length: int | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "data", bytes(self.data))
        if self.bit_length is None:
            object.__setattr__(self, "bit_length", 8 * len(self.data))
        elif not 0 <= self.bit_length <= 8 * len(self.data):
            raise ValueError(
                f"bit length {self.bit_length} does not fit in {len(self.data)} bytes"
            )

    @classmethod
    def from_slice(cls, data: bytes) -> "JumpMap":
        """Build a jump map whose bits are exactly those of ``data``."""
        return cls(bytes(data))

    def as_slice(self) -> bytes:
        """Raw bytes backing the bit set."""
        return self.data

    def is_valid(self, pc: int) -> bool:
        """True if ``pc`` is a valid jump destination."""
        if pc < 0 or pc >= self.bit_length:
            return False
        return bool((self.data[pc >> 3] >> (pc & 7)) & 1)

    def __repr__(self) -> str:
        bits = "".join(format(byte, "08b") for byte in self.data)
        return f"JumpMap(map={bits!r})"


class BytecodeStateKind(Enum):
    """How far a piece of bytecode has been processed."""

    RAW = "raw"
    CHECKED = "checked"
    ANALYSED = "analysed"


@dataclass(frozen=True)
class BytecodeState:
    """Processing state; checked and analysed code record the original length."""

    kind: BytecodeStateKind
    length: int | None = None
    jump_map: JumpMap | None = None

    def __post_init__(self) -> None:
        if self.kind is BytecodeStateKind.RAW:
            if self.length is not None or self.jump_map is not None:
                raise ValueError("raw bytecode carries no length or jump map")
        else:
            if self.length is None or self.length < 0:
                raise ValueError(f"{self.kind.value} bytecode needs a length")
            if self.kind is BytecodeStateKind.CHECKED and self.jump_map is not None:
                raise ValueError("checked bytecode carries no jump map")
            if self.kind is BytecodeStateKind.ANALYSED and self.jump_map is None:
                raise ValueError("analysed bytecode needs a jump map")

    @classmethod
    def raw(cls) -> "BytecodeState":
        return cls(BytecodeStateKind.RAW)

    @classmethod
    def checked(cls, length: int) -> "BytecodeState":
        return cls(BytecodeStateKind.CHECKED, length)

    @classmethod
    def analysed(cls, length: int, jump_map: JumpMap) -> "BytecodeState":
        return cls(BytecodeStateKind.ANALYSED, length, jump_map)


def _stop_state() -> BytecodeState:
    return BytecodeState.analysed(0, JumpMap(b"\x00", 1))


@dataclass(frozen=True)
class Bytecode:
    """Bytecode bytes and their state; the default is a single STOP opcode."""

    bytecode: bytes = b"\x00"
    state: BytecodeState = field(default_factory=_stop_state)

    def __post_init__(self) -> None:
        object.__setattr__(self, "bytecode", bytes(self.bytecode))
        if self.state.kind is not BytecodeStateKind.RAW and self.state.length > len(
            self.bytecode
        ):
            raise ValueError(
                f"original length {self.state.length} exceeds "
                f"bytecode length {len(self.bytecode)}"
            )

    @classmethod
    def new_raw(cls, code: bytes) -> "Bytecode":
        """Unprocessed bytecode."""
        return cls(bytes(code), BytecodeState.raw())

    @classmethod
    def new_checked(cls, code: bytes, length: int) -> "Bytecode":
        """Checked bytecode; ``code`` should already be padded to end with STOP."""
        return cls(bytes(code), BytecodeState.checked(length))

    def __len__(self) -> int:
        if self.state.kind is BytecodeStateKind.RAW:
            return len(self.bytecode)
        return self.state.length

    def is_empty(self) -> bool:
        return len(self) == 0

    def original_bytes(self) -> bytes:
        """The bytecode without any padding added by checking."""
        if self.state.kind is BytecodeStateKind.RAW:
            return self.bytecode
        return self.bytecode[: self.state.length]

    def hash_slow(self) -> B256:
        """Keccak-256 of the original bytecode."""
        if self.is_empty():
            return KECCAK_EMPTY
        return keccak256(self.original_bytes())

    def to_checked(self) -> "Bytecode":
        """Pad raw bytecode with 33 zero bytes; other states are returned unchanged."""
        if self.state.kind is BytecodeStateKind.RAW:
            return Bytecode(
                self.bytecode + bytes(33), BytecodeState.checked(len(self.bytecode))
            )
        return self