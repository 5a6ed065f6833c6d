"""Types shared by the precompiled contracts: errors, outputs, addresses and gas helpers."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Iterator, Tuple, Union

from .bits import B160
from .result import Log

PrecompileResult = Tuple[int, bytes]
"""Gas used and output bytes of a successful precompile run."""

PrecompileFn = Callable[[bytes, int], PrecompileResult]
"""A precompile: takes input bytes and a gas limit, raises PrecompileError on failure."""


class PrecompileErrorKind(Enum):
    """Reasons a precompile can fail."""

    OUT_OF_GAS = "OutOfGas"
    BLAKE2_WRONG_LENGTH = "Blake2WrongLength"
    BLAKE2_WRONG_FINAL_INDICATOR_FLAG = "Blake2WrongFinalIndicatorFlag"
    MODEXP_EXP_OVERFLOW = "ModexpExpOverflow"
    MODEXP_BASE_OVERFLOW = "ModexpBaseOverflow"
    MODEXP_MOD_OVERFLOW = "ModexpModOverflow"
    BN128_FIELD_POINT_NOT_A_MEMBER = "Bn128FieldPointNotAMember"
    BN128_AFFINE_G_FAILED_TO_CREATE = "Bn128AffineGFailedToCreate"
    BN128_PAIR_LENGTH = "Bn128PairLength"


class PrecompileError(Exception):
    """A precompile failed; the reason is in ``kind``."""

    def __init__(self, kind: PrecompileErrorKind) -> None:
        super().__init__(kind.value)
        self.kind = kind

    def __repr__(self) -> str:
        return f"PrecompileError({self.kind.value})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PrecompileError):
            return NotImplemented
        return self.kind is other.kind

    def __hash__(self) -> int:
        return hash(self.kind)


@dataclass
class PrecompileOutput:
    """Cost, output and logs of a precompile call."""

    cost: int
    output: bytes
    logs: list[Log] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.output = bytes(self.output)

    @classmethod
    def without_logs(cls, cost: int, output: bytes) -> "PrecompileOutput":
        return cls(cost, bytes(output), [])


@dataclass(frozen=True)
class PrecompileAddress:
    """A precompile together with the address it lives at.

    Iterating yields the address and then the function, so a sequence of these
    can be passed straight to ``dict``.
    """

    address: B160
    function: PrecompileFn

    def __iter__(self) -> Iterator[Union[B160, PrecompileFn]]:
        yield self.address
        yield self.function


def calc_linear_cost_u32(length: int, base: int, word: int) -> int:
    """Base cost plus ``word`` for every started 32-byte word of input."""
    return (length + 31) // 32 * word + base


def u64_to_address(value: int) -> B160:
    """Address whose last eight bytes hold ``value`` big-endian."""
    return B160(bytes(12) + value.to_bytes(8, "big"))