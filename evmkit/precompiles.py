"""Sets of precompiled contracts active at each hard fork."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from functools import cache
from typing import KeysView

from . import bn128
from .bits import B160
from .blake2 import FUN as BLAKE2
from .hashes import IDENTITY, RIPEMD160, SHA256
from .precompile_types import PrecompileFn
from .secp256k1 import ECRECOVER
from .specification import SpecId


class PrecompileSpecId(IntEnum):
    """Forks at which the set of precompiles changed."""

    HOMESTEAD = 0
    BYZANTIUM = 1
    ISTANBUL = 2
    BERLIN = 3
    LATEST = 4

    @classmethod
    def from_spec_id(cls, spec_id: SpecId) -> "PrecompileSpecId":
        """Precompile set that applies to a hard fork."""
        spec = SpecId(spec_id)
        if spec is SpecId.LATEST:
            return cls.LATEST
        if spec <= SpecId.SPURIOUS_DRAGON:
            return cls.HOMESTEAD
        if spec <= SpecId.PETERSBURG:
            return cls.BYZANTIUM
        if spec <= SpecId.MUIR_GLACIER:
            return cls.ISTANBUL
        return cls.BERLIN

    def enabled(self, spec_id: int) -> bool:
        """True when ``spec_id`` is at or after this precompile set."""
        return int(spec_id) >= int(self)


def _latest_functions() -> dict[B160, PrecompileFn]:
    return dict(Precompiles.latest().fun)


@dataclass
class Precompiles:
    """Precompile functions by address; the default is a copy of the latest set."""

    fun: dict[B160, PrecompileFn] = field(default_factory=_latest_functions)

    @classmethod
    def homestead(cls) -> "Precompiles":
        return _homestead()

    @classmethod
    def byzantium(cls) -> "Precompiles":
        return _byzantium()

    @classmethod
    def istanbul(cls) -> "Precompiles":
        return _istanbul()

    @classmethod
    def berlin(cls) -> "Precompiles":
        return _berlin()

    @classmethod
    def latest(cls) -> "Precompiles":
        return _berlin()

    @classmethod
    def new(cls, spec: PrecompileSpecId) -> "Precompiles":
        """Shared precompile set for the given fork."""
        builders = {
            PrecompileSpecId.HOMESTEAD: cls.homestead,
            PrecompileSpecId.BYZANTIUM: cls.byzantium,
            PrecompileSpecId.ISTANBUL: cls.istanbul,
            PrecompileSpecId.BERLIN: cls.berlin,
            PrecompileSpecId.LATEST: cls.latest,
        }
        return builders[PrecompileSpecId(spec)]()

    def addresses(self) -> KeysView[B160]:
        return self.fun.keys()

    def contains(self, address: B160) -> bool:
        return address in self.fun

    def get(self, address: B160) -> PrecompileFn | None:
        return self.fun.get(address)

    def is_empty(self) -> bool:
        return not self.fun

    def __len__(self) -> int:
        return len(self.fun)

    def __contains__(self, address: object) -> bool:
        return address in self.fun


@cache
def _homestead() -> Precompiles:
    return Precompiles(dict([ECRECOVER, SHA256, RIPEMD160, IDENTITY]))


@cache
def _byzantium() -> Precompiles:
    fun = dict(_homestead().fun)
    fun.update([bn128.ADD_BYZANTIUM, bn128.MUL_BYZANTIUM, bn128.PAIR_BYZANTIUM])
    return Precompiles(fun)


@cache
def _istanbul() -> Precompiles:
    fun = dict(_byzantium().fun)
    fun.update([BLAKE2, bn128.ADD_ISTANBUL, bn128.MUL_ISTANBUL, bn128.PAIR_ISTANBUL])
    return Precompiles(fun)


@cache
def _berlin() -> Precompiles:
    return Precompiles(dict(_istanbul().fun))