"""Hard fork identifiers and their ordering."""

from __future__ import annotations

from enum import IntEnum


class SpecId(IntEnum):
    """Ethereum hard forks, ordered by activation."""

    FRONTIER = 0
    FRONTIER_THAWING = 1
    HOMESTEAD = 2
    DAO_FORK = 3
    TANGERINE = 4
    SPURIOUS_DRAGON = 5
    BYZANTIUM = 6
    CONSTANTINOPLE = 7
    PETERSBURG = 8
    ISTANBUL = 9
    MUIR_GLACIER = 10
    BERLIN = 11
    LONDON = 12
    ARROW_GLACIER = 13
    GRAY_GLACIER = 14
    MERGE = 15
    SHANGHAI = 16
    CANCUN = 17
    LATEST = 18

    @classmethod
    def from_name(cls, name: str) -> "SpecId":
        """Map a fork name as used in test fixtures; unknown names give LATEST."""
        return _NAMES.get(name, cls.LATEST)

    @classmethod
    def try_from_u8(cls, value: int) -> "SpecId | None":
        """Return the fork with this number, or None if there is none."""
        try:
            return cls(value)
        except ValueError:
            return None

    def enabled(self, other: "SpecId") -> bool:
        """True when this fork includes the rules of ``other``."""
        return spec_enabled(self, other)


_NAMES = {
    "Frontier": SpecId.FRONTIER,
    "Homestead": SpecId.HOMESTEAD,
    "Tangerine": SpecId.TANGERINE,
    "Spurious": SpecId.SPURIOUS_DRAGON,
    "Byzantium": SpecId.BYZANTIUM,
    "Constantinople": SpecId.CONSTANTINOPLE,
    "Petersburg": SpecId.PETERSBURG,
    "Istanbul": SpecId.ISTANBUL,
    "MuirGlacier": SpecId.MUIR_GLACIER,
    "Berlin": SpecId.BERLIN,
    "London": SpecId.LONDON,
    "Merge": SpecId.MERGE,
    "Shanghai": SpecId.SHANGHAI,
    "Cancun": SpecId.CANCUN,
}


def spec_enabled(our: SpecId, other: SpecId) -> bool:
    """True when fork ``our`` is at or after fork ``other``."""
    return int(our) >= int(other)