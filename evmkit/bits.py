"""Fixed-size byte strings: 160-bit addresses and 256-bit hashes."""

from __future__ import annotations

import os
from typing import ClassVar

_WHITESPACE = frozenset(" \r\n\t")
_HEX_VALUES = {ch: int(ch, 16) for ch in "0123456789abcdefABCDEF"}


class FromHexError(ValueError):
    """A non-hex character was met while decoding."""

    def __init__(self, character: str, index: int) -> None:
        super().__init__(f"invalid hex character: {character}, at {index}")
        self.character = character
        self.index = index


def to_hex(data: bytes, skip_leading_zero: bool = False) -> str:
    """Encode bytes as a 0x-prefixed lower-case hex string."""
    if not data:
        return "0x"
    text = bytes(data).hex()
    if skip_leading_zero and text[0] == "0":
        text = text[1:]
    return "0x" + text


def from_hex(text: str, length: int) -> bytes:
    """Decode a hex string, with or without 0x, into exactly ``length`` bytes.

    The string must hold exactly ``2 * length`` characters after the prefix.
    Whitespace characters are skipped; positions they leave unfilled stay zero.
    """
    if text.startswith("0x"):
        digits, offset = text[2:], 2
    else:
        digits, offset = text, 0
    if len(digits) != 2 * length:
        raise ValueError(
            f"invalid length {len(digits)}, expected a (both 0x-prefixed or not) "
            f"hex string with length of {2 * length}"
        )
    out = bytearray(length)
    pos = 0
    high: int | None = None
    for index, ch in enumerate(digits):
        if ch in _WHITESPACE:
            continue
        nibble = _HEX_VALUES.get(ch)
        if nibble is None:
            raise FromHexError(ch, index + offset)
        if high is None:
            high = nibble
        else:
            out[pos] = (high << 4) | nibble
            pos += 1
            high = None
    return bytes(out)


class FixedBytes(bytes):
    """Immutable byte string of a fixed length set by the subclass."""

    LENGTH: ClassVar[int] = 0

    def __new__(cls, data: bytes) -> "FixedBytes":
        if cls is FixedBytes:
            raise TypeError("FixedBytes is abstract; use B160 or B256")
        if isinstance(data, int):
            raise TypeError("use from_int to build from an integer")
        raw = bytes(data)
        if len(raw) != cls.LENGTH:
            raise ValueError(
                f"{cls.__name__} needs {cls.LENGTH} bytes, got {len(raw)}"
            )
        return super().__new__(cls, raw)

    @classmethod
    def zero(cls) -> "FixedBytes":
        """All-zero value."""
        return cls(bytes(cls.LENGTH))

    @classmethod
    def random(cls) -> "FixedBytes":
        """Value filled with random bytes."""
        return cls(os.urandom(cls.LENGTH))

    @classmethod
    def from_hex(cls, text: str) -> "FixedBytes":
        """Parse from a hex string of exactly the right length."""
        return cls(from_hex(text, cls.LENGTH))

    def to_hex(self) -> str:
        """Full 0x-prefixed hex form."""
        return to_hex(self)

    @classmethod
    def from_int(cls, value: int) -> "FixedBytes":
        """Big-endian encoding of a non-negative integer, left-padded with zeros."""
        if value < 0:
            raise OverflowError("negative value cannot be encoded")
        return cls(value.to_bytes(cls.LENGTH, "big"))

    def to_int(self) -> int:
        """Big-endian integer value."""
        return int.from_bytes(self, "big")

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.to_hex()})"

    def __str__(self) -> str:
        return self.to_hex()


class B160(FixedBytes):
    """160-bit value, used for addresses."""

    LENGTH = 20


class B256(FixedBytes):
    """256-bit value, used for hashes and storage words."""

    LENGTH = 32


Address = B160
Hash = B256