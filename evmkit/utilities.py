"""Hashing, address derivation, hex helpers and protocol constants."""

from __future__ import annotations

import binascii
from typing import Sequence, Union

from Crypto.Hash import keccak

from .bits import B160, B256

STACK_LIMIT = 1024
"""Interpreter stack limit."""
CALL_STACK_LIMIT = 1024
"""EVM call stack limit."""
MAX_CODE_SIZE = 0x6000
"""EIP-170 contract code size limit."""
BLOCK_HASH_HISTORY = 256
"""Number of past block hashes the EVM can access."""
MAX_INITCODE_SIZE = 2 * MAX_CODE_SIZE
"""EIP-3860 initcode size limit."""
PRECOMPILE3 = B160(bytes(19) + b"\x03")
"""Address of the RIPEMD-160 precompile, which is special in a few places."""

KECCAK_EMPTY = B256(
    bytes.fromhex("c5d2460186f7233c927e7db2dcc703c0e500b653ca82273b7bfad8045d85a470")
)
"""Keccak-256 of the empty string."""

RlpItem = Union[bytes, bytearray, int, Sequence["RlpItem"]]


def keccak256(data: bytes) -> B256:
    """Keccak-256 digest of ``data``."""
    return B256(keccak.new(digest_bits=256, data=bytes(data)).digest())


def _length_prefix(length: int, offset: int) -> bytes:
    if length < 56:
        return bytes([offset + length])
    encoded = length.to_bytes((length.bit_length() + 7) // 8, "big")
    return bytes([offset + 55 + len(encoded)]) + encoded


def rlp_encode(item: RlpItem) -> bytes:
    """RLP-encode bytes, non-negative integers and (nested) lists of them."""
    if isinstance(item, bool):
        raise TypeError("booleans cannot be RLP-encoded")
    if isinstance(item, int):
        if item < 0:
            raise ValueError("negative integers cannot be RLP-encoded")
        item = item.to_bytes((item.bit_length() + 7) // 8, "big")
    if isinstance(item, (bytes, bytearray, memoryview)):
        data = bytes(item)
        if len(data) == 1 and data[0] < 0x80:
            return data
        return _length_prefix(len(data), 0x80) + data
    if isinstance(item, (list, tuple)):
        payload = b"".join(rlp_encode(element) for element in item)
        return _length_prefix(len(payload), 0xC0) + payload
    raise TypeError(f"cannot RLP-encode {type(item).__name__}")


def create_address(caller: B160, nonce: int) -> B160:
    """Address of a contract made with CREATE by ``caller`` at ``nonce``."""
    digest = keccak256(rlp_encode([bytes(caller), nonce]))
    return B160(digest[12:])


def create2_address(caller: B160, code_hash: B256, salt: int) -> B160:
    """Address of a contract made with CREATE2."""
    preimage = b"\xff" + bytes(caller) + salt.to_bytes(32, "big") + bytes(code_hash)
    return B160(keccak256(preimage)[12:])


def hex_bytes_encode(data: bytes) -> str:
    """Encode bytes as a 0x-prefixed hex string."""
    return "0x" + bytes(data).hex()


def hex_bytes_decode(text: str) -> bytes:
    """Decode a hex string, with or without 0x, into bytes."""
    digits = text[2:] if text.startswith("0x") else text
    try:
        return binascii.unhexlify(digits)
    except (binascii.Error, ValueError) as exc:
        raise ValueError(f"invalid hex string: {exc}") from exc