"""ECRECOVER precompile: recover the signer address of a secp256k1 signature."""

from __future__ import annotations

from typing import Optional, Tuple

from .bits import B256
from .precompile_types import (
    PrecompileAddress,
    PrecompileError,
    PrecompileErrorKind,
    PrecompileResult,
    u64_to_address,
)
from .utilities import keccak256

ECRECOVER_BASE = 3_000

_P = 0xFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFEFFFFFC2F
_N = 0xFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFEBAAEDCE6AF48A03BBFD25E8CD0364141
_G = (
    0x79BE667EF9DCBBAC55A06295CE870B07029BFCDB2DCE28D959F2815B16F81798,
    0x483ADA7726A3C4655DA4FBFC0E1108A8FD17B448A68554199C47D08FFB10D4B8,
)

Point = Optional[Tuple[int, int]]


def _add(p1: Point, p2: Point) -> Point:
    if p1 is None:
        return p2
    if p2 is None:
        return p1
    x1, y1 = p1
    x2, y2 = p2
    if x1 == x2:
        if (y1 + y2) % _P == 0:
            return None
        slope = 3 * x1 * x1 * pow(2 * y1, -1, _P) % _P
    else:
        slope = (y2 - y1) * pow(x2 - x1, -1, _P) % _P
    x3 = (slope * slope - x1 - x2) % _P
    return (x3, (slope * (x1 - x3) - y1) % _P)


def _mul(point: Point, scalar: int) -> Point:
    result: Point = None
    for bit in bin(scalar)[2:]:
        result = _add(result, result)
        if bit == "1":
            result = _add(result, point)
    return result


def ecrecover(sig: bytes, msg: bytes) -> B256:
    """Recover the signer of a 65-byte (r, s, recovery id) signature over ``msg``.

    Returns the address left-padded to 32 bytes; raises ValueError when the
    signature is malformed or no key can be recovered.
    """
    sig, msg = bytes(sig), bytes(msg)
    if len(sig) != 65 or len(msg) != 32:
        raise ValueError("signature needs 65 bytes and message 32 bytes")
    recid = sig[64]
    if recid > 3:
        raise ValueError(f"invalid recovery id {recid}")
    r = int.from_bytes(sig[:32], "big")
    s = int.from_bytes(sig[32:64], "big")
    if not (0 < r < _N and 0 < s < _N):
        raise ValueError("signature scalar out of range")

    x = r + _N if recid & 2 else r
    if x >= _P:
        raise ValueError("signature r does not name a curve point")
    alpha = (x * x * x + 7) % _P
    beta = pow(alpha, (_P + 1) // 4, _P)
    if beta * beta % _P != alpha:
        raise ValueError("signature r does not name a curve point")
    y = beta if beta & 1 == recid & 1 else _P - beta

    z = int.from_bytes(msg, "big") % _N
    r_inv = pow(r, -1, _N)
    public = _add(_mul((x, y), s * r_inv % _N), _mul(_G, -z * r_inv % _N))
    if public is None:
        raise ValueError("recovered key is the point at infinity")

    encoded = public[0].to_bytes(32, "big") + public[1].to_bytes(32, "big")
    return B256(bytes(12) + keccak256(encoded)[12:])


def ec_recover_run(data: bytes, gas_limit: int) -> PrecompileResult:
    """Precompile wrapper: hash, v, r, s in 128 bytes; empty output on failure."""
    if ECRECOVER_BASE > gas_limit:
        raise PrecompileError(PrecompileErrorKind.OUT_OF_GAS)
    padded = bytes(data[:128]).ljust(128, b"\x00")
    msg = padded[:32]
    if padded[32:63] != bytes(31) or padded[63] not in (27, 28):
        return ECRECOVER_BASE, b""
    sig = padded[64:128] + bytes([padded[63] - 27])
    try:
        return ECRECOVER_BASE, bytes(ecrecover(sig, msg))
    except ValueError:
        return ECRECOVER_BASE, b""


ECRECOVER = PrecompileAddress(u64_to_address(1), ec_recover_run)