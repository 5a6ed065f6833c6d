"""Addition, scalar multiplication and pairing check on the alt_bn128 curve."""

from __future__ import annotations

from typing import Optional, Tuple

from .precompile_types import (
    PrecompileAddress,
    PrecompileError,
    PrecompileErrorKind,
    PrecompileResult,
    u64_to_address,
)

FIELD_MODULUS = 0x30644E72E131A029B85045B68181585D97816A916871CA8D3C208C16D87CFD47
CURVE_ORDER = 0x30644E72E131A029B85045B68181585D2833E84879B9709143E1F593F0000001
ATE_LOOP_COUNT = 29793968203157093288
_LOG_ATE_LOOP_COUNT = 63
_FINAL_EXPONENT = (FIELD_MODULUS**12 - 1) // CURVE_ORDER

ADD_INPUT_LEN = 128
MUL_INPUT_LEN = 128
PAIR_ELEMENT_LEN = 192

ISTANBUL_PAIR_PER_POINT = 34_000
ISTANBUL_PAIR_BASE = 45_000
BYZANTIUM_PAIR_PER_POINT = 80_000
BYZANTIUM_PAIR_BASE = 100_000

_P = FIELD_MODULUS

Fq2 = Tuple[int, int]
Fq12 = Tuple[int, ...]
G1Point = Optional[Tuple[int, int]]
G2Point = Optional[Tuple[Fq2, Fq2]]


# --- base field -----------------------------------------------------------

def _inv(a: int) -> int:
    return pow(a % _P, _P - 2, _P)


# --- quadratic extension Fq2 = Fq[i] / (i^2 + 1) --------------------------

_F2_ZERO: Fq2 = (0, 0)


def _f2_add(a: Fq2, b: Fq2) -> Fq2:
    return ((a[0] + b[0]) % _P, (a[1] + b[1]) % _P)


def _f2_sub(a: Fq2, b: Fq2) -> Fq2:
    return ((a[0] - b[0]) % _P, (a[1] - b[1]) % _P)


def _f2_neg(a: Fq2) -> Fq2:
    return (-a[0] % _P, -a[1] % _P)


def _f2_mul(a: Fq2, b: Fq2) -> Fq2:
    a0, a1 = a
    b0, b1 = b
    return ((a0 * b0 - a1 * b1) % _P, (a0 * b1 + a1 * b0) % _P)


def _f2_scale(a: Fq2, k: int) -> Fq2:
    return (a[0] * k % _P, a[1] * k % _P)


def _f2_inv(a: Fq2) -> Fq2:
    a0, a1 = a
    norm = _inv(a0 * a0 + a1 * a1)
    return (a0 * norm % _P, -a1 * norm % _P)


def _f2_conj(a: Fq2) -> Fq2:
    return (a[0], -a[1] % _P)


def _f2_pow(a: Fq2, exponent: int) -> Fq2:
    result: Fq2 = (1, 0)
    for bit in bin(exponent)[2:]:
        result = _f2_mul(result, result)
        if bit == "1":
            result = _f2_mul(result, a)
    return result


_XI: Fq2 = (9, 1)
_B2: Fq2 = _f2_mul((3, 0), _f2_inv(_XI))
_FROB_X = _f2_pow(_XI, (_P - 1) // 3)
_FROB_Y = _f2_pow(_XI, (_P - 1) // 2)


# --- degree-12 extension Fq12 = Fq[w] / (w^12 - 18 w^6 + 82) ---------------

_F12_ONE: Fq12 = (1,) + (0,) * 11


def _f12_mul(a: Fq12, b: Fq12) -> Fq12:
    product = [0] * 23
    for i, ai in enumerate(a):
        if ai:
            for j, bj in enumerate(b):
                if bj:
                    product[i + j] += ai * bj
    for degree in range(22, 11, -1):
        top = product[degree]
        if top:
            product[degree - 6] += 18 * top
            product[degree - 12] -= 82 * top
    return tuple(c % _P for c in product[:12])


def _f12_pow(a: Fq12, exponent: int) -> Fq12:
    result = _F12_ONE
    for bit in bin(exponent)[2:]:
        result = _f12_mul(result, result)
        if bit == "1":
            result = _f12_mul(result, a)
    return result


def _embed(coeffs: list[int], value: Fq2, power: int) -> None:
    """Add ``value * w**power`` to ``coeffs``, with i mapped to w^6 - 9."""
    real, imag = value
    coeffs[power] += real - 9 * imag
    coeffs[power + 6] += imag


# --- G1 over Fq -----------------------------------------------------------

def _g1_on_curve(x: int, y: int) -> bool:
    return (y * y - x * x * x - 3) % _P == 0


def _g1_add(p1: G1Point, p2: G1Point) -> G1Point:
    if p1 is None:
        return p2
    if p2 is None:
        return p1
    x1, y1 = p1
    x2, y2 = p2
    if x1 == x2:
        if (y1 + y2) % _P == 0:
            return None
        slope = 3 * x1 * x1 * _inv(2 * y1) % _P
    else:
        slope = (y2 - y1) * _inv(x2 - x1) % _P
    x3 = (slope * slope - x1 - x2) % _P
    y3 = (slope * (x1 - x3) - y1) % _P
    return (x3, y3)


def _g1_mul(point: G1Point, scalar: int) -> G1Point:
    result: G1Point = None
    for bit in bin(scalar)[2:]:
        result = _g1_add(result, result)
        if bit == "1":
            result = _g1_add(result, point)
    return result


# --- G2 over Fq2 (the sextic twist) ---------------------------------------

def _g2_on_curve(x: Fq2, y: Fq2) -> bool:
    return _f2_mul(y, y) == _f2_add(_f2_mul(_f2_mul(x, x), x), _B2)


def _g2_add(p1: G2Point, p2: G2Point) -> G2Point:
    if p1 is None:
        return p2
    if p2 is None:
        return p1
    x1, y1 = p1
    x2, y2 = p2
    if x1 == x2:
        if _f2_add(y1, y2) == _F2_ZERO:
            return None
        slope = _f2_mul(_f2_scale(_f2_mul(x1, x1), 3), _f2_inv(_f2_scale(y1, 2)))
    else:
        slope = _f2_mul(_f2_sub(y2, y1), _f2_inv(_f2_sub(x2, x1)))
    x3 = _f2_sub(_f2_sub(_f2_mul(slope, slope), x1), x2)
    y3 = _f2_sub(_f2_mul(slope, _f2_sub(x1, x3)), y1)
    return (x3, y3)


def _g2_mul(point: G2Point, scalar: int) -> G2Point:
    result: G2Point = None
    for bit in bin(scalar)[2:]:
        result = _g2_add(result, result)
        if bit == "1":
            result = _g2_add(result, point)
    return result


def _g2_new(x: Fq2, y: Fq2) -> Tuple[Fq2, Fq2]:
    """Affine G2 point, checked to be on the curve and in the prime-order subgroup."""
    if not _g2_on_curve(x, y) or _g2_mul((x, y), CURVE_ORDER) is not None:
        raise PrecompileError(PrecompileErrorKind.BN128_AFFINE_G_FAILED_TO_CREATE)
    return (x, y)


def _frobenius(point: Tuple[Fq2, Fq2]) -> Tuple[Fq2, Fq2]:
    x, y = point
    return (_f2_mul(_f2_conj(x), _FROB_X), _f2_mul(_f2_conj(y), _FROB_Y))


# --- pairing --------------------------------------------------------------

def _line(r: Tuple[Fq2, Fq2], s: Tuple[Fq2, Fq2], xp: int, yp: int) -> Fq12:
    """Line through twisted points ``r`` and ``s`` evaluated at the G1 point."""
    x1, y1 = r
    x2, y2 = s
    coeffs = [0] * 12
    if x1 != x2:
        slope = _f2_mul(_f2_sub(y2, y1), _f2_inv(_f2_sub(x2, x1)))
    elif y1 == y2 and y1 != _F2_ZERO:
        slope = _f2_mul(_f2_scale(_f2_mul(x1, x1), 3), _f2_inv(_f2_scale(y1, 2)))
    else:
        coeffs[0] = xp
        _embed(coeffs, _f2_neg(x1), 2)
        return tuple(c % _P for c in coeffs)
    coeffs[0] = -yp
    _embed(coeffs, _f2_scale(slope, xp), 1)
    _embed(coeffs, _f2_sub(y1, _f2_mul(slope, x1)), 3)
    return tuple(c % _P for c in coeffs)


def _miller_loop(q: G2Point, p: G1Point) -> Fq12:
    if q is None or p is None:
        return _F12_ONE
    xp, yp = p
    r = q
    f = _F12_ONE
    for i in range(_LOG_ATE_LOOP_COUNT, -1, -1):
        f = _f12_mul(_f12_mul(f, f), _line(r, r, xp, yp))
        r = _g2_add(r, r)
        if (ATE_LOOP_COUNT >> i) & 1:
            f = _f12_mul(f, _line(r, q, xp, yp))
            r = _g2_add(r, q)
    q1 = _frobenius(q)
    x2, y2 = _frobenius(q1)
    neg_q2 = (x2, _f2_neg(y2))
    f = _f12_mul(f, _line(r, q1, xp, yp))
    r = _g2_add(r, q1)
    return _f12_mul(f, _line(r, neg_q2, xp, yp))


def _pairing_product_is_one(pairs: list[Tuple[G1Point, G2Point]]) -> bool:
    product = _F12_ONE
    for a, b in pairs:
        product = _f12_mul(product, _miller_loop(b, a))
    if product == _F12_ONE:
        return True
    return _f12_pow(product, _FINAL_EXPONENT) == _F12_ONE


# --- encoding -------------------------------------------------------------

def _read_fq(chunk: bytes) -> int:
    value = int.from_bytes(chunk, "big")
    if value >= _P:
        raise PrecompileError(PrecompileErrorKind.BN128_FIELD_POINT_NOT_A_MEMBER)
    return value


def _g1_new(x: int, y: int) -> G1Point:
    if x == 0 and y == 0:
        return None
    if not _g1_on_curve(x, y):
        raise PrecompileError(PrecompileErrorKind.BN128_AFFINE_G_FAILED_TO_CREATE)
    return (x, y)


def _encode_g1(point: G1Point) -> bytes:
    if point is None:
        return bytes(64)
    x, y = point
    return x.to_bytes(32, "big") + y.to_bytes(32, "big")


def read_point(data: bytes, pos: int) -> G1Point:
    """Read a G1 point from 64 bytes at ``pos``; all zeros is the point at infinity."""
    chunk = bytes(data[pos : pos + 64])
    if len(chunk) != 64:
        raise ValueError(f"need 64 bytes at offset {pos}, got {len(chunk)}")
    x = _read_fq(chunk[:32])
    y = _read_fq(chunk[32:])
    return _g1_new(x, y)


def run_add(data: bytes) -> bytes:
    """Sum of two G1 points; input is cut or zero-padded to 128 bytes."""
    padded = bytes(data[:ADD_INPUT_LEN]).ljust(ADD_INPUT_LEN, b"\x00")
    p1 = read_point(padded, 0)
    p2 = read_point(padded, 64)
    return _encode_g1(_g1_add(p1, p2))


def run_mul(data: bytes) -> bytes:
    """Scalar multiple of a G1 point; input is cut or zero-padded to 128 bytes."""
    padded = bytes(data[:MUL_INPUT_LEN]).ljust(MUL_INPUT_LEN, b"\x00")
    point = read_point(padded, 0)
    scalar = int.from_bytes(padded[64:96], "big") % CURVE_ORDER
    return _encode_g1(_g1_mul(point, scalar))


def run_pair(
    data: bytes, pair_per_point_cost: int, pair_base_cost: int, gas_limit: int
) -> PrecompileResult:
    """Check that the product of pairings of the given (G1, G2) pairs is one."""
    data = bytes(data)
    gas_used = pair_per_point_cost * len(data) // PAIR_ELEMENT_LEN + pair_base_cost
    if gas_used > gas_limit:
        raise PrecompileError(PrecompileErrorKind.OUT_OF_GAS)
    if len(data) % PAIR_ELEMENT_LEN != 0:
        raise PrecompileError(PrecompileErrorKind.BN128_PAIR_LENGTH)

    pairs: list[Tuple[G1Point, G2Point]] = []
    for offset in range(0, len(data), PAIR_ELEMENT_LEN):
        element = data[offset : offset + PAIR_ELEMENT_LEN]
        ax, ay, bay, bax, bby, bbx = (
            _read_fq(element[k : k + 32]) for k in range(0, PAIR_ELEMENT_LEN, 32)
        )
        a = _g1_new(ax, ay)
        bx: Fq2 = (bax, bay)
        by: Fq2 = (bbx, bby)
        b: G2Point = None if bx == _F2_ZERO and by == _F2_ZERO else _g2_new(bx, by)
        pairs.append((a, b))

    success = _pairing_product_is_one(pairs)
    return gas_used, (1 if success else 0).to_bytes(32, "big")


def _charged(cost: int, gas_limit: int) -> None:
    if cost > gas_limit:
        raise PrecompileError(PrecompileErrorKind.OUT_OF_GAS)


def add_istanbul(data: bytes, gas_limit: int) -> PrecompileResult:
    _charged(150, gas_limit)
    return 150, run_add(data)


def add_byzantium(data: bytes, gas_limit: int) -> PrecompileResult:
    _charged(500, gas_limit)
    return 500, run_add(data)


def mul_istanbul(data: bytes, gas_limit: int) -> PrecompileResult:
    _charged(6_000, gas_limit)
    return 6_000, run_mul(data)


def mul_byzantium(data: bytes, gas_limit: int) -> PrecompileResult:
    _charged(40_000, gas_limit)
    return 40_000, run_mul(data)


def pair_istanbul(data: bytes, gas_limit: int) -> PrecompileResult:
    return run_pair(data, ISTANBUL_PAIR_PER_POINT, ISTANBUL_PAIR_BASE, gas_limit)


def pair_byzantium(data: bytes, gas_limit: int) -> PrecompileResult:
    return run_pair(data, BYZANTIUM_PAIR_PER_POINT, BYZANTIUM_PAIR_BASE, gas_limit)


ADD_ISTANBUL = PrecompileAddress(u64_to_address(6), add_istanbul)
ADD_BYZANTIUM = PrecompileAddress(u64_to_address(6), add_byzantium)
MUL_ISTANBUL = PrecompileAddress(u64_to_address(7), mul_istanbul)
MUL_BYZANTIUM = PrecompileAddress(u64_to_address(7), mul_byzantium)
PAIR_ISTANBUL = PrecompileAddress(u64_to_address(8), pair_istanbul)
PAIR_BYZANTIUM = PrecompileAddress(u64_to_address(8), pair_byzantium)