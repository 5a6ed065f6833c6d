import pytest
from hypothesis import given, settings, strategies as st

from evmkit.precompile_types import PrecompileError, PrecompileErrorKind, u64_to_address
from evmkit.secp256k1 import ECRECOVER, _G, _N, _mul, ec_recover_run, ecrecover

VALID_INPUT = bytes.fromhex(
    "18c547e4f7b0f325ad1e56f57e26c745b09a3e503d86e00e5255ff7f715d3d1c"
    "000000000000000000000000000000000000000000000000000000000000001c"
    "73b1693892219d736caba55bdb67216e485557ea6b6af75f37096c9aa6a5a75f"
    "eeb940b1d03b21e36b0e47e79769f095fe2ab855bd91e3a38756b7d75a9c4549"
)


def sign(secret_scalar: int, nonce: int, digest: bytes) -> bytes:
    point = _mul(_G, nonce)
    r = point[0] % _N
    z = int.from_bytes(digest, "big") % _N
    s = pow(nonce, -1, _N) * (z + r * secret_scalar) % _N
    return r.to_bytes(32, "big") + s.to_bytes(32, "big") + bytes([point[1] & 1])


def test_known_vector():
    cost, out = ec_recover_run(VALID_INPUT, 3_000)
    assert cost == 3_000
    assert out == bytes(12) + bytes.fromhex("a94f5374fce5edbc8e2a8697c15331677e6ebf0b")


def test_generator_key_address():
    digest = bytes(range(32))
    recovered = ecrecover(sign(1, 12345, digest), digest)
    assert bytes(recovered) == bytes(12) + bytes.fromhex(
        "7e5f4552091a69125d5dfcb7b8c2659029395bdf"
    )


@settings(max_examples=10, deadline=None)
@given(
    st.integers(min_value=1, max_value=_N - 1),
    st.integers(min_value=1, max_value=_N - 1),
    st.integers(min_value=1, max_value=_N - 1),
    st.binary(min_size=32, max_size=32),
)
def test_recovery_independent_of_nonce(secret_scalar, nonce_a, nonce_b, digest):
    first = ecrecover(sign(secret_scalar, nonce_a, digest), digest)
    second = ecrecover(sign(secret_scalar, nonce_b, digest), digest)
    assert first == second
    assert bytes(first)[:12] == bytes(12)


def test_run_matches_ecrecover():
    digest = bytes(range(32))
    sig = sign(7, 99, digest)
    data = digest + bytes(31) + bytes([27 + sig[64]]) + sig[:64]
    assert ec_recover_run(data, 3_000)[1] == bytes(ecrecover(sig, digest))


def test_out_of_gas():
    with pytest.raises(PrecompileError) as info:
        ec_recover_run(VALID_INPUT, 2_999)
    assert info.value.kind is PrecompileErrorKind.OUT_OF_GAS


def test_bad_v_gives_empty_output():
    data = bytearray(VALID_INPUT)
    data[63] = 29
    assert ec_recover_run(bytes(data), 3_000) == (3_000, b"")


def test_nonzero_padding_gives_empty_output():
    data = bytearray(VALID_INPUT)
    data[40] = 1
    assert ec_recover_run(bytes(data), 3_000) == (3_000, b"")


def test_zero_r_gives_empty_output():
    data = bytearray(VALID_INPUT)
    data[64:96] = bytes(32)
    assert ec_recover_run(bytes(data), 3_000) == (3_000, b"")


def test_empty_input_gives_empty_output():
    assert ec_recover_run(b"", 10_000) == (3_000, b"")


def test_ecrecover_rejects_zero_s():
    with pytest.raises(ValueError):
        ecrecover(bytes([1]) * 32 + bytes(32) + b"\x00", bytes(32))


def test_address():
    assert ECRECOVER.address == u64_to_address(1)