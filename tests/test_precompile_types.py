import pytest

from evmkit.bits import B160
from evmkit.precompile_types import (
    PrecompileAddress,
    PrecompileError,
    PrecompileErrorKind,
    PrecompileOutput,
    calc_linear_cost_u32,
    u64_to_address,
)
from evmkit.utilities import PRECOMPILE3


def _echo(data, gas_limit):
    return 0, bytes(data)


def test_linear_cost_of_empty_input_is_base():
    assert calc_linear_cost_u32(0, 60, 12) == 60


def test_linear_cost_one_word():
    assert calc_linear_cost_u32(1, 60, 12) == 60 + 12
    assert calc_linear_cost_u32(32, 60, 12) == 60 + 12


def test_linear_cost_rounds_up_words():
    assert calc_linear_cost_u32(33, 600, 120) == 600 + 2 * 120
    assert calc_linear_cost_u32(64, 600, 120) == calc_linear_cost_u32(33, 600, 120)


@pytest.mark.parametrize("length", [0, 5, 31, 32, 100, 1000])
def test_linear_cost_is_monotonic(length):
    assert calc_linear_cost_u32(length + 1, 15, 3) >= calc_linear_cost_u32(length, 15, 3)


def test_u64_to_address_matches_precompile3():
    assert u64_to_address(3) == PRECOMPILE3


def test_u64_to_address_round_trips_through_int():
    address = u64_to_address(0xDEADBEEF)
    assert isinstance(address, B160)
    assert address.to_int() == 0xDEADBEEF
    assert bytes(address[:12]) == bytes(12)


def test_u64_to_address_rejects_values_over_64_bits():
    with pytest.raises(OverflowError):
        u64_to_address(2**64)


def test_without_logs_has_empty_logs():
    output = PrecompileOutput.without_logs(7, b"abc")
    assert output.cost == 7
    assert output.output == b"abc"
    assert output.logs == []


def test_precompile_error_equality_by_kind():
    assert PrecompileError(PrecompileErrorKind.OUT_OF_GAS) == PrecompileError(
        PrecompileErrorKind.OUT_OF_GAS
    )
    assert PrecompileError(PrecompileErrorKind.OUT_OF_GAS) != PrecompileError(
        PrecompileErrorKind.BN128_PAIR_LENGTH
    )


def test_precompile_error_message_names_kind():
    error = PrecompileError(PrecompileErrorKind.BLAKE2_WRONG_LENGTH)
    assert str(error) == "Blake2WrongLength"
    assert error.kind is PrecompileErrorKind.BLAKE2_WRONG_LENGTH


def test_precompile_address_builds_dict():
    first = PrecompileAddress(u64_to_address(4), _echo)
    second = PrecompileAddress(u64_to_address(5), _echo)
    table = dict([first, second])
    assert set(table) == {u64_to_address(4), u64_to_address(5)}
    assert table[u64_to_address(4)](b"xyz", 0) == (0, b"xyz")