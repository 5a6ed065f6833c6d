import pytest

from evmkit.bn128 import add_byzantium, add_istanbul
from evmkit.hashes import identity_run
from evmkit.precompile_types import u64_to_address
from evmkit.precompiles import Precompiles, PrecompileSpecId
from evmkit.specification import SpecId


def addrs(*numbers):
    return {u64_to_address(n) for n in numbers}


def test_homestead_set():
    pre = Precompiles.homestead()
    assert set(pre.addresses()) == addrs(1, 2, 3, 4)
    assert len(pre) == 4
    assert not pre.is_empty()


def test_byzantium_extends_homestead():
    pre = Precompiles.byzantium()
    assert addrs(1, 2, 3, 4, 6, 7, 8) <= set(pre.addresses())
    assert not pre.contains(u64_to_address(9))
    assert pre.get(u64_to_address(6)) is add_byzantium


def test_istanbul_adds_blake2_and_cheaper_bn128():
    pre = Precompiles.istanbul()
    assert pre.contains(u64_to_address(9))
    assert pre.get(u64_to_address(6)) is add_istanbul
    assert pre.get(u64_to_address(6))(b"", 1_000)[0] == 150
    assert Precompiles.byzantium().get(u64_to_address(6))(b"", 1_000)[0] == 500


def test_sets_only_grow():
    order = [
        Precompiles.homestead(),
        Precompiles.byzantium(),
        Precompiles.istanbul(),
        Precompiles.berlin(),
    ]
    for earlier, later in zip(order, order[1:]):
        assert set(earlier.addresses()) <= set(later.addresses())


def test_instances_are_shared():
    assert Precompiles.homestead() is Precompiles.homestead()
    assert Precompiles.latest() is Precompiles.berlin()
    assert Precompiles.new(PrecompileSpecId.LATEST) is Precompiles.berlin()
    assert Precompiles.new(PrecompileSpecId.HOMESTEAD) is Precompiles.homestead()


def test_get_missing_returns_none():
    assert Precompiles.homestead().get(u64_to_address(100)) is None
    assert u64_to_address(100) not in Precompiles.latest()


def test_default_is_copy_of_latest():
    pre = Precompiles()
    assert pre.fun == Precompiles.latest().fun
    assert pre.fun is not Precompiles.latest().fun


def test_identity_callable_through_set():
    run = Precompiles.homestead().get(u64_to_address(4))
    assert run is identity_run
    assert run(b"abc", 100)[1] == b"abc"


def test_empty_set():
    assert Precompiles({}).is_empty()


@pytest.mark.parametrize(
    "spec, expected",
    [
        (SpecId.FRONTIER, PrecompileSpecId.HOMESTEAD),
        (SpecId.SPURIOUS_DRAGON, PrecompileSpecId.HOMESTEAD),
        (SpecId.BYZANTIUM, PrecompileSpecId.BYZANTIUM),
        (SpecId.PETERSBURG, PrecompileSpecId.BYZANTIUM),
        (SpecId.ISTANBUL, PrecompileSpecId.ISTANBUL),
        (SpecId.MUIR_GLACIER, PrecompileSpecId.ISTANBUL),
        (SpecId.BERLIN, PrecompileSpecId.BERLIN),
        (SpecId.CANCUN, PrecompileSpecId.BERLIN),
        (SpecId.LATEST, PrecompileSpecId.LATEST),
    ],
)
def test_from_spec_id(spec, expected):
    assert PrecompileSpecId.from_spec_id(spec) is expected


def test_enabled():
    assert PrecompileSpecId.ISTANBUL.enabled(2)
    assert PrecompileSpecId.ISTANBUL.enabled(4)
    assert not PrecompileSpecId.ISTANBUL.enabled(1)