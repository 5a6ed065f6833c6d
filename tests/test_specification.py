import pytest

from evmkit.specification import SpecId, spec_enabled


@pytest.mark.parametrize(
    "name, expected",
    [
        ("Frontier", SpecId.FRONTIER),
        ("Homestead", SpecId.HOMESTEAD),
        ("Tangerine", SpecId.TANGERINE),
        ("Spurious", SpecId.SPURIOUS_DRAGON),
        ("Byzantium", SpecId.BYZANTIUM),
        ("Constantinople", SpecId.CONSTANTINOPLE),
        ("Petersburg", SpecId.PETERSBURG),
        ("Istanbul", SpecId.ISTANBUL),
        ("MuirGlacier", SpecId.MUIR_GLACIER),
        ("Berlin", SpecId.BERLIN),
        ("London", SpecId.LONDON),
        ("Merge", SpecId.MERGE),
        ("Shanghai", SpecId.SHANGHAI),
        ("Cancun", SpecId.CANCUN),
    ],
)
def test_from_name_known(name, expected):
    assert SpecId.from_name(name) is expected


@pytest.mark.parametrize("name", ["Prague", "", "berlin", "DaoFork"])
def test_from_name_unknown_is_latest(name):
    assert SpecId.from_name(name) is SpecId.LATEST


@pytest.mark.parametrize(
    "value, expected",
    [(0, SpecId.FRONTIER), (11, SpecId.BERLIN), (18, SpecId.LATEST)],
)
def test_numbers_match_fork_order(value, expected):
    assert SpecId.try_from_u8(value) is expected


@pytest.mark.parametrize("spec", list(SpecId))
def test_try_from_u8_round_trip(spec):
    assert SpecId.try_from_u8(int(spec)) is spec


@pytest.mark.parametrize("value", [19, 100, 255])
def test_try_from_u8_out_of_range(value):
    assert SpecId.try_from_u8(value) is None


def test_enabled_ordering():
    assert SpecId.LONDON.enabled(SpecId.BERLIN) is True
    assert SpecId.BERLIN.enabled(SpecId.LONDON) is False
    assert SpecId.MERGE.enabled(SpecId.MERGE) is True


def test_latest_enables_everything():
    assert all(SpecId.LATEST.enabled(spec) for spec in SpecId)


def test_frontier_enables_only_itself():
    enabled = [spec for spec in SpecId if SpecId.FRONTIER.enabled(spec)]
    assert enabled == [SpecId.FRONTIER]


@pytest.mark.parametrize("our", list(SpecId))
def test_spec_enabled_agrees_with_method(our):
    for other in SpecId:
        assert spec_enabled(our, other) == our.enabled(other)