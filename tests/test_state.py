from hypothesis import given, strategies as st

from evmkit.bits import B256
from evmkit.bytecode import Bytecode
from evmkit.state import Account, AccountInfo, AccountStatus, StorageSlot
from evmkit.utilities import KECCAK_EMPTY


def test_account_state():
    account = Account()

    assert not account.is_touched()
    assert not account.is_selfdestructed()

    account.mark_touch()
    assert account.is_touched()
    assert not account.is_selfdestructed()

    account.mark_selfdestruct()
    assert account.is_touched()
    assert account.is_selfdestructed()

    account.unmark_selfdestruct()
    assert account.is_touched()
    assert not account.is_selfdestructed()


def test_created_flag():
    account = Account()
    account.mark_created()
    assert account.is_created()
    account.unmark_created()
    assert not account.is_created()
    assert account.status == AccountStatus.LOADED


def test_unmark_touch_keeps_other_flags():
    account = Account()
    account.mark_touch()
    account.mark_created()
    account.unmark_touch()
    assert not account.is_touched()
    assert account.is_created()


@given(st.lists(st.sampled_from(["touch", "selfdestruct", "created"]), max_size=10))
def test_unmarking_everything_returns_to_loaded(ops):
    account = Account()
    for op in ops:
        getattr(account, f"mark_{op}")()
    account.unmark_touch()
    account.unmark_selfdestruct()
    account.unmark_created()
    assert account.status == AccountStatus.LOADED


def test_new_not_existing():
    account = Account.new_not_existing()
    assert account.is_loaded_as_not_existing()
    assert account.is_empty()
    assert account.storage == {}


def test_from_info():
    info = AccountInfo.from_balance(10)
    account = Account.from_info(info)
    assert account.info is info
    assert account.status == AccountStatus.LOADED
    assert not account.is_loaded_as_not_existing()
    assert not account.is_empty()


def test_default_account_info_is_empty():
    info = AccountInfo()
    assert info.is_empty()
    assert not info.exists()
    assert info.code_hash == KECCAK_EMPTY
    assert info.code == Bytecode()


def test_zero_code_hash_counts_as_empty():
    info = AccountInfo(code_hash=B256.zero())
    assert info.is_empty()


def test_nonce_or_code_makes_account_exist():
    assert AccountInfo(nonce=1).exists()
    assert AccountInfo(code_hash=B256.from_int(1)).exists()


def test_equality_ignores_code():
    first = AccountInfo(balance=3, nonce=1, code=Bytecode.new_raw(b"\x01"))
    second = AccountInfo(balance=3, nonce=1, code=None)
    assert first == second
    assert first != AccountInfo(balance=4, nonce=1)


def test_take_bytecode():
    code = Bytecode.new_raw(b"\x60\x00")
    info = AccountInfo(code=code)
    assert info.take_bytecode() == code
    assert info.code is None
    assert info.take_bytecode() is None


def test_storage_slot():
    slot = StorageSlot.new(7)
    assert not slot.is_changed()
    assert slot.original_value() == 7
    assert slot.present_value == 7

    changed = StorageSlot.new_changed(7, 9)
    assert changed.is_changed()
    assert changed.original_value() == 7
    assert changed.present_value == 9