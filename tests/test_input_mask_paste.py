import pytest

from mask_engine import InputMask, Selection
from mask_engine.engine import EditTransaction

PHONE = "(111) 111-1111"


def test_paste_applies_transform_per_slot() -> None:
    mask = InputMask("A1")

    assert mask.paste("b2") is True

    assert mask.get_value() == "B2"
    assert mask.selection == Selection(2, 2)


def test_paste_raw_digits_into_phone_mask() -> None:
    mask = InputMask(PHONE)
    mask.set_selection((0, 0))

    assert mask.paste("5551234567") is True

    assert mask.get_value() == "(555) 123-4567"
    assert mask.selection == Selection(14, 14)


def test_paste_with_literal_prefix() -> None:
    mask = InputMask(PHONE)

    assert mask.paste("(555") is True

    assert mask.get_value() == "(555) ___-____"


def test_paste_fully_formatted_value_is_rejected() -> None:
    mask = InputMask(PHONE)

    assert mask.paste("(555) 123-4567") is False

    assert mask.get_value() == "(___) ___-____"
    assert mask.selection == Selection(0, 0)


def test_paste_accepts_literal_just_behind_cursor() -> None:
    mask = InputMask(PHONE)

    assert mask.paste("(555 123") is True

    assert mask.get_value() == "(555) 123-____"

def test_paste_single_separator_between_groups() -> None:
    mask = InputMask("111-111")

    assert mask.paste("123-456") is True

    assert mask.get_value() == "123-456"


def test_paste_prefix_mismatch_fails_without_mutation() -> None:
    mask = InputMask(PHONE)

    assert mask.paste("[555") is False
    assert mask.paste("555") is False

    assert mask.get_value() == "(___) ___-____"
    assert mask.selection == Selection(0, 0)


def test_paste_invalid_character_rolls_back() -> None:
    mask = InputMask(PHONE)
    mask.input("9")
    history_before = mask.history.entries
    selection_before = mask.selection

    assert mask.paste("12x4") is False

    assert mask.get_value() == "(9__) ___-____"
    assert mask.selection == selection_before
    assert mask.history.entries == history_before


def test_paste_unexpected_literal_rolls_back() -> None:
    mask = InputMask("111-111")

    assert mask.paste("12-3") is False

    assert mask.get_value() == "___-___"


def test_paste_stops_after_last_editable_slot() -> None:
    mask = InputMask("11")

    assert mask.paste("123456") is True

    assert mask.get_value() == "12"


def test_paste_over_selection_replaces_it() -> None:
    mask = InputMask("1111", value="1234")
    mask.set_selection((1, 3))

    assert mask.paste("9") is True

    assert mask.get_value() == "19_4"
    assert mask.selection == Selection(2, 2)


def test_paste_is_one_undo_step() -> None:
    mask = InputMask("1111")

    mask.paste("1234")
    assert mask.undo() is True

    assert mask.get_value() == "____"
    assert mask.undo() is False


def test_paste_empty_text_succeeds() -> None:
    mask = InputMask("11")

    assert mask.paste("") is True
    assert mask.get_value() == "__"


def test_failed_paste_keeps_typing_run_coalesced() -> None:
    mask = InputMask(PHONE)
    mask.input("9")
    before = mask.capture()

    assert mask.paste("1x") is False
    assert mask.capture() == before

    mask.input("8")
    assert mask.undo() is True
    assert mask.get_value() == "(___) ___-____"
    assert mask.undo() is False


def test_transaction_rolls_back_when_block_raises() -> None:
    mask = InputMask("111")
    mask.input("1")
    before = mask.capture()

    with pytest.raises(RuntimeError):
        with EditTransaction(mask, "scripted") as tx:
            mask.input("2")
            raise RuntimeError("boom")

    assert tx.rolled_back is True
    assert mask.capture() == before
    assert mask.get_value() == "1__"
