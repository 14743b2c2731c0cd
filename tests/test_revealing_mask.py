from mask_engine import InputMask, Selection


def make_revealing(pattern: str = "111-111", **options: object) -> InputMask:
    return InputMask(pattern, is_revealing_mask=True, **options)  # type: ignore[arg-type]


def test_revealing_mask_shows_only_typed_prefix() -> None:
    mask = make_revealing()

    mask.input("1")
    mask.input("2")

    assert mask.get_value() == "12"
    assert mask.get_raw_value() == "12"


def test_revealing_mask_reveals_passed_literal() -> None:
    mask = make_revealing()

    for char in "123":
        mask.input(char)

    assert mask.get_value() == "123-"
    assert mask.selection == Selection(4, 4)


def test_revealing_mask_initial_value() -> None:
    mask = make_revealing(value="1234")

    assert mask.get_value() == "123-4"
    assert mask.empty_value == ""


def test_revealing_backspace_truncates() -> None:
    mask = make_revealing(value="12345", selection=(6, 6))

    assert mask.backspace() is True

    assert mask.get_value() == "123-4"
    assert mask.get_raw_value() == "1234"
    assert mask.selection == Selection(5, 5)


def test_revealing_backspace_over_literal_then_digit() -> None:
    mask = make_revealing(value="123", selection=(4, 4))

    mask.backspace()
    assert mask.selection == Selection(3, 3)
    assert mask.get_value() == "123-"

    mask.backspace()
    assert mask.get_value() == "12"


def test_revealing_range_backspace_at_tail_hides_cleared_slots() -> None:
    mask = make_revealing(value="12345")
    mask.set_selection((2, 6))

    assert mask.backspace() is True

    assert mask.get_value() == "12"
    assert mask.get_raw_value() == "12"
    assert mask.selection == Selection(2, 2)


def test_revealing_range_backspace_in_middle_keeps_placeholders() -> None:
    mask = make_revealing(value="12345")
    mask.set_selection((1, 2))

    mask.backspace()

    assert mask.get_value() == "1_3-45"


def test_revealing_cursor_snaps_to_typed_content() -> None:
    mask = make_revealing(value="12")

    mask.set_selection((7, 7))

    assert mask.selection == Selection(2, 2)


def test_revealing_undo_redo() -> None:
    mask = make_revealing()
    for char in "1234":
        mask.input(char)

    assert mask.undo() is True
    assert mask.get_value() == ""

    assert mask.redo() is True
    assert mask.get_value() == "123-4"


def test_revealing_paste() -> None:
    mask = make_revealing()

    assert mask.paste("12-3") is False
    assert mask.paste("123-4") is True

    assert mask.get_value() == "123-4"
