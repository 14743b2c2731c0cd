import pytest

from mask_engine.errors import EmptyPatternError, PatternError, UnterminatedEscapeError
from mask_engine.formats import FormatCharacterRegistry, merge_format_characters
from mask_engine.pattern import EditableBounds, Pattern, Slot, compile_pattern


def test_compile_phone_pattern() -> None:
    pattern = compile_pattern("(111) 111-1111")

    assert pattern.length == 14
    assert pattern.first_editable_index == 1
    assert pattern.last_editable_index == 13
    assert pattern.editable_indices == frozenset({1, 2, 3, 6, 7, 8, 10, 11, 12, 13})
    assert pattern.bounds == EditableBounds(1, 13)


def test_escaped_backslash_then_digit_slot() -> None:
    pattern = compile_pattern(r"\\1")

    assert pattern.slots == ("\\", "1")
    assert pattern.editable_indices == frozenset({1})
    assert pattern.length == 2


def test_escaped_symbol_is_literal() -> None:
    pattern = compile_pattern(r"\1-1")

    assert pattern.slots == ("1", "-", "1")
    assert list(pattern.iter_slots()) == [
        Slot(0, "1", False),
        Slot(1, "-", False),
        Slot(2, "1", True),
    ]


def test_trailing_escape_is_rejected() -> None:
    with pytest.raises(UnterminatedEscapeError) as excinfo:
        compile_pattern("11\\")

    assert excinfo.value.source == "11\\"


def test_pattern_without_editable_slots_is_rejected() -> None:
    with pytest.raises(EmptyPatternError):
        compile_pattern("()-")


def test_fully_escaped_pattern_is_rejected() -> None:
    with pytest.raises(PatternError):
        compile_pattern(r"\1\a")


def test_empty_source_is_rejected() -> None:
    with pytest.raises(EmptyPatternError):
        compile_pattern("")


def test_removed_symbol_becomes_literal() -> None:
    registry = merge_format_characters({"a": None})

    pattern = compile_pattern("a1", registry)

    assert pattern.editable_indices == frozenset({1})


def test_pattern_is_immutable() -> None:
    pattern = compile_pattern("11")

    with pytest.raises(AttributeError):
        pattern.source = "111"  # type: ignore[misc]


def test_format_value_fills_placeholders() -> None:
    pattern = compile_pattern("(111) 111-1111")

    assert "".join(pattern.format_value("")) == "(___) ___-____"
    assert pattern.empty_value == "(___) ___-____"


def test_format_value_consumes_matching_literals() -> None:
    pattern = compile_pattern("(111) 111-1111")

    assert "".join(pattern.format_value("(555) 123-4567")) == "(555) 123-4567"
    assert "".join(pattern.format_value("5551234567")) == "(555) 123-4567"


def test_format_value_invalid_character_keeps_its_slot() -> None:
    pattern = compile_pattern("111")

    assert "".join(pattern.format_value("1x3")) == "1_3"
    assert "".join(pattern.format_value("1_3")) == "1_3"


def test_format_value_applies_transform() -> None:
    pattern = compile_pattern("AA-11")

    assert "".join(pattern.format_value("ab12")) == "AB-12"


def test_format_value_custom_placeholder() -> None:
    pattern = Pattern.compile("11/11", placeholder_char="#")

    assert "".join(pattern.format_value("1")) == "1#/##"


def test_revealing_format_stops_at_first_unfilled_slot() -> None:
    pattern = Pattern.compile("111-111", is_revealing_mask=True)

    assert "".join(pattern.format_value("12")) == "12"
    assert "".join(pattern.format_value("123")) == "123-"
    assert "".join(pattern.format_value("")) == ""


def test_revealing_format_keeps_leading_literals() -> None:
    pattern = Pattern.compile("(111)", is_revealing_mask=True)

    assert pattern.empty_value == "("


def test_pattern_uses_given_registry() -> None:
    registry = FormatCharacterRegistry.defaults().merge(
        {"x": {"validate": lambda char: char in "xy"}}
    )

    pattern = compile_pattern("x1", registry)

    assert pattern.is_valid_at_index("y", 0) is True
    assert pattern.is_valid_at_index("z", 0) is False
    assert pattern.is_valid_at_index("y", 5) is False
