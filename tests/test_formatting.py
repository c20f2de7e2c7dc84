import pytest

from data_cleaner.errors import ValidationError
from data_cleaner.formatting import FormatTextOptions, convert_case, format_text, truncate


def test_format_text_defaults_collapse_whitespace():
    assert format_text("  Hello   World \n") == "Hello World"
    assert format_text(None) == ""
    assert format_text("") == ""


def test_format_text_line_breaks_without_trimming():
    options = FormatTextOptions(trim_whitespace=False, remove_line_breaks=True)
    assert format_text("line1\nline2\r\nline3 ", options) == "line1 line2 line3 "


def test_format_text_removals_follow_fixed_order():
    assert (
        format_text("Hello, World! #2024", FormatTextOptions(remove_special_chars=True))
        == "Hello World 2024"
    )
    # digits are removed after whitespace collapsing
    assert format_text("Room  101 now", FormatTextOptions(remove_numbers=True)) == "Room  now"
    assert (
        format_text("Hi, there! (ok)", FormatTextOptions(remove_punctuation=True))
        == "Hi there ok"
    )


def test_format_text_case_and_truncation():
    options = FormatTextOptions(case_type="title", max_length=10)
    assert format_text("the lord of the rings", options) == "The Lor..."
    assert format_text("Hello World", FormatTextOptions(case_type="snake")) == "hello_world"
    assert format_text("Hello", FormatTextOptions(case_type="none")) == "Hello"


def test_truncate():
    assert truncate("Hello wonderful world", 10) == "Hello w..."
    assert truncate("Hello wonderful world", 10, "") == "Hello wond"
    assert truncate("abcdef", 2) == "..."
    assert truncate("short", 10) == "short"
    assert truncate("short", None) == "short"


def test_convert_case_rejects_unknown_type():
    assert convert_case("MiXeD", "lower") == "mixed"
    assert convert_case("MiXeD", None) == "MiXeD"
    with pytest.raises(ValidationError):
        convert_case("text", "kebab")


def test_options_from_mapping():
    options = FormatTextOptions.from_mapping(
        {"case_type": "upper", "max_length": "5", "truncation_indicator": "~"}
    )
    assert options.trim_whitespace is True
    assert options.case_type == "upper"
    assert options.max_length == 5
    assert format_text(" abcdefgh ", options) == "ABCD~"
    assert FormatTextOptions.from_mapping({"trim_whitespace": False}).trim_whitespace is False
