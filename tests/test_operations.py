import pytest

from operations import format_number, is_plain_number, parse_operand


@pytest.mark.parametrize("value, expected", [
    (7.0, "7"),
    (-3.0, "-3"),
    (-0.0, "0"),
    (0.1 + 0.2, "0.3"),
    (5e-05, "0.00005"),
    (1e-07, "0.0000001"),
    (1 / 3, "0.3333333333"),
    (9999999999.0 * 9999999999.0, "99999999980000000000"),
    (1e21, "1e+21"),
])
def test_format_number(value, expected):
    assert format_number(value) == expected


@pytest.mark.parametrize("text, expected", [
    ("", True),
    ("12.5", True),
    ("-3", True),
    (".", True),
    ("1e+21", False),
    ("5e-06.", False),
    ("Error", False),
])
def test_is_plain_number(text, expected):
    assert is_plain_number(text) is expected


@pytest.mark.parametrize("text", ["", ".", "Error", "inf", "nan", "abc"])
def test_parse_operand_rejects(text):
    assert parse_operand(text) is None
