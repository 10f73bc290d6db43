"""ru-RU number and money formatting."""
from moto_suite.formatting import CURRENCY_SIGN, NBSP, format_currency, format_number, format_percent, human_money


def test_format_currency_groups_thousands():
    assert format_currency(1234567) == f"1{NBSP}234{NBSP}567{NBSP}{CURRENCY_SIGN}"
    assert format_currency(999.6) == f"1{NBSP}000{NBSP}{CURRENCY_SIGN}"
    assert format_currency(-1500) == f"-1{NBSP}500{NBSP}{CURRENCY_SIGN}"


def test_format_number_decimal_comma():
    assert format_number(1234.5) == f"1{NBSP}234,5"
    assert format_number(42) == "42"
    assert format_number(0) == "0"


def test_human_money_scales():
    assert human_money(1250000) == f"1,25{NBSP}млн{NBSP}{CURRENCY_SIGN}"
    assert human_money(3400000000) == f"3,40{NBSP}млрд{NBSP}{CURRENCY_SIGN}"
    assert human_money(5000) == format_currency(5000)


def test_format_percent():
    assert format_percent(12.345) == "12,3%"
    assert format_percent(50, digits=0) == "50%"


def test_non_numeric_input_is_returned_as_text():
    assert format_currency(None) == "None"
    assert format_number(float("nan")) == "nan"
