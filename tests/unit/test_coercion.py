"""Tests for raw text coercion."""

from datetime import date
from decimal import Decimal

import pytest

from src.config.constants import SqlType
from src.services.crud.coercion import TypeCoercer
from src.services.crud.errors import ParseError

INTEGER_FAMILY = [SqlType.INTEGER, SqlType.SMALLINT, SqlType.BIGINT, SqlType.TINYINT]


@pytest.fixture
def coercer():
    return TypeCoercer()


@pytest.mark.parametrize("sql_type", list(SqlType))
def test_empty_text_is_null_for_every_type(coercer, sql_type):
    assert coercer.coerce("", sql_type) is None
    assert coercer.coerce(None, sql_type) is None


@pytest.mark.parametrize("sql_type", INTEGER_FAMILY)
def test_integer_family(coercer, sql_type):
    assert coercer.coerce("42", sql_type) == 42
    assert coercer.coerce("-7", sql_type) == -7


@pytest.mark.parametrize("sql_type", INTEGER_FAMILY)
def test_integer_family_rejects_text(coercer, sql_type):
    with pytest.raises(ParseError, match="invalid integer for abc"):
        coercer.coerce("abc", sql_type)


@pytest.mark.parametrize("raw", ["4.2", "1_000", " 42", "0x10"])
def test_integer_rejects_non_decimal_digits(coercer, raw):
    with pytest.raises(ParseError):
        coercer.coerce(raw, SqlType.INTEGER)


def test_decimal_family(coercer):
    assert coercer.coerce("12.50", SqlType.NUMERIC) == Decimal("12.50")
    assert coercer.coerce("3", SqlType.DECIMAL) == Decimal("3")


def test_floating_family(coercer):
    value = coercer.coerce("2.5", SqlType.DOUBLE)
    assert isinstance(value, float)
    assert value == 2.5


def test_numeric_accepts_exponent_and_bare_fraction(coercer):
    assert coercer.coerce("1e3", SqlType.DECIMAL) == Decimal("1000")
    assert coercer.coerce(".5", SqlType.NUMERIC) == Decimal("0.5")
    assert coercer.coerce("-2.", SqlType.REAL) == -2.0


@pytest.mark.parametrize(
    "raw", ["abc", "NaN", "Infinity", "1,5", "1_000", " 12 ", "12\n", ".", "1e"]
)
def test_numeric_rejects_invalid_text(coercer, raw):
    with pytest.raises(ParseError, match="invalid number"):
        coercer.coerce(raw, SqlType.DECIMAL)


@pytest.mark.parametrize("raw", ["1_000", " 12 "])
@pytest.mark.parametrize("sql_type", [SqlType.DOUBLE, SqlType.FLOAT, SqlType.REAL])
def test_floating_rejects_loose_number_text(coercer, sql_type, raw):
    with pytest.raises(ParseError, match="invalid number"):
        coercer.coerce(raw, sql_type)


@pytest.mark.parametrize("raw", ["1e400", "-1e400"])
@pytest.mark.parametrize("sql_type", [SqlType.DOUBLE, SqlType.FLOAT, SqlType.REAL])
def test_floating_rejects_overflow(coercer, sql_type, raw):
    with pytest.raises(ParseError, match=f"invalid number for {raw}"):
        coercer.coerce(raw, sql_type)


@pytest.mark.parametrize("sql_type", [SqlType.BOOLEAN, SqlType.BIT])
def test_boolean_case_insensitive(coercer, sql_type):
    assert coercer.coerce("TRUE", sql_type) is True
    assert coercer.coerce("False", sql_type) is False


def test_strict_boolean_rejects_typos(coercer):
    with pytest.raises(ParseError, match="invalid boolean for ture"):
        coercer.coerce("ture", SqlType.BOOLEAN)


def test_lenient_boolean_defaults_to_false():
    lenient = TypeCoercer(strict_booleans=False)
    assert lenient.coerce("ture", SqlType.BOOLEAN) is False
    assert lenient.coerce("yes", SqlType.BIT) is False
    assert lenient.coerce("true", SqlType.BIT) is True


def test_date_iso_format(coercer):
    assert coercer.coerce("2024-01-15", SqlType.DATE) == date(2024, 1, 15)


@pytest.mark.parametrize("raw", ["15/01/2024", "2024-1-15", "2024-02-30", "20240115"])
def test_date_rejects_other_formats(coercer, raw):
    with pytest.raises(ParseError, match="invalid date format, expected YYYY-MM-DD"):
        coercer.coerce(raw, SqlType.DATE)


def test_text_passes_through_unchanged(coercer):
    assert coercer.coerce("  Drill  ", SqlType.TEXT) == "  Drill  "


def test_type_code_mapping():
    assert SqlType.from_type_code(4) is SqlType.INTEGER
    assert SqlType.from_type_code(-5) is SqlType.BIGINT
    assert SqlType.from_type_code(91) is SqlType.DATE
    assert SqlType.from_type_code(-7) is SqlType.BIT
    assert SqlType.from_type_code(12) is SqlType.TEXT  # VARCHAR
    assert SqlType.from_type_code(None) is SqlType.TEXT
