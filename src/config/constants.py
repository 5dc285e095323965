"""
Constants, enums, and static values.
"""

from enum import Enum


class SqlType(str, Enum):
    """Declared column types understood by the input coercer."""

    INTEGER = "integer"
    SMALLINT = "smallint"
    BIGINT = "bigint"
    TINYINT = "tinyint"
    NUMERIC = "numeric"
    DECIMAL = "decimal"
    DOUBLE = "double"
    FLOAT = "float"
    REAL = "real"
    BOOLEAN = "boolean"
    BIT = "bit"
    DATE = "date"
    TEXT = "text"

    @classmethod
    def from_type_code(cls, code: int | None) -> "SqlType":
        """Map an ODBC/JDBC ``DATA_TYPE`` code to a SqlType (``TEXT`` when unknown)."""
        if code is None:
            return cls.TEXT
        return TYPE_CODES.get(int(code), cls.TEXT)

    @property
    def is_integer(self) -> bool:
        return self in INTEGER_TYPES

    @property
    def is_decimal(self) -> bool:
        return self in DECIMAL_TYPES

    @property
    def is_floating(self) -> bool:
        return self in FLOATING_TYPES

    @property
    def is_boolean(self) -> bool:
        return self in BOOLEAN_TYPES


# ODBC SQL type codes (identical to java.sql.Types for these entries)
TYPE_CODES: dict[int, SqlType] = {
    4: SqlType.INTEGER,
    5: SqlType.SMALLINT,
    -5: SqlType.BIGINT,
    -6: SqlType.TINYINT,
    2: SqlType.NUMERIC,
    3: SqlType.DECIMAL,
    8: SqlType.DOUBLE,
    6: SqlType.FLOAT,
    7: SqlType.REAL,
    16: SqlType.BOOLEAN,
    -7: SqlType.BIT,
    91: SqlType.DATE,
}

INTEGER_TYPES: frozenset[SqlType] = frozenset(
    {SqlType.INTEGER, SqlType.SMALLINT, SqlType.BIGINT, SqlType.TINYINT}
)
DECIMAL_TYPES: frozenset[SqlType] = frozenset({SqlType.NUMERIC, SqlType.DECIMAL})
FLOATING_TYPES: frozenset[SqlType] = frozenset({SqlType.DOUBLE, SqlType.FLOAT, SqlType.REAL})
BOOLEAN_TYPES: frozenset[SqlType] = frozenset({SqlType.BOOLEAN, SqlType.BIT})

DATE_FORMAT_HINT = "YYYY-MM-DD"
BIND_PLACEHOLDER = "?"
