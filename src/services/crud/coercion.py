"""Coercion of raw form text into typed statement parameters."""

import logging
import math
import re
from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Any

from src.config.constants import DATE_FORMAT_HINT, SqlType
from src.services.crud.errors import ParseError

logger = logging.getLogger(__name__)

_INTEGER_RE = re.compile(r"[+-]?[0-9]+")
_NUMBER_RE = re.compile(r"[+-]?([0-9]+(\.[0-9]*)?|\.[0-9]+)([eE][+-]?[0-9]+)?")
_DATE_RE = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")


class TypeCoercer:
    """Converts user-entered text to the native value for a column type.

    Empty or missing input always becomes ``None`` (SQL NULL); NOT NULL
    constraints are left for the database to enforce.

    Args:
        strict_booleans: When True, boolean columns only accept ``true`` or
            ``false`` (any case). When False, any other text becomes ``False``.
    """

    def __init__(self, strict_booleans: bool = True) -> None:
        self.strict_booleans = strict_booleans

    def coerce(self, raw: str | None, sql_type: SqlType) -> Any:
        """Coerce ``raw`` for a column declared as ``sql_type``.

        Raises:
            ParseError: If the text is not valid for the type.
        """
        if raw is None or raw == "":
            return None

        if sql_type.is_integer:
            return self._to_integer(raw)
        if sql_type.is_decimal:
            return self._to_decimal(raw)
        if sql_type.is_floating:
            return self._to_float(raw)
        if sql_type.is_boolean:
            return self._to_boolean(raw)
        if sql_type is SqlType.DATE:
            return self._to_date(raw)
        return raw

    @staticmethod
    def _to_integer(raw: str) -> int:
        if not _INTEGER_RE.fullmatch(raw):
            raise ParseError(f"invalid integer for {raw}")
        return int(raw, 10)

    @staticmethod
    def _to_decimal(raw: str) -> Decimal:
        # Decimal() alone would also take whitespace, underscores, NaN and Infinity
        if not _NUMBER_RE.fullmatch(raw):
            raise ParseError(f"invalid number for {raw}")
        try:
            value = Decimal(raw)
        except InvalidOperation as e:
            raise ParseError(f"invalid number for {raw}") from e
        return value

    @classmethod
    def _to_float(cls, raw: str) -> float:
        value = float(cls._to_decimal(raw))
        if not math.isfinite(value):
            raise ParseError(f"invalid number for {raw}")
        return value

    def _to_boolean(self, raw: str) -> bool:
        lowered = raw.lower()
        if lowered == "true":
            return True
        if lowered == "false":
            return False
        if self.strict_booleans:
            raise ParseError(f"invalid boolean for {raw}")
        logger.debug("Lenient boolean parse: %r treated as false", raw)
        return False

    @staticmethod
    def _to_date(raw: str) -> date:
        if not _DATE_RE.fullmatch(raw):
            raise ParseError(f"invalid date format, expected {DATE_FORMAT_HINT}")
        try:
            return date.fromisoformat(raw)
        except ValueError as e:
            raise ParseError(f"invalid date format, expected {DATE_FORMAT_HINT}") from e
