"""Error taxonomy for CRUD operations."""


class CrudError(Exception):
    """Base class for every failure surfaced by a CRUD operation."""


class ParseError(CrudError):
    """User-entered text cannot be coerced to the column's declared type."""


class DatabaseConnectionError(CrudError):
    """The database could not be reached."""


class QueryError(CrudError):
    """The database (or statement assembly) rejected a well-formed request."""


class IdentifierError(QueryError):
    """A table or column name is not part of the known schema vocabulary."""
