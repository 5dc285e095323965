"""
SQLSTATE classification for driver errors.
"""

# SQLSTATE codes (or classes) meaning the server could not be reached or the
# link dropped. Everything else is a rejection of the statement itself.
_CONNECTION_SQLSTATE_CLASSES: frozenset[str] = frozenset({
    "08",  # Connection exception (08001, 08S01, 08004, ...)
})
_CONNECTION_SQLSTATES: frozenset[str] = frozenset({
    "HYT01",  # Connection timeout expired
})


def extract_sqlstate(exception: Exception) -> str | None:
    """Return the SQLSTATE carried in ``exception.args[0]``, if any.

    pyodbc errors are raised as ``Error(sqlstate, message)``.
    """
    if exception.args and isinstance(exception.args[0], str):
        candidate = exception.args[0].strip()
        if len(candidate) == 5 and candidate.isalnum():
            return candidate.upper()
    return None


def is_connection_failure(exception: Exception) -> bool:
    """Check if a driver error means the database is unreachable."""
    if isinstance(exception, (ConnectionError, TimeoutError)):
        return True
    sqlstate = extract_sqlstate(exception)
    if sqlstate is None:
        return False
    return sqlstate in _CONNECTION_SQLSTATES or sqlstate[:2] in _CONNECTION_SQLSTATE_CLASSES
