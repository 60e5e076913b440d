"""Error taxonomy raised by the query helper."""

from __future__ import annotations

from typing import Any, Optional


class PgClientHelperError(Exception):
    """Base class for every error raised by `pg_client_helper`."""


class InvalidParameterName(PgClientHelperError, ValueError):
    """A named parameter key does not look like `$identifier`."""

    def __init__(self, key: Any):
        self.key = key
        super().__init__(
            f"Invalid parameter name: {key!r}, parameter names must start with a dollar sign '$'"
        )


class ConnectionAcquisitionFailed(PgClientHelperError):
    """The connection source could not hand out a connection."""

    def __init__(self, cause: BaseException):
        self.cause = cause
        super().__init__(f"Failed to acquire a connection: {cause}")


class QueryExecutionFailed(PgClientHelperError):
    """The database rejected or failed a statement.

    `query` and `params` hold the statement as it was sent to the driver,
    i.e. after named parameters were rewritten to positional ones.
    """

    def __init__(
        self,
        cause: BaseException,
        query: Optional[str] = None,
        params: Any = None,
    ):
        self.cause = cause
        self.query = query
        self.params = params
        super().__init__(f"Query failed: {cause}")


class TransactionStateError(PgClientHelperError, RuntimeError):
    """A transaction session was used after it was committed or rolled back."""
