"""Public core API for parameter rewriting, execution, and transactions."""

from .contracts import ConnectionSourcePort
from .errors import (
    ConnectionAcquisitionFailed,
    InvalidParameterName,
    PgClientHelperError,
    QueryExecutionFailed,
    TransactionStateError,
)
from .executor import QueryExecutor
from .transaction import TransactionManager, TransactionSession, TransactionState
from .transform import transform_query
from .types import MaybeRow, NamedParams, ParamValue, PositionalParams, QueryParams, Row, Rows

__all__ = [
    "ConnectionSourcePort",
    "PgClientHelperError",
    "InvalidParameterName",
    "ConnectionAcquisitionFailed",
    "QueryExecutionFailed",
    "TransactionStateError",
    "QueryExecutor",
    "TransactionManager",
    "TransactionSession",
    "TransactionState",
    "transform_query",
    "NamedParams",
    "ParamValue",
    "PositionalParams",
    "QueryParams",
    "Row",
    "Rows",
    "MaybeRow",
]
