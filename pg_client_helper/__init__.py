"""Named-parameter query helper for asyncpg connection pools."""

from .client import PgClientHelper
from .config import PgConfig, is_true
from .core import (
    ConnectionAcquisitionFailed,
    ConnectionSourcePort,
    InvalidParameterName,
    MaybeRow,
    NamedParams,
    ParamValue,
    PgClientHelperError,
    PositionalParams,
    QueryExecutionFailed,
    QueryExecutor,
    QueryParams,
    Row,
    Rows,
    TransactionManager,
    TransactionSession,
    TransactionState,
    TransactionStateError,
    transform_query,
)
from .log import configure_logging
from .ports import AsyncpgConnectionSource, RdsAuthTokenProvider

__all__ = [
    "PgClientHelper",
    "PgConfig",
    "is_true",
    "configure_logging",
    "ConnectionSourcePort",
    "AsyncpgConnectionSource",
    "RdsAuthTokenProvider",
    "QueryExecutor",
    "TransactionManager",
    "TransactionSession",
    "TransactionState",
    "transform_query",
    "PgClientHelperError",
    "InvalidParameterName",
    "ConnectionAcquisitionFailed",
    "QueryExecutionFailed",
    "TransactionStateError",
    "NamedParams",
    "ParamValue",
    "PositionalParams",
    "QueryParams",
    "Row",
    "Rows",
    "MaybeRow",
]
