"""Public port exports for concrete connection source implementations."""

from .asyncpg_source import AsyncpgConnectionSource, pool_kwargs
from .rds_signer import RdsAuthTokenProvider

__all__ = [
    "AsyncpgConnectionSource",
    "RdsAuthTokenProvider",
    "pool_kwargs",
]
