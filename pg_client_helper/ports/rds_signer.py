"""IAM database authentication tokens for Amazon RDS.

This adapter is optional and requires `boto3` package installed.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Optional

logger = logging.getLogger(__name__)


class RdsAuthTokenProvider:
    """Async password source that signs a fresh RDS auth token per connect."""

    def __init__(
        self,
        *,
        host: str,
        port: int,
        user: str,
        region: Optional[str] = None,
        client: Any = None,
    ) -> None:
        self.host = host
        self.port = port
        self.user = user
        self.region = region
        self._client = client

    def _rds_client(self) -> Any:
        if self._client is None:
            try:
                import boto3  # type: ignore[import-not-found]
            except ImportError as exc:  # pragma: no cover - env dependent
                raise ImportError(
                    "boto3 is required for RDS IAM authentication. "
                    "Install with `pip install boto3`."
                ) from exc
            self._client = boto3.client("rds", region_name=self.region)
        return self._client

    async def __call__(self) -> str:
        # boto3 signs synchronously; keep it off the event loop.
        return await asyncio.to_thread(self._sign)

    def _sign(self) -> str:
        logger.debug("[RDS SIGNER] getting auth token for %s@%s:%s", self.user, self.host, self.port)
        return self._rds_client().generate_db_auth_token(
            DBHostname=self.host,
            Port=self.port,
            DBUsername=self.user,
            Region=self.region,
        )
