"""Connection settings read from the standard `PG*` environment variables."""

from __future__ import annotations

import os
import ssl
from dataclasses import dataclass
from typing import Any, Mapping, Optional, Union

from .log import LOG_LEVELS, normalize_log_level

DEFAULT_CA_BUNDLE = "./rds-combined-ca-bundle.pem"

SSLSetting = Union[bool, ssl.SSLContext]


def is_true(value: Any) -> bool:
    """Return True for `True`, `1` and case-insensitive `"true"`."""

    if isinstance(value, str):
        return value.strip().lower() == "true"
    return value is True or (type(value) is int and value == 1)


def _int_or_default(raw: Optional[str], default: int, name: str) -> int:
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer, got {raw!r}.") from exc


@dataclass(frozen=True)
class PgConfig:
    """Connection target, TLS policy and pool sizing for the helper."""

    host: Optional[str] = None
    port: int = 5432
    user: Optional[str] = None
    password: Optional[str] = None
    database: Optional[str] = None
    ssl_required: bool = False
    ssl_allow_self_signed: bool = False
    use_aws_rds_signer: bool = False
    ssl_ca_bundle: str = DEFAULT_CA_BUNDLE
    aws_region: Optional[str] = None
    min_pool_size: int = 1
    max_pool_size: int = 10
    log_level: str = "SILENT"

    def __post_init__(self) -> None:
        if not 1 <= self.port <= 65535:
            raise ValueError("port must be between 1 and 65535.")
        if self.max_pool_size < 1:
            raise ValueError("max_pool_size must be >= 1.")
        if not 0 <= self.min_pool_size <= self.max_pool_size:
            raise ValueError("min_pool_size must be between 0 and max_pool_size.")
        if self.log_level.strip().upper() not in LOG_LEVELS:
            raise ValueError(
                "log_level must be one of: DEBUG, INFO, WARN, ERROR, SILENT."
            )
        object.__setattr__(self, "log_level", normalize_log_level(self.log_level))
        if self.use_aws_rds_signer and not (self.host and self.user):
            raise ValueError("host and user are required when use_aws_rds_signer is enabled.")

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> PgConfig:
        """Build config from `PGHOST`, `PGPORT`, ... and the helper's own flags."""

        env = os.environ if environ is None else environ
        return cls(
            host=env.get("PGHOST") or None,
            port=_int_or_default(env.get("PGPORT"), 5432, "PGPORT"),
            user=env.get("PGUSER") or None,
            password=env.get("PGPASSWORD"),
            database=env.get("PGDATABASE") or None,
            ssl_required=is_true(env.get("PG_SSL_REQUIRED")),
            ssl_allow_self_signed=is_true(env.get("PG_SSL_ALLOW_SELFSIGNED")),
            use_aws_rds_signer=is_true(env.get("PG_USE_AWS_RDS_SIGNER")),
            ssl_ca_bundle=env.get("PG_SSL_CA_BUNDLE") or DEFAULT_CA_BUNDLE,
            aws_region=env.get("AWS_REGION") or None,
            min_pool_size=_int_or_default(env.get("PG_POOL_MIN"), 1, "PG_POOL_MIN"),
            max_pool_size=_int_or_default(env.get("PG_POOL_MAX"), 10, "PG_POOL_MAX"),
            log_level=normalize_log_level(env.get("PG_CLIENT_HELPER_LOGLEVEL")),
        )

    def read_ca_bundle(self) -> str:
        try:
            with open(self.ssl_ca_bundle, encoding="utf-8") as fh:
                return fh.read()
        except OSError as exc:
            raise ValueError(f"Failed to read CA bundle {self.ssl_ca_bundle!r}: {exc}") from exc

    def ssl_context(self) -> SSLSetting:
        """Return the `ssl=` argument for the driver.

        * No flags: `False`, plain connection.
        * `ssl_required` / `ssl_allow_self_signed`: encrypted, certificate unchecked.
        * RDS signer: verified against the CA bundle unless self-signed is allowed.
        """

        if self.use_aws_rds_signer:
            ctx = ssl.create_default_context(cadata=self.read_ca_bundle())
            if self.ssl_allow_self_signed:
                ctx.check_hostname = False
                ctx.verify_mode = ssl.CERT_NONE
            return ctx

        if self.ssl_required or self.ssl_allow_self_signed:
            ctx = ssl.create_default_context()
            ctx.check_hostname = False
            ctx.verify_mode = ssl.CERT_NONE
            return ctx

        return False

