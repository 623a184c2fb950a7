"""Accessor configuration

Defaults live on AccessorConfig; load_config() applies environment
overrides:

    SQLITE_COMMON_TIMEOUT              busy timeout in seconds
    SQLITE_COMMON_RETRY_ATTEMPTS       retry budget for retry_transaction
    SQLITE_COMMON_RETRY_INTERVAL       seconds between busy retries
    SQLITE_COMMON_RETRY_BACKOFF        delay multiplier per attempt
    SQLITE_COMMON_RETRY_MAX_INTERVAL   delay cap in seconds
    SQLITE_COMMON_RETRY_JITTER         max random seconds added per delay
    SQLITE_COMMON_CREATE_PARENT_DIRS   "true" / "false"
"""

import logging
import os
from dataclasses import dataclass

from .retry import DEFAULT_INTERVAL, DEFAULT_RETRIES, RetryPolicy

ENV_PREFIX = "SQLITE_COMMON_"

logger = logging.getLogger(__name__)


@dataclass
class AccessorConfig:
    timeout: float = 5.0
    retry_attempts: int = DEFAULT_RETRIES
    retry_interval: float = DEFAULT_INTERVAL
    retry_backoff: float = 1.0
    retry_max_interval: float = 2.0
    retry_jitter: float = 0.0
    create_parent_dirs: bool = True

    def retry_policy(self):
        """Build the RetryPolicy described by this config"""
        return RetryPolicy(
            attempts=self.retry_attempts,
            interval=self.retry_interval,
            backoff=self.retry_backoff,
            max_interval=self.retry_max_interval,
            jitter=self.retry_jitter,
        )


def _env_value(name, default, parse):
    raw = os.getenv(ENV_PREFIX + name)
    if raw is None or not raw.strip():
        return default
    try:
        return parse(raw.strip())
    except ValueError:
        logger.warning(
            f"Ignoring invalid {ENV_PREFIX + name}={raw!r}, using {default!r}"
        )
        return default


def _parse_flag(raw):
    value = raw.lower()
    if value in ("1", "true", "yes", "on"):
        return True
    if value in ("0", "false", "no", "off"):
        return False
    raise ValueError(raw)


def load_config():
    """Load AccessorConfig from environment variables, falling back to defaults"""
    defaults = AccessorConfig()
    return AccessorConfig(
        timeout=_env_value("TIMEOUT", defaults.timeout, float),
        retry_attempts=_env_value("RETRY_ATTEMPTS", defaults.retry_attempts, int),
        retry_interval=_env_value("RETRY_INTERVAL", defaults.retry_interval, float),
        retry_backoff=_env_value("RETRY_BACKOFF", defaults.retry_backoff, float),
        retry_max_interval=_env_value(
            "RETRY_MAX_INTERVAL", defaults.retry_max_interval, float
        ),
        retry_jitter=_env_value("RETRY_JITTER", defaults.retry_jitter, float),
        create_parent_dirs=_env_value(
            "CREATE_PARENT_DIRS", defaults.create_parent_dirs, _parse_flag
        ),
    )
