"""Busy-retry handling for SQLite writes

SQLite allows a single writer per database file. A second writer gets a
busy error once the connection's busy timeout runs out; these helpers
re-run the operation a bounded number of times before giving up.
"""

import logging
import time
from dataclasses import dataclass

from tenacity import (
    RetryError,
    Retrying,
    before_sleep_log,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential,
    wait_fixed,
    wait_random,
)

from .errors import RetriesExhaustedError

DEFAULT_RETRIES = 10
DEFAULT_INTERVAL = 0.1  # seconds between attempts

BUSY_ERROR_NAMES = ("SQLITE_BUSY", "SQLITE_LOCKED")
BUSY_MESSAGES = ("SQLITE_BUSY", "database is locked", "database table is locked")

logger = logging.getLogger(__name__)


def is_busy_error(exc):
    """Check whether a driver error reports a busy or locked database"""
    # Imported here so the package loads even without the driver
    import sqlite3

    if not isinstance(exc, sqlite3.OperationalError):
        return False

    # sqlite_errorname is only set on Python 3.11+
    error_name = getattr(exc, "sqlite_errorname", None) or ""
    if error_name.startswith(BUSY_ERROR_NAMES):
        return True

    message = str(exc)
    return any(marker in message for marker in BUSY_MESSAGES)


@dataclass(frozen=True)
class RetryPolicy:
    """Delay schedule between busy retries

    The defaults give a fixed 100ms interval. Set ``backoff`` above 1 for
    exponential growth and ``jitter`` to spread out competing writers.
    """

    attempts: int = DEFAULT_RETRIES
    interval: float = DEFAULT_INTERVAL
    backoff: float = 1.0
    max_interval: float = 2.0
    jitter: float = 0.0

    def wait_strategy(self):
        """Tenacity wait strategy for this schedule"""
        if self.backoff == 1.0:
            wait = wait_fixed(min(self.interval, self.max_interval))
        else:
            wait = wait_exponential(
                multiplier=self.interval,
                exp_base=self.backoff,
                max=self.max_interval,
            )
        if self.jitter > 0:
            wait = wait + wait_random(0, self.jitter)
        return wait


def retry_transaction(action, retries=None, policy=None, sleep=time.sleep):
    """Run action(), retrying while the database reports busy

    Args:
        action: Zero-argument callable doing the database work
        retries: Attempt budget; overrides policy.attempts when given
        policy: RetryPolicy controlling the delay between attempts
        sleep: Blocking sleep function, replaceable in tests

    Returns:
        Whatever action() returns on its first successful attempt

    Raises:
        RetriesExhaustedError: If every attempt failed with a busy error
        sqlite3.Error: Any non-busy driver error, raised on the spot
    """
    policy = policy or RetryPolicy()
    attempts = policy.attempts if retries is None else retries
    if attempts < 1:
        raise ValueError(f"retries must be at least 1, got {attempts}")

    retrying = Retrying(
        stop=stop_after_attempt(attempts),
        wait=policy.wait_strategy(),
        retry=retry_if_exception(is_busy_error),
        before_sleep=before_sleep_log(logger, logging.WARNING),
        sleep=sleep,
    )
    try:
        return retrying(action)
    except RetryError as e:
        raise RetriesExhaustedError(attempts) from e.last_attempt.exception()
