"""SQLite Common - base class and helpers for SQLite data access."""

from .accessor import NO_ID, NO_STRING_ID, DatabaseAccessor
from .compression import compress, decompress
from .config import AccessorConfig, load_config
from .errors import (
    AccessorError,
    CompressionError,
    DatabaseConnectionError,
    DriverUnavailableError,
    RetriesExhaustedError,
    SchemaError,
    UnsupportedTypeError,
)
from .params import (
    IdType,
    IntParam,
    LongParam,
    NullableIntParam,
    ObjectParam,
    StrParam,
    bind_params,
    to_param,
)
from .retry import RetryPolicy, is_busy_error, retry_transaction
from .schema import SchemaReport, TableOutcome, TableStatus

__all__ = [
    "DatabaseAccessor",
    "NO_ID",
    "NO_STRING_ID",
    "AccessorConfig",
    "load_config",
    "compress",
    "decompress",
    "RetryPolicy",
    "is_busy_error",
    "retry_transaction",
    "SchemaReport",
    "TableOutcome",
    "TableStatus",
    "IdType",
    "IntParam",
    "LongParam",
    "NullableIntParam",
    "ObjectParam",
    "StrParam",
    "bind_params",
    "to_param",
    "AccessorError",
    "CompressionError",
    "DatabaseConnectionError",
    "DriverUnavailableError",
    "RetriesExhaustedError",
    "SchemaError",
    "UnsupportedTypeError",
]
