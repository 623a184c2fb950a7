"""Exception types raised by the SQLite accessor"""


class AccessorError(Exception):
    """Base class for accessor errors"""


class DriverUnavailableError(AccessorError):
    """The sqlite3 driver module could not be loaded"""


class DatabaseConnectionError(AccessorError):
    """Opening or preparing the database connection failed"""


class RetriesExhaustedError(AccessorError):
    """The database stayed busy for the whole retry budget"""

    def __init__(self, attempts):
        super().__init__(
            f"Failed after {attempts} attempts due to database being busy."
        )
        self.attempts = attempts


class UnsupportedTypeError(AccessorError, TypeError):
    """A numeric type was requested that the id reader cannot produce"""


class SchemaError(AccessorError):
    """A table could not be created or dropped"""

    def __init__(self, action, table, cause):
        super().__init__(f"Error {action} table {table}: {cause}")
        self.action = action
        self.table = table
        self.cause = cause


class CompressionError(AccessorError, ValueError):
    """Text could not be decompressed"""
