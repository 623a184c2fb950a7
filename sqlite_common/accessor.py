"""Base class for SQLite database access

Subclasses supply the table creation statements; the base class owns the
connection and offers query, update and retry plumbing on top of it.
"""

import importlib
import logging
from abc import ABC, abstractmethod
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Callable, Mapping, Optional, TypeVar

from . import compression
from .config import AccessorConfig, load_config
from .errors import DatabaseConnectionError, DriverUnavailableError, UnsupportedTypeError
from .params import IdType, IntParam, LongParam, bind_params
from .retry import retry_transaction as _retry_transaction
from .schema import SchemaReport, TableOutcome, TableStatus

T = TypeVar("T")

DRIVER_MODULE = "sqlite3"
URL_PREFIX = "jdbc:sqlite:"
NO_ID = -1
NO_STRING_ID = ""

logger = logging.getLogger(__name__)


class DatabaseAccessor(ABC):
    """One SQLite connection plus the helpers every data access class needs

    The connection is opened in the constructor and stays open until
    close_connection() is called or the ``with`` block exits. It is not
    safe to share one accessor between threads.

    Example:
        >>> class People(DatabaseAccessor):
        ...     table_creation_queries = {
        ...         "people": "CREATE TABLE IF NOT EXISTS people "
        ...                   "(id INTEGER PRIMARY KEY, name TEXT)",
        ...     }
        >>> with People("people.db") as db:
        ...     db.execute_update("INSERT INTO people (name) VALUES (?)", "alice")
        ...     db.last_insert_id()
    """

    def __init__(self, url: str, config: Optional[AccessorConfig] = None):
        self.url = url
        self.config = config or load_config()
        self._closed = False
        self._driver = self._load_driver()
        self.conn = self._create_database_connection(url)
        try:
            self.schema_report = self.create_tables()
        except BaseException:
            self.close_connection()
            raise

    @property
    @abstractmethod
    def table_creation_queries(self) -> Mapping[str, str]:
        """Ordered mapping of table name to its CREATE TABLE IF NOT EXISTS statement"""
        raise NotImplementedError

    # ------------------------------------------------------------------
    # Connection lifecycle
    # ------------------------------------------------------------------

    def _load_driver(self):
        """Import the sqlite3 driver module"""
        try:
            return importlib.import_module(DRIVER_MODULE)
        except ImportError as e:
            raise DriverUnavailableError("SQLite driver not found!") from e

    def _create_database_connection(self, url):
        """Open the connection and enable foreign keys on it"""
        target, uri = self._resolve_url(url)
        try:
            if not uri and target != ":memory:" and self.config.create_parent_dirs:
                Path(target).parent.mkdir(parents=True, exist_ok=True)

            conn = self._driver.connect(
                target,
                timeout=self.config.timeout,
                isolation_level=None,
                uri=uri,
            )
        except (self._driver.Error, OSError) as e:
            raise DatabaseConnectionError(
                f"Error connecting to the database: {e}"
            ) from e

        conn.row_factory = self._driver.Row
        try:
            self._enable_foreign_keys(conn)
        except self._driver.Error as e:
            conn.close()
            raise DatabaseConnectionError(
                f"Error connecting to the database: {e}"
            ) from e
        return conn

    @staticmethod
    def _resolve_url(url):
        """Turn a database URL into a (target, uri_mode) pair for connect()"""
        url = str(url)
        if url.startswith(URL_PREFIX):
            url = url[len(URL_PREFIX):]
        return url, url.startswith("file:")

    def _enable_foreign_keys(self, conn):
        # Must run before create_tables so REFERENCES clauses are enforced
        conn.execute("PRAGMA foreign_keys = ON;")

    @property
    def closed(self):
        return self._closed

    def close_connection(self):
        """Close the database connection"""
        self.conn.close()
        self._closed = True

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close_connection()
        return None

    # ------------------------------------------------------------------
    # Schema management
    # ------------------------------------------------------------------

    def create_tables(self) -> SchemaReport:
        """Create the subclass's tables if they do not already exist

        Stops at the first failing statement. The failure is logged and
        reported, never raised.
        """
        return self._run_schema_statements(
            "create",
            [(name, sql) for name, sql in self.table_creation_queries.items()],
            success_message="Table {name} created successfully.",
            error_message="Error creating tables: {error}",
        )

    def drop_tables(self) -> SchemaReport:
        """Drop the subclass's tables if they exist"""
        return self._run_schema_statements(
            "drop",
            [(name, f"DROP TABLE IF EXISTS {name}") for name in self.table_creation_queries],
            success_message="Dropped table: {name}",
            error_message="Error dropping tables: {error}",
        )

    def _run_schema_statements(self, action, statements, success_message, error_message):
        report = SchemaReport(action)
        cursor = self.conn.cursor()
        try:
            failed = False
            for name, sql in statements:
                if failed:
                    report.outcomes.append(TableOutcome(name, TableStatus.SKIPPED))
                    continue
                try:
                    cursor.execute(sql)
                except self._driver.Error as e:
                    logger.error(error_message.format(error=e))
                    report.outcomes.append(TableOutcome(name, TableStatus.FAILED, e))
                    failed = True
                    continue
                logger.info(success_message.format(name=name))
                report.outcomes.append(TableOutcome(name, TableStatus.OK))
        finally:
            cursor.close()
        return report

    # ------------------------------------------------------------------
    # Statement helpers
    # ------------------------------------------------------------------

    def set_params(self, params):
        """Bind values to placeholders, left to right"""
        return bind_params(params)

    def execute_query(self, sql: str, *params: Any, mapper: Callable[[Any], T]) -> T:
        """Run a SELECT and hand the live cursor to mapper

        The cursor is closed when this returns, including when mapper raises.
        """
        cursor = self.conn.cursor()
        try:
            cursor.execute(sql, self.set_params(params))
            return mapper(cursor)
        finally:
            cursor.close()

    def execute_update(self, sql: str, *params: Any) -> bool:
        """Run an INSERT, UPDATE or DELETE; True if at least one row changed"""
        cursor = self.conn.cursor()
        try:
            cursor.execute(sql, self.set_params(params))
            return cursor.rowcount > 0
        finally:
            cursor.close()

    def last_insert_id(self) -> int:
        """Rowid of the most recent insert on this connection, or NO_ID

        Call it right after the insert; it is per connection, not per
        statement.
        """
        value = self.execute_query("SELECT last_insert_rowid()", mapper=_first_column)
        # SQLite reports 0 when nothing has been inserted on this connection
        if not value:
            return NO_ID
        return int(value)

    def last_insert_string_id(self) -> str:
        """String form of last_insert_id(), or NO_STRING_ID"""
        value = self.execute_query("SELECT last_insert_rowid()", mapper=_first_column)
        if not value:
            return NO_STRING_ID
        return str(value)

    def exists_check(self, sql: str, *params: Any) -> bool:
        """True if the query yields at least one row"""
        return self.execute_query(
            sql, *params, mapper=lambda cursor: cursor.fetchone() is not None
        )

    @staticmethod
    def get_id_result(cursor, id_type=IdType.INT):
        """Read the "id" column of the next row as a 32 or 64-bit integer

        Returns None when the cursor has no more rows or the id is NULL.

        Raises:
            UnsupportedTypeError: If id_type is not an IdType
            OverflowError: If the id does not fit the requested width
        """
        if not isinstance(id_type, IdType):
            raise UnsupportedTypeError(f"Unsupported type: {id_type!r}")

        row = cursor.fetchone()
        if row is None:
            return None

        columns = [column[0] for column in cursor.description]
        if "id" not in columns:
            raise KeyError("Result has no 'id' column")
        value = row[columns.index("id")]
        if value is None:
            return None

        if id_type is IdType.INT:
            return IntParam(int(value)).value
        return LongParam(int(value)).value

    @contextmanager
    def transaction(self, immediate=False):
        """Group statements into one transaction

        Commits when the block exits normally, rolls back and re-raises
        otherwise. ``immediate=True`` takes the write lock up front, so a
        busy database fails at BEGIN rather than mid-transaction.
        """
        self.conn.execute("BEGIN IMMEDIATE" if immediate else "BEGIN")
        try:
            yield self
            self.conn.execute("COMMIT")
        except BaseException:
            # Some errors make SQLite roll back on its own
            if self.conn.in_transaction:
                self.conn.execute("ROLLBACK")
            raise

    def retry_transaction(self, action: Callable[[], T], retries: Optional[int] = None) -> T:
        """Run action(), retrying while the database is busy

        The budget defaults to config.retry_attempts.
        """
        return _retry_transaction(
            action, retries=retries, policy=self.config.retry_policy()
        )

    # ------------------------------------------------------------------
    # Compression
    # ------------------------------------------------------------------

    @staticmethod
    def compress(text: str) -> str:
        return compression.compress(text)

    @staticmethod
    def decompress(compressed: str) -> str:
        return compression.decompress(compressed)


def _first_column(cursor):
    row = cursor.fetchone()
    return row[0] if row is not None else None
