"""Tests for CLI argument parsing and the inspection command"""

import sqlite3
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

from sqlite_common.cli import InspectionAccessor, main, parse_args
from sqlite_common.compression import compress
from sqlite_common.config import AccessorConfig


class TestCLIArgs(unittest.TestCase):
    """Test cases for CLI argument parsing"""

    def test_parse_args_requires_database(self):
        with patch("sys.stderr"):
            with self.assertRaises(SystemExit):
                parse_args([])

    def test_parse_args_defaults(self):
        args = parse_args(["data.db"])
        self.assertEqual(args.database, "data.db")
        self.assertIsNone(args.compress)
        self.assertIsNone(args.decompress)

    def test_parse_args_accepts_compress(self):
        args = parse_args(["data.db", "--compress", "hello"])
        self.assertEqual(args.compress, "hello")

    def test_parse_args_reads_sys_argv(self):
        with patch("sys.argv", ["sqlite-common", "other.db"]):
            args = parse_args()
            self.assertEqual(args.database, "other.db")


class TestInspectionCommand(unittest.TestCase):
    """Test cases for main() against a real database file"""

    def setUp(self):
        self.tmpdir = tempfile.TemporaryDirectory()
        self.db_path = Path(self.tmpdir.name) / "inspect.db"

        conn = sqlite3.connect(self.db_path)
        conn.execute("CREATE TABLE people (id INTEGER PRIMARY KEY, name TEXT)")
        conn.execute("CREATE TABLE \"odd name\" (id INTEGER)")
        conn.executemany("INSERT INTO people (name) VALUES (?)", [("alice",), ("bob",)])
        conn.commit()
        conn.close()

    def tearDown(self):
        self.tmpdir.cleanup()

    def test_list_tables_counts_rows(self):
        with InspectionAccessor(str(self.db_path), config=AccessorConfig()) as db:
            rows = db.list_tables()

        self.assertEqual(rows, [("odd name", 0), ("people", 2)])

    def test_main_prints_tables(self):
        with patch("sqlite_common.cli.console") as mock_console:
            result = main([str(self.db_path)])

        self.assertEqual(result, 0)
        mock_console.print.assert_called_once()

    def test_main_compress_and_decompress(self):
        packed = compress("hello")
        with patch("sqlite_common.cli.console") as mock_console:
            result = main(
                [str(self.db_path), "--compress", "hello", "--decompress", packed]
            )

        self.assertEqual(result, 0)
        printed = [call.args[0] for call in mock_console.print.call_args_list]
        self.assertIn(packed, printed)
        self.assertIn("hello", printed)

    def test_main_missing_file(self):
        missing = Path(self.tmpdir.name) / "missing.db"
        with patch("sqlite_common.cli.console") as mock_console:
            result = main([str(missing)])

        self.assertEqual(result, 1)
        self.assertFalse(missing.exists())
        self.assertIn("does not exist", mock_console.print.call_args.args[0])

    def test_main_jdbc_url(self):
        with patch("sqlite_common.cli.console") as mock_console:
            result = main([f"jdbc:sqlite:{self.db_path}"])

        self.assertEqual(result, 0)
        mock_console.print.assert_called_once()

    def test_main_missing_file_behind_jdbc_prefix(self):
        missing = Path(self.tmpdir.name) / "missing.db"
        with patch("sqlite_common.cli.console") as mock_console:
            result = main([f"jdbc:sqlite:{missing}"])

        self.assertEqual(result, 1)
        self.assertFalse(missing.exists())
        self.assertIn("does not exist", mock_console.print.call_args.args[0])

    def test_main_bad_compressed_value(self):
        with patch("sqlite_common.cli.console") as mock_console:
            result = main([str(self.db_path), "--decompress", "@@@"])

        self.assertEqual(result, 1)
        self.assertIn("Error", mock_console.print.call_args.args[0])


if __name__ == "__main__":
    unittest.main()
