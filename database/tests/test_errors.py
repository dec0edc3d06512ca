"""
Tests for bootstrap error types and their diagnostics
"""

import sqlite3
from pathlib import Path

from database.errors import (
    TROUBLESHOOTING_HINTS,
    ConnectionUnavailableError,
    DatabaseBootstrapError,
    DatabaseOpenError,
    SchemaInitError,
    StorageLocationError,
)


class TestErrorHierarchy:
    def test_all_errors_share_base(self):
        for error in (
            DatabaseOpenError(Path("/tmp/x.db"), "boom"),
            StorageLocationError(Path("/tmp/x.db"), "boom"),
            ConnectionUnavailableError(),
            SchemaInitError("users", "boom"),
        ):
            assert isinstance(error, DatabaseBootstrapError)

    def test_connection_unavailable_default_message(self):
        assert str(ConnectionUnavailableError()) == "Database connection not available"

    def test_schema_error_names_table(self):
        error = SchemaInitError("files", "near \"(\": syntax error")

        assert error.table == "files"
        assert "files" in str(error)
        assert error.hints == ()


class TestDiagnosticLines:
    def test_open_error_diagnostics(self):
        """Test message, path, full error and numbered tips"""
        db_path = Path("/srv/app/sidandtos.db")
        cause = sqlite3.OperationalError("unable to open database file")
        error = DatabaseOpenError(db_path, str(cause))
        error.__cause__ = cause

        lines = error.diagnostic_lines()

        assert lines[0] == "[ERROR] Error opening database: unable to open database file"
        assert f"Database path: {db_path}" in lines
        assert any(line.startswith("Full error: OperationalError(") for line in lines)
        assert "Troubleshooting tips:" in lines
        tips = lines[lines.index("Troubleshooting tips:") + 1 :]
        assert len(tips) == len(TROUBLESHOOTING_HINTS) == 4
        assert tips[0] == f"   1. {TROUBLESHOOTING_HINTS[0]}"
        assert tips[3].endswith("Try deleting the database file and let it recreate")

    def test_minimal_diagnostics(self):
        lines = ConnectionUnavailableError().diagnostic_lines()
        assert lines == ["[ERROR] Database connection not available"]
