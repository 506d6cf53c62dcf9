"""
Unit tests for header synonym resolution and tolerant number parsing.
"""

import pytest

from parsers.column_resolver import (
    TEXT_LAYOUT_HEADERS,
    TOP_SQL_COLUMNS,
    build_statement_record,
    find_column_value,
    is_top_sql_header,
    resolve_fields,
    to_float,
    to_int,
)


def spec_for(field):
    return next(s for s in TOP_SQL_COLUMNS if s.field == field)


class TestNumbers:
    """Numbers never raise, garbage becomes 0."""

    @pytest.mark.parametrize("value,expected", [
        ("3.10%", 3.10),
        ("1,234.5", 1234.5),
        (" 42 ", 42.0),
        ("", 0.0),
        (None, 0.0),
        ("n/a", 0.0),
        ("nan", 0.0),
        ("inf", 0.0),
        ("1e999", 1.0),
        ("9" * 400, 0.0),
    ])
    def test_to_float(self, value, expected):
        assert to_float(value) == expected

    @pytest.mark.parametrize("value,expected", [
        ("1,024", 1024),
        ("12abc", 12),
        ("4", 4),
        ("", 0),
        (None, 0),
        ("n/a", 0),
    ])
    def test_to_int(self, value, expected):
        assert to_int(value) == expected


class TestFindColumnValue:
    """First synonym with a non-empty cell wins."""

    def test_synonym_order(self):
        headers = ["activity", "% activity"]
        assert find_column_value(spec_for("activity_pct"), headers, ["1.0", "2.0"]) == "2.0"

    def test_falls_through_to_next_synonym_on_empty_cell(self):
        headers = ["sql id", "sqlid"]
        assert find_column_value(spec_for("sql_id"), headers, ["", "abc"]) == "abc"

    def test_event_ignores_percentage_columns(self):
        headers = ["% event", "event"]
        cells = ["2.5", "log file sync"]
        assert find_column_value(spec_for("event"), headers, cells) == "log file sync"
        assert find_column_value(spec_for("event_pct"), headers, cells) == "2.5"

    def test_missing_column(self):
        assert find_column_value(spec_for("row_source"), ["sql id"], ["x"]) == ""

    def test_short_row(self):
        assert find_column_value(spec_for("executions"), ["sql id", "executions"], ["x"]) == ""

    def test_resolve_fields_lowercases_headers(self):
        fields = resolve_fields(["SQL ID", "Plan Hash"], ["fh1c4w9qda6jr", " 99 "])
        assert fields["sql_id"] == "fh1c4w9qda6jr"
        assert fields["plan_hash"] == "99"
        assert fields["event"] == ""


class TestBuildStatementRecord:
    """Row -> StatementRecord with defaults."""

    def test_percentages_fall_back_to_activity(self):
        record = build_statement_record(
            ["SQL ID", "Plan Hash", "Executions", "% Activity"],
            ["fh1c4w9qda6jr", "3666371265", "4", "3.10%"],
        )
        assert record.activity_pct == 3.10
        assert record.event_pct == 3.10
        assert record.row_source_pct == 3.10
        assert record.event == "CPU + Wait for CPU"
        assert record.row_source == "Unknown"

    def test_placeholder_text(self):
        record = build_statement_record(TEXT_LAYOUT_HEADERS, ["fh1c4w9qda6jr", "1", "2", "3"])
        assert record.sql_text == "SQL ID: fh1c4w9qda6jr - Text extracted from AWR"

    def test_text_from_mapping(self):
        record = build_statement_record(
            TEXT_LAYOUT_HEADERS,
            ["fh1c4w9qda6jr", "1", "2", "3"],
            {"fh1c4w9qda6jr": "select 1 from dual"},
        )
        assert record.sql_text == "select 1 from dual"

    def test_defaults_for_garbage(self):
        record = build_statement_record(TEXT_LAYOUT_HEADERS, ["fh1c4w9qda6jr", "", "many", "lots"])
        assert record.plan_hash == "0"
        assert record.executions == 0
        assert record.activity_pct == 0.0

    def test_negative_executions_clamped(self):
        record = build_statement_record(TEXT_LAYOUT_HEADERS, ["fh1c4w9qda6jr", "1", "-5", "1"])
        assert record.executions == 0

    def test_no_sql_id_is_skipped(self):
        assert build_statement_record(["sql id", "activity"], ["", "1.0"]) is None
        assert build_statement_record(["activity"], ["1.0"]) is None


class TestTopSqlHeader:

    def test_detection(self):
        assert is_top_sql_header(["SQL Id", "Executions"])
        assert is_top_sql_header(["sql_id"])
        assert is_top_sql_header(["% Activity"])
        assert not is_top_sql_header(["Wait Event", "Waits"])
        assert not is_top_sql_header([])
