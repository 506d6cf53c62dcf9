"""
Tests for CSV export of parsed reports.
"""

import os

import pandas as pd

from engine.report_export import TOP_SQL_COLUMNS, save_report_csv, summary_dataframe, top_sql_dataframe
from engine.report_models import ParsedReport
from parsers.awr_report_parser import AWRReportParser


def parsed(sample_text, config):
    return AWRReportParser(config).parse_content(sample_text, "awr.txt")


class TestDataFrames:

    def test_top_sql_dataframe(self, sample_text, quiet_config):
        df = top_sql_dataframe(parsed(sample_text, quiet_config))
        assert list(df.columns) == TOP_SQL_COLUMNS
        assert df["sql_id"].tolist() == ["fh1c4w9qda6jr", "7ztv2z24kw0s0"]
        assert df["executions"].tolist() == [4, 1024]

    def test_empty_report_keeps_columns(self):
        df = top_sql_dataframe(ParsedReport())
        assert df.empty
        assert list(df.columns) == TOP_SQL_COLUMNS

    def test_summary_dataframe(self, sample_text, quiet_config):
        df = summary_dataframe(parsed(sample_text, quiet_config))
        assert len(df) == 1
        assert df.loc[0, "db_time"] == 1234.5


class TestSaveReportCsv:

    def test_files_written(self, tmp_path, sample_text, quiet_config):
        files = save_report_csv(parsed(sample_text, quiet_config), "snap1", str(tmp_path))
        assert files == ["awr_top_sql_snap1.csv", "awr_summary_snap1.csv"]

        df = pd.read_csv(os.path.join(str(tmp_path), "awr_top_sql_snap1.csv"))
        assert df["sql_id"].tolist() == ["fh1c4w9qda6jr", "7ztv2z24kw0s0"]

    def test_empty_report_writes_summary_only(self, tmp_path):
        files = save_report_csv(ParsedReport(), "empty", str(tmp_path))
        assert files == ["awr_summary_empty.csv"]
        assert not (tmp_path / "awr_top_sql_empty.csv").exists()
