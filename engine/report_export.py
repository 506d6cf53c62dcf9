import os
import sys
from dataclasses import asdict
from typing import List, Optional

import pandas as pd

from engine.report_models import ParsedReport

# Fallback output folder for command line runs only.
# Callers serving several users should always pass their own out_dir.
OUT_DIR = "data/parsed_csv"

TOP_SQL_COLUMNS = [
    "sql_id",
    "plan_hash",
    "executions",
    "activity_pct",
    "event",
    "event_pct",
    "row_source",
    "row_source_pct",
    "sql_text",
]


def ensure_dir(path: Optional[str] = None) -> str:
    if not path:
        path = OUT_DIR

    os.makedirs(path, exist_ok=True)
    return path


def top_sql_dataframe(report: ParsedReport) -> pd.DataFrame:
    rows = [asdict(r) for r in report.top_sql]
    return pd.DataFrame(rows, columns=TOP_SQL_COLUMNS)


def summary_dataframe(report: ParsedReport) -> pd.DataFrame:
    return pd.DataFrame([asdict(report.summary)])


def save_report_csv(report: ParsedReport, file_prefix: str, out_dir: Optional[str] = None) -> List[str]:
    """
    Write awr_top_sql_<prefix>.csv and awr_summary_<prefix>.csv.
    The Top SQL file is skipped when the report has no entries.
    Returns the generated file names.
    """
    out = ensure_dir(out_dir)
    generated_files = []

    if not report.is_empty:
        filename = "awr_top_sql_{}.csv".format(file_prefix)
        top_sql_dataframe(report).to_csv(os.path.join(out, filename), index=False)
        generated_files.append(filename)
    else:
        print("    ⚠️ No Top SQL rows, awr_top_sql CSV not written")

    filename = "awr_summary_{}.csv".format(file_prefix)
    summary_dataframe(report).to_csv(os.path.join(out, filename), index=False)
    generated_files.append(filename)

    print(
        "✅ AWR report exported with prefix '{}' → {} CSV generated → saved in {}"
        .format(file_prefix, len(generated_files), out)
    )
    return generated_files


def main(report_file) -> None:
    from parsers.awr_report_parser import AWRReportParser

    report = AWRReportParser().parse_path(report_file)
    prefix = os.path.splitext(os.path.basename(report_file))[0]
    save_report_csv(report, prefix)


if __name__ == "__main__":
    main(sys.argv[1])
