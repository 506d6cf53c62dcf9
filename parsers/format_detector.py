from typing import Optional

from engine.report_models import ReportFormat

HTML_SUFFIXES = (".html", ".htm")


def detect_format(filename: Optional[str]) -> ReportFormat:
    """HTML for .html/.htm, TEXT for everything else (unknown suffixes included)."""
    if filename and filename.strip().lower().endswith(HTML_SUFFIXES):
        return ReportFormat.HTML
    return ReportFormat.TEXT
