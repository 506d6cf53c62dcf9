"""
AWR Report Parser - HTML / TXT AWR report -> ParsedReport
=========================================================

Pipeline (one pass, nothing cached between calls):

    read content -> detect format -> SQL text map (once)
                 -> Top SQL + Summary (format specific) -> ParsedReport

The ONLY error raised is ReportReadError, when the content cannot be read.
A report with nothing recognisable still returns a valid, empty ParsedReport;
deciding whether that is a failure is up to the caller.
"""

from typing import Optional, Union

from bs4 import BeautifulSoup

from engine.report_models import ParsedReport, RawReport, ReportFormat
from parsers.errors import ReportReadError
from parsers.format_detector import detect_format
from parsers.parser_config import ParserConfig
from parsers.sql_text_extractor import extract_sql_texts, extract_sql_texts_from_text
from parsers.summary_extractor import extract_summary_html, extract_summary_text
from parsers.top_sql_extractor import extract_top_sql_html, extract_top_sql_text


def decode_content(content: Union[bytes, str]) -> str:
    if isinstance(content, bytes):
        return content.decode("utf-8", errors="ignore")
    return content


class AWRReportParser:
    """
    USAGE:
        parser = AWRReportParser()
        report = await parser.parse_file(upload)          # FastAPI UploadFile
        report = parser.parse_content(raw, "awr.html")    # bytes or str
        report = parser.parse_path("reports/awr.txt")
    """

    def __init__(self, config: Optional[ParserConfig] = None) -> None:
        self.config: ParserConfig = config or ParserConfig.from_env()

    # ------------------------------------------------------------------
    # READ
    # ------------------------------------------------------------------
    async def parse_file(self, upload) -> ParsedReport:
        filename = getattr(upload, "filename", None) or ""
        try:
            content = await upload.read()
        except Exception as e:
            raise ReportReadError(filename, e) from e

        return self.parse_content(content, filename)

    def parse_path(self, path: str) -> ParsedReport:
        try:
            with open(path, "r", encoding="utf-8", errors="ignore") as f:
                content = f.read()
        except OSError as e:
            raise ReportReadError(path, e) from e

        return self.parse_content(content, path)

    def parse_content(self, content: Union[bytes, str, None], filename: Optional[str]) -> ParsedReport:
        if content is None:
            raise ReportReadError(filename, "no content")

        raw = RawReport(
            content=decode_content(content),
            filename=filename or "",
            format=detect_format(filename),
        )
        self.config.log("📖 Reading AWR report: {} ({})".format(raw.filename, raw.format.value))

        if raw.format is ReportFormat.HTML:
            report = self._parse_html(raw)
        else:
            report = self._parse_text(raw)

        if report.is_empty:
            self.config.log("    ⚠️ No Top SQL entries found")
        else:
            self.config.log("    ✅ Top SQL entries extracted: {}".format(len(report.top_sql)))
        return report

    # ------------------------------------------------------------------
    # FORMAT SPECIFIC PATHS
    # ------------------------------------------------------------------
    def _parse_html(self, raw: RawReport) -> ParsedReport:
        self.config.log("🔍 Parsing AWR HTML with BeautifulSoup...")
        soup = BeautifulSoup(raw.content, "html.parser")
        text = (soup.body or soup).get_text()

        sql_texts = extract_sql_texts_from_text(text, self.config.strict_sql_text_owner)
        self.config.log("  📝 SQL texts found: {}".format(len(sql_texts)))

        return ParsedReport(
            top_sql=extract_top_sql_html(soup, sql_texts, self.config.max_top_sql),
            summary=extract_summary_html(soup, text),
        )

    def _parse_text(self, raw: RawReport) -> ParsedReport:
        self.config.log("🔍 Parsing AWR text report...")
        lines = raw.content.split("\n")

        sql_texts = extract_sql_texts(lines, self.config.strict_sql_text_owner)
        self.config.log("  📝 SQL texts found: {}".format(len(sql_texts)))

        return ParsedReport(
            top_sql=extract_top_sql_text(lines, sql_texts, self.config.max_top_sql),
            summary=extract_summary_text(lines, self.config.max_text_wait_events),
        )


def parse_report(content: Union[bytes, str], filename: str,
                 config: Optional[ParserConfig] = None) -> ParsedReport:
    return AWRReportParser(config).parse_content(content, filename)
