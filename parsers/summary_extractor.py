"""
Summary Extractor - workload level metrics of one AWR report
============================================================

HTML reports are read in TIERS. A later tier only fills what an earlier tier
left at zero:

    1. Time Model Statistics table  -> db_time, cpu_time
    2. Load Profile / Instance Efficiency table -> total_sessions
    3. free text patterns ("DB Time: 1,234.5 s") -> db_time, cpu_time
    4. wait event tables -> wait_events (largest row count)

Plain text reports only have tier 3 style patterns.

Anything not found stays 0. No synthetic values, ever.
"""

import re
from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence

from bs4 import BeautifulSoup

from engine.report_models import SummaryMetrics
from parsers.column_resolver import to_float, to_int
from parsers.parser_config import MAX_TEXT_WAIT_EVENTS
from parsers.top_sql_extractor import split_table

TIME_MODEL_MARKERS = ("Time Model Statistics", "DB time", "DB Time")
SESSION_TABLE_MARKERS = ("Instance Efficiency", "Load Profile")
CPU_TIME_KEYS = ("cpu time", "cpu used")

TIME_WITH_UNIT = re.compile(r"([0-9,]+\.?[0-9]*)\s*s", re.IGNORECASE)
BARE_NUMBER = re.compile(r"([0-9,]+\.?[0-9]*)")
INTEGER = re.compile(r"([0-9,]+)")

# priority order, first match wins
DB_TIME_PATTERNS = (
    re.compile(r"DB Time[:\s]+([0-9,.]+)\s*s", re.IGNORECASE),
    re.compile(r"Database Time[:\s]+([0-9,.]+)\s*s", re.IGNORECASE),
    re.compile(r"Total Database Time[:\s]+([0-9,.]+)\s*s", re.IGNORECASE),
)
CPU_TIME_PATTERNS = (
    re.compile(r"CPU Time[:\s]+([0-9,.]+)\s*s", re.IGNORECASE),
    re.compile(r"CPU used by this session[:\s]+([0-9,.]+)\s*s", re.IGNORECASE),
)
SESSIONS_PATTERNS = (
    re.compile(r"Sessions[:\s]+([0-9,]+)", re.IGNORECASE),
    re.compile(r"User calls[:\s]+([0-9,]+)", re.IGNORECASE),
    re.compile(r"Logical reads[:\s]+([0-9,]+)", re.IGNORECASE),
)
WAIT_EVENT_MENTION = re.compile(r"wait event", re.IGNORECASE)


@dataclass
class _Summary:
    """Mutable scratch pad while tiers run; frozen into SummaryMetrics at the end."""
    total_sessions: int = 0
    cpu_time: float = 0.0
    db_time: float = 0.0
    wait_events: int = 0

    def freeze(self) -> SummaryMetrics:
        return SummaryMetrics(
            total_sessions=self.total_sessions,
            cpu_time=self.cpu_time,
            db_time=self.db_time,
            wait_events=self.wait_events,
        )


# ------------------------------------------------------------------
# helpers
# ------------------------------------------------------------------
def first_time_value(cells: Sequence[str]) -> float:
    """First positive number in cells, '123.4 s' style preferred over bare numbers"""
    for cell in cells:
        m = TIME_WITH_UNIT.search(cell) or BARE_NUMBER.search(cell)
        if m:
            value = to_float(m.group(1))
            if value > 0:
                return value
    return 0.0


def first_positive_int(cells: Sequence[str]) -> int:
    for cell in cells:
        m = INTEGER.search(cell)
        if m:
            value = to_int(m.group(1))
            if value > 0:
                return value
    return 0


def first_pattern_float(patterns, text: str) -> float:
    for pattern in patterns:
        m = pattern.search(text)
        if m:
            return to_float(m.group(1))
    return 0.0


def first_pattern_int(patterns, text: str) -> int:
    for pattern in patterns:
        m = pattern.search(text)
        if m:
            return to_int(m.group(1))
    return 0


def _row_cells(tr) -> List[str]:
    return [c.get_text(strip=True) for c in tr.find_all(["td", "th"])]


def _other_cells(cells: List[str], keys) -> List[str]:
    return [c for c in cells if not any(k in c.lower() for k in keys)]


# ------------------------------------------------------------------
# HTML TIERS
# ------------------------------------------------------------------
def _time_model_tier(soup: BeautifulSoup, summary: _Summary) -> None:
    for table in soup.find_all("table"):
        table_text = table.get_text()
        if not any(m in table_text for m in TIME_MODEL_MARKERS):
            continue

        for tr in table.find_all("tr"):
            cells = _row_cells(tr)
            lowered = [c.lower() for c in cells]

            if summary.db_time == 0 and any("db time" in c for c in lowered):
                summary.db_time = first_time_value(_other_cells(cells, ("db time",)))

            if summary.cpu_time == 0 and any(k in c for c in lowered for k in CPU_TIME_KEYS):
                summary.cpu_time = first_time_value(_other_cells(cells, CPU_TIME_KEYS))


def _sessions_tier(soup: BeautifulSoup, summary: _Summary) -> None:
    for table in soup.find_all("table"):
        if summary.total_sessions:
            return

        table_text = table.get_text()
        if not any(m in table_text for m in SESSION_TABLE_MARKERS):
            continue

        for tr in table.find_all("tr"):
            cells = _row_cells(tr)
            if any("sessions" in c.lower() or "user calls" in c.lower() for c in cells):
                summary.total_sessions = first_positive_int(cells)
                if summary.total_sessions:
                    return


def _text_pattern_tier(text: str, summary: _Summary) -> None:
    if summary.db_time == 0:
        summary.db_time = first_pattern_float(DB_TIME_PATTERNS, text)
    if summary.cpu_time == 0:
        summary.cpu_time = first_pattern_float(CPU_TIME_PATTERNS, text)


def count_wait_events_html(soup: BeautifulSoup) -> int:
    count = 0
    for table in soup.find_all("table"):
        headers, rows = split_table(table)
        is_wait_table = any(
            ("wait" in h and "event" in h) or "top 5 timed events" in h
            for h in headers
        )
        if is_wait_table:
            count = max(count, len(rows))
    return count


def extract_summary_html(soup: BeautifulSoup, text: Optional[str] = None) -> SummaryMetrics:
    summary = _Summary()

    for tier in (_time_model_tier, _sessions_tier):
        try:
            tier(soup, summary)
        except Exception as e:
            print("    ⚠️ Summary tier {} failed: {}".format(tier.__name__, e))

    if summary.db_time == 0 or summary.cpu_time == 0:
        if text is None:
            text = (soup.body or soup).get_text()
        _text_pattern_tier(text, summary)

    summary.wait_events = count_wait_events_html(soup)
    return summary.freeze()


# ------------------------------------------------------------------
# PLAIN TEXT
# ------------------------------------------------------------------
def extract_summary_text(lines: Iterable[str],
                         max_wait_events: int = MAX_TEXT_WAIT_EVENTS) -> SummaryMetrics:
    text = " ".join(lines)
    summary = _Summary()

    _text_pattern_tier(text, summary)
    summary.total_sessions = first_pattern_int(SESSIONS_PATTERNS, text)
    summary.wait_events = min(len(WAIT_EVENT_MENTION.findall(text)), max_wait_events)

    return summary.freeze()
