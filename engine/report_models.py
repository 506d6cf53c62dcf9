"""
Report Models - the structured record set produced from one AWR report
=====================================================================

A parsed report is ALWAYS structurally valid:
- top_sql holds at most 10 entries, in the order they were found
- every missing field resolves to the default declared here
- nothing is ever filled with random or synthetic values

These objects are frozen. Build a new one instead of mutating.
"""

from dataclasses import dataclass, field, asdict
from enum import Enum
from typing import Any, Dict, Tuple


DEFAULT_PLAN_HASH = "0"
DEFAULT_EVENT = "CPU + Wait for CPU"
DEFAULT_ROW_SOURCE = "Unknown"
MAX_TOP_SQL = 10


def placeholder_sql_text(sql_id: str) -> str:
    return f"SQL ID: {sql_id} - Text extracted from AWR"


class ReportFormat(Enum):
    HTML = "html"
    TEXT = "text"


@dataclass(frozen=True)
class RawReport:
    content: str
    filename: str
    format: ReportFormat


@dataclass(frozen=True)
class StatementRecord:
    """One Top SQL row."""
    sql_id: str
    plan_hash: str = DEFAULT_PLAN_HASH
    executions: int = 0
    activity_pct: float = 0.0
    event: str = DEFAULT_EVENT
    event_pct: float = 0.0
    row_source: str = DEFAULT_ROW_SOURCE
    row_source_pct: float = 0.0
    sql_text: str = ""

    def __post_init__(self) -> None:
        if not self.sql_text:
            object.__setattr__(self, "sql_text", placeholder_sql_text(self.sql_id))


@dataclass(frozen=True)
class SummaryMetrics:
    total_sessions: int = 0
    cpu_time: float = 0.0
    db_time: float = 0.0
    wait_events: int = 0  # distinct wait events


@dataclass(frozen=True)
class ParsedReport:
    """
    The only value handed back to callers.

    top_sql    -> tuple of StatementRecord (max 10, document order)
    summary    -> SummaryMetrics
    """
    top_sql: Tuple[StatementRecord, ...] = ()
    summary: SummaryMetrics = field(default_factory=SummaryMetrics)

    def __post_init__(self) -> None:
        # any iterable in, never more than MAX_TOP_SQL entries stored
        object.__setattr__(self, "top_sql", tuple(self.top_sql)[:MAX_TOP_SQL])

    @property
    def is_empty(self) -> bool:
        return len(self.top_sql) == 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "topSQL": [asdict(r) for r in self.top_sql],
            "summary": asdict(self.summary),
        }
