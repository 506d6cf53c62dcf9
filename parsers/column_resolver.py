"""
Column Resolver - ONE header-synonym table for every Top SQL layout
===================================================================

AWR generators do not agree on header names ("SQL Id", "SQL_ID", "% Activity",
"Act%" ...). Instead of hard coding positions, every field is described once
as an ordered list of header synonyms. The first synonym that hits a column
with a non-empty cell wins.

The same table drives both inputs:
- HTML tables   -> headers come from the <th> row
- plain text    -> headers come from TEXT_LAYOUT_HEADERS (positional tokens)
"""

import re
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple

import numpy as np

from engine.report_models import (
    DEFAULT_EVENT,
    DEFAULT_PLAN_HASH,
    DEFAULT_ROW_SOURCE,
    StatementRecord,
)


@dataclass(frozen=True)
class ColumnSpec:
    field: str
    synonyms: Tuple[str, ...]
    exclude: Tuple[str, ...] = ()

    def matches(self, header: str, synonym: str) -> bool:
        if synonym not in header:
            return False
        return not any(x in header for x in self.exclude)


# ------------------------------------------------------------------
# FIELD -> HEADER SYNONYMS (order matters)
# ------------------------------------------------------------------
TOP_SQL_COLUMNS: Tuple[ColumnSpec, ...] = (
    ColumnSpec("sql_id", ("sql id", "sql_id", "sqlid")),
    ColumnSpec("plan_hash", ("plan hash", "plan_hash", "planhash")),
    ColumnSpec("executions", ("executions", "exec", "execs")),
    ColumnSpec("activity_pct", ("% activity", "activity", "act%", "%act")),
    ColumnSpec("event", ("top event", "wait event", "event"), exclude=("%", "pct")),
    ColumnSpec("event_pct", ("% event", "event %", "event pct", "% wait event")),
    ColumnSpec("row_source", ("row source", "rowsource", "operation"), exclude=("%", "pct")),
    ColumnSpec("row_source_pct", ("% row source", "row source %", "% operation")),
)

# plain text "Top SQL" lines: <sql_id> <plan hash> <executions> <% activity> ...
TEXT_LAYOUT_HEADERS: Tuple[str, ...] = ("sql id", "plan hash", "executions", "% activity")

SQL_ID_HEADERS = ("sql id", "sql_id")
ACTIVITY_HEADERS = ("activity", "% activity")

_INT_RE = re.compile(r"^[-+]?\d+")
_FLOAT_RE = re.compile(r"^[-+]?(?:\d+(?:\.\d*)?|\.\d+)")


# ------------------------------------------------------------------
# NUMBERS (never raise)
# ------------------------------------------------------------------
def to_int(value) -> int:
    """'1,234' -> 1234, '12abc' -> 12, '' / 'n/a' / None -> 0"""
    if value is None:
        return 0
    text = str(value).strip().replace(",", "")
    m = _INT_RE.match(text)
    return int(m.group(0)) if m else 0


def to_float(value) -> float:
    """'3.10%' -> 3.1, '1,234.5' -> 1234.5, '1e999' -> 1.0, '' / 'nan' / None -> 0.0"""
    if value is None:
        return 0.0
    text = str(value).strip().replace("%", "").replace(",", "").strip()
    m = _FLOAT_RE.match(text)
    if not m:
        return 0.0

    value = float(m.group(0))
    # a 400 digit cell still overflows to inf
    return value if np.isfinite(value) else 0.0


# ------------------------------------------------------------------
# RESOLVER
# ------------------------------------------------------------------
def find_column_value(spec: ColumnSpec, headers: Sequence[str], cells: Sequence[str]) -> str:
    for synonym in spec.synonyms:
        for i, header in enumerate(headers):
            if spec.matches(header, synonym):
                if i < len(cells) and cells[i]:
                    return cells[i]
                # only the FIRST matching column counts for a synonym
                break
    return ""


def resolve_fields(headers: Sequence[str], cells: Sequence[str],
                   columns: Sequence[ColumnSpec] = TOP_SQL_COLUMNS) -> Dict[str, str]:
    headers = [h.strip().lower() for h in headers]
    cells = [c.strip() for c in cells]
    return {spec.field: find_column_value(spec, headers, cells) for spec in columns}


def build_statement_record(headers: Sequence[str], cells: Sequence[str],
                           sql_texts: Optional[Dict[str, str]] = None) -> Optional[StatementRecord]:
    """
    Turn one row into a StatementRecord.
    Returns None when no SQL ID can be resolved (row is skipped, not defaulted).
    """
    raw = resolve_fields(headers, cells)

    sql_id = raw["sql_id"]
    if not sql_id:
        return None

    activity = to_float(raw["activity_pct"])
    event_pct = to_float(raw["event_pct"]) if raw["event_pct"] else activity
    row_source_pct = to_float(raw["row_source_pct"]) if raw["row_source_pct"] else activity

    return StatementRecord(
        sql_id=sql_id,
        plan_hash=raw["plan_hash"] or DEFAULT_PLAN_HASH,
        executions=max(0, to_int(raw["executions"])),
        activity_pct=activity,
        event=raw["event"] or DEFAULT_EVENT,
        event_pct=event_pct,
        row_source=raw["row_source"] or DEFAULT_ROW_SOURCE,
        row_source_pct=row_source_pct,
        sql_text=(sql_texts or {}).get(sql_id, ""),
    )


def is_top_sql_header(headers: List[str]) -> bool:
    lowered = [h.lower() for h in headers]
    return any(k in h for h in lowered for k in SQL_ID_HEADERS + ACTIVITY_HEADERS)
