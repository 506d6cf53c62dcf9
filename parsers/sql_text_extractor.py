"""
SQL Text Extractor - map SQL ID -> full SQL statement text
==========================================================

AWR reports print the full statement text far away from the Top SQL table
("Complete List of SQL Text" or similar). This module walks the flattened
report text ONCE, line by line, as a small state machine:

    Idle(owner)                 -> not collecting statement lines
    Capturing(owner, buffer)    -> collecting lines of one statement

Two triggers are checked on EVERY line, independently:
    1. SQL ID line   : line starts with a 13 char [a-z0-9] token + whitespace
                       -> flush buffer to the previous owner, adopt new owner
    2. statement line: line contains select/insert/update/delete/with
                       -> (re)start the buffer with this line

NOTE: because the triggers are independent, a statement that starts BEFORE
its own SQL ID line is credited to the previous SQL ID. That is how these
reports have always been read and it is kept as the default.
ParserConfig.strict_sql_text_owner hands such a statement to the SQL ID line
that follows it instead.
"""

import re
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Tuple, Union

SQL_ID_LINE = re.compile(r"^([a-z0-9]{13})\s")
SEPARATOR_LINE = re.compile(r"^-+$")
VERSION_LIKE = re.compile(r"^\d+\.\d+")
STATEMENT_KEYWORDS = ("select", "insert", "update", "delete", "with")

Flush = Tuple[str, str]


@dataclass(frozen=True)
class Idle:
    owner: Optional[str] = None
    # owner already received text (strict mode only)
    owner_done: bool = False


@dataclass(frozen=True)
class Capturing:
    owner: Optional[str]
    buffer: Tuple[str, ...]
    owner_done: bool = False


@dataclass(frozen=True)
class Pending:
    """Strict mode only: a finished statement waiting for its SQL ID line."""
    owner: Optional[str]
    buffer: Tuple[str, ...]
    owner_done: bool = False


ScanState = Union[Idle, Capturing, Pending]


# ------------------------------------------------------------------
# LINE CLASSIFIERS
# ------------------------------------------------------------------
def sql_id_of(line: str) -> Optional[str]:
    m = SQL_ID_LINE.match(line)
    return m.group(1) if m else None


def starts_statement(line: str) -> bool:
    lowered = line.lower()
    return any(k in lowered for k in STATEMENT_KEYWORDS)


def ends_statement(line: str) -> bool:
    return not line or bool(SEPARATOR_LINE.match(line))


def is_statement_body(line: str) -> bool:
    return (
        bool(line)
        and not SEPARATOR_LINE.match(line)
        and not VERSION_LIKE.match(line)
        and "plan hash" not in line.lower()
    )


def _joined(buffer: Iterable[str]) -> str:
    return " ".join(buffer).strip()


def _flush(owner: Optional[str], buffer: Tuple[str, ...]) -> List[Flush]:
    if owner and buffer:
        return [(owner, _joined(buffer))]
    return []


# ------------------------------------------------------------------
# TRANSITIONS (pure)
# ------------------------------------------------------------------
def _is_orphan(state: ScanState) -> bool:
    return state.owner is None or state.owner_done


def on_sql_id(state: ScanState, new_id: str, strict: bool = False) -> Tuple[ScanState, List[Flush]]:
    buffer = state.buffer if isinstance(state, (Capturing, Pending)) else ()

    if strict and buffer and _is_orphan(state):
        # statement started before its SQL ID line -> belongs to new_id
        return Idle(owner=new_id, owner_done=True), [(new_id, _joined(buffer))]

    return Idle(owner=new_id), _flush(state.owner, buffer)


def on_line(state: ScanState, line: str, strict: bool = False) -> Tuple[ScanState, List[Flush]]:
    """Everything after the SQL ID trigger: statement start, body, end."""
    if starts_statement(line):
        return Capturing(state.owner, (line,), state.owner_done), []

    if not isinstance(state, Capturing):
        return state, []

    if state.owner is None and not strict:
        # nobody to hand the text to yet
        return state, []

    if is_statement_body(line):
        return Capturing(state.owner, state.buffer + (line,), state.owner_done), []

    if ends_statement(line):
        if strict and _is_orphan(state):
            return Pending(state.owner, state.buffer, state.owner_done), []
        flushes = _flush(state.owner, state.buffer)
        return Idle(state.owner, owner_done=state.owner_done or bool(flushes)), flushes

    # version-like / plan hash lines: skipped, still capturing
    return state, []


def step(state: ScanState, raw_line: str, strict: bool = False) -> Tuple[ScanState, List[Flush]]:
    line = raw_line.strip()
    flushes: List[Flush] = []

    new_id = sql_id_of(line)
    if new_id:
        state, flushes = on_sql_id(state, new_id, strict)

    state, more = on_line(state, line, strict)
    return state, flushes + more


def finish(state: ScanState, strict: bool = False) -> List[Flush]:
    if isinstance(state, Capturing):
        if strict and _is_orphan(state):
            return []
        return _flush(state.owner, state.buffer)
    return []


# ------------------------------------------------------------------
# PUBLIC API
# ------------------------------------------------------------------
def extract_sql_texts(lines: Iterable[str], strict: bool = False) -> Dict[str, str]:
    """
    Scan report lines and return {sql_id: sql_text}.
    A SQL ID seen twice keeps the LAST text found for it.
    """
    sql_texts: Dict[str, str] = {}
    state: ScanState = Idle()

    for line in lines:
        state, flushes = step(state, line, strict)
        for sql_id, text in flushes:
            sql_texts[sql_id] = text

    for sql_id, text in finish(state, strict):
        sql_texts[sql_id] = text

    return sql_texts


def extract_sql_texts_from_text(text: str, strict: bool = False) -> Dict[str, str]:
    return extract_sql_texts(text.split("\n"), strict)
