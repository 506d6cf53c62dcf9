import re
from typing import Dict, Iterable, List, Optional

from bs4 import BeautifulSoup
from bs4.element import Tag

from engine.report_models import MAX_TOP_SQL, StatementRecord
from parsers.column_resolver import TEXT_LAYOUT_HEADERS, build_statement_record, is_top_sql_header

MIN_ROW_CELLS = 4

TOP_SQL_MARKERS = ("top sql", "sql ordered by")
SECTION_HEADER = re.compile(r"^[A-Z\s]+:")
TEXT_SQL_ROW = re.compile(r"^\s*[a-z0-9]{13}\s+")


def _safe_record(headers, cells, sql_texts) -> Optional[StatementRecord]:
    try:
        return build_statement_record(headers, cells, sql_texts)
    except Exception as e:
        print("    ⚠️ Skipping Top SQL row {}: {}".format(cells[:1], e))
        return None


# ------------------------------------------------------------------
# HTML
# ------------------------------------------------------------------
def table_headers(table: Tag) -> List[str]:
    return [th.get_text(strip=True).lower() for th in table.find_all("th")]


def table_body_rows(table: Tag, header_from_first_row: bool = False) -> List[List[str]]:
    rows = []
    for i, tr in enumerate(table.find_all("tr")):
        if header_from_first_row and i == 0:
            continue
        cells = [td.get_text(strip=True) for td in tr.find_all("td")]
        if cells:
            rows.append(cells)
    return rows


def split_table(table: Tag):
    """(headers, body rows) - first row doubles as header when there is no <th>"""
    headers = table_headers(table)
    if headers:
        return headers, table_body_rows(table)

    first = table.find("tr")
    if first is None:
        return [], []
    headers = [c.get_text(strip=True).lower() for c in first.find_all(["td", "th"])]
    return headers, table_body_rows(table, header_from_first_row=True)


def extract_top_sql_html(soup: BeautifulSoup, sql_texts: Optional[Dict[str, str]] = None,
                         limit: int = MAX_TOP_SQL) -> List[StatementRecord]:
    top_sql: List[StatementRecord] = []
    limit = min(limit, MAX_TOP_SQL)

    for table in soup.find_all("table"):
        headers, rows = split_table(table)
        if not is_top_sql_header(headers):
            continue

        for cells in rows:
            if len(top_sql) >= limit:
                return top_sql
            if len(cells) < MIN_ROW_CELLS:
                continue

            record = _safe_record(headers, cells, sql_texts)
            if record is not None:
                top_sql.append(record)

    return top_sql


# ------------------------------------------------------------------
# PLAIN TEXT
# ------------------------------------------------------------------
def extract_top_sql_text(lines: Iterable[str], sql_texts: Optional[Dict[str, str]] = None,
                         limit: int = MAX_TOP_SQL) -> List[StatementRecord]:
    top_sql: List[StatementRecord] = []
    limit = min(limit, MAX_TOP_SQL)
    in_top_sql = False

    for raw in lines:
        if len(top_sql) >= limit:
            break

        line = raw.strip()
        lowered = line.lower()

        if any(m in lowered for m in TOP_SQL_MARKERS):
            in_top_sql = True
            continue

        # a new upper case section ("WAIT EVENTS:") ends the Top SQL block
        if in_top_sql and SECTION_HEADER.match(line) and "sql" not in lowered:
            in_top_sql = False

        if not in_top_sql or not TEXT_SQL_ROW.match(line):
            continue

        parts = line.split()
        if len(parts) < MIN_ROW_CELLS:
            continue

        record = _safe_record(TEXT_LAYOUT_HEADERS, parts[:len(TEXT_LAYOUT_HEADERS)], sql_texts)
        if record is not None:
            top_sql.append(record)

    return top_sql
