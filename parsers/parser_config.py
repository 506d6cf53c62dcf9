import os
from dataclasses import dataclass
from typing import Tuple

from engine.report_models import MAX_TOP_SQL

# ------------------------------------------------------------------
# DEFAULTS
# ------------------------------------------------------------------
MAX_TEXT_WAIT_EVENTS = 50
MAX_UPLOAD_MB = 50
ALLOWED_EXTENSIONS = (".html", ".htm", ".txt")

TRUE_VALUES = ("1", "true", "yes", "on")


def _env_flag(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in TRUE_VALUES


def _env_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None:
        return default
    try:
        return int(value.strip())
    except ValueError:
        print("⚠️ Ignoring invalid {}={!r}, using {}".format(name, value, default))
        return default


@dataclass(frozen=True)
class ParserConfig:
    """
    Tunables for one parser instance.

    strict_sql_text_owner:
        OFF (default) -> a SQL statement that starts before its SQL ID line
                         is credited to the PREVIOUS SQL ID (historic behaviour)
        ON            -> such a statement is handed to the SQL ID line that
                         follows it
    """
    max_top_sql: int = MAX_TOP_SQL
    max_text_wait_events: int = MAX_TEXT_WAIT_EVENTS
    strict_sql_text_owner: bool = False
    verbose: bool = True
    max_upload_mb: int = MAX_UPLOAD_MB
    allowed_extensions: Tuple[str, ...] = ALLOWED_EXTENSIONS

    def __post_init__(self) -> None:
        # Top SQL never holds more than MAX_TOP_SQL entries
        object.__setattr__(self, "max_top_sql", max(0, min(self.max_top_sql, MAX_TOP_SQL)))

    @property
    def max_upload_bytes(self) -> int:
        return self.max_upload_mb * 1024 * 1024

    @classmethod
    def from_env(cls) -> "ParserConfig":
        return cls(
            max_top_sql=_env_int("AWR_MAX_TOP_SQL", MAX_TOP_SQL),
            max_text_wait_events=_env_int("AWR_MAX_TEXT_WAIT_EVENTS", MAX_TEXT_WAIT_EVENTS),
            strict_sql_text_owner=_env_flag("AWR_STRICT_SQL_TEXT", False),
            verbose=_env_flag("AWR_PARSER_VERBOSE", True),
            max_upload_mb=_env_int("AWR_MAX_UPLOAD_MB", MAX_UPLOAD_MB),
        )

    def log(self, message: str) -> None:
        if self.verbose:
            print(message)
