import typing

import fastapi
from pydantic import BaseModel

from engine.report_models import ParsedReport
from parsers.awr_report_parser import AWRReportParser
from parsers.errors import ReportReadError
from parsers.parser_config import ParserConfig

router = fastapi.APIRouter()


# =====================================================
# RESPONSE MODELS
# =====================================================
class TopSQLOut(BaseModel):
    sql_id: str
    plan_hash: str
    executions: int
    activity_pct: float
    event: str
    event_pct: float
    row_source: str
    row_source_pct: float
    sql_text: str


class SummaryOut(BaseModel):
    total_sessions: int
    cpu_time: float
    db_time: float
    wait_events: int


class ParsedReportOut(BaseModel):
    filename: str
    topSQL: typing.List[TopSQLOut]
    summary: SummaryOut

    @classmethod
    def from_report(cls, filename: str, report: ParsedReport) -> "ParsedReportOut":
        data: typing.Dict[str, typing.Any] = report.to_dict()
        return cls(filename=filename, **data)


# =====================================================
# CONFIG
# =====================================================
def get_parser_config() -> ParserConfig:
    return ParserConfig.from_env()


def validate_upload(file: fastapi.UploadFile, config: ParserConfig) -> str:
    filename: str = file.filename or ""
    if not filename.lower().endswith(config.allowed_extensions):
        raise fastapi.HTTPException(
            status_code=400,
            detail="Unsupported file type. Use {} files only".format(", ".join(config.allowed_extensions))
        )

    size: typing.Optional[int] = getattr(file, "size", None)
    if size is not None and size > config.max_upload_bytes:
        raise fastapi.HTTPException(
            status_code=413,
            detail="File too large ({:.2f} MB). Limit is {} MB".format(size / 1024 / 1024, config.max_upload_mb)
        )
    return filename


# =====================================================
# UPLOAD + PARSE
# =====================================================
@router.post("/parse", response_model=ParsedReportOut)
async def parse_upload(
    file: fastapi.UploadFile = fastapi.File(...),
    config: ParserConfig = fastapi.Depends(get_parser_config),
) -> ParsedReportOut:

    filename: str = validate_upload(file, config)

    try:
        report: ParsedReport = await AWRReportParser(config).parse_file(file)
    except ReportReadError as e:
        print(f"❌ {e}")
        raise fastapi.HTTPException(status_code=400, detail=str(e))

    if report.is_empty:
        raise fastapi.HTTPException(
            status_code=422,
            detail="No data extracted: no Top SQL entries found in '{}'".format(filename)
        )

    return ParsedReportOut.from_report(filename, report)
