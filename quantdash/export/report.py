"""Analysis report bundle serialization."""

from datetime import datetime
from pathlib import Path
from typing import Any, Optional

import orjson

from ..errors import ExportError
from ..logging.config import get_logger
from ..state.models import SessionState
from ..utils.time import format_timestamp, utc_now

logger = get_logger(__name__)


def report_file_name(symbol: str) -> str:
    """File name the dashboard offers for a symbol's report."""
    safe_symbol = "".join(ch if ch.isalnum() or ch in "-_." else "_" for ch in symbol)
    return f"{safe_symbol}_analysis_report.json"


def build_report(state: SessionState, generated_at: Optional[datetime] = None) -> dict[str, Any]:
    """
    Build the report bundle for the current session.

    Args:
        state: Session to export
        generated_at: Report timestamp (default: now, UTC)

    Returns:
        Dictionary with symbol, analysisResults, portfolioState and
        generatedAtTimestamp keys
    """
    return {
        "symbol": state.symbol,
        "analysisResults": state.analysis.to_dict() if state.analysis else None,
        "portfolioState": state.portfolio.to_dict(),
        "generatedAtTimestamp": format_timestamp(generated_at or utc_now()),
    }


def serialize_report(report: dict[str, Any]) -> bytes:
    """
    Serialize a report bundle to indented JSON bytes.

    Raises:
        ExportError: If the bundle holds values JSON cannot represent
    """
    try:
        return orjson.dumps(report, option=orjson.OPT_INDENT_2)
    except orjson.JSONEncodeError as e:
        raise ExportError(f"Report serialization failed: {e}", operation="serialize")


def write_report(state: SessionState, directory: Path,
                 generated_at: Optional[datetime] = None) -> Path:
    """
    Write the session's report bundle into a directory.

    Args:
        state: Session to export
        directory: Target directory, created if missing
        generated_at: Report timestamp (default: now, UTC)

    Returns:
        Path of the written file

    Raises:
        ExportError: If serialization or the file write fails
    """
    payload = serialize_report(build_report(state, generated_at))
    target = Path(directory) / report_file_name(state.symbol)

    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_bytes(payload)
    except OSError as e:
        raise ExportError(f"Report write failed: {e}", operation="write", target=str(target))

    logger.info("Report written", symbol=state.symbol, path=str(target), size_bytes=len(payload))
    return target
