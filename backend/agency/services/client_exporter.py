"""Client list exporter - CSV and Excel export of a filtered client list."""
import csv
import io
from datetime import datetime
from typing import Any, Dict, Iterable, List, Optional

import pandas as pd
import structlog

from agency.core.config import settings
from agency.services.access_policy import as_snapshot, field, to_local_datetime

logger = structlog.get_logger()

EXPORT_COLUMNS = ["Name", "Phone", "Email", "PR Status", "Transfer Status", "Registered At"]


def _status_value(value: Any) -> str:
    if value is None:
        return "N/A"
    return getattr(value, "value", value)


def build_export_rows(clients: Iterable[Any]) -> List[Dict[str, Any]]:
    rows = []
    for c in as_snapshot(clients):
        registered = to_local_datetime(field(c, "registered_at"))
        rows.append({
            "Name": field(c, "name"),
            "Phone": field(c, "phone"),
            "Email": field(field(c, "basic_info"), "email") or "N/A",
            "PR Status": _status_value(field(c, "pr_status")),
            "Transfer Status": _status_value(field(c, "transfer_status")),
            "Registered At": registered.date().isoformat() if registered else "N/A",
        })
    return rows


def export_csv(clients: Iterable[Any]) -> str:
    rows = build_export_rows(clients)
    output = io.StringIO()
    writer = csv.DictWriter(output, fieldnames=EXPORT_COLUMNS)
    writer.writeheader()
    writer.writerows(rows)
    logger.info("Client CSV export generated", rows=len(rows))
    return output.getvalue()


def export_excel(clients: Iterable[Any]) -> bytes:
    rows = build_export_rows(clients)
    df = pd.DataFrame(rows, columns=EXPORT_COLUMNS)
    buffer = io.BytesIO()
    df.to_excel(buffer, index=False, sheet_name="Data", engine="openpyxl")
    logger.info("Client Excel export generated", rows=len(rows))
    return buffer.getvalue()


def export_filename(extension: str, now: Optional[datetime] = None) -> str:
    """``<prefix>_<YYYY-MM-DD>.<extension>``"""
    stamp = (now or datetime.now()).strftime("%Y-%m-%d")
    return f"{settings.EXPORT_FILENAME_PREFIX}_{stamp}.{extension}"
