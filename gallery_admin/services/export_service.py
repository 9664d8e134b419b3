"""
Spreadsheet export of gallery tables.
Builds an .xlsx workbook with one "Data" sheet whose header row is the table's column names.
"""
import json
import logging
from datetime import date, datetime
from decimal import Decimal
from io import BytesIO
from typing import Any, Dict, List

from openpyxl import Workbook
from openpyxl.styles import Font
from openpyxl.utils import get_column_letter
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from gallery_admin.models import Artist, Artwork, Event, EventRegistration, Inquiry

logger = logging.getLogger(__name__)

XLSX_CONTENT_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
SHEET_NAME = "Data"
MAX_COLUMN_WIDTH = 50

EXPORT_MODELS = {
    "events": Event,
    "artworks": Artwork,
    "artists": Artist,
    "inquiries": Inquiry,
    "event-registrations": EventRegistration,
}


def _cell_value(value: Any) -> Any:
    # Excel rejects timezone-aware datetimes and nested structures
    if isinstance(value, datetime):
        return value.replace(tzinfo=None) if value.tzinfo else value
    if isinstance(value, date):
        return value
    if isinstance(value, Decimal):
        return float(value)
    if isinstance(value, (list, dict)):
        return json.dumps(value)
    return value


def build_workbook(columns: List[str], rows: List[Dict[str, Any]]) -> bytes:
    """
    Render rows as an .xlsx file.

    Args:
        columns: Header names, also the keys looked up in each row
        rows: Row dictionaries

    Returns:
        bytes: Workbook file contents
    """
    wb = Workbook()
    ws = wb.active
    ws.title = SHEET_NAME

    ws.append(columns)
    for cell in ws[1]:
        cell.font = Font(bold=True)

    for row in rows:
        ws.append([_cell_value(row.get(column)) for column in columns])

    for col_num, column in enumerate(columns, 1):
        values = [column] + [row.get(column) for row in rows]
        width = max(len(str(v)) for v in values if v is not None)
        ws.column_dimensions[get_column_letter(col_num)].width = min(width + 2, MAX_COLUMN_WIDTH)

    buffer = BytesIO()
    wb.save(buffer)
    return buffer.getvalue()


async def export_table(db: AsyncSession, export_type: str) -> bytes:
    """
    Export every row of one table as a workbook.

    Raises:
        KeyError: If export_type is not one of EXPORT_MODELS
    """
    model = EXPORT_MODELS[export_type]
    columns = [column.name for column in model.__table__.columns]

    result = await db.execute(select(model.__table__))
    rows = [dict(row) for row in result.mappings().all()]

    logger.info(f"Exporting {len(rows)} {export_type} rows")
    return build_workbook(columns, rows)
