"""Two-sheet Excel workbook of teacher records, built with openpyxl."""

from __future__ import annotations

import io
import logging
from typing import Sequence

from openpyxl import Workbook
from openpyxl.styles import Font
from openpyxl.utils import get_column_letter

from .. import models
from ..errors import InternalError
from .stats import mean_classes

_LOGGER = logging.getLogger("teacher_registry.reports")

HEADERS = ["ID", "Full Name", "Age", "Date of Birth", "Number of Classes"]
TEACHERS_SHEET = "Teachers"
STATISTICS_SHEET = "Statistics"


def _fit_columns(sheet) -> None:
    """Size every column to its longest rendered cell."""
    for column_cells in sheet.iter_cols():
        longest = max((len(str(c.value)) for c in column_cells if c.value is not None), default=0)
        sheet.column_dimensions[get_column_letter(column_cells[0].column)].width = longest + 2


def render_teachers_excel(teachers: Sequence[models.Teacher]) -> bytes:
    """Render `teachers` as an xlsx workbook and return its bytes.

    The "Teachers" sheet holds a bold header row and one row per record
    in input order. The "Statistics" sheet holds the total count and, for
    a non-empty input, the raw mean class load as a number. Any failure
    is raised as `InternalError` with the original cause attached.
    """
    buffer = io.BytesIO()
    try:
        workbook = Workbook()
        sheet = workbook.active
        sheet.title = TEACHERS_SHEET
        sheet.append(HEADERS)
        header_font = Font(bold=True)
        for cell in sheet[1]:
            cell.font = header_font
        for t in teachers:
            sheet.append([
                t.id,
                t.full_name,
                t.age,
                t.date_of_birth.isoformat(),
                t.number_of_classes,
            ])
            # names are text even when they look like a formula
            sheet.cell(row=sheet.max_row, column=2).data_type = "s"
        _fit_columns(sheet)

        stats_sheet = workbook.create_sheet(STATISTICS_SHEET)
        stats_sheet.append(["Total Teachers:", len(teachers)])
        avg = mean_classes(teachers)
        if avg is not None:
            stats_sheet.append(["Average Classes per Teacher:", avg])
        _fit_columns(stats_sheet)

        workbook.save(buffer)
    except Exception as exc:
        _LOGGER.exception("excel_render_failed rows=%s", len(teachers))
        raise InternalError(f"Error generating Excel: {exc}") from exc
    return buffer.getvalue()
