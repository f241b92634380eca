"""Tabular PDF report of teacher records, rendered with reportlab."""

from __future__ import annotations

import io
import logging
from typing import Sequence
from xml.sax.saxutils import escape

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import getSampleStyleSheet
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from .. import models
from ..config import settings
from ..errors import InternalError
from .stats import mean_classes, round_half_up

_LOGGER = logging.getLogger("teacher_registry.reports")

HEADERS = ["ID", "Full Name", "Age", "Date of Birth", "Number of Classes"]
# relative widths of the five columns
_COL_RATIOS = [1, 3, 2, 2, 2]


def _summary_lines(teachers: Sequence[models.Teacher]) -> list[str]:
    lines = [f"Total Teachers: {len(teachers)}"]
    avg = mean_classes(teachers)
    if avg is not None:
        lines.append(f"Average Classes per Teacher: {round_half_up(avg, 2):.2f}")
    return lines


def render_teachers_pdf(teachers: Sequence[models.Teacher], title: str | None = None) -> bytes:
    """Render `teachers` as a one-table PDF and return the document bytes.

    Rows keep the input order. The table is followed by the record count
    and, for a non-empty input, the mean class load to two decimals. Any
    failure is raised as `InternalError` with the original cause attached.
    """
    buffer = io.BytesIO()
    try:
        styles = getSampleStyleSheet()
        doc = SimpleDocTemplate(buffer, pagesize=A4, title=title or settings.REPORT_TITLE)
        elements = [Paragraph(escape(title or settings.REPORT_TITLE), styles["Title"]), Spacer(1, 12)]

        table_data = [HEADERS]
        for t in teachers:
            table_data.append([
                str(t.id),
                Paragraph(escape(t.full_name), styles["BodyText"]),
                str(t.age),
                t.date_of_birth.isoformat(),
                str(t.number_of_classes),
            ])
        unit = doc.width / sum(_COL_RATIOS)
        table = Table(table_data, colWidths=[r * unit for r in _COL_RATIOS], repeatRows=1, hAlign="LEFT")
        table.setStyle(TableStyle([
            ("BACKGROUND", (0, 0), (-1, 0), colors.lightgrey),
            ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
            ("GRID", (0, 0), (-1, -1), 0.5, colors.grey),
            ("VALIGN", (0, 0), (-1, -1), "TOP"),
        ]))
        elements.append(table)
        elements.append(Spacer(1, 12))
        for line in _summary_lines(teachers):
            elements.append(Paragraph(f"<b>{line}</b>", styles["Normal"]))
        doc.build(elements)
    except Exception as exc:
        _LOGGER.exception("pdf_render_failed rows=%s", len(teachers))
        raise InternalError(f"Error generating PDF: {exc}") from exc
    return buffer.getvalue()
