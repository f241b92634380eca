import io
from datetime import date

import openpyxl
import pdfplumber
import pytest

from teacher_registry import models
from teacher_registry.errors import InternalError
from teacher_registry.utils.excel_report import render_teachers_excel
from teacher_registry.utils.pdf_report import render_teachers_pdf


def make_teachers():
    return [
        models.Teacher(id=7, full_name="Zoe Zimmer", date_of_birth=date(1990, 1, 1), number_of_classes=3),
        models.Teacher(id=2, full_name="Adam & Eve Ltd", date_of_birth=date(1975, 5, 20), number_of_classes=4),
        models.Teacher(id=5, full_name="Mia Moreau", date_of_birth=date(1988, 11, 30), number_of_classes=4),
    ]


def pdf_text(data: bytes) -> str:
    with pdfplumber.open(io.BytesIO(data)) as pdf:
        return "\n".join(page.extract_text() or "" for page in pdf.pages)


def test_pdf_report_content():
    data = render_teachers_pdf(make_teachers())
    assert data.startswith(b"%PDF")
    text = pdf_text(data)
    assert "Teachers Report" in text
    assert "Full Name" in text and "Number of Classes" in text
    assert "1975-05-20" in text
    assert "Adam & Eve Ltd" in text
    assert "Total Teachers: 3" in text
    assert "Average Classes per Teacher: 3.67" in text
    # rows keep input order
    assert text.index("Zoe Zimmer") < text.index("Adam & Eve Ltd") < text.index("Mia Moreau")


def test_pdf_report_empty_list():
    text = pdf_text(render_teachers_pdf([]))
    assert "Teachers Report" in text
    assert "Total Teachers: 0" in text
    assert "Average" not in text


def test_excel_report_structure():
    teachers = make_teachers()
    wb = openpyxl.load_workbook(io.BytesIO(render_teachers_excel(teachers)))
    assert wb.sheetnames == ["Teachers", "Statistics"]
    sheet = wb["Teachers"]
    assert sheet.max_row == len(teachers) + 1
    header = [c.value for c in sheet[1]]
    assert header == ["ID", "Full Name", "Age", "Date of Birth", "Number of Classes"]
    assert all(c.font.bold for c in sheet[1])
    assert [sheet.cell(row=r, column=1).value for r in range(2, 5)] == [7, 2, 5]
    assert sheet.cell(row=3, column=4).value == "1975-05-20"
    assert sheet.cell(row=3, column=3).value == teachers[1].age

    stats = wb["Statistics"]
    assert stats["A1"].value == "Total Teachers:"
    assert stats["B1"].value == 3
    assert stats["A2"].value == "Average Classes per Teacher:"
    assert isinstance(stats["B2"].value, float)
    assert stats["B2"].value == pytest.approx(11 / 3)


def test_excel_report_empty_list():
    wb = openpyxl.load_workbook(io.BytesIO(render_teachers_excel([])))
    assert wb["Teachers"].max_row == 1
    stats = wb["Statistics"]
    assert stats["B1"].value == 0
    assert stats.max_row == 1


def test_render_faults_are_wrapped():
    broken = [object()]
    with pytest.raises(InternalError) as pdf_err:
        render_teachers_pdf(broken)
    assert "Error generating PDF" in str(pdf_err.value)
    assert isinstance(pdf_err.value.__cause__, AttributeError)
    with pytest.raises(InternalError) as xlsx_err:
        render_teachers_excel(broken)
    assert isinstance(xlsx_err.value.__cause__, AttributeError)


def test_excel_names_are_never_formulas():
    teachers = [models.Teacher(id=1, full_name="=1+1", date_of_birth=date(1990, 1, 1), number_of_classes=3)]
    wb = openpyxl.load_workbook(io.BytesIO(render_teachers_excel(teachers)))
    cell = wb["Teachers"].cell(row=2, column=2)
    assert cell.value == "=1+1"
    assert cell.data_type == "s"
