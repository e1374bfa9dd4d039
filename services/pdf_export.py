"""PDF documents for the results screens, built with reportlab platypus."""

import io
from datetime import datetime
from typing import Iterable, Optional
from xml.sax.saxutils import escape

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import getSampleStyleSheet
from reportlab.lib.units import inch
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from config import SCHOOL_NAME

TABLE_STYLE = TableStyle([
    ("BACKGROUND",    (0, 0), (-1,  0), colors.HexColor("#2F4B7C")),
    ("TEXTCOLOR",     (0, 0), (-1,  0), colors.white),
    ("FONTNAME",      (0, 0), (-1,  0), "Helvetica-Bold"),
    ("FONTSIZE",      (0, 0), (-1, -1), 9),
    ("ALIGN",         (0, 0), (-1, -1), "CENTER"),
    ("GRID",          (0, 0), (-1, -1), 0.5, colors.grey),
    ("ROWBACKGROUNDS",(0, 1), (-1, -1), [colors.white, colors.HexColor("#EEF2F8")]),
    ("BOTTOMPADDING", (0, 0), (-1, -1), 5),
])


def _header(title: str, subtitle: Optional[str] = None):
    styles = getSampleStyleSheet()
    elems = [
        Paragraph(f"<b>{escape(SCHOOL_NAME)}</b>", styles["Title"]),
        Paragraph(title, styles["Heading2"]),
    ]
    if subtitle:
        elems.append(Paragraph(escape(subtitle), styles["Normal"]))
    elems.append(Paragraph(f"Generated {datetime.now().strftime('%b %d, %Y')}", styles["Normal"]))
    elems.append(Spacer(1, 0.2 * inch))
    return elems


def _build(elems) -> bytes:
    buf = io.BytesIO()
    doc = SimpleDocTemplate(buf, pagesize=A4, leftMargin=0.6 * inch, rightMargin=0.6 * inch)
    doc.build(elems)
    return buf.getvalue()


def _date(value) -> str:
    return value.strftime("%a %b %d %Y") if value else "-"


def render_results_list(records: Iterable, subtitle: Optional[str] = None) -> bytes:
    """Aggregated results table: one line per student."""
    elems = _header("Long Course Results", subtitle)

    table_data = [["Student", "Student ID", "Department", "Courses", "Avg. Score", "Date"]]
    for r in records:
        table_data.append([
            r.full_name or "-",
            r.student_id or "-",
            r.department or "-",
            r.courses_count,
            f"{r.score:.2f}",
            _date(r.created_at),
        ])
    if len(table_data) == 1:
        table_data.append(["No records, yet", "", "", "", "", ""])

    widths = [i * inch for i in [1.6, 1.1, 1.5, 0.7, 0.9, 1.2]]
    tbl = Table(table_data, colWidths=widths, repeatRows=1)
    tbl.setStyle(TABLE_STYLE)
    elems.append(tbl)
    return _build(elems)


def render_student_transcript(aggregate, rows: Iterable) -> bytes:
    """Per-course results for one student, with the aggregate summary on top."""
    styles = getSampleStyleSheet()
    elems = _header("Statement of Result", f"{aggregate.full_name} ({aggregate.student_id or '-'})")

    summary = Table(
        [[
            "Department", aggregate.department or "-",
            "Courses", aggregate.courses_count,
            "Average", f"{aggregate.score:.2f}",
        ]],
        colWidths=[1.0 * inch, 1.6 * inch, 0.8 * inch, 0.6 * inch, 0.8 * inch, 0.8 * inch],
    )
    summary.setStyle(TableStyle([
        ("FONTNAME",      (0, 0), (-1, -1), "Helvetica-Bold"),
        ("FONTSIZE",      (0, 0), (-1, -1), 9),
        ("ALIGN",         (0, 0), (-1, -1), "CENTER"),
        ("BOTTOMPADDING", (0, 0), (-1, -1), 5),
    ]))
    elems.append(summary)
    elems.append(Spacer(1, 0.2 * inch))

    table_data = [["Course", "Score", "Grade", "Session", "Semester"]]
    for row in rows:
        table_data.append([
            row.course or "-",
            f"{row.score:g}",
            row.grade or "-",
            row.academic_session or "-",
            row.semester or "-",
        ])
    tbl = Table(table_data, colWidths=[1.6 * inch, 0.9 * inch, 0.8 * inch, 1.3 * inch, 1.2 * inch], repeatRows=1)
    tbl.setStyle(TABLE_STYLE)
    elems.append(tbl)
    elems.append(Spacer(1, 0.3 * inch))
    elems.append(Paragraph("Grades: A 90+, B 80+, C 70+, D 60+, E 50+, F below 50.", styles["Italic"]))
    return _build(elems)
