"""
Result Bulk Import Router
Lets administrators upload an Excel or CSV sheet of per-course scores and
insert them as long-course result rows, validating every row first.
"""

import io
import logging
from typing import Any, Dict, List, Optional

import pandas as pd
from fastapi import APIRouter, Depends, File, HTTPException, UploadFile
from pydantic import ValidationError
from sqlalchemy.orm import Session

from database import get_db
from models.results import LongCourseResult
from schemas.errors import field_errors
from schemas.results import CourseEntrySchema
from services import gateway
from services.grading import grade_or_blank

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/bulk-import", tags=["Bulk Import"])

REQUIRED_COLUMNS = ["student_id", "course", "score"]
OPTIONAL_COLUMNS = ["first_name", "last_name", "department", "grade", "academic_session", "semester"]


def safe_str(value) -> Optional[str]:
    """Safely convert value to string, handling NaN and None"""
    if value is None or pd.isna(value):
        return None
    text = str(value).strip()
    return text or None


def read_sheet(filename: str, contents: bytes) -> pd.DataFrame:
    if filename.endswith(".csv"):
        df = pd.read_csv(io.BytesIO(contents), dtype=str)
    else:
        df = pd.read_excel(io.BytesIO(contents), engine="openpyxl", dtype=str)
    # Normalise headers: "Student ID " -> "student_id"
    df.columns = df.columns.str.strip().str.lower().str.replace(" ", "_")
    return df


def row_to_result(row) -> Dict[str, Any]:
    """Validate one sheet row; raises ValidationError with per-field messages."""
    score = safe_str(row.get("score"))
    course = CourseEntrySchema(
        course_code=safe_str(row.get("course")),
        score=score,
        grade=safe_str(row.get("grade")) or grade_or_blank(score),
    )
    return {
        "student_id": safe_str(row.get("student_id")),
        "first_name": safe_str(row.get("first_name")),
        "last_name": safe_str(row.get("last_name")),
        "department": safe_str(row.get("department")),
        "academic_session": safe_str(row.get("academic_session")),
        "semester": safe_str(row.get("semester")),
        "course": course.course_code,
        "score": course.score,
        "grade": course.grade,
    }


@router.post("/results")
async def bulk_import_results(file: UploadFile = File(...), db: Session = Depends(get_db)):
    if not file.filename or not file.filename.lower().endswith((".xlsx", ".csv")):
        raise HTTPException(status_code=400, detail="Invalid file format. Please upload an .xlsx or .csv file")

    contents = await file.read()
    try:
        df = read_sheet(file.filename.lower(), contents)
    except Exception as e:
        raise HTTPException(status_code=400, detail=f"Error reading file: {e}")

    missing = [c for c in REQUIRED_COLUMNS if c not in df.columns]
    if missing:
        raise HTTPException(status_code=400, detail=f"Missing columns: {', '.join(missing)}")

    errors: List[Dict[str, Any]] = []
    rows_to_add: List[Dict[str, Any]] = []

    for idx, row in df.iterrows():
        row_num = idx + 2  # sheet row number (1-indexed + header)

        if row.isna().all():
            continue

        if not safe_str(row.get("student_id")):
            errors.append({"row": row_num, "error": "Student ID is required!"})
            continue

        try:
            rows_to_add.append(row_to_result(row))
        except ValidationError as e:
            message = "; ".join(field_errors(e).values())
            logger.warning("Bulk import row %d rejected: %s", row_num, message)
            errors.append({"row": row_num, "error": message})

    imported_count = 0
    if rows_to_add:
        inserted = gateway.insert(db, LongCourseResult, rows_to_add)
        if not inserted.ok:
            raise HTTPException(status_code=500, detail=f"Database error. No results were imported. Error: {inserted.error}")
        imported_count = len(inserted.data)

    return {
        "success": True,
        "total_rows": len(df),
        "imported_count": imported_count,
        "error_count": len(errors),
        "errors": errors,
    }


@router.get("/template")
async def get_sample_template():
    """Expected columns for the upload sheet."""
    return {
        "required_columns": REQUIRED_COLUMNS,
        "optional_columns": OPTIONAL_COLUMNS,
        "notes": [
            "student_id is the long-course matric number",
            "score must be a number between 0 and 100",
            "grade is calculated from the score when left empty",
        ],
    }
