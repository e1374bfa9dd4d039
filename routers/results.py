import logging
from datetime import datetime
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import HTMLResponse, JSONResponse, Response
from pydantic import ValidationError
from sqlalchemy.orm import Session

from config import ITEMS_PER_PAGE
from database import get_db
from models.results import LongCourseResult
from models.students import LongCourseStudent
from schemas.errors import field_errors
from schemas.filters import ListState, ResultFilters
from schemas.results import ResultEntrySchema, ResultRowSchema, StudentLookupResponse
from services import gateway, pdf_export
from services.aggregation import aggregate_results
from services.filters import filter_result_rows, search_aggregates
from services.grading import grade_or_blank
from services.options import departments_for
from services.pagination import paginate
from templating import templates

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/results", tags=["Results"])

COLUMNS = [
    {"header": "Subjects Count", "accessor": "courses_count"},
    {"header": "Student", "accessor": "student"},
    {"header": "Student ID", "accessor": "student_id", "class_name": "hide-sm"},
    {"header": "Avg. Score", "accessor": "score", "class_name": "hide-sm"},
    {"header": "Date", "accessor": "created_at", "class_name": "hide-sm"},
    {"header": "Actions", "accessor": "action"},
]


# ===========================
#   HELPERS
# ===========================

def load_result_view(db: Session, filters: ResultFilters, search: str = ""):
    """
    Fetch all result rows, filter the raw rows, aggregate per student and
    apply the search box. Returns (FetchResult, aggregated records).
    """
    fetched = gateway.select_all(db, LongCourseResult, order_by=LongCourseResult.id)
    rows = filter_result_rows(fetched.data, filters)
    records = search_aggregates(aggregate_results(rows), search)
    return fetched, records


def lookup_student(db: Session, student_id: str):
    """Long-course student for a matric number. Returns (FetchResult, student or None)."""
    fetched = gateway.filter_eq(db, LongCourseStudent, "matric_number", student_id, single=True)
    if fetched.ok and fetched.is_empty:
        logger.info("Student ID '%s' not found", student_id)
    return fetched, fetched.first


def blank_course():
    return {"course_code": "", "score": "", "grade": ""}


def courses_from_form(form) -> List[dict]:
    codes = form.getlist("course_code")
    scores = form.getlist("score")
    grades = form.getlist("grade")
    courses = []
    for i, code in enumerate(codes):
        score = scores[i] if i < len(scores) else ""
        grade = grades[i] if i < len(grades) else ""
        # Grade follows the score; the field is read-only in the form
        courses.append({"course_code": code, "score": score, "grade": grade_or_blank(score) or grade})
    return courses


def filter_subtitle(filters: ResultFilters, search: str) -> str:
    parts = [f"{k.replace('_', ' ').title()}: {v}" for k, v in filters.model_dump().items() if v]
    if search:
        parts.append(f"Search: {search}")
    return ", ".join(parts)


# ===========================
#   PART 1: JSON API
# ===========================

@router.get("/api/long")
def results_api(filters: ResultFilters = Depends(), search: str = "", db: Session = Depends(get_db)):
    fetched, records = load_result_view(db, filters, search)
    if not fetched.ok:
        raise HTTPException(status_code=502, detail=fetched.error)
    return {"total": len(records), "records": [r.model_dump() for r in records]}


@router.get("/api/long/{student_id:path}")
def student_results_api(student_id: str, db: Session = Depends(get_db)):
    fetched = gateway.filter_eq(db, LongCourseResult, "student_id", student_id)
    if not fetched.ok:
        raise HTTPException(status_code=502, detail=fetched.error)
    if fetched.is_empty:
        raise HTTPException(status_code=404, detail="No results for this student")
    return {
        "summary": aggregate_results(fetched.data)[0].model_dump(),
        "rows": [ResultRowSchema.model_validate(r).model_dump() for r in fetched.data],
    }


@router.get("/api/lookup")
def lookup_student_api(student_id: str, db: Session = Depends(get_db)):
    fetched, student = lookup_student(db, student_id)
    if not fetched.ok:
        raise HTTPException(status_code=502, detail=fetched.error)
    if student is None:
        raise HTTPException(status_code=404, detail="Student ID not found")
    return StudentLookupResponse(
        student_id=student.matric_number,
        first_name=student.first_name or "",
        last_name=student.last_name or "",
        department=student.department or "",
    )


@router.post("/api", status_code=201)
def submit_results_api(payload: dict, db: Session = Depends(get_db)):
    try:
        entry = ResultEntrySchema(**payload)
    except ValidationError as e:
        return JSONResponse(status_code=422, content={"errors": field_errors(e)})

    inserted = gateway.insert(db, LongCourseResult, entry.to_rows())
    if not inserted.ok:
        raise HTTPException(status_code=500, detail="Failed to submit data. Please try again.")
    return {"message": "Data successfully submitted!", "inserted_count": len(inserted.data)}


# ===========================
#   PART 2: PAGES
# ===========================

@router.get("/long", response_class=HTMLResponse)
def results_list_page(
    request: Request,
    filters: ResultFilters = Depends(),
    search: str = "",
    page: int = 1,
    show_filters: bool = False,
    db: Session = Depends(get_db),
):
    fetched, records = load_result_view(db, filters, search)
    state = ListState(page=page, search=search, filters=filters, filter_modal_open=show_filters)

    return templates.TemplateResponse(request, "result_list.html", {
        "columns": COLUMNS,
        "fetch_ok": fetched.ok,
        "page": paginate(records, page, ITEMS_PER_PAGE),
        "state": state,
        "departments": departments_for("long"),
    })


@router.get("/long/export.pdf")
def export_results_pdf(filters: ResultFilters = Depends(), search: str = "", db: Session = Depends(get_db)):
    fetched, records = load_result_view(db, filters, search)
    if not fetched.ok:
        raise HTTPException(status_code=502, detail=fetched.error)

    pdf = pdf_export.render_results_list(records, filter_subtitle(filters, search) or None)
    filename = f"long_course_results_{datetime.now().strftime('%Y%m%d')}.pdf"
    return Response(content=pdf, media_type="application/pdf",
                    headers={"Content-Disposition": f'attachment; filename="{filename}"'})


# Matric numbers contain slashes. Export goes first so the detail route doesn't match it.
@router.get("/long/student/{student_id:path}/export.pdf")
def export_student_pdf(student_id: str, db: Session = Depends(get_db)):
    fetched = gateway.filter_eq(db, LongCourseResult, "student_id", student_id)
    if not fetched.ok:
        raise HTTPException(status_code=502, detail=fetched.error)
    if fetched.is_empty:
        raise HTTPException(status_code=404, detail="No results for this student")

    pdf = pdf_export.render_student_transcript(aggregate_results(fetched.data)[0], fetched.data)
    filename = "result_" + student_id.replace("/", "_") + ".pdf"
    return Response(content=pdf, media_type="application/pdf",
                    headers={"Content-Disposition": f'attachment; filename="{filename}"'})


@router.get("/long/student/{student_id:path}", response_class=HTMLResponse)
def student_results_page(request: Request, student_id: str, db: Session = Depends(get_db)):
    fetched = gateway.filter_eq(db, LongCourseResult, "student_id", student_id)
    if not fetched.ok:
        raise HTTPException(status_code=502, detail=fetched.error)
    if fetched.is_empty:
        raise HTTPException(status_code=404, detail="No results for this student")

    return templates.TemplateResponse(request, "result_detail.html", {
        "summary": aggregate_results(fetched.data)[0],
        "rows": fetched.data,
    })


# ===========================
#   PART 3: RESULT ENTRY FORM
# ===========================

def _entry_page(request, values, courses, errors=None, toast=None, status_code=200):
    return templates.TemplateResponse(request, "result_form.html", {
        "type": "create",
        "values": values,
        "courses": courses,
        "errors": errors or {},
        "toast": toast,
    }, status_code=status_code)


@router.get("/new", response_class=HTMLResponse)
def result_entry_page(request: Request):
    return _entry_page(request, {}, [blank_course()])


@router.post("/new", response_class=HTMLResponse)
async def result_entry_submit(request: Request, db: Session = Depends(get_db)):
    """
    One endpoint for every button on the form. `action` is one of
    find, add, remove-<index> or submit.
    """
    form = await request.form()
    action = form.get("action", "submit")
    values = {k: form.get(k, "") for k in ("student_id", "first_name", "last_name", "department", "academic_session", "semester")}
    courses = courses_from_form(form)

    if action == "find":
        fetched, student = lookup_student(db, values["student_id"].strip())
        if not fetched.ok:
            return _entry_page(request, values, courses or [blank_course()], toast={"kind": "error", "message": "Could not look up student"})
        if student is None:
            return _entry_page(request, values, courses or [blank_course()], toast={"kind": "error", "message": "Student ID not found"})
        values.update(first_name=student.first_name or "", last_name=student.last_name or "", department=student.department or "")
        return _entry_page(request, values, courses or [blank_course()], toast={"kind": "success", "message": "Fetched student data"})

    if action == "add":
        return _entry_page(request, values, courses + [blank_course()])

    if action.startswith("remove-"):
        suffix = action.split("-", 1)[1]
        index = int(suffix) if suffix.isdigit() else -1
        remaining = [c for i, c in enumerate(courses) if i != index]
        return _entry_page(request, values, remaining)

    try:
        entry = ResultEntrySchema(**values, courses=courses)
    except ValidationError as e:
        return _entry_page(request, values, courses, errors=field_errors(e), status_code=422)

    inserted = gateway.insert(db, LongCourseResult, entry.to_rows())
    if not inserted.ok:
        return _entry_page(request, values, courses, toast={"kind": "error", "message": "Failed to submit data. Please try again."}, status_code=500)

    logger.info("Saved %d result rows for %s", len(inserted.data), entry.student_id)
    # Reset the form after a successful submission
    return _entry_page(request, {}, [blank_course()], toast={"kind": "success", "message": "Data successfully submitted!"})
