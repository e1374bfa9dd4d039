import logging
from enum import Enum

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import HTMLResponse, JSONResponse, RedirectResponse
from pydantic import ValidationError
from sqlalchemy.orm import Session

from config import ITEMS_PER_PAGE
from database import get_db
from models.students import LongCourseStudent, ShortCourseStudent
from schemas.errors import field_errors
from schemas.filters import ListState, ShortCourseFilters
from schemas.students import (
    LongCourseStudentResponse,
    LongCourseStudentSchema,
    ShortCourseStudentResponse,
    ShortCourseStudentSchema,
)
from services import gateway, media
from services.filters import filter_short_course_students
from services.options import QUARTER_OPTIONS, courses_for, departments_for
from services.pagination import paginate
from templating import templates

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/students", tags=["Students"])


class StudentKind(str, Enum):
    long_course = "long-course"
    short_course = "short-course"


# kind -> (model, form schema, response schema, identifier column, title)
KINDS = {
    StudentKind.long_course: (LongCourseStudent, LongCourseStudentSchema, LongCourseStudentResponse, "matric_number", "Long Course"),
    StudentKind.short_course: (ShortCourseStudent, ShortCourseStudentSchema, ShortCourseStudentResponse, "student_id", "Short Course"),
}

FORM_FIELDS = ["first_name", "last_name", "sex", "dob", "email", "phone", "address", "department", "course", "photo_url"]

# Table columns, same shape for both kinds except the identifier header
def columns_for(kind: StudentKind):
    ident_header = "Matric Number" if kind == StudentKind.long_course else "Student ID"
    return [
        {"header": "Info", "accessor": "info"},
        {"header": ident_header, "accessor": KINDS[kind][3], "class_name": "hide-sm"},
        {"header": "Sex", "accessor": "sex", "class_name": "hide-sm"},
        {"header": "Phone", "accessor": "phone", "class_name": "hide-md"},
        {"header": "Address", "accessor": "address", "class_name": "hide-md"},
        {"header": "Actions", "accessor": "action"},
    ]


def is_admin(request: Request) -> bool:
    return getattr(request.state, "role", None) == "admin"


def require_admin(request: Request):
    if not is_admin(request):
        raise HTTPException(status_code=403, detail="Admin access required")


def dump_form(form) -> dict:
    return {k: v for k, v in form.items() if isinstance(v, str)}


def load_students(db: Session, kind: StudentKind, filters: ShortCourseFilters = None):
    model, _, _, _, _ = KINDS[kind]
    fetched = gateway.select_all(db, model, order_by=model.id.desc())
    students = fetched.data
    if kind == StudentKind.short_course and filters is not None:
        students = filter_short_course_students(students, filters)
    return fetched, students


# ===============================
#   1. JSON API
# ===============================

@router.get("/api/options/courses")
def course_options(department: str = ""):
    """Course select options that depend on the chosen department."""
    return {"department": department, "courses": courses_for(department)}


@router.get("/api/{kind}")
def list_students_api(kind: StudentKind, filters: ShortCourseFilters = Depends(), db: Session = Depends(get_db)):
    fetched, students = load_students(db, kind, filters)
    if not fetched.ok:
        raise HTTPException(status_code=502, detail=fetched.error)
    response_schema = KINDS[kind][2]
    return [response_schema.model_validate(s) for s in students]


@router.get("/api/{kind}/{id}")
def get_student_api(kind: StudentKind, id: int, db: Session = Depends(get_db)):
    model, _, response_schema, _, _ = KINDS[kind]
    fetched = gateway.select_by_id(db, model, id)
    if not fetched.ok:
        raise HTTPException(status_code=502, detail=fetched.error)
    if fetched.is_empty:
        raise HTTPException(status_code=404, detail="Student not found")
    return response_schema.model_validate(fetched.first)


@router.post("/api/{kind}", status_code=201)
def create_student_api(kind: StudentKind, payload: dict, request: Request, db: Session = Depends(get_db)):
    require_admin(request)
    model, schema, response_schema, _, _ = KINDS[kind]
    try:
        data = schema(**payload)
    except ValidationError as e:
        return JSONResponse(status_code=422, content={"errors": field_errors(e)})

    created = gateway.insert(db, model, [data.model_dump()])
    if not created.ok:
        raise HTTPException(status_code=500, detail=created.error)
    return response_schema.model_validate(created.first)


@router.put("/api/{kind}/{id}")
def update_student_api(kind: StudentKind, id: int, payload: dict, request: Request, db: Session = Depends(get_db)):
    require_admin(request)
    model, schema, response_schema, _, _ = KINDS[kind]
    try:
        data = schema(**payload)
    except ValidationError as e:
        return JSONResponse(status_code=422, content={"errors": field_errors(e)})

    # Fields left out of the payload keep their stored values
    updated = gateway.update(db, model, id, data.model_dump(exclude_unset=True))
    if not updated.ok:
        raise HTTPException(status_code=500, detail=updated.error)
    if updated.is_empty:
        raise HTTPException(status_code=404, detail="Student not found")
    return response_schema.model_validate(updated.first)


@router.delete("/api/{kind}/{id}")
def delete_student_api(kind: StudentKind, id: int, request: Request, db: Session = Depends(get_db)):
    require_admin(request)
    model = KINDS[kind][0]
    deleted = gateway.delete(db, model, id)
    if not deleted.ok:
        raise HTTPException(status_code=500, detail=deleted.error)
    if deleted.is_empty:
        raise HTTPException(status_code=404, detail="Student not found")
    return {"message": "Deleted"}


# ===============================
#   2. PAGES
# ===============================

@router.get("/{kind}", response_class=HTMLResponse)
def student_list_page(
    request: Request,
    kind: StudentKind,
    page: int = 1,
    filters: ShortCourseFilters = Depends(),
    db: Session = Depends(get_db),
):
    use_filters = filters if kind == StudentKind.short_course else None
    fetched, students = load_students(db, kind, use_filters)
    state = ListState(page=page, filters=use_filters)
    current = paginate(students, page, ITEMS_PER_PAGE)

    return templates.TemplateResponse(request, "student_list.html", {
        "kind": kind.value,
        "title": KINDS[kind][4],
        "ident_field": KINDS[kind][3],
        "columns": columns_for(kind),
        "fetch_ok": fetched.ok,
        "page": current,
        "state": state,
        "is_admin": is_admin(request),
        "departments": departments_for("short"),
        "courses": courses_for(filters.department),
        "quarters": QUARTER_OPTIONS,
    })


@router.get("/{kind}/new", response_class=HTMLResponse)
def new_student_page(request: Request, kind: StudentKind):
    require_admin(request)
    return _form_page(request, kind, "create", values={}, errors={})


def _form_page(request, kind, form_type, values, errors, student_id=None, status_code=200):
    short = "short" if kind == StudentKind.short_course else "long"
    return templates.TemplateResponse(request, "student_form.html", {
        "kind": kind.value,
        "title": KINDS[kind][4],
        "ident_field": KINDS[kind][3],
        "type": form_type,
        "values": values,
        "errors": errors,
        "student_id": student_id,
        "departments": departments_for(short),
        "courses": courses_for(values.get("department")),
        "quarters": QUARTER_OPTIONS,
        "photo_upload": media.is_configured(),
    }, status_code=status_code)


@router.post("/{kind}")
async def create_student(request: Request, kind: StudentKind, db: Session = Depends(get_db)):
    require_admin(request)
    model, schema, _, _, _ = KINDS[kind]
    form = await request.form()
    values = dump_form(form)

    try:
        data = schema(**values)
    except ValidationError as e:
        return _form_page(request, kind, "create", values, field_errors(e), status_code=422)

    row = data.model_dump()
    photo_url = media.upload_photo(form.get("photo"))
    if photo_url:
        row["photo_url"] = photo_url

    created = gateway.insert(db, model, [row])
    if not created.ok:
        return _form_page(request, kind, "create", values, {"__root__": "Failed to save student. Please try again."}, status_code=500)

    logger.info("Created %s student %s", kind.value, created.first.id)
    return RedirectResponse(url=f"/students/{kind.value}", status_code=303)


@router.get("/{kind}/{id}", response_class=HTMLResponse)
def student_detail_page(request: Request, kind: StudentKind, id: int, db: Session = Depends(get_db)):
    model = KINDS[kind][0]
    fetched = gateway.select_by_id(db, model, id)
    if not fetched.ok:
        raise HTTPException(status_code=502, detail=fetched.error)
    if fetched.is_empty:
        raise HTTPException(status_code=404, detail="Student not found")

    return templates.TemplateResponse(request, "student_detail.html", {
        "kind": kind.value,
        "title": KINDS[kind][4],
        "ident_field": KINDS[kind][3],
        "student": fetched.first,
        "is_admin": is_admin(request),
    })


@router.get("/{kind}/{id}/edit", response_class=HTMLResponse)
def edit_student_page(request: Request, kind: StudentKind, id: int, db: Session = Depends(get_db)):
    require_admin(request)
    model, _, response_schema, _, _ = KINDS[kind]
    fetched = gateway.select_by_id(db, model, id)
    if not fetched.ok:
        raise HTTPException(status_code=502, detail=fetched.error)
    if fetched.is_empty:
        raise HTTPException(status_code=404, detail="Student not found")

    values = {
        k: ("" if v is None else str(v))
        for k, v in response_schema.model_validate(fetched.first).model_dump().items()
    }
    return _form_page(request, kind, "update", values, {}, student_id=id)


@router.post("/{kind}/{id}/update")
async def update_student(request: Request, kind: StudentKind, id: int, db: Session = Depends(get_db)):
    require_admin(request)
    model, schema, _, _, _ = KINDS[kind]
    form = await request.form()
    values = dump_form(form)

    try:
        data = schema(**values)
    except ValidationError as e:
        return _form_page(request, kind, "update", values, field_errors(e), student_id=id, status_code=422)

    row = data.model_dump()
    # The upload form has no photo_url input; keep the stored photo unless replaced
    if not values.get("photo_url"):
        row.pop("photo_url")
    photo_url = media.upload_photo(form.get("photo"))
    if photo_url:
        row["photo_url"] = photo_url

    updated = gateway.update(db, model, id, row)
    if not updated.ok:
        return _form_page(request, kind, "update", values, {"__root__": "Failed to save student. Please try again."}, student_id=id, status_code=500)
    if updated.is_empty:
        raise HTTPException(status_code=404, detail="Student not found")
    return RedirectResponse(url=f"/students/{kind.value}/{id}", status_code=303)


@router.post("/{kind}/{id}/delete")
def delete_student(request: Request, kind: StudentKind, id: int, db: Session = Depends(get_db)):
    require_admin(request)
    deleted = gateway.delete(db, KINDS[kind][0], id)
    if not deleted.ok:
        raise HTTPException(status_code=500, detail=deleted.error)
    return RedirectResponse(url=f"/students/{kind.value}", status_code=303)
