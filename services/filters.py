"""
Client-side style filter predicates.

Every filter field gates inclusion on its own, an empty field always passes,
and all active fields are AND-ed. Results-page fields match case-sensitively,
short-course fields and the search box case-insensitively.
"""

from typing import Any, Iterable, List

from schemas.filters import ResultFilters, ShortCourseFilters


def _text(row, name) -> str:
    value = row.get(name) if isinstance(row, dict) else getattr(row, name, None)
    return "" if value is None else str(value)


def contains(value: str, needle: str, case_sensitive: bool = True) -> bool:
    if not needle:
        return True
    if case_sensitive:
        return needle in value
    return needle.lower() in value.lower()


def _created_year(row) -> str:
    created_at = row.get("created_at") if isinstance(row, dict) else getattr(row, "created_at", None)
    return str(created_at.year) if created_at else ""


# --- RESULTS PAGE ---

def match_result_row(row, filters: ResultFilters) -> bool:
    matches_student_id = contains(_text(row, "student_id"), filters.student_id)
    matches_department = contains(_text(row, "department"), filters.department)
    matches_year = _created_year(row) == filters.year if filters.year else True
    return matches_student_id and matches_department and matches_year


def filter_result_rows(rows: Iterable[Any], filters: ResultFilters) -> List[Any]:
    return [row for row in rows if match_result_row(row, filters)]


def search_aggregates(records: Iterable[Any], query: str) -> List[Any]:
    """Search box over aggregated records: first name, last name or student ID."""
    query = (query or "").strip().lower()
    if not query:
        return list(records)
    return [
        r for r in records
        if query in _text(r, "first_name").lower()
        or query in _text(r, "last_name").lower()
        or query in _text(r, "student_id").lower()
    ]


# --- SHORT COURSE STUDENTS PAGE ---

def match_short_course_student(student, filters: ShortCourseFilters) -> bool:
    return all(
        contains(_text(student, name), getattr(filters, name), case_sensitive=False)
        for name in ("year", "quarter", "department", "course")
    )


def filter_short_course_students(students: Iterable[Any], filters: ShortCourseFilters) -> List[Any]:
    return [s for s in students if match_short_course_student(s, filters)]
