import math
from typing import Any, Dict, Iterable, List

from schemas.results import AggregatedResult

IDENTITY_FIELDS = (
    "student_id",
    "first_name",
    "last_name",
    "department",
    "academic_session",
    "semester",
    "course",
    "created_at",
)


def _get(row, name, default=None):
    if isinstance(row, dict):
        return row.get(name, default)
    return getattr(row, name, default)


def aggregate_results(rows: Iterable[Any]) -> List[AggregatedResult]:
    """
    Group per-course score rows by student identifier.

    Each group carries the identity fields of the first row seen for that
    student, the number of rows (`courses_count`) and the mean score.
    Rows without an identifier all fall into one "" group.
    Output order is the order in which students were first seen.
    """
    firsts: Dict[str, Any] = {}
    scores: Dict[str, List[float]] = {}

    for row in rows:
        key = _get(row, "student_id") or ""
        if key not in firsts:
            firsts[key] = row
            scores[key] = []
        scores[key].append(float(_get(row, "score") or 0))

    aggregated = []
    for key, first in firsts.items():
        values = scores[key]
        # fsum is exactly rounded, so the mean doesn't depend on row order
        total = math.fsum(values)
        record = AggregatedResult(
            **{name: _get(first, name) for name in IDENTITY_FIELDS},
            courses_count=len(values),
            total_score=total,
            score=total / len(values),
        )
        aggregated.append(record)
    return aggregated
