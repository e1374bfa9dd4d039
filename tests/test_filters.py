from datetime import datetime

from schemas.filters import ListState, ResultFilters, ShortCourseFilters
from services.aggregation import aggregate_results
from services.filters import (
    contains,
    filter_result_rows,
    filter_short_course_students,
    search_aggregates,
)

ROWS = [
    {"student_id": "S1", "first_name": "Ada", "last_name": "Obi", "department": "Computer Science", "score": 80, "created_at": datetime(2024, 2, 1)},
    {"student_id": "S1", "first_name": "Ada", "last_name": "Obi", "department": "Computer Science", "score": 60, "created_at": datetime(2024, 2, 3)},
    {"student_id": "S12", "first_name": "Bola", "last_name": "Ige", "department": "Mass Communication", "score": 75, "created_at": datetime(2023, 5, 1)},
    {"student_id": "S2", "first_name": "Tunde", "last_name": "Bello", "department": "Electrical Engineering", "score": 90, "created_at": datetime(2024, 7, 9)},
]


def test_contains():
    assert contains("anything", "")
    assert contains("Computer", "put")
    assert not contains("Computer", "COMP")
    assert contains("Computer", "COMP", case_sensitive=False)


def test_empty_filters_keep_everything():
    assert filter_result_rows(ROWS, ResultFilters()) == ROWS
    assert aggregate_results(filter_result_rows(ROWS, ResultFilters())) == aggregate_results(ROWS)


def test_student_id_uses_containment():
    kept = filter_result_rows(ROWS, ResultFilters(student_id="S1"))
    assert {r["student_id"] for r in kept} == {"S1", "S12"}


def test_result_filters_are_case_sensitive():
    assert filter_result_rows(ROWS, ResultFilters(department="computer")) == []
    assert len(filter_result_rows(ROWS, ResultFilters(department="Computer"))) == 2


def test_year_is_exact():
    kept = filter_result_rows(ROWS, ResultFilters(year="2023"))
    assert [r["student_id"] for r in kept] == ["S12"]
    assert filter_result_rows(ROWS, ResultFilters(year="202")) == []


def test_filters_combine_with_and():
    kept = filter_result_rows(ROWS, ResultFilters(student_id="S1", year="2024"))
    assert {r["student_id"] for r in kept} == {"S1"}


def test_missing_values_only_pass_empty_filters():
    rows = [{"student_id": None, "department": None, "created_at": None, "score": 1}]
    assert filter_result_rows(rows, ResultFilters()) == rows
    assert filter_result_rows(rows, ResultFilters(student_id="S")) == []
    assert filter_result_rows(rows, ResultFilters(year="2024")) == []


def test_clearing_restores_unfiltered_view():
    before = aggregate_results(filter_result_rows(ROWS, ResultFilters()))
    filters = ResultFilters(department="Mass")
    assert len(aggregate_results(filter_result_rows(ROWS, filters))) == 1
    after = aggregate_results(filter_result_rows(ROWS, filters.cleared()))
    assert after == before


def test_search_is_case_insensitive_over_names_and_id():
    records = aggregate_results(ROWS)
    assert [r.student_id for r in search_aggregates(records, "ADA")] == ["S1"]
    assert [r.student_id for r in search_aggregates(records, "bello")] == ["S2"]
    assert [r.student_id for r in search_aggregates(records, "s1")] == ["S1", "S12"]
    assert search_aggregates(records, "") == records


def test_short_course_filters_case_insensitive():
    students = [
        {"year": 2024, "quarter": "First", "department": "ICT", "course": "Web Design"},
        {"year": 2023, "quarter": "Second", "department": "Languages", "course": "French"},
        {"year": None, "quarter": None, "department": None, "course": None},
    ]
    assert filter_short_course_students(students, ShortCourseFilters()) == students
    assert filter_short_course_students(students, ShortCourseFilters(department="ict")) == [students[0]]
    assert filter_short_course_students(students, ShortCourseFilters(year="202")) == students[:2]
    assert filter_short_course_students(students, ShortCourseFilters(quarter="second", course="FRENCH")) == [students[1]]
    assert filter_short_course_students(students, ShortCourseFilters(year="2024", quarter="Second")) == []


def test_filter_models_normalise_input():
    filters = ResultFilters(student_id="  S1 ", department=None)
    assert filters.student_id == "S1"
    assert filters.department == ""
    assert filters.is_active
    assert not ResultFilters().is_active


def test_list_state_query_string():
    state = ListState(page=2, search="ada", filters=ResultFilters(department="Computer Science"))
    assert state.query_string() == "department=Computer+Science&search=ada&page=2"
    assert state.query_string(page=3) == "department=Computer+Science&search=ada&page=3"
    assert ListState().query_string(page="") == ""
