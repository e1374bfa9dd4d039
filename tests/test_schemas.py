import pytest
from pydantic import ValidationError

from schemas.errors import field_errors
from schemas.results import ResultEntrySchema
from schemas.students import LongCourseStudentSchema, ShortCourseStudentSchema


def entry(**overrides):
    data = {
        "student_id": "CS/2023/001",
        "first_name": "Ada",
        "last_name": "Obi",
        "department": "Computer Science",
        "courses": [{"course_code": "CSC101", "score": "72", "grade": "C"}],
    }
    data.update(overrides)
    return data


def errors_for(schema, data):
    with pytest.raises(ValidationError) as exc:
        schema(**data)
    return field_errors(exc.value)


def test_valid_entry_builds_rows():
    parsed = ResultEntrySchema(**entry(semester="First"))
    assert parsed.courses[0].score == 72.0
    assert parsed.to_rows() == [{
        "student_id": "CS/2023/001",
        "first_name": "Ada",
        "last_name": "Obi",
        "department": "Computer Science",
        "academic_session": None,
        "semester": "First",
        "course": "CSC101",
        "score": 72.0,
        "grade": "C",
    }]


def test_required_fields():
    errors = errors_for(ResultEntrySchema, {"courses": []})
    assert errors == {
        "student_id": "Student ID is required!",
        "first_name": "First name is required!",
        "last_name": "Last name is required!",
        "department": "Department is required!",
        "courses": "At least one course is required!",
    }


@pytest.mark.parametrize("score, message", [
    ("", "Score is required!"),
    ("abc", "Score must be a number!"),
    ("101", "Score must be between 0 and 100!"),
    (-1, "Score must be between 0 and 100!"),
])
def test_score_messages(score, message):
    errors = errors_for(ResultEntrySchema, entry(courses=[{"course_code": "CSC101", "score": score, "grade": "A"}]))
    assert errors == {"courses.0.score": message}


def test_score_bounds_are_inclusive():
    for score in (0, 100, "0", "100.0"):
        ResultEntrySchema(**entry(courses=[{"course_code": "X", "score": score, "grade": "F"}]))


def test_course_line_messages_are_indexed():
    errors = errors_for(ResultEntrySchema, entry(courses=[
        {"course_code": "CSC101", "score": "50", "grade": "E"},
        {"course_code": " ", "score": "50", "grade": ""},
    ]))
    assert errors == {
        "courses.1.course_code": "Course Code is required!",
        "courses.1.grade": "Grade is required!",
    }


def test_student_schemas():
    long = LongCourseStudentSchema(matric_number=" CS/1 ", first_name="Ada", last_name="Obi", dob="2001-05-02", email="")
    assert long.matric_number == "CS/1"
    assert long.email is None
    assert str(long.dob) == "2001-05-02"

    short = ShortCourseStudentSchema(student_id="SC-1", first_name="K", last_name="A", year="2024", quarter="Third")
    assert short.year == 2024

    errors = errors_for(ShortCourseStudentSchema, {"first_name": "K", "year": "soon", "quarter": "Fifth"})
    assert errors == {
        "last_name": "Last name is required!",
        "student_id": "Student ID is required!",
        "year": "Year must be a number!",
        "quarter": "Quarter must be First, Second, Third or Fourth!",
    }
