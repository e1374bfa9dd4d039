from models.results import LongCourseResult
from models.students import LongCourseStudent
from services import gateway
from services.gateway import FetchResult


def test_fetch_result_states():
    assert FetchResult.success().is_empty
    assert FetchResult.success(None).data == []
    assert FetchResult.success("row").first == "row"
    failed = FetchResult.failed("boom")
    assert not failed.ok and not failed.is_empty and failed.error == "boom"


def test_select_all_empty_is_ok(db):
    fetched = gateway.select_all(db, LongCourseResult)
    assert fetched.ok
    assert fetched.is_empty


def test_select_all_failure_is_reported(db, db_engine):
    db.commit()
    LongCourseResult.__table__.drop(bind=db_engine)
    fetched = gateway.select_all(db, LongCourseResult)
    assert not fetched.ok
    assert "long_course_results" in fetched.error
    assert fetched.data == []


def test_insert_and_lookup(db):
    inserted = gateway.insert(db, LongCourseResult, [
        {"student_id": "S1", "course": "A", "score": 50, "grade": "E"},
        {"student_id": "S1", "course": "B", "score": 70, "grade": "C"},
    ])
    assert inserted.ok and len(inserted.data) == 2
    assert all(r.id for r in inserted.data)

    assert len(gateway.filter_eq(db, LongCourseResult, "student_id", "S1").data) == 2
    single = gateway.filter_eq(db, LongCourseResult, "course", "B", single=True)
    assert single.first.score == 70
    assert gateway.filter_eq(db, LongCourseResult, "student_id", "nobody").is_empty


def test_insert_is_all_or_nothing(db):
    result = gateway.insert(db, LongCourseStudent, [
        {"matric_number": "M1", "first_name": "A", "last_name": "B"},
        {"matric_number": "M1", "first_name": "C", "last_name": "D"},
    ])
    assert not result.ok
    assert gateway.select_all(db, LongCourseStudent).is_empty


def test_update_and_delete(db, long_student):
    updated = gateway.update(db, LongCourseStudent, long_student.id, {"phone": "0700"})
    assert updated.ok and updated.first.phone == "0700"

    assert gateway.update(db, LongCourseStudent, 9999, {"phone": "x"}).is_empty
    assert gateway.delete(db, LongCourseStudent, 9999).is_empty

    assert gateway.delete(db, LongCourseStudent, long_student.id).ok
    assert gateway.select_by_id(db, LongCourseStudent, long_student.id).is_empty
