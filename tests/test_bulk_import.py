from models.results import LongCourseResult

CSV = (
    "Student ID,First Name,Last Name,Department,Course,Score,Grade\n"
    "CS/1,Ada,Obi,Computer Science,CSC101,72,\n"
    "CS/1,Ada,Obi,Computer Science,CSC102,101,\n"
    ",,,,CSC103,50,\n"
    "EE/2,Tunde,Bello,Electrical Engineering,EEE201,95,A\n"
)


def test_bulk_import_csv(client, db):
    resp = client.post("/bulk-import/results", files={"file": ("results.csv", CSV, "text/csv")})
    assert resp.status_code == 200
    data = resp.json()
    assert data["total_rows"] == 4
    assert data["imported_count"] == 2
    assert data["error_count"] == 2
    assert data["errors"] == [
        {"row": 3, "error": "Score must be between 0 and 100!"},
        {"row": 4, "error": "Student ID is required!"},
    ]

    rows = {r.course: r for r in db.query(LongCourseResult).all()}
    assert rows["CSC101"].grade == "C"  # filled from the score
    assert rows["EEE201"].grade == "A"
    assert rows["EEE201"].department == "Electrical Engineering"


def test_bulk_import_rejects_missing_columns(client, db):
    resp = client.post("/bulk-import/results", files={"file": ("results.csv", "student_id,course\nS1,X\n", "text/csv")})
    assert resp.status_code == 400
    assert "score" in resp.json()["detail"]


def test_bulk_import_rejects_other_formats(client, db):
    resp = client.post("/bulk-import/results", files={"file": ("results.txt", "hello", "text/plain")})
    assert resp.status_code == 400


def test_template(client):
    data = client.get("/bulk-import/template").json()
    assert data["required_columns"] == ["student_id", "course", "score"]
