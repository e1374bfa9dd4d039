import os

# Must be set before config is imported anywhere
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["ADMIN_USERNAME"] = "admin"
os.environ["ADMIN_PASSWORD"] = "secret"
os.environ["ITEMS_PER_PAGE"] = "10"
os.environ.pop("CLOUDINARY_URL", None)

from datetime import datetime

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from database import Base, get_db
from main import app
from models.results import LongCourseResult
from models.students import LongCourseStudent, ShortCourseStudent

engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db_engine():
    return engine


@pytest.fixture
def db():
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    yield session
    session.close()
    Base.metadata.drop_all(bind=engine)


def _client(db, login):
    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as c:
        if login:
            resp = c.post("/auth/login", data={"username": "admin", "password": "secret"})
            assert resp.status_code == 200
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def client(db):
    yield from _client(db, login=True)


@pytest.fixture
def anon_client(db):
    yield from _client(db, login=False)


@pytest.fixture
def results(db):
    rows = [
        LongCourseResult(student_id="CS/2023/001", first_name="Ada", last_name="Obi", department="Computer Science",
                         course="CSC101", score=80, grade="B", academic_session="2023/2024", semester="First",
                         created_at=datetime(2024, 3, 1)),
        LongCourseResult(student_id="CS/2023/001", first_name="Ada", last_name="Obi", department="Computer Science",
                         course="CSC102", score=60, grade="D", academic_session="2023/2024", semester="First",
                         created_at=datetime(2024, 3, 2)),
        LongCourseResult(student_id="EE/2022/014", first_name="Tunde", last_name="Bello", department="Electrical Engineering",
                         course="EEE201", score=90, grade="A", academic_session="2022/2023", semester="Second",
                         created_at=datetime(2023, 6, 10)),
    ]
    db.add_all(rows)
    db.commit()
    return rows


@pytest.fixture
def long_student(db):
    student = LongCourseStudent(
        matric_number="CS/2023/001", first_name="Ada", last_name="Obi", sex="female",
        department="Computer Science", course="ND Computer Science", phone="08030000000",
        address="12 Marina Road", created_at=datetime(2023, 9, 1),
    )
    db.add(student)
    db.commit()
    db.refresh(student)
    return student


@pytest.fixture
def short_students(db):
    students = [
        ShortCourseStudent(student_id="SC-001", first_name="Kemi", last_name="Ade", department="ICT",
                           course="Web Design", year=2024, quarter="First"),
        ShortCourseStudent(student_id="SC-002", first_name="Musa", last_name="Ali", department="Languages",
                           course="French", year=2024, quarter="Second"),
        ShortCourseStudent(student_id="SC-003", first_name="Ngozi", last_name="Eze", department="ICT",
                           course="Data Analysis", year=2023, quarter="Fourth"),
    ]
    db.add_all(students)
    db.commit()
    return students
