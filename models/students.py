from sqlalchemy import Column, Integer, String, Date, DateTime
from sqlalchemy.sql import func
from database import Base


class StudentFieldsMixin:
    """Columns shared by both programme tables."""

    id = Column(Integer, primary_key=True, index=True)

    # --- PERSONAL INFO ---
    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=False)
    sex = Column(String(10), nullable=True)
    dob = Column(Date, nullable=True)

    # --- CONTACT ---
    email = Column(String(150), nullable=True)
    phone = Column(String(20), nullable=True)
    address = Column(String(255), nullable=True)

    # --- ACADEMIC INFO ---
    department = Column(String(100), nullable=True)
    course = Column(String(100), nullable=True)

    photo_url = Column(String(500), nullable=True)
    created_at = Column(DateTime, server_default=func.now())

    @property
    def full_name(self):
        return f"{self.first_name} {self.last_name}".strip()


# 1. LONG COURSE (Diploma / Degree) - identified by matric number
class LongCourseStudent(StudentFieldsMixin, Base):
    __tablename__ = "long_course_students"

    matric_number = Column(String(50), unique=True, index=True, nullable=False)


# 2. SHORT COURSE - identified by student ID, enrolled per year + quarter
class ShortCourseStudent(StudentFieldsMixin, Base):
    __tablename__ = "short_course_students"

    student_id = Column(String(50), unique=True, index=True, nullable=False)
    year = Column(Integer, nullable=True)      # Example: 2024
    quarter = Column(String(10), nullable=True)  # First / Second / Third / Fourth
