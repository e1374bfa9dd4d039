from sqlalchemy import Column, Integer, String, Float, DateTime
from sqlalchemy.sql import func
from database import Base


class LongCourseResult(Base):
    """One row per (student, course) score."""

    __tablename__ = "long_course_results"

    id = Column(Integer, primary_key=True, index=True)
    student_id = Column(String(50), index=True, nullable=True)  # matric number
    first_name = Column(String(100), nullable=True)
    last_name = Column(String(100), nullable=True)
    department = Column(String(100), nullable=True)

    course = Column(String(50))          # Example: "CSC101"
    score = Column(Float, default=0.0)   # Example: 72.5
    grade = Column(String(2))            # Example: "C"

    academic_session = Column(String(20), nullable=True)  # Example: "2024/2025"
    semester = Column(String(20), nullable=True)          # Example: "First"
    created_at = Column(DateTime, server_default=func.now())
