from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator
from pydantic_core import PydanticCustomError

from schemas.errors import is_blank, required_error


# ===========================
#      RESPONSE MODELS
# ===========================

class ResultRowSchema(BaseModel):
    id: int
    student_id: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    department: Optional[str] = None
    course: Optional[str] = None
    score: float
    grade: Optional[str] = None
    academic_session: Optional[str] = None
    semester: Optional[str] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class AggregatedResult(BaseModel):
    # Identity fields come from the first row seen for the student
    student_id: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    department: Optional[str] = None
    academic_session: Optional[str] = None
    semester: Optional[str] = None
    course: Optional[str] = None
    created_at: Optional[datetime] = None

    courses_count: int = 0
    total_score: float = 0.0
    score: float = 0.0

    @property
    def full_name(self):
        return f"{self.first_name or ''} {self.last_name or ''}".strip()


# ===========================
#      RESULT ENTRY FORM
# ===========================

class CourseEntrySchema(BaseModel):
    course_code: str = Field(default="", validate_default=True)
    score: float = Field(default="", validate_default=True)
    grade: str = Field(default="", validate_default=True)

    @field_validator("course_code", mode="before")
    @classmethod
    def course_code_required(cls, v):
        if is_blank(v):
            raise required_error("Course Code is required!")
        return str(v).strip()

    @field_validator("score", mode="before")
    @classmethod
    def score_in_range(cls, v):
        if is_blank(v):
            raise required_error("Score is required!")
        try:
            value = float(v)
        except (TypeError, ValueError):
            raise PydanticCustomError("number", "Score must be a number!")
        if value != value:  # NaN
            raise PydanticCustomError("number", "Score must be a number!")
        if value < 0 or value > 100:
            raise PydanticCustomError("range", "Score must be between 0 and 100!")
        return value

    @field_validator("grade", mode="before")
    @classmethod
    def grade_required(cls, v):
        if is_blank(v):
            raise required_error("Grade is required!")
        return str(v).strip()


class ResultEntrySchema(BaseModel):
    student_id: str = Field(default="", validate_default=True)
    first_name: str = Field(default="", validate_default=True)
    last_name: str = Field(default="", validate_default=True)
    department: str = Field(default="", validate_default=True)
    academic_session: Optional[str] = None
    semester: Optional[str] = None
    courses: List[CourseEntrySchema] = Field(default_factory=list, validate_default=True)

    @field_validator("student_id", mode="before")
    @classmethod
    def student_id_required(cls, v):
        if is_blank(v):
            raise required_error("Student ID is required!")
        return str(v).strip()

    @field_validator("first_name", mode="before")
    @classmethod
    def first_name_required(cls, v):
        if is_blank(v):
            raise required_error("First name is required!")
        return str(v).strip()

    @field_validator("last_name", mode="before")
    @classmethod
    def last_name_required(cls, v):
        if is_blank(v):
            raise required_error("Last name is required!")
        return str(v).strip()

    @field_validator("department", mode="before")
    @classmethod
    def department_required(cls, v):
        if is_blank(v):
            raise required_error("Department is required!")
        return str(v).strip()

    @field_validator("courses")
    @classmethod
    def at_least_one_course(cls, v):
        if not v:
            raise required_error("At least one course is required!")
        return v

    def to_rows(self):
        """One long_course_results row per course line."""
        return [
            {
                "student_id": self.student_id,
                "first_name": self.first_name,
                "last_name": self.last_name,
                "department": self.department,
                "academic_session": self.academic_session or None,
                "semester": self.semester or None,
                "course": c.course_code,
                "score": c.score,
                "grade": c.grade,
            }
            for c in self.courses
        ]


class StudentLookupResponse(BaseModel):
    student_id: str
    first_name: str = ""
    last_name: str = ""
    department: str = ""
