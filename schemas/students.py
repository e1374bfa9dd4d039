from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator
from pydantic_core import PydanticCustomError

from schemas.errors import is_blank, required_error
from services.options import QUARTER_OPTIONS as QUARTERS


# 1. Common fields (create + update forms)
class StudentBaseSchema(BaseModel):
    first_name: str = Field(default="", validate_default=True)
    last_name: str = Field(default="", validate_default=True)
    sex: Optional[str] = None
    dob: Optional[date] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    department: Optional[str] = None
    course: Optional[str] = None
    photo_url: Optional[str] = None

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

    # HTML forms post "" for untouched optional inputs
    @field_validator("sex", "dob", "email", "phone", "address", "department", "course", "photo_url", mode="before")
    @classmethod
    def blank_to_none(cls, v):
        return None if is_blank(v) else v


class LongCourseStudentSchema(StudentBaseSchema):
    matric_number: str = Field(default="", validate_default=True)

    @field_validator("matric_number", mode="before")
    @classmethod
    def matric_required(cls, v):
        if is_blank(v):
            raise required_error("Matric number is required!")
        return str(v).strip()


class ShortCourseStudentSchema(StudentBaseSchema):
    student_id: str = Field(default="", validate_default=True)
    year: Optional[int] = None
    quarter: Optional[str] = None

    @field_validator("student_id", mode="before")
    @classmethod
    def student_id_required(cls, v):
        if is_blank(v):
            raise required_error("Student ID is required!")
        return str(v).strip()

    @field_validator("year", mode="before")
    @classmethod
    def year_number(cls, v):
        if is_blank(v):
            return None
        try:
            return int(v)
        except (TypeError, ValueError):
            raise PydanticCustomError("number", "Year must be a number!")

    @field_validator("quarter", mode="before")
    @classmethod
    def known_quarter(cls, v):
        if is_blank(v):
            return None
        if v not in QUARTERS:
            raise PydanticCustomError("choice", "Quarter must be First, Second, Third or Fourth!")
        return v


# 2. Response models
class LongCourseStudentResponse(BaseModel):
    id: int
    matric_number: str
    first_name: str
    last_name: str
    sex: Optional[str] = None
    dob: Optional[date] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    department: Optional[str] = None
    course: Optional[str] = None
    photo_url: Optional[str] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class ShortCourseStudentResponse(BaseModel):
    id: int
    student_id: str
    first_name: str
    last_name: str
    sex: Optional[str] = None
    dob: Optional[date] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    department: Optional[str] = None
    course: Optional[str] = None
    year: Optional[int] = None
    quarter: Optional[str] = None
    photo_url: Optional[str] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
