# /classroll/schemas/student.py
from datetime import datetime
from pydantic import BaseModel, EmailStr, Field, field_validator
from typing import Optional, List


class StudentCreate(BaseModel):
    name: str = Field(..., min_length=1)
    email: Optional[EmailStr] = None
    student_id: Optional[str] = None
    class_id: Optional[str] = None

    @field_validator("email", "student_id", "class_id", mode="before")
    @classmethod
    def blank_to_none(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v.strip() if isinstance(v, str) else v

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Student name is required")
        return v.strip()


class StudentResponse(BaseModel):
    id: str
    name: str
    email: str | None = None
    student_id: str | None = None
    class_id: str | None = None
    class_name: str | None = None
    created_at: datetime | None = None

    class Config:
        from_attributes = True


class StudentListResponse(BaseModel):
    students: List[StudentResponse]
