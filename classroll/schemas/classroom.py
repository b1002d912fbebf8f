from datetime import datetime
from pydantic import BaseModel, Field, field_validator
from typing import Optional, List, Literal

Weekday = Literal["Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday"]

class ClassCreate(BaseModel):
    name: str = Field(..., min_length=1)
    subject: Optional[str] = None
    room: Optional[str] = None
    schedule_days: Optional[List[Weekday]] = None
    schedule_time: Optional[str] = None

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Class name is required")
        return v.strip()

    @field_validator("subject", "room", "schedule_time")
    @classmethod
    def blank_to_none(cls, v):
        # 빈 입력칸은 null로 저장
        if v is None or not v.strip():
            return None
        return v.strip()

    @field_validator("schedule_days")
    @classmethod
    def empty_days_to_none(cls, v):
        return v or None

class ClassResponse(BaseModel):
    id: str
    teacher_id: str
    name: str
    subject: str | None = None
    room: str | None = None
    schedule_days: list[str] | None = None
    schedule_time: str | None = None
    created_at: datetime | None = None

    class Config:
        from_attributes = True

class ClassListResponse(BaseModel):
    classes: List[ClassResponse]

class ClassOption(BaseModel):
    id: str
    name: str

class ClassOptionListResponse(BaseModel):
    classes: List[ClassOption]
