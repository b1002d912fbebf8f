import datetime
from pydantic import BaseModel
from typing import List, Literal

AttendanceStatus = Literal["present", "absent", "late", "excused"]


class AttendanceEntry(BaseModel):
    student_id: str
    status: AttendanceStatus
    notes: str = ""


class AttendanceSheetRow(BaseModel):
    student_id: str
    name: str
    student_number: str | None = None  # 명단의 학번(students.student_id)
    status: AttendanceStatus
    notes: str = ""


class AttendanceSheetResponse(BaseModel):
    class_id: str
    date: datetime.date
    students: List[AttendanceSheetRow]


class AttendanceSaveRequest(BaseModel):
    class_id: str
    date: datetime.date
    records: List[AttendanceEntry] = []


class AttendanceSaveResponse(BaseModel):
    class_id: str
    date: datetime.date
    saved: int
    message: str


class AttendanceHistoryItem(BaseModel):
    id: int
    class_id: str
    class_name: str | None = None
    class_subject: str | None = None
    date: datetime.date
    status: AttendanceStatus
    notes: str | None = None
