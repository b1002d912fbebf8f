from pydantic import BaseModel
from typing import List
from classroll.schemas.auth import SessionResponse
from classroll.schemas.classroom import ClassResponse
from classroll.schemas.student import StudentResponse
from classroll.schemas.attendance import AttendanceHistoryItem


class TeacherDashboardResponse(BaseModel):
    profile: SessionResponse
    class_count: int
    student_count: int
    active_session_count: int


class StudentDashboardResponse(BaseModel):
    profile: SessionResponse
    student: StudentResponse | None = None
    current_class: ClassResponse | None = None
    recent_attendance: List[AttendanceHistoryItem]
    attendance_percentage: int
    total_records: int
