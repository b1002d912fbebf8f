from sqlalchemy.orm import Session

from classroll.models.attendance import Attendance
from classroll.models.classroom import Classroom
from classroll.models.qr_session import QRSession
from classroll.models.student import Student
from classroll.models.user import User
from classroll.schemas.attendance import AttendanceHistoryItem
from classroll.schemas.classroom import ClassResponse
from classroll.schemas.dashboard import TeacherDashboardResponse, StudentDashboardResponse
from classroll.services.auth_service import get_session_info
from classroll.services.student_service import get_roster_entries_by_email, to_student_response

RECENT_ATTENDANCE_LIMIT = 10


def calculate_attendance_percentage(records: list) -> int:
    if not records:
        return 0
    present_count = len([r for r in records if r.status == "present"])
    return round(present_count / len(records) * 100)


def get_teacher_dashboard(db: Session, user: User) -> TeacherDashboardResponse:
    return TeacherDashboardResponse(
        profile=get_session_info(db, user),
        class_count=db.query(Classroom).filter(Classroom.teacher_id == user.id).count(),
        student_count=db.query(Student).filter(Student.teacher_id == user.id).count(),
        active_session_count=db.query(QRSession).filter(
            QRSession.teacher_id == user.id,
            QRSession.is_active == True
        ).count()
    )


def get_student_dashboard(db: Session, user: User) -> StudentDashboardResponse:
    """
    학생 대시보드
    - 이메일로 연결된 명단 항목과 소속 반
    - 최근 출석 기록 10건 (날짜 내림차순)과 출석률
    """
    profile = get_session_info(db, user)
    roster = get_roster_entries_by_email(db, user.email)
    if not roster:
        return StudentDashboardResponse(
            profile=profile,
            recent_attendance=[],
            attendance_percentage=0,
            total_records=0
        )

    student = roster[0]
    records = (
        db.query(Attendance)
        .filter(Attendance.student_id.in_([s.id for s in roster]))
        .order_by(Attendance.date.desc())
        .limit(RECENT_ATTENDANCE_LIMIT)
        .all()
    )
    return StudentDashboardResponse(
        profile=profile,
        student=to_student_response(student),
        current_class=ClassResponse.model_validate(student.classroom) if student.classroom else None,
        recent_attendance=[
            AttendanceHistoryItem(
                id=r.id,
                class_id=r.class_id,
                class_name=r.classroom.name if r.classroom else None,
                class_subject=r.classroom.subject if r.classroom else None,
                date=r.date,
                status=r.status,
                notes=r.notes
            ) for r in records
        ],
        attendance_percentage=calculate_attendance_percentage(records),
        total_records=len(records)
    )
