import uuid
from sqlalchemy import Column, String, ForeignKey, DateTime, JSON
from datetime import datetime
from classroll.db.base import Base

class Classroom(Base):
    __tablename__ = "classes"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    teacher_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    subject = Column(String(255), nullable=True)
    # 강의실 정보 예: 'Room 204'
    room = Column(String(100), nullable=True)
    # 요일 목록 예: ["Monday", "Wednesday"]
    schedule_days = Column(JSON, nullable=True)
    # 예: '09:00'
    schedule_time = Column(String(20), nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)
