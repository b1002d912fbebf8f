# /classroll/models/student.py
import uuid
from sqlalchemy import Column, String, ForeignKey, DateTime
from sqlalchemy.orm import relationship
from datetime import datetime
from classroll.db.base import Base

class Student(Base):
    """ 교사가 등록한 명단(roster) 항목. 학생 계정과는 이메일/이름/학번으로 매칭된다. """
    __tablename__ = "students"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    teacher_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    class_id = Column(String(36), ForeignKey("classes.id"), nullable=True, index=True)
    name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=True, index=True)
    student_id = Column(String(64), nullable=True, comment="학교에서 부여한 학번")
    created_at = Column(DateTime, default=datetime.utcnow)

    classroom = relationship("Classroom", backref="students")
