from sqlalchemy import Column, String, ForeignKey
from classroll.db.base import Base

class Profile(Base):
    __tablename__ = "profiles"

    user_id = Column(String(36), ForeignKey("users.id"), primary_key=True)
    full_name = Column(String(255), nullable=True)
    role = Column(String(20), nullable=False)  # 'teacher' 또는 'student'
