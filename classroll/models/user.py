# /classroll/models/user.py
import uuid
from sqlalchemy import Column, String, DateTime
from sqlalchemy.sql import func
from classroll.db.base import Base

class User(Base):
    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    email = Column(String(255), unique=True, index=True, nullable=False)
    password = Column(String(255), nullable=True)  # bcrypt 해시, 소셜 로그인 전용 계정은 None
    firebase_uid = Column(String(128), unique=True, nullable=True)
    created_at = Column(DateTime, server_default=func.now())
