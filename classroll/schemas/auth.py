from pydantic import BaseModel, EmailStr, Field
from typing import Optional

PASSWORD_MIN_LENGTH = 6

class SignUpRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=PASSWORD_MIN_LENGTH)
    full_name: str = Field(..., min_length=1)

class SignInRequest(BaseModel):
    email: EmailStr
    password: str

class StudentSignUpRequest(BaseModel):
    full_name: str = Field(..., min_length=1)
    student_id: str = Field(..., min_length=1)
    email: EmailStr
    password: str = Field(..., min_length=PASSWORD_MIN_LENGTH)

class SignOutRequest(BaseModel):
    refresh_token: str

class AuthResponse(BaseModel):
    user_id: str
    email: str
    full_name: Optional[str]
    role: str
    redirect_to: str  # 역할에 따라 이동할 화면 경로
    access_token: str
    refresh_token: str
    message: str = None

    class Config:
        from_attributes = True

class SessionResponse(BaseModel):
    user_id: str
    email: str
    full_name: str | None
    role: str

class MessageResponse(BaseModel):
    message: str
