# models/user.py
from pydantic import BaseModel, Field
from enum import Enum
from typing import Optional


class UserRole(str, Enum):
    STUDENT = "student"
    TEACHER = "teacher"
    ADMIN = "admin"
    SUPER_ADMIN = "super-admin"


ADMIN_ROLES = (UserRole.ADMIN, UserRole.SUPER_ADMIN)


class LoginRequest(BaseModel):
    email: str
    password: str


class RegisterRequest(BaseModel):
    email: str
    password: str = Field(..., min_length=6)
    fullName: str


class UserCreate(RegisterRequest):
    role: UserRole = UserRole.STUDENT
    isActive: bool = True


class UserUpdate(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = Field(None, min_length=6)
    fullName: Optional[str] = None
    role: Optional[UserRole] = None
    isActive: Optional[bool] = None
