from typing import Optional

from pydantic import EmailStr, Field

from app.models.enums import RecordStatus
from app.schemas.common import StrictModel


class UserRegisterRequest(StrictModel):
    name: str = Field(..., min_length=2, max_length=100)
    email: EmailStr
    # strength is checked by the auth service so weak passwords get their own error
    password: str = Field(..., min_length=1)
    phone: str = Field(..., min_length=10, max_length=15)
    status: RecordStatus = RecordStatus.ACTIVE


class AdminRegisterRequest(StrictModel):
    name: str = Field(..., min_length=2, max_length=100)
    email: EmailStr
    password: str = Field(..., min_length=1)
    phone: Optional[str] = Field(None, min_length=10, max_length=15)
    status: RecordStatus = RecordStatus.ACTIVE


class LoginRequest(StrictModel):
    email: EmailStr
    password: str = Field(..., min_length=1)
