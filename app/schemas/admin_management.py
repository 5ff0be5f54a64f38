from typing import Optional

from pydantic import EmailStr, Field

from app.models.enums import AdminRole, RecordStatus, TemplateCategory
from app.schemas.common import TokenBody


class AdminCreateRequest(TokenBody):
    name: str = Field(..., min_length=2, max_length=100)
    email: EmailStr
    password: str = Field(..., min_length=1)
    phone: str = Field(..., min_length=10, max_length=15)
    status: RecordStatus = RecordStatus.ACTIVE
    role: AdminRole = AdminRole.ADMIN


class AdminUpdateRequest(TokenBody):
    name: Optional[str] = Field(None, min_length=2, max_length=100)
    email: Optional[EmailStr] = None
    phone: Optional[str] = Field(None, min_length=10, max_length=15)
    status: Optional[RecordStatus] = None
    role: Optional[AdminRole] = None


class AdminStatusRequest(TokenBody):
    status: RecordStatus


class UserCreateRequest(TokenBody):
    name: str = Field(..., min_length=2, max_length=100)
    email: EmailStr
    password: str = Field(..., min_length=1)
    phone: str = Field(..., min_length=10, max_length=15)
    status: RecordStatus = RecordStatus.ACTIVE


class UserUpdateRequest(TokenBody):
    name: Optional[str] = Field(None, min_length=2, max_length=100)
    email: Optional[EmailStr] = None
    phone: Optional[str] = Field(None, min_length=10, max_length=15)
    status: Optional[RecordStatus] = None


class UserStatusRequest(TokenBody):
    status: RecordStatus


class TemplateCreateRequest(TokenBody):
    template_name: str = Field(..., min_length=3, max_length=100)
    template_description: Optional[str] = Field(None, max_length=500)
    template_html: str = Field(..., min_length=1)
    template_css: Optional[str] = None
    category: TemplateCategory = TemplateCategory.PROFESSIONAL
    status: RecordStatus = RecordStatus.ACTIVE


class TemplateUpdateRequest(TokenBody):
    template_name: Optional[str] = Field(None, min_length=3, max_length=100)
    template_description: Optional[str] = Field(None, max_length=500)
    template_html: Optional[str] = Field(None, min_length=1)
    template_css: Optional[str] = None
    category: Optional[TemplateCategory] = None
    status: Optional[RecordStatus] = None
