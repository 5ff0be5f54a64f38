from typing import Optional

from pydantic import Field

from app.schemas.user_details import UserScopedRequest


class AddResumeRequest(UserScopedRequest):
    resume_name: str = Field(..., min_length=1, max_length=150)
    template_id: Optional[int] = None


class UpdateResumeRequest(UserScopedRequest):
    resume_id: int
    resume_name: Optional[str] = Field(None, min_length=1, max_length=150)
    template_id: Optional[int] = None


class ResumeIdRequest(UserScopedRequest):
    resume_id: int
