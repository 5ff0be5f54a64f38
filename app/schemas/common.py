from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


class StrictModel(BaseModel):
    """Request bodies reject fields they do not declare."""
    model_config = ConfigDict(extra="forbid")


class TokenBody(StrictModel):
    # Legacy clients send the access token inside the JSON body
    token: Optional[str] = Field(default=None, exclude=True)


class ApiResponse(BaseModel):
    """Success envelope shared by every endpoint."""
    success: int = 1
    message: str
    data: Optional[Any] = None


class PaginationMeta(BaseModel):
    current_page: int
    total_pages: int
    total_records: int
    records_per_page: int
