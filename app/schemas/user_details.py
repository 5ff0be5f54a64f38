from datetime import date
from decimal import Decimal
from typing import List, Optional

from pydantic import Field, model_validator

from app.models.enums import Gender
from app.schemas.common import StrictModel, TokenBody


class ProfileIn(StrictModel):
    dateOfBirth: Optional[date] = None
    gender: Optional[Gender] = None
    currentSalary: Optional[Decimal] = Field(None, ge=0)
    isAnnually: bool = True
    countryId: Optional[int] = None
    stateId: Optional[int] = None
    cityId: Optional[int] = None
    zipcode: Optional[str] = Field(None, max_length=20)
    address: Optional[str] = Field(None, max_length=500)


class EducationIn(StrictModel):
    degreeName: str = Field(..., min_length=1, max_length=150)
    instituteName: str = Field(..., min_length=1, max_length=200)
    startDate: Optional[date] = None
    endDate: Optional[date] = None
    percentage: Optional[Decimal] = Field(None, ge=0, le=100)
    cgpa: Optional[Decimal] = Field(None, ge=0, le=10)

    @model_validator(mode="after")
    def check_dates(self):
        if self.startDate and self.endDate and self.endDate < self.startDate:
            raise ValueError("endDate must not be before startDate")
        return self


class ExperienceIn(StrictModel):
    companyName: str = Field(..., min_length=1, max_length=200)
    jobTitle: str = Field(..., min_length=1, max_length=150)
    isCurrentJob: bool = False
    startDate: Optional[date] = None
    endDate: Optional[date] = None
    description: Optional[str] = Field(None, max_length=5000)
    countryId: Optional[int] = None
    stateId: Optional[int] = None
    cityId: Optional[int] = None

    @model_validator(mode="after")
    def check_dates(self):
        if self.startDate and self.endDate and self.endDate < self.startDate:
            raise ValueError("endDate must not be before startDate")
        return self


class UserScopedRequest(TokenBody):
    """Body of user routes. The target user defaults to the caller."""
    user_id: Optional[int] = None
    requested_user_id: Optional[int] = None

    @property
    def target_user_id(self) -> Optional[int]:
        return self.requested_user_id or self.user_id


class SubmitUserDetailsRequest(UserScopedRequest):
    # None leaves the stored section untouched, [] clears it
    profile: Optional[ProfileIn] = None
    education: Optional[List[EducationIn]] = None
    experience: Optional[List[ExperienceIn]] = None
    skills: Optional[List[int]] = None


class UpdateProfileRequest(UserScopedRequest):
    profile: ProfileIn


class UpdateSkillsRequest(UserScopedRequest):
    skills: List[int]


class UpdateEducationRequest(UserScopedRequest):
    education: List[EducationIn]


class UpdateExperienceRequest(UserScopedRequest):
    experience: List[ExperienceIn]
