from .common import ApiResponse, PaginationMeta, StrictModel, TokenBody
from .auth import AdminRegisterRequest, LoginRequest, UserRegisterRequest
from .user_details import (
	EducationIn,
	ExperienceIn,
	ProfileIn,
	SubmitUserDetailsRequest,
	UpdateEducationRequest,
	UpdateExperienceRequest,
	UpdateProfileRequest,
	UpdateSkillsRequest,
	UserScopedRequest,
)
from .resume import AddResumeRequest, ResumeIdRequest, UpdateResumeRequest
from .admin_management import (
	AdminCreateRequest,
	AdminUpdateRequest,
	AdminStatusRequest,
	TemplateCreateRequest,
	TemplateUpdateRequest,
	UserCreateRequest,
	UserStatusRequest,
	UserUpdateRequest,
)

__all__ = [
	"ApiResponse",
	"PaginationMeta",
	"StrictModel",
	"TokenBody",
	"AdminRegisterRequest",
	"LoginRequest",
	"UserRegisterRequest",
	"EducationIn",
	"ExperienceIn",
	"ProfileIn",
	"SubmitUserDetailsRequest",
	"UpdateEducationRequest",
	"UpdateExperienceRequest",
	"UpdateProfileRequest",
	"UpdateSkillsRequest",
	"UserScopedRequest",
	"AddResumeRequest",
	"ResumeIdRequest",
	"UpdateResumeRequest",
	"AdminCreateRequest",
	"AdminUpdateRequest",
	"AdminStatusRequest",
	"TemplateCreateRequest",
	"TemplateUpdateRequest",
	"UserCreateRequest",
	"UserStatusRequest",
	"UserUpdateRequest",
]
