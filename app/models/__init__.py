from .enums import AdminRole, Gender, RecordStatus, TemplateCategory
from .user import User
from .admin import Admin
from .profile import City, Country, Skill, State, UserEducation, UserExperience, UserProfile, UserSkill
from .resume_template import ResumeTemplate
from .resume import Resume

__all__ = [
    "AdminRole",
    "Gender",
    "RecordStatus",
    "TemplateCategory",
    "User",
    "Admin",
    "City",
    "Country",
    "Skill",
    "State",
    "UserEducation",
    "UserExperience",
    "UserProfile",
    "UserSkill",
    "ResumeTemplate",
    "Resume",
]
