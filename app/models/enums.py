import enum

from sqlalchemy import Enum


class RecordStatus(str, enum.Enum):
    ACTIVE = "Active"
    INACTIVE = "Inactive"


class AdminRole(str, enum.Enum):
    ADMIN = "admin"
    SUPER_ADMIN = "super_admin"


class TemplateCategory(str, enum.Enum):
    PROFESSIONAL = "Professional"
    CREATIVE = "Creative"
    MODERN = "Modern"
    CLASSIC = "Classic"


class Gender(str, enum.Enum):
    MALE = "Male"
    FEMALE = "Female"
    OTHER = "Other"


def enum_column_type(enum_cls, name: str) -> Enum:
    """Store the enum's value (e.g. 'Active'), not its member name."""
    return Enum(
        enum_cls,
        name=name,
        native_enum=False,
        length=32,
        values_callable=lambda members: [m.value for m in members],
    )
