import enum
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Dict, Mapping, Optional


def _convert_value(v: Any) -> Any:
    """Convert a single column value to a JSON-friendly representation."""
    if isinstance(v, enum.Enum):
        return v.value
    # datetimes -> isoformat
    if isinstance(v, (datetime, date)):
        return v.isoformat()
    if isinstance(v, Decimal):
        return float(v)
    return v


def serialize_row(row: Any, fields: Mapping[str, str]) -> Dict[str, Any]:
    """Build a dict from an ORM row.

    ``fields`` maps output keys to attribute names on the row, so the API
    shape does not have to follow column naming.
    """
    if row is None:
        return {}
    return {key: _convert_value(getattr(row, attr, None)) for key, attr in fields.items()}


USER_FIELDS = {
    "user_id": "id",
    "name": "name",
    "email": "email",
    "phone": "phone",
    "status": "status",
    "added_date": "added_at",
    "updated_date": "updated_at",
}

ADMIN_FIELDS = {
    "admin_id": "id",
    "name": "name",
    "email": "email",
    "phone": "phone",
    "role": "role",
    "status": "status",
    "added_date": "added_at",
    "updated_date": "updated_at",
}

TEMPLATE_SUMMARY_FIELDS = {
    "template_id": "id",
    "template_name": "name",
    "template_description": "description",
    "category": "category",
    "status": "status",
    "added_date": "added_at",
    "updated_date": "updated_at",
}

TEMPLATE_FIELDS = {
    **TEMPLATE_SUMMARY_FIELDS,
    "template_html": "html",
    "template_css": "css",
}

RESUME_FIELDS = {
    "resume_id": "id",
    "user_id": "user_id",
    "resume_name": "name",
    "template_id": "template_id",
    "status": "status",
    "added_date": "added_at",
    "updated_date": "updated_at",
}

EDUCATION_FIELDS = {
    "educationId": "id",
    "degreeName": "degree_name",
    "instituteName": "institute_name",
    "startDate": "start_date",
    "endDate": "end_date",
    "percentage": "percentage",
    "cgpa": "cgpa",
}

EXPERIENCE_FIELDS = {
    "experienceId": "id",
    "companyName": "company_name",
    "jobTitle": "job_title",
    "isCurrentJob": "is_current_job",
    "startDate": "start_date",
    "endDate": "end_date",
    "description": "description",
    "countryId": "country_id",
    "stateId": "state_id",
    "cityId": "city_id",
}

PROFILE_FIELDS = {
    "dateOfBirth": "date_of_birth",
    "gender": "gender",
    "currentSalary": "current_salary",
    "isAnnually": "is_annually",
    "countryId": "country_id",
    "stateId": "state_id",
    "cityId": "city_id",
    "zipcode": "zipcode",
    "address": "address",
    "addedDate": "added_at",
    "updatedDate": "updated_at",
}


def user_to_dict(user: Any) -> Dict[str, Any]:
    return serialize_row(user, USER_FIELDS)


def admin_to_dict(admin: Any) -> Dict[str, Any]:
    return serialize_row(admin, ADMIN_FIELDS)


def template_to_dict(template: Any, include_body: bool = True) -> Dict[str, Any]:
    return serialize_row(template, TEMPLATE_FIELDS if include_body else TEMPLATE_SUMMARY_FIELDS)


def resume_to_dict(resume: Any) -> Dict[str, Any]:
    return serialize_row(resume, RESUME_FIELDS)


def profile_to_dict(profile: Any) -> Optional[Dict[str, Any]]:
    if profile is None:
        return None
    return serialize_row(profile, PROFILE_FIELDS)


def education_to_dict(entry: Any) -> Dict[str, Any]:
    return serialize_row(entry, EDUCATION_FIELDS)


def experience_to_dict(entry: Any) -> Dict[str, Any]:
    return serialize_row(entry, EXPERIENCE_FIELDS)


def _name_of(row: Any) -> Optional[str]:
    return getattr(row, "name", None) if row is not None else None


def experience_with_location(entry: Any) -> Dict[str, Any]:
    data = experience_to_dict(entry)
    data.update(
        country=_name_of(getattr(entry, "country", None)),
        state=_name_of(getattr(entry, "state", None)),
        city=_name_of(getattr(entry, "city", None)),
    )
    return data


def profile_with_location(profile: Any) -> Optional[Dict[str, Any]]:
    data = profile_to_dict(profile)
    if data is None:
        return None
    data.update(
        country=_name_of(getattr(profile, "country", None)),
        state=_name_of(getattr(profile, "state", None)),
        city=_name_of(getattr(profile, "city", None)),
    )
    return data


def skill_to_dict(skill: Any) -> Dict[str, Any]:
    return {"skillId": skill.id, "skillName": skill.name, "skillCode": skill.code}
