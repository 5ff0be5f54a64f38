"""
User Details Service

Writes and reads the profile, education, experience and skill sections
that make up a user's resume data. ``submit_user_details`` applies any
combination of sections as one all-or-nothing transaction.
"""

import logging
from typing import Any, Dict, List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.errors import AppError, InternalError, NotFound, TransactionFailure, translate_db_error
from app.crud import crud_user, crud_user_details
from app.db.session import transaction_scope
from app.schemas.user_details import EducationIn, ExperienceIn, ProfileIn, SubmitUserDetailsRequest
from app.tools.serializers import (
    education_to_dict,
    experience_to_dict,
    experience_with_location,
    profile_to_dict,
    profile_with_location,
    skill_to_dict,
    user_to_dict,
)

logger = logging.getLogger(__name__)

SECTIONS = ("profile", "skills", "education", "experience")


def _profile_values(profile: ProfileIn) -> Dict[str, Any]:
    return {
        "date_of_birth": profile.dateOfBirth,
        "gender": profile.gender,
        "current_salary": profile.currentSalary,
        "is_annually": profile.isAnnually,
        "country_id": profile.countryId,
        "state_id": profile.stateId,
        "city_id": profile.cityId,
        "zipcode": profile.zipcode,
        "address": profile.address,
    }


def _education_rows(entries: List[EducationIn]) -> List[Dict[str, Any]]:
    return [
        {
            "degree_name": e.degreeName,
            "institute_name": e.instituteName,
            "start_date": e.startDate,
            "end_date": e.endDate,
            "percentage": e.percentage,
            "cgpa": e.cgpa,
        }
        for e in entries
    ]


def _experience_rows(entries: List[ExperienceIn]) -> List[Dict[str, Any]]:
    return [
        {
            "company_name": e.companyName,
            "job_title": e.jobTitle,
            "is_current_job": e.isCurrentJob,
            "start_date": e.startDate,
            # a current job has no end date
            "end_date": None if e.isCurrentJob else e.endDate,
            "description": e.description,
            "country_id": e.countryId,
            "state_id": e.stateId,
            "city_id": e.cityId,
        }
        for e in entries
    ]


def _raise_store_error(exc: SQLAlchemyError, operation: str) -> None:
    """Re-raise a store failure as an application error."""
    err = translate_db_error(exc)
    if type(err) is InternalError:
        logger.error(f"{operation} failed: {exc}")
        raise TransactionFailure(f"Failed to {operation.replace('_', ' ')}") from exc
    raise err from exc


def _run_in_transaction(db: Session, user_id: int, operation: str, apply) -> Dict[str, Any]:
    """Lock the user, apply the writes and commit them together."""
    try:
        with transaction_scope(db, operation):
            if crud_user.lock_user(db, user_id) is None:
                raise NotFound("User not found", error_code="USER_NOT_FOUND")
            return apply()
    except AppError:
        raise
    except SQLAlchemyError as e:
        _raise_store_error(e, operation)


def submit_user_details(
    db: Session,
    user_id: int,
    payload: SubmitUserDetailsRequest,
    actor_id: Optional[int] = None,
) -> Dict[str, Any]:
    """Apply profile, education, experience and skills in that order.

    A section that is ``None`` is left untouched, an empty list clears it
    and a non-empty list replaces it. Either every present section is
    written or none is.
    """
    def apply() -> Dict[str, Any]:
        result = {
            "user_id": user_id,
            "profileUpdated": False,
            "educationCount": 0,
            "experienceCount": 0,
            "skillsCount": 0,
        }
        if payload.profile is not None:
            crud_user_details.upsert_profile(db, user_id, _profile_values(payload.profile), actor_id)
            result["profileUpdated"] = True
        if payload.education is not None:
            result["educationCount"] = crud_user_details.replace_education(
                db, user_id, _education_rows(payload.education), actor_id
            )
        if payload.experience is not None:
            result["experienceCount"] = crud_user_details.replace_experience(
                db, user_id, _experience_rows(payload.experience), actor_id
            )
        if payload.skills is not None:
            result["skillsCount"] = crud_user_details.replace_skills(db, user_id, payload.skills, actor_id)
        return result

    result = _run_in_transaction(db, user_id, "submit_user_details", apply)
    logger.info(
        f"User details submitted for user {user_id}: profile={result['profileUpdated']}, "
        f"education={result['educationCount']}, experience={result['experienceCount']}, "
        f"skills={result['skillsCount']}"
    )
    return result


def update_profile(db: Session, user_id: int, profile: ProfileIn, actor_id: Optional[int] = None) -> Dict[str, Any]:
    def apply():
        return crud_user_details.upsert_profile(db, user_id, _profile_values(profile), actor_id)

    row = _run_in_transaction(db, user_id, "update_profile", apply)
    return {"user_id": user_id, "profile": profile_to_dict(row)}


def update_skills(db: Session, user_id: int, skills: List[int], actor_id: Optional[int] = None) -> Dict[str, Any]:
    count = _run_in_transaction(
        db, user_id, "update_skills", lambda: crud_user_details.replace_skills(db, user_id, skills, actor_id)
    )
    return {"user_id": user_id, "skillsCount": count}


def update_education(db: Session, user_id: int, education: List[EducationIn], actor_id: Optional[int] = None) -> Dict[str, Any]:
    count = _run_in_transaction(
        db,
        user_id,
        "update_education",
        lambda: crud_user_details.replace_education(db, user_id, _education_rows(education), actor_id),
    )
    return {"user_id": user_id, "educationCount": count}


def update_experience(db: Session, user_id: int, experience: List[ExperienceIn], actor_id: Optional[int] = None) -> Dict[str, Any]:
    count = _run_in_transaction(
        db,
        user_id,
        "update_experience",
        lambda: crud_user_details.replace_experience(db, user_id, _experience_rows(experience), actor_id),
    )
    return {"user_id": user_id, "experienceCount": count}


def _require_user(db: Session, user_id: int):
    user = crud_user.get_user(db, user_id)
    if user is None:
        raise NotFound("User not found", error_code="USER_NOT_FOUND")
    return user


def get_user_info(db: Session, user_id: int) -> Dict[str, Any]:
    user = _require_user(db, user_id)
    return {
        "user": user_to_dict(user),
        "profile": profile_to_dict(crud_user_details.get_profile(db, user_id)),
        "skills": [skill_to_dict(s) for s in crud_user_details.get_skills(db, user_id)],
        "education": [education_to_dict(e) for e in crud_user_details.get_education(db, user_id)],
        "experience": [experience_to_dict(e) for e in crud_user_details.get_experience(db, user_id)],
    }


def get_resume_info(db: Session, user_id: int) -> Dict[str, Any]:
    """Everything needed to render a resume, with location names resolved."""
    user = _require_user(db, user_id)
    resume = {
        "user": user_to_dict(user),
        "profile": profile_with_location(crud_user_details.get_profile_with_location(db, user_id)),
        "skills": [skill_to_dict(s) for s in crud_user_details.get_skills(db, user_id)],
        "education": [education_to_dict(e) for e in crud_user_details.get_education(db, user_id)],
        "experience": [
            experience_with_location(e) for e in crud_user_details.get_experience(db, user_id, with_location=True)
        ],
    }

    completeness = {
        "profile": resume["profile"] is not None,
        "skills": len(resume["skills"]) > 0,
        "education": len(resume["education"]) > 0,
        "experience": len(resume["experience"]) > 0,
    }
    completeness["totalPercentage"] = sum(25 for section in SECTIONS if completeness[section])

    return {
        "resume": resume,
        "completeness": completeness,
        "summary": {
            "totalSkills": len(resume["skills"]),
            "totalEducation": len(resume["education"]),
            "totalExperience": len(resume["experience"]),
            "hasProfile": completeness["profile"],
        },
    }
