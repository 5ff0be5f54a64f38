"""
Users API Endpoints

Profile, skills, education, experience and resume endpoints for the
signed-in user, or for any user when called by an admin.
"""

from typing import Optional

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.api.deps import Identity, get_current_identity, owner_scope, resolve_target_user_id
from app.api.responses import success
from app.db.session import get_db
from app.schemas.common import ApiResponse
from app.schemas.resume import AddResumeRequest, ResumeIdRequest, UpdateResumeRequest
from app.schemas.user_details import (
    SubmitUserDetailsRequest,
    UpdateEducationRequest,
    UpdateExperienceRequest,
    UpdateProfileRequest,
    UpdateSkillsRequest,
    UserScopedRequest,
)
from app.services import resume_service, user_details_service

router = APIRouter()

# Composite endpoints also served from the API root
root_router = APIRouter()


def _target(identity: Identity, payload: Optional[UserScopedRequest]) -> int:
    return resolve_target_user_id(identity, payload.target_user_id if payload else None)


# ==================== USER DETAILS ====================

@router.post("/update-user-profile", response_model=ApiResponse)
def update_user_profile(
    payload: UpdateProfileRequest,
    identity: Identity = Depends(get_current_identity),
    db: Session = Depends(get_db),
):
    user_id = _target(identity, payload)
    data = user_details_service.update_profile(db, user_id, payload.profile, identity.subject_id)
    return success("User profile updated successfully", data)


@router.post("/update-user-skills", response_model=ApiResponse)
def update_user_skills(
    payload: UpdateSkillsRequest,
    identity: Identity = Depends(get_current_identity),
    db: Session = Depends(get_db),
):
    user_id = _target(identity, payload)
    data = user_details_service.update_skills(db, user_id, payload.skills, identity.subject_id)
    return success("User skills updated successfully", data)


@router.post("/update-user-education", response_model=ApiResponse)
def update_user_education(
    payload: UpdateEducationRequest,
    identity: Identity = Depends(get_current_identity),
    db: Session = Depends(get_db),
):
    user_id = _target(identity, payload)
    data = user_details_service.update_education(db, user_id, payload.education, identity.subject_id)
    return success("User education updated successfully", data)


@router.post("/update-user-experience", response_model=ApiResponse)
def update_user_experience(
    payload: UpdateExperienceRequest,
    identity: Identity = Depends(get_current_identity),
    db: Session = Depends(get_db),
):
    user_id = _target(identity, payload)
    data = user_details_service.update_experience(db, user_id, payload.experience, identity.subject_id)
    return success("User experience updated successfully", data)


@router.post("/get-user-info", response_model=ApiResponse)
def get_user_info(
    payload: Optional[UserScopedRequest] = None,
    identity: Identity = Depends(get_current_identity),
    db: Session = Depends(get_db),
):
    data = user_details_service.get_user_info(db, _target(identity, payload))
    return success("User details found", data)


@router.post("/submit-user-details", response_model=ApiResponse)
@root_router.post("/submit-user-details", response_model=ApiResponse)
def submit_user_details(
    payload: SubmitUserDetailsRequest,
    identity: Identity = Depends(get_current_identity),
    db: Session = Depends(get_db),
):
    user_id = _target(identity, payload)
    data = user_details_service.submit_user_details(db, user_id, payload, identity.subject_id)
    return success("User details submitted successfully", data)


@router.post("/get-resume-info", response_model=ApiResponse)
@root_router.post("/get-resume-info", response_model=ApiResponse)
def get_resume_info(
    payload: Optional[UserScopedRequest] = None,
    identity: Identity = Depends(get_current_identity),
    db: Session = Depends(get_db),
):
    data = user_details_service.get_resume_info(db, _target(identity, payload))
    return success("Resume information retrieved successfully", data)


# ==================== NAMED RESUMES ====================

@router.post("/add-user-resume", status_code=status.HTTP_201_CREATED, response_model=ApiResponse)
def add_user_resume(
    payload: AddResumeRequest,
    identity: Identity = Depends(get_current_identity),
    db: Session = Depends(get_db),
):
    user_id = _target(identity, payload)
    data = resume_service.add_user_resume(db, user_id, payload.resume_name, payload.template_id)
    return success("Resume added successfully", data)


@router.post("/update-user-resume", response_model=ApiResponse)
def update_user_resume(
    payload: UpdateResumeRequest,
    identity: Identity = Depends(get_current_identity),
    db: Session = Depends(get_db),
):
    data = resume_service.update_user_resume(
        db,
        payload.resume_id,
        owner_scope(identity),
        name=payload.resume_name,
        template_id=payload.template_id,
    )
    return success("Resume updated successfully", data)


@router.post("/get-user-resumes", response_model=ApiResponse)
def get_user_resumes(
    payload: Optional[UserScopedRequest] = None,
    identity: Identity = Depends(get_current_identity),
    db: Session = Depends(get_db),
):
    data = resume_service.get_user_resumes(db, _target(identity, payload))
    return success("User resumes retrieved successfully", data)


@router.post("/get-user-resume", response_model=ApiResponse)
def get_user_resume(
    payload: ResumeIdRequest,
    identity: Identity = Depends(get_current_identity),
    db: Session = Depends(get_db),
):
    data = resume_service.get_user_resume(db, payload.resume_id, owner_scope(identity))
    return success("Resume retrieved successfully", data)


@router.post("/delete-user-resume", response_model=ApiResponse)
def delete_user_resume(
    payload: ResumeIdRequest,
    identity: Identity = Depends(get_current_identity),
    db: Session = Depends(get_db),
):
    data = resume_service.delete_user_resume(db, payload.resume_id, owner_scope(identity))
    return success("Resume deleted successfully", data)
