"""
Resume Service

Named resumes owned by a user. Names are unique per user among active
resumes; deleting a resume only marks it Inactive.
"""

import logging
from datetime import datetime
from typing import Any, Dict, Optional

from sqlalchemy.orm import Session

from app.core.errors import Conflict, Forbidden, NotFound
from app.crud import crud_resume, crud_resume_template, crud_user
from app.db.session import transaction_scope
from app.models import RecordStatus
from app.tools.serializers import resume_to_dict

logger = logging.getLogger(__name__)


def _require_user(db: Session, user_id: int):
    user = crud_user.get_user(db, user_id)
    if user is None:
        raise NotFound("User not found", error_code="USER_NOT_FOUND")
    return user


def _require_active_template(db: Session, template_id: int):
    template = crud_resume_template.get_template(db, template_id)
    if template is None or template.status != RecordStatus.ACTIVE:
        raise NotFound("Template not found", error_code="TEMPLATE_NOT_FOUND")
    return template


def _require_owned_resume(db: Session, resume_id: int, user_id: Optional[int]):
    resume = crud_resume.get_resume(db, resume_id)
    if resume is None or resume.status != RecordStatus.ACTIVE:
        raise NotFound("Resume not found", error_code="RESUME_NOT_FOUND")
    if user_id is not None and resume.user_id != user_id:
        raise Forbidden("You do not have permission to access this resume")
    return resume


def _ensure_unique_name(db: Session, user_id: int, name: str, exclude_id: Optional[int] = None) -> None:
    if crud_resume.find_active_resume_by_name(db, user_id, name, exclude_id=exclude_id) is not None:
        raise Conflict("A resume with this name already exists", error_code="RESUME_NAME_EXISTS")


def add_user_resume(db: Session, user_id: int, name: str, template_id: Optional[int] = None) -> Dict[str, Any]:
    _require_user(db, user_id)
    name = name.strip()
    _ensure_unique_name(db, user_id, name)
    if template_id is not None:
        _require_active_template(db, template_id)

    with transaction_scope(db, "add_user_resume"):
        resume = crud_resume.create_resume(
            db, user_id=user_id, name=name, template_id=template_id, status=RecordStatus.ACTIVE
        )

    logger.info(f"Resume {resume.id} added for user {user_id}")
    return resume_to_dict(resume)


def update_user_resume(
    db: Session,
    resume_id: int,
    user_id: Optional[int],
    name: Optional[str] = None,
    template_id: Optional[int] = None,
) -> Dict[str, Any]:
    """Partial update; fields left as None keep their stored value."""
    resume = _require_owned_resume(db, resume_id, user_id)
    changes: Dict[str, Any] = {}
    if name is not None:
        name = name.strip()
        _ensure_unique_name(db, resume.user_id, name, exclude_id=resume.id)
        changes["name"] = name
    if template_id is not None:
        _require_active_template(db, template_id)
        changes["template_id"] = template_id

    changes["updated_at"] = datetime.utcnow()
    with transaction_scope(db, "update_user_resume"):
        crud_resume.update_resume(db, resume, changes)

    logger.info(f"Resume {resume.id} updated")
    return resume_to_dict(resume)


def get_user_resumes(db: Session, user_id: int) -> Dict[str, Any]:
    user = _require_user(db, user_id)
    resumes = [resume_to_dict(r) for r in crud_resume.get_resumes_for_user(db, user_id)]
    return {
        "resumes": resumes,
        "total_count": len(resumes),
        "user": {"user_id": user.id, "name": user.name, "email": user.email},
    }


def get_user_resume(db: Session, resume_id: int, user_id: Optional[int] = None) -> Dict[str, Any]:
    """Look a resume up by id whatever its status."""
    resume = crud_resume.get_resume(db, resume_id)
    if resume is None:
        raise NotFound("Resume not found", error_code="RESUME_NOT_FOUND")
    if user_id is not None and resume.user_id != user_id:
        raise Forbidden("You do not have permission to access this resume")
    return resume_to_dict(resume)


def delete_user_resume(db: Session, resume_id: int, user_id: Optional[int]) -> Dict[str, Any]:
    resume = _require_owned_resume(db, resume_id, user_id)
    deleted_at = datetime.utcnow()
    with transaction_scope(db, "delete_user_resume"):
        crud_resume.update_resume(db, resume, {"status": RecordStatus.INACTIVE, "updated_at": deleted_at})

    logger.info(f"Resume {resume.id} soft-deleted")
    return {"resume_id": resume.id, "deleted_at": deleted_at.isoformat()}
