"""
Admin Management Service

List, read, create, update and soft-delete admins, users and resume
templates, plus the dashboard statistics. Listings share one shape:
exact-match filters, an OR substring search, newest first, and a
pagination block computed from a count over the same predicate.
"""

import logging
import math
from datetime import datetime
from typing import Any, Dict, Optional

from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.errors import Conflict, Forbidden, InUse, NotFound
from app.core.security import hash_password, validate_password_strength
from app.crud import crud_admin, crud_resume, crud_resume_template, crud_user, crud_user_details
from app.db.session import transaction_scope
from app.models import AdminRole, RecordStatus, TemplateCategory
from app.schemas.common import PaginationMeta
from app.schemas.admin_management import (
    AdminCreateRequest,
    AdminUpdateRequest,
    TemplateCreateRequest,
    TemplateUpdateRequest,
    UserCreateRequest,
    UserUpdateRequest,
)
from app.tools.serializers import (
    admin_to_dict,
    education_to_dict,
    experience_to_dict,
    profile_to_dict,
    resume_to_dict,
    skill_to_dict,
    template_to_dict,
    user_to_dict,
)

logger = logging.getLogger(__name__)

# request field -> column attribute
TEMPLATE_COLUMNS = {
    "template_name": "name",
    "template_description": "description",
    "template_html": "html",
    "template_css": "css",
    "category": "category",
    "status": "status",
}


def page_window(page: Optional[int], limit: Optional[int]) -> Dict[str, int]:
    """Clamp paging input and turn it into offset/limit."""
    page = page if page and page > 0 else settings.DEFAULT_PAGE_INDEX
    limit = limit if limit and limit > 0 else settings.DEFAULT_PAGE_LIMIT
    limit = min(limit, settings.MAX_PAGE_LIMIT)
    return {"page": page, "limit": limit, "offset": (page - 1) * limit}


def pagination_meta(page: int, limit: int, total: int) -> Dict[str, int]:
    return PaginationMeta(
        current_page=page,
        total_pages=math.ceil(total / limit) if limit else 0,
        total_records=total,
        records_per_page=limit,
    ).model_dump()


# ==================== ADMINS ====================

def _refuse_self_deactivation(admin_id: int, actor_id: int, status: Optional[RecordStatus]) -> None:
    if admin_id == actor_id and status == RecordStatus.INACTIVE:
        raise Forbidden("You cannot deactivate your own account", error_code="SELF_DELETE_NOT_ALLOWED")


def list_admins(
    db: Session,
    status: Optional[RecordStatus] = RecordStatus.ACTIVE,
    role: Optional[AdminRole] = None,
    search: Optional[str] = None,
    page: Optional[int] = None,
    limit: Optional[int] = None,
) -> Dict[str, Any]:
    window = page_window(page, limit)
    admins, total = crud_admin.list_admins(
        db, {"status": status, "role": role}, search, window["limit"], window["offset"]
    )
    return {
        "admins": [admin_to_dict(a) for a in admins],
        "pagination": pagination_meta(window["page"], window["limit"], total),
    }


def get_admin(db: Session, admin_id: int) -> Dict[str, Any]:
    admin = crud_admin.get_admin(db, admin_id)
    if admin is None:
        raise NotFound("Admin not found", error_code="ADMIN_NOT_FOUND")
    return admin_to_dict(admin)


def create_admin(db: Session, payload: AdminCreateRequest, actor_id: int) -> Dict[str, Any]:
    email = payload.email.strip().lower()
    validate_password_strength(payload.password)
    if crud_admin.get_admin_by_email(db, email) is not None:
        raise Conflict("Admin with this email already exists", error_code="ADMIN_EXISTS")

    with transaction_scope(db, "create_admin"):
        admin = crud_admin.create_admin(
            db,
            name=payload.name.strip(),
            email=email,
            password_hash=hash_password(payload.password),
            phone=payload.phone,
            role=payload.role,
            status=payload.status,
            added_by=actor_id,
        )

    logger.info(f"Admin {admin.id} created by admin {actor_id}")
    return admin_to_dict(admin)


def update_admin(db: Session, admin_id: int, payload: AdminUpdateRequest, actor_id: int) -> Dict[str, Any]:
    admin = crud_admin.get_admin(db, admin_id)
    if admin is None:
        raise NotFound("Admin not found", error_code="ADMIN_NOT_FOUND")

    changes = payload.model_dump(exclude_unset=True, exclude_none=True)
    _refuse_self_deactivation(admin_id, actor_id, changes.get("status"))
    if "email" in changes:
        changes["email"] = changes["email"].strip().lower()
        other = crud_admin.get_admin_by_email(db, changes["email"])
        if other is not None and other.id != admin.id:
            raise Conflict("Email already exists with another admin", error_code="ADMIN_EXISTS")
    if "name" in changes:
        changes["name"] = changes["name"].strip()
    changes.update(updated_by=actor_id, updated_at=datetime.utcnow())

    with transaction_scope(db, "update_admin"):
        crud_admin.update_admin(db, admin, changes)

    logger.info(f"Admin {admin.id} updated by admin {actor_id}")
    return admin_to_dict(admin)


def update_admin_status(db: Session, admin_id: int, status: RecordStatus, actor_id: int) -> Dict[str, Any]:
    _refuse_self_deactivation(admin_id, actor_id, status)
    admin = crud_admin.get_admin(db, admin_id)
    if admin is None:
        raise NotFound("Admin not found", error_code="ADMIN_NOT_FOUND")

    with transaction_scope(db, "update_admin_status"):
        crud_admin.update_admin(db, admin, {"status": status, "updated_by": actor_id, "updated_at": datetime.utcnow()})

    logger.info(f"Admin {admin.id} status set to {status.value} by admin {actor_id}")
    return {"admin_id": admin.id, "status": status.value}


def delete_admin(db: Session, admin_id: int, actor_id: int) -> Dict[str, Any]:
    if admin_id == actor_id:
        raise Forbidden("You cannot delete your own account", error_code="SELF_DELETE_NOT_ALLOWED")
    admin = crud_admin.get_admin(db, admin_id)
    if admin is None:
        raise NotFound("Admin not found", error_code="ADMIN_NOT_FOUND")

    with transaction_scope(db, "delete_admin"):
        crud_admin.update_admin(
            db, admin, {"status": RecordStatus.INACTIVE, "updated_by": actor_id, "updated_at": datetime.utcnow()}
        )

    logger.info(f"Admin {admin.id} deactivated by admin {actor_id}")
    return {"admin_id": admin.id, "status": RecordStatus.INACTIVE.value}


# ==================== USERS ====================

def list_users(
    db: Session,
    status: Optional[RecordStatus] = None,
    search: Optional[str] = None,
    page: Optional[int] = None,
    limit: Optional[int] = None,
) -> Dict[str, Any]:
    window = page_window(page, limit)
    users, total = crud_user.list_users(db, {"status": status}, search, window["limit"], window["offset"])
    return {
        "users": [user_to_dict(u) for u in users],
        "pagination": pagination_meta(window["page"], window["limit"], total),
    }


def _require_user(db: Session, user_id: int):
    user = crud_user.get_user(db, user_id)
    if user is None:
        raise NotFound("User not found", error_code="USER_NOT_FOUND")
    return user


def get_user_details(db: Session, user_id: int) -> Dict[str, Any]:
    user = _require_user(db, user_id)
    return {
        "user": user_to_dict(user),
        "profile": profile_to_dict(crud_user_details.get_profile(db, user_id)),
        "education": [education_to_dict(e) for e in crud_user_details.get_education(db, user_id)],
        "experience": [experience_to_dict(e) for e in crud_user_details.get_experience(db, user_id)],
        "skills": [skill_to_dict(s) for s in crud_user_details.get_skills(db, user_id)],
        "resumes": [resume_to_dict(r) for r in crud_resume.get_resumes_for_user(db, user_id, status=None)],
    }


def create_user(db: Session, payload: UserCreateRequest, actor_id: int) -> Dict[str, Any]:
    email = payload.email.strip().lower()
    validate_password_strength(payload.password)
    if crud_user.get_user_by_email(db, email) is not None:
        raise Conflict("User with this email already exists", error_code="USER_EXISTS")

    with transaction_scope(db, "create_user"):
        user = crud_user.create_user(
            db,
            name=payload.name.strip(),
            email=email,
            password_hash=hash_password(payload.password),
            phone=payload.phone,
            status=payload.status,
        )

    logger.info(f"User {user.id} created by admin {actor_id}")
    return user_to_dict(user)


def update_user(db: Session, user_id: int, payload: UserUpdateRequest, actor_id: int) -> Dict[str, Any]:
    user = _require_user(db, user_id)
    changes = payload.model_dump(exclude_unset=True, exclude_none=True)
    if "email" in changes:
        changes["email"] = changes["email"].strip().lower()
        other = crud_user.get_user_by_email(db, changes["email"])
        if other is not None and other.id != user.id:
            raise Conflict("Email already exists with another user", error_code="USER_EXISTS")
    if "name" in changes:
        changes["name"] = changes["name"].strip()
    changes["updated_at"] = datetime.utcnow()

    with transaction_scope(db, "update_user"):
        crud_user.update_user(db, user, changes)

    logger.info(f"User {user.id} updated by admin {actor_id}")
    return user_to_dict(user)


def update_user_status(db: Session, user_id: int, status: RecordStatus, actor_id: int) -> Dict[str, Any]:
    user = _require_user(db, user_id)
    with transaction_scope(db, "update_user_status"):
        crud_user.update_user(db, user, {"status": status, "updated_at": datetime.utcnow()})

    logger.info(f"User {user.id} status set to {status.value} by admin {actor_id}")
    return {"user_id": user.id, "status": status.value}


def delete_user(db: Session, user_id: int, actor_id: int) -> Dict[str, Any]:
    return update_user_status(db, user_id, RecordStatus.INACTIVE, actor_id)


# ==================== TEMPLATES ====================

def list_templates(
    db: Session,
    status: Optional[RecordStatus] = None,
    category: Optional[TemplateCategory] = None,
    search: Optional[str] = None,
    page: Optional[int] = None,
    limit: Optional[int] = None,
) -> Dict[str, Any]:
    window = page_window(page, limit)
    templates, total = crud_resume_template.list_templates(
        db, {"status": status, "category": category}, search, window["limit"], window["offset"]
    )
    return {
        "templates": [template_to_dict(t, include_body=False) for t in templates],
        "pagination": pagination_meta(window["page"], window["limit"], total),
    }


def _require_template(db: Session, template_id: int):
    template = crud_resume_template.get_template(db, template_id)
    if template is None:
        raise NotFound("Template not found", error_code="TEMPLATE_NOT_FOUND")
    return template


def get_template(db: Session, template_id: int) -> Dict[str, Any]:
    return template_to_dict(_require_template(db, template_id))


def create_template(db: Session, payload: TemplateCreateRequest, actor_id: int) -> Dict[str, Any]:
    name = payload.template_name.strip()
    if crud_resume_template.get_template_by_name(db, name) is not None:
        raise Conflict("Template with this name already exists", error_code="TEMPLATE_EXISTS")

    with transaction_scope(db, "create_template"):
        template = crud_resume_template.create_template(
            db,
            name=name,
            description=payload.template_description,
            html=payload.template_html,
            css=payload.template_css,
            category=payload.category,
            status=payload.status,
            added_by=actor_id,
        )

    logger.info(f"Template {template.id} '{name}' created by admin {actor_id}")
    return template_to_dict(template)


def update_template(db: Session, template_id: int, payload: TemplateUpdateRequest, actor_id: int) -> Dict[str, Any]:
    template = _require_template(db, template_id)
    fields = payload.model_dump(exclude_unset=True, exclude_none=True)
    changes = {TEMPLATE_COLUMNS[key]: value for key, value in fields.items() if key in TEMPLATE_COLUMNS}

    if "name" in changes:
        changes["name"] = changes["name"].strip()
        other = crud_resume_template.get_template_by_name(db, changes["name"])
        if other is not None and other.id != template.id:
            raise Conflict("Template with this name already exists", error_code="TEMPLATE_EXISTS")
    changes.update(updated_by=actor_id, updated_at=datetime.utcnow())

    with transaction_scope(db, "update_template"):
        crud_resume_template.update_template(db, template, changes)

    logger.info(f"Template {template.id} updated by admin {actor_id}")
    return template_to_dict(template)


def delete_template(db: Session, template_id: int, actor_id: int) -> Dict[str, Any]:
    """Soft-delete a template nobody's resume points at."""
    template = _require_template(db, template_id)
    usage = crud_resume_template.count_template_usage(db, template_id)
    if usage > 0:
        raise InUse(
            "Cannot delete template as it is being used by users",
            error_code="TEMPLATE_IN_USE",
            details=[{"field": "template_id", "message": f"Referenced by {usage} resume(s)", "type": "in_use"}],
        )

    with transaction_scope(db, "delete_template"):
        crud_resume_template.update_template(
            db, template, {"status": RecordStatus.INACTIVE, "updated_by": actor_id, "updated_at": datetime.utcnow()}
        )

    logger.info(f"Template {template.id} deactivated by admin {actor_id}")
    return {"template_id": template.id, "status": RecordStatus.INACTIVE.value}


# ==================== DASHBOARD ====================

def get_dashboard_stats(db: Session) -> Dict[str, Any]:
    return {
        "admin_statistics": crud_admin.get_admin_stats(db),
        "user_statistics": crud_user.get_user_stats(db),
        "template_statistics": crud_resume_template.get_template_stats(db),
        "resume_statistics": crud_resume.get_resume_stats(db),
    }
