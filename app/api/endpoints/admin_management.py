"""
Admin Management API Endpoints

Super-admin control over admin accounts, plus user, template and
dashboard administration for any active admin.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from fastapi import status as http_status
from sqlalchemy.orm import Session

from app.api.deps import Identity, get_current_admin, require_roles
from app.api.responses import success
from app.db.session import get_db
from app.models import AdminRole, RecordStatus, TemplateCategory
from app.schemas.admin_management import (
    AdminCreateRequest,
    AdminUpdateRequest,
    AdminStatusRequest,
    TemplateCreateRequest,
    TemplateUpdateRequest,
    UserCreateRequest,
    UserStatusRequest,
    UserUpdateRequest,
)
from app.schemas.common import ApiResponse
from app.services import admin_management_service as service

router = APIRouter()

require_super_admin = require_roles(AdminRole.SUPER_ADMIN)


# ==================== ADMINS ====================

@router.get("/admins", response_model=ApiResponse)
def list_admins(
    page: Optional[int] = Query(None, ge=1),
    limit: Optional[int] = Query(None, ge=1),
    search: Optional[str] = None,
    status: Optional[RecordStatus] = RecordStatus.ACTIVE,
    role: Optional[AdminRole] = None,
    admin: Identity = Depends(require_super_admin),
    db: Session = Depends(get_db),
):
    data = service.list_admins(db, status=status, role=role, search=search, page=page, limit=limit)
    return success("Admins retrieved successfully", data)


@router.get("/admins/{admin_id}", response_model=ApiResponse)
def get_admin(admin_id: int, admin: Identity = Depends(require_super_admin), db: Session = Depends(get_db)):
    return success("Admin details retrieved successfully", service.get_admin(db, admin_id))


@router.post("/admins", status_code=http_status.HTTP_201_CREATED, response_model=ApiResponse)
def create_admin(
    payload: AdminCreateRequest, admin: Identity = Depends(require_super_admin), db: Session = Depends(get_db)
):
    return success("Admin created successfully", service.create_admin(db, payload, admin.subject_id))


@router.put("/admins/{admin_id}", response_model=ApiResponse)
def update_admin(
    admin_id: int,
    payload: AdminUpdateRequest,
    admin: Identity = Depends(require_super_admin),
    db: Session = Depends(get_db),
):
    return success("Admin updated successfully", service.update_admin(db, admin_id, payload, admin.subject_id))


@router.patch("/admins/{admin_id}/status", response_model=ApiResponse)
def update_admin_status(
    admin_id: int,
    payload: AdminStatusRequest,
    admin: Identity = Depends(require_super_admin),
    db: Session = Depends(get_db),
):
    data = service.update_admin_status(db, admin_id, payload.status, admin.subject_id)
    return success(f"Admin status updated to '{payload.status.value}' successfully", data)


@router.delete("/admins/{admin_id}", response_model=ApiResponse)
def delete_admin(admin_id: int, admin: Identity = Depends(require_super_admin), db: Session = Depends(get_db)):
    return success("Admin deleted successfully", service.delete_admin(db, admin_id, admin.subject_id))


# ==================== USERS ====================

@router.get("/users", response_model=ApiResponse)
def list_users(
    page: Optional[int] = Query(None, ge=1),
    limit: Optional[int] = Query(None, ge=1),
    search: Optional[str] = None,
    status: Optional[RecordStatus] = None,
    admin: Identity = Depends(get_current_admin),
    db: Session = Depends(get_db),
):
    data = service.list_users(db, status=status, search=search, page=page, limit=limit)
    return success("Users retrieved successfully", data)


@router.post("/users", status_code=http_status.HTTP_201_CREATED, response_model=ApiResponse)
def create_user(payload: UserCreateRequest, admin: Identity = Depends(get_current_admin), db: Session = Depends(get_db)):
    return success("User created successfully", service.create_user(db, payload, admin.subject_id))


@router.get("/users/{user_id}", response_model=ApiResponse)
def get_user_details(user_id: int, admin: Identity = Depends(get_current_admin), db: Session = Depends(get_db)):
    return success("User details retrieved successfully", service.get_user_details(db, user_id))


@router.put("/users/{user_id}", response_model=ApiResponse)
def update_user(
    user_id: int,
    payload: UserUpdateRequest,
    admin: Identity = Depends(get_current_admin),
    db: Session = Depends(get_db),
):
    return success("User updated successfully", service.update_user(db, user_id, payload, admin.subject_id))


@router.patch("/users/{user_id}/status", response_model=ApiResponse)
def update_user_status(
    user_id: int,
    payload: UserStatusRequest,
    admin: Identity = Depends(get_current_admin),
    db: Session = Depends(get_db),
):
    data = service.update_user_status(db, user_id, payload.status, admin.subject_id)
    return success(f"User status updated to '{payload.status.value}' successfully", data)


@router.delete("/users/{user_id}", response_model=ApiResponse)
def delete_user(user_id: int, admin: Identity = Depends(get_current_admin), db: Session = Depends(get_db)):
    return success("User deleted successfully", service.delete_user(db, user_id, admin.subject_id))


# ==================== TEMPLATES ====================

@router.get("/templates", response_model=ApiResponse)
def list_templates(
    page: Optional[int] = Query(None, ge=1),
    limit: Optional[int] = Query(None, ge=1),
    search: Optional[str] = None,
    status: Optional[RecordStatus] = None,
    category: Optional[TemplateCategory] = None,
    admin: Identity = Depends(get_current_admin),
    db: Session = Depends(get_db),
):
    data = service.list_templates(db, status=status, category=category, search=search, page=page, limit=limit)
    return success("Resume templates retrieved successfully", data)


@router.get("/templates/{template_id}", response_model=ApiResponse)
def get_template(template_id: int, admin: Identity = Depends(get_current_admin), db: Session = Depends(get_db)):
    return success("Template details retrieved successfully", service.get_template(db, template_id))


@router.post("/templates", status_code=http_status.HTTP_201_CREATED, response_model=ApiResponse)
def create_template(
    payload: TemplateCreateRequest, admin: Identity = Depends(get_current_admin), db: Session = Depends(get_db)
):
    return success("Resume template created successfully", service.create_template(db, payload, admin.subject_id))


@router.put("/templates/{template_id}", response_model=ApiResponse)
def update_template(
    template_id: int,
    payload: TemplateUpdateRequest,
    admin: Identity = Depends(get_current_admin),
    db: Session = Depends(get_db),
):
    data = service.update_template(db, template_id, payload, admin.subject_id)
    return success("Resume template updated successfully", data)


@router.delete("/templates/{template_id}", response_model=ApiResponse)
def delete_template(template_id: int, admin: Identity = Depends(get_current_admin), db: Session = Depends(get_db)):
    return success("Resume template deleted successfully", service.delete_template(db, template_id, admin.subject_id))


# ==================== DASHBOARD ====================

@router.get("/dashboard/stats", response_model=ApiResponse)
def dashboard_stats(admin: Identity = Depends(get_current_admin), db: Session = Depends(get_db)):
    return success("Dashboard statistics retrieved successfully", service.get_dashboard_stats(db))
