"""
Admin Auth API Endpoints

Admin registration, login and the signed-in admin's profile.
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.api.deps import Identity, get_current_admin
from app.api.responses import success
from app.db.session import get_db
from app.schemas.auth import AdminRegisterRequest, LoginRequest
from app.schemas.common import ApiResponse
from app.services import auth_service

router = APIRouter()


@router.post("/register", status_code=status.HTTP_201_CREATED, response_model=ApiResponse)
def register_admin(payload: AdminRegisterRequest, db: Session = Depends(get_db)):
    data = auth_service.register_admin(
        db,
        name=payload.name,
        email=payload.email,
        password=payload.password,
        phone=payload.phone,
        status=payload.status,
    )
    return success("Admin registered successfully", data)


@router.post("/login", response_model=ApiResponse)
def login_admin(payload: LoginRequest, db: Session = Depends(get_db)):
    data = auth_service.login_admin(db, payload.email, payload.password)
    return success("Admin login successful", data)


@router.get("/profile", response_model=ApiResponse)
def admin_profile(admin: Identity = Depends(get_current_admin), db: Session = Depends(get_db)):
    data = auth_service.get_admin_profile(db, admin.subject_id)
    return success("Admin profile retrieved successfully", data)
