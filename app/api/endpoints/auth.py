"""
Auth API Endpoints

User registration and login.
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.api.responses import success
from app.db.session import get_db
from app.schemas.auth import LoginRequest, UserRegisterRequest
from app.schemas.common import ApiResponse
from app.services import auth_service

router = APIRouter()


@router.post("/register", status_code=status.HTTP_201_CREATED, response_model=ApiResponse)
def register(payload: UserRegisterRequest, db: Session = Depends(get_db)):
    data = auth_service.register_user(
        db,
        name=payload.name,
        email=payload.email,
        password=payload.password,
        phone=payload.phone,
        status=payload.status,
    )
    return success("user created successfully", data)


@router.post("/login", response_model=ApiResponse)
def login(payload: LoginRequest, db: Session = Depends(get_db)):
    data = auth_service.login_user(db, payload.email, payload.password)
    return success("Login successful", data)
