"""
Auth Service

Registration and login for user and admin accounts. Passwords are stored
as bcrypt hashes and every successful login returns a signed access token
whose audience tells user tokens and admin tokens apart.
"""

import logging
from typing import Any, Dict, Optional

from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.errors import AccountDisabled, Conflict, InvalidCredentials, NotFound
from app.core.security import (
    burn_password_check,
    create_access_token,
    hash_password,
    token_expires_in,
    validate_password_strength,
    verify_password,
)
from app.crud import crud_admin, crud_user
from app.db.session import transaction_scope
from app.models import AdminRole, RecordStatus
from app.tools.serializers import admin_to_dict, user_to_dict

logger = logging.getLogger(__name__)

USER_ROLE = "user"


def normalize_email(email: str) -> str:
    return email.strip().lower()


def _token_payload(token: str) -> Dict[str, Any]:
    return {"token": token, "token_type": "Bearer", "expires_in": token_expires_in()}


def issue_user_token(user) -> str:
    return create_access_token(user.id, user.email, user.name, USER_ROLE, settings.USER_TOKEN_AUDIENCE)


def issue_admin_token(admin) -> str:
    role = admin.role.value if isinstance(admin.role, AdminRole) else str(admin.role)
    return create_access_token(admin.id, admin.email, admin.name, role, settings.ADMIN_TOKEN_AUDIENCE)


def register_user(
    db: Session,
    name: str,
    email: str,
    password: str,
    phone: Optional[str],
    status: RecordStatus = RecordStatus.ACTIVE,
) -> Dict[str, Any]:
    """Create a user account and return it together with a fresh token."""
    email = normalize_email(email)
    validate_password_strength(password)

    if crud_user.get_user_by_email(db, email) is not None:
        raise Conflict("User Already Exist. Please Login", error_code="USER_EXISTS")

    with transaction_scope(db, "register_user"):
        user = crud_user.create_user(
            db,
            name=name.strip(),
            email=email,
            password_hash=hash_password(password),
            phone=phone,
            status=status,
        )

    logger.info(f"User registered: {email} (id={user.id})")
    data = user_to_dict(user)
    data.update(_token_payload(issue_user_token(user)))
    return data


def login_user(db: Session, email: str, password: str) -> Dict[str, Any]:
    """Verify credentials; unknown email and wrong password fail identically."""
    email = normalize_email(email)
    user = crud_user.get_user_by_email(db, email)

    if user is None:
        burn_password_check(password)
        raise InvalidCredentials("Invalid email or password")
    if not verify_password(password, user.password_hash):
        raise InvalidCredentials("Invalid email or password")
    if not user.is_active:
        raise AccountDisabled("User account is deactivated. Please contact support.")

    logger.info(f"User logged in: {email}")
    data = {"user": user_to_dict(user)}
    data.update(_token_payload(issue_user_token(user)))
    return data


def register_admin(
    db: Session,
    name: str,
    email: str,
    password: str,
    phone: Optional[str] = None,
    status: RecordStatus = RecordStatus.ACTIVE,
) -> Dict[str, Any]:
    """Self-registration for admins. The very first admin becomes super_admin."""
    email = normalize_email(email)
    validate_password_strength(password)

    if crud_admin.get_admin_by_email(db, email) is not None:
        raise Conflict("Admin already exists. Please login instead.", error_code="ADMIN_EXISTS")

    role = AdminRole.SUPER_ADMIN if crud_admin.count_admins(db) == 0 else AdminRole.ADMIN
    with transaction_scope(db, "register_admin"):
        admin = crud_admin.create_admin(
            db,
            name=name.strip(),
            email=email,
            password_hash=hash_password(password),
            phone=phone,
            role=role,
            status=status,
        )

    logger.info(f"Admin registered: {email} (id={admin.id}, role={role.value})")
    data = admin_to_dict(admin)
    data.update(_token_payload(issue_admin_token(admin)))
    return data


def login_admin(db: Session, email: str, password: str) -> Dict[str, Any]:
    email = normalize_email(email)
    admin = crud_admin.get_admin_by_email(db, email)

    if admin is None:
        burn_password_check(password)
        raise InvalidCredentials("Invalid email or password", error_code="ADMIN_AUTH_001")
    if not verify_password(password, admin.password_hash):
        raise InvalidCredentials("Invalid email or password", error_code="ADMIN_AUTH_001")
    if not admin.is_active:
        raise AccountDisabled(
            "Admin account is deactivated. Please contact super administrator.",
            error_code="ADMIN_AUTH_002",
        )

    logger.info(f"Admin logged in: {email}")
    data = {"admin": admin_to_dict(admin)}
    data.update(_token_payload(issue_admin_token(admin)))
    return data


def get_admin_profile(db: Session, admin_id: int) -> Dict[str, Any]:
    admin = crud_admin.get_admin(db, admin_id)
    if admin is None:
        raise NotFound("Admin not found", error_code="ADMIN_NOT_FOUND")
    return admin_to_dict(admin)
