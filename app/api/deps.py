"""
Access control dependencies.

A request's token is found, verified and turned into an ``Identity`` once;
handlers receive that object and never look at the raw token again.
"""

import json
import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable, Optional

from fastapi import Depends, Request
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.errors import Forbidden, Unauthenticated, ValidationError
from app.core.security import decode_access_token
from app.crud import crud_admin, crud_user
from app.db.session import get_db

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Identity:
    subject_id: int
    email: str
    name: Optional[str]
    role: str
    audience: str
    issued_at: Optional[datetime] = None
    expires_at: Optional[datetime] = None

    @property
    def is_admin(self) -> bool:
        return self.audience == settings.ADMIN_TOKEN_AUDIENCE


def _bearer_token(header: Optional[str]) -> Optional[str]:
    if not header:
        return None
    scheme, _, value = header.partition(" ")
    if scheme.lower() != "bearer" or not value.strip():
        return None
    return value.strip()


async def extract_token(request: Request) -> Optional[str]:
    """Find the access token: Bearer header, then ``token`` header, then body, then query."""
    token = _bearer_token(request.headers.get("authorization"))
    if token:
        return token

    token = request.headers.get("token")
    if token:
        return token

    if request.method in ("POST", "PUT", "PATCH", "DELETE"):
        try:
            body = await request.json()
        except (json.JSONDecodeError, UnicodeDecodeError):
            body = None
        if isinstance(body, dict) and isinstance(body.get("token"), str) and body["token"]:
            return body["token"]

    return request.query_params.get("token") or None


def _timestamp(value) -> Optional[datetime]:
    if value is None:
        return None
    return datetime.fromtimestamp(value, tz=timezone.utc)


def _ensure_account_active(db: Session, identity: Identity) -> None:
    """Reject tokens whose account was removed or deactivated after issue."""
    if not settings.CHECK_ACCOUNT_STATUS:
        return
    try:
        if identity.is_admin:
            account = crud_admin.get_admin(db, identity.subject_id)
        else:
            account = crud_user.get_user(db, identity.subject_id)
    except SQLAlchemyError as e:
        logger.warning(f"Account status check skipped for {identity.email}: {e}")
        return

    if account is None:
        raise Unauthenticated("Account not found", error_code="ACCOUNT_NOT_FOUND")
    if not account.is_active:
        raise Unauthenticated("Account is deactivated", error_code="ACCOUNT_INACTIVE")


def authenticate(token: Optional[str], audiences, db: Session) -> Identity:
    if not token:
        raise Unauthenticated("A token is required for authentication", error_code="TOKEN_MISSING")
    claims = decode_access_token(token, audiences)
    identity = Identity(
        subject_id=claims["sub"],
        email=claims["email"],
        name=claims.get("name"),
        role=claims.get("role") or "user",
        audience=claims["aud"] if isinstance(claims["aud"], str) else claims["aud"][0],
        issued_at=_timestamp(claims.get("iat")),
        expires_at=_timestamp(claims.get("exp")),
    )
    _ensure_account_active(db, identity)
    return identity


def get_current_identity(
    token: Optional[str] = Depends(extract_token),
    db: Session = Depends(get_db),
) -> Identity:
    """User routes: user tokens, and admin tokens acting on a user's behalf."""
    return authenticate(token, [settings.USER_TOKEN_AUDIENCE, settings.ADMIN_TOKEN_AUDIENCE], db)


def get_current_admin(
    token: Optional[str] = Depends(extract_token),
    db: Session = Depends(get_db),
) -> Identity:
    try:
        return authenticate(token, [settings.ADMIN_TOKEN_AUDIENCE], db)
    except Unauthenticated as e:
        if e.error_code == "TOKEN_BAD_AUDIENCE":
            raise Forbidden("Access denied. Admin privileges required.", error_code="ADMIN_REQUIRED")
        raise


def require_roles(*roles: str) -> Callable[..., Identity]:
    """Dependency factory admitting only admins holding one of ``roles``."""
    allowed = {getattr(r, "value", r) for r in roles}

    def checker(identity: Identity = Depends(get_current_admin)) -> Identity:
        if identity.role not in allowed:
            raise Forbidden("You do not have permission to access this resource", error_code="INSUFFICIENT_ROLE")
        return identity

    return checker


def ensure_owner(identity: Identity, owner_id: int) -> None:
    if identity.is_admin:
        return
    if identity.subject_id != owner_id:
        raise Forbidden("You do not have permission to access this resource", error_code="NOT_OWNER")


def resolve_target_user_id(identity: Identity, requested_id: Optional[int]) -> int:
    """The user a user-route acts on: the caller unless another id was asked for."""
    if requested_id is None:
        if identity.is_admin:
            raise ValidationError(
                "user_id is required",
                details=[{"field": "user_id", "message": "user_id is required for admin callers", "type": "missing"}],
            )
        return identity.subject_id
    ensure_owner(identity, requested_id)
    return requested_id


def owner_scope(identity: Identity) -> Optional[int]:
    """Owner id to filter resumes by; admins are not restricted."""
    return None if identity.is_admin else identity.subject_id
