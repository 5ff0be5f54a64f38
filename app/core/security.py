"""
Password hashing and access token helpers.

Tokens are HS256 JWTs carrying the account id (``sub``), email, display
name and role. User and admin tokens are told apart by their audience.
"""

import re
from datetime import datetime, timedelta, timezone
from functools import lru_cache
from typing import Any, Dict, Iterable

import bcrypt
import jwt

from app.core.config import settings
from app.core.errors import Unauthenticated, WeakPassword

PASSWORD_MIN_LENGTH = 8
_SPECIAL_CHARS = re.compile(r"[^A-Za-z0-9\s]")


@lru_cache(maxsize=None)
def _dummy_hash_for(rounds: int) -> bytes:
    return bcrypt.hashpw(b"not-a-real-password", bcrypt.gensalt(rounds=rounds))


def dummy_password_hash() -> bytes:
    """Hash verified against when the email is unknown.

    Built at the same cost as real hashes so a failed login takes as long
    whether or not the account exists.
    """
    return _dummy_hash_for(settings.BCRYPT_ROUNDS)


def is_password_strong(password: str) -> bool:
    return (
        len(password) >= PASSWORD_MIN_LENGTH
        and re.search(r"[A-Z]", password) is not None
        and re.search(r"[a-z]", password) is not None
        and re.search(r"\d", password) is not None
        and _SPECIAL_CHARS.search(password) is not None
    )


def validate_password_strength(password: str) -> None:
    if not is_password_strong(password):
        raise WeakPassword(details=[{"field": "password", "message": WeakPassword.default_message, "type": "password.weak"}])


def hash_password(password: str) -> str:
    salt = bcrypt.gensalt(rounds=settings.BCRYPT_ROUNDS)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        # malformed stored hash
        return False


def burn_password_check(password: str) -> None:
    bcrypt.checkpw(password.encode("utf-8"), dummy_password_hash())


def token_expires_in() -> str:
    return f"{settings.TOKEN_EXPIRE_HOURS}h"


def create_access_token(subject_id: int, email: str, name: str, role: str, audience: str) -> str:
    now = datetime.now(timezone.utc)
    payload = {
        "sub": str(subject_id),
        "email": email,
        "name": name,
        "role": role,
        "iat": now,
        "exp": now + timedelta(hours=settings.TOKEN_EXPIRE_HOURS),
        "iss": settings.TOKEN_ISSUER,
        "aud": audience,
    }
    return jwt.encode(payload, settings.TOKEN_KEY, algorithm="HS256")


def is_valid_token_format(token: str) -> bool:
    parts = token.split(".")
    return len(parts) == 3 and all(parts)


def decode_access_token(token: str, audiences: Iterable[str]) -> Dict[str, Any]:
    """Verify signature, expiry, issuer and audience and return the claims.

    Any failure is reported as ``Unauthenticated`` with an error code that
    names the reason.
    """
    if not token or not is_valid_token_format(token):
        raise Unauthenticated("Invalid token format", error_code="TOKEN_MALFORMED")

    try:
        claims = jwt.decode(
            token,
            settings.TOKEN_KEY,
            algorithms=["HS256"],
            audience=list(audiences),
            issuer=settings.TOKEN_ISSUER,
            options={"require": ["exp", "iat", "sub", "aud", "iss"]},
        )
    except jwt.ExpiredSignatureError:
        raise Unauthenticated("Token has expired. Please login again.", error_code="TOKEN_EXPIRED")
    except jwt.ImmatureSignatureError:
        raise Unauthenticated("Token not yet valid", error_code="TOKEN_NOT_YET_VALID")
    except jwt.InvalidSignatureError:
        raise Unauthenticated("Invalid token signature", error_code="TOKEN_BAD_SIGNATURE")
    except jwt.InvalidAudienceError:
        raise Unauthenticated("Token is not valid for this resource", error_code="TOKEN_BAD_AUDIENCE")
    except jwt.InvalidIssuerError:
        raise Unauthenticated("Token issuer is not trusted", error_code="TOKEN_BAD_ISSUER")
    except jwt.InvalidTokenError:
        raise Unauthenticated("Invalid token", error_code="TOKEN_MALFORMED")

    try:
        claims["sub"] = int(claims["sub"])
    except (TypeError, ValueError):
        raise Unauthenticated("Invalid token payload", error_code="TOKEN_BAD_PAYLOAD")
    if not isinstance(claims.get("email"), str) or "@" not in claims["email"]:
        raise Unauthenticated("Invalid token payload", error_code="TOKEN_BAD_PAYLOAD")
    return claims
