"""
Application error taxonomy and the database error translator.

Services raise subclasses of ``AppError``; the handlers registered in
``main.py`` turn them into the JSON envelope. Raw SQLAlchemy errors are
mapped onto the same taxonomy by ``translate_db_error``.
"""

import logging
from typing import Any, Dict, List, Optional

from sqlalchemy.exc import (
    DBAPIError,
    IntegrityError,
    OperationalError,
    ProgrammingError,
    SQLAlchemyError,
    TimeoutError as PoolTimeoutError,
)

logger = logging.getLogger(__name__)


class AppError(Exception):
    status_code = 500
    error_code = "INTERNAL_ERROR"
    default_message = "Internal Server Error"

    def __init__(
        self,
        message: Optional[str] = None,
        *,
        error_code: Optional[str] = None,
        details: Optional[List[Dict[str, Any]]] = None,
        status_code: Optional[int] = None,
    ):
        self.message = message or self.default_message
        if error_code:
            self.error_code = error_code
        if status_code:
            self.status_code = status_code
        self.details = details
        super().__init__(self.message)


class ValidationError(AppError):
    status_code = 400
    error_code = "VALIDATION_ERROR"
    default_message = "Validation Error"


class WeakPassword(ValidationError):
    error_code = "WEAK_PASSWORD"
    default_message = (
        "Password must be at least 8 characters long and contain uppercase, "
        "lowercase, number, and special character"
    )


class InvalidReference(AppError):
    status_code = 400
    error_code = "INVALID_REFERENCE"
    default_message = "Invalid Reference"


class Unauthenticated(AppError):
    status_code = 401
    error_code = "UNAUTHENTICATED"
    default_message = "Authentication required"


class InvalidCredentials(Unauthenticated):
    error_code = "INVALID_CREDENTIALS"
    default_message = "Invalid email or password"


class Forbidden(AppError):
    status_code = 403
    error_code = "FORBIDDEN"
    default_message = "You do not have permission to access this resource"


class AccountDisabled(Forbidden):
    error_code = "ACCOUNT_DISABLED"
    default_message = "Account is deactivated. Please contact an administrator."


class NotFound(AppError):
    status_code = 404
    error_code = "NOT_FOUND"
    default_message = "Resource Not Found"


class Conflict(AppError):
    status_code = 409
    error_code = "CONFLICT"
    default_message = "Resource Conflict"


class DuplicateKey(Conflict):
    error_code = "DUPLICATE_ENTRY"
    default_message = "Duplicate Entry"


class InUse(AppError):
    status_code = 409
    error_code = "IN_USE"
    default_message = "Resource is still referenced and cannot be deleted"


class InternalError(AppError):
    pass


class TransactionFailure(InternalError):
    pass


class ServiceUnavailable(AppError):
    status_code = 503
    error_code = "DB_CONNECTION_ERROR"
    default_message = "Database Connection Failed"


class GatewayTimeout(AppError):
    status_code = 504
    error_code = "TIMEOUT"
    default_message = "Request Timeout"


# Driver specific codes, grouped by meaning.
_MYSQL_DUPLICATE = {1062, 1586}
_MYSQL_FK_MISSING_PARENT = {1216, 1452}
_MYSQL_FK_REFERENCED = {1217, 1451}
_MYSQL_MISSING_TABLE = {1146}
_MYSQL_CONNECTION = {2002, 2003, 2006, 2013, 1040}
_MYSQL_TIMEOUT = {1205, 3024}

_PG_DUPLICATE = {"23505"}
_PG_FK = {"23503"}
_PG_MISSING_TABLE = {"42P01"}
_PG_TIMEOUT = {"57014", "55P03"}


def _driver_code(exc: SQLAlchemyError) -> Any:
    orig = getattr(exc, "orig", None)
    if orig is None:
        return None
    pgcode = getattr(orig, "pgcode", None) or getattr(orig, "sqlstate", None)
    if pgcode:
        return str(pgcode)
    args = getattr(orig, "args", ())
    if args and isinstance(args[0], int):
        return args[0]
    return None


def translate_db_error(exc: SQLAlchemyError) -> AppError:
    """Map a SQLAlchemy/driver error onto the application taxonomy."""
    code = _driver_code(exc)
    text = str(getattr(exc, "orig", None) or exc).lower()

    if isinstance(exc, PoolTimeoutError):
        return GatewayTimeout("Timed out waiting for a database connection")

    is_integrity = isinstance(exc, IntegrityError)

    if code in _MYSQL_DUPLICATE or code in _PG_DUPLICATE or (
        is_integrity and ("unique constraint failed" in text or "duplicate" in text)
    ):
        return DuplicateKey()

    if code in _MYSQL_FK_REFERENCED:
        return InvalidReference("Cannot Delete Referenced Record", error_code="REFERENCED_RECORD")

    if code in _MYSQL_FK_MISSING_PARENT or code in _PG_FK or "foreign key constraint failed" in text:
        return InvalidReference()

    if code in _MYSQL_MISSING_TABLE or code in _PG_MISSING_TABLE or "no such table" in text:
        return InternalError("Database schema is not initialised", error_code="MISSING_TABLE")

    if code in _MYSQL_TIMEOUT or code in _PG_TIMEOUT or "timed out" in text or "timeout" in text:
        return GatewayTimeout()

    if (
        code in _MYSQL_CONNECTION
        or "connection refused" in text
        or "unable to open database" in text
        or "can't connect" in text
        or (isinstance(exc, DBAPIError) and exc.connection_invalidated)
    ):
        return ServiceUnavailable()

    if is_integrity:
        return Conflict("Constraint violation")

    if isinstance(exc, (OperationalError, ProgrammingError)):
        logger.error("Unclassified database error: %s", exc)

    return InternalError()
