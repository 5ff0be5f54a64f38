"""
Exception handlers turning every failure into the error envelope

    {success: 0, message, error, details?, timestamp, path, method}
"""

import logging
import traceback
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.core.config import settings
from app.core.errors import AppError, InternalError, translate_db_error

logger = logging.getLogger(__name__)

AVAILABLE_ENDPOINTS = {
    "auth": {
        "login": "POST /api/login",
        "register": "POST /api/register",
    },
    "admin": {
        "login": "POST /api/admin/login",
        "register": "POST /api/admin/register",
        "profile": "GET /api/admin/profile",
    },
    "adminManagement": {
        "admins": "GET|POST /api/admin-management/admins, GET|PUT|DELETE /api/admin-management/admins/{id}",
        "users": "GET|POST /api/admin-management/users, GET|PUT|DELETE /api/admin-management/users/{id}",
        "adminStatus": "PATCH /api/admin-management/admins/{id}/status",
        "userStatus": "PATCH /api/admin-management/users/{id}/status",
        "templates": "GET|POST /api/admin-management/templates, GET|PUT|DELETE /api/admin-management/templates/{id}",
        "dashboard": "GET /api/admin-management/dashboard/stats",
    },
    "users": {
        "updateProfile": "POST /api/users/update-user-profile",
        "updateSkills": "POST /api/users/update-user-skills",
        "updateEducation": "POST /api/users/update-user-education",
        "updateExperience": "POST /api/users/update-user-experience",
        "getUserInfo": "POST /api/users/get-user-info",
        "submitUserDetails": "POST /api/submit-user-details",
        "getResumeInfo": "POST /api/get-resume-info",
        "addUserResume": "POST /api/users/add-user-resume",
        "updateUserResume": "POST /api/users/update-user-resume",
        "getUserResumes": "POST /api/users/get-user-resumes",
        "getUserResume": "POST /api/users/get-user-resume",
        "deleteUserResume": "POST /api/users/delete-user-resume",
    },
    "health": {
        "check": "GET /health",
    },
}


def error_body(
    request: Request,
    message: str,
    error_code: str,
    details: Optional[List[Dict[str, Any]]] = None,
) -> Dict[str, Any]:
    body: Dict[str, Any] = {
        "success": 0,
        "message": message,
        "error": error_code,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "path": request.url.path,
        "method": request.method,
    }
    if details:
        body["details"] = details
    return body


def _app_error_response(request: Request, exc: AppError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: [{exc.error_code}] {exc.message}")
    else:
        logger.warning(f"{request.method} {request.url.path} -> {exc.status_code} [{exc.error_code}] {exc.message}")
    body = error_body(request, exc.message, exc.error_code, exc.details)
    if exc.status_code >= 500 and not settings.is_production and exc.__cause__ is not None:
        body["debug"] = str(exc.__cause__)
    return JSONResponse(status_code=exc.status_code, content=body)


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    return _app_error_response(request, exc)


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    details = []
    for err in exc.errors():
        loc = [str(part) for part in err.get("loc", ()) if part not in ("body", "query", "path")]
        details.append({"field": ".".join(loc) or "body", "message": err.get("msg", ""), "type": err.get("type", "")})
    logger.warning(f"{request.method} {request.url.path} -> 400 validation failed on {len(details)} field(s)")
    return JSONResponse(status_code=400, content=error_body(request, "Validation Error", "VALIDATION_ERROR", details))


async def db_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    app_error = translate_db_error(exc)
    if not settings.is_production:
        app_error.__cause__ = exc
    return _app_error_response(request, app_error)


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    if exc.status_code == 404:
        logger.warning(f"404 {request.method} {request.url.path}")
        body = error_body(request, "Endpoint not found", "NOT_FOUND")
        body["availableEndpoints"] = AVAILABLE_ENDPOINTS
        return JSONResponse(status_code=404, content=body)
    code = "METHOD_NOT_ALLOWED" if exc.status_code == 405 else "HTTP_ERROR"
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(request, str(exc.detail), code),
        headers=getattr(exc, "headers", None),
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    body = error_body(request, InternalError.default_message, InternalError.error_code)
    if not settings.is_production:
        body["debug"] = str(exc)
        body["stack"] = traceback.format_exception(type(exc), exc, exc.__traceback__)
    return JSONResponse(status_code=500, content=body)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(SQLAlchemyError, db_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
