from fastapi import HTTPException, Request
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from app.core.config import settings
from app.core.exceptions import AppError
from app.schemas.response import ErrorResponse, ErrorDetail
import logging
import uuid

logger = logging.getLogger(__name__)

def _get_error_code(status_code: int) -> str:
    code_map = {
        400: "BAD_REQUEST",
        401: "UNAUTHORIZED",
        403: "FORBIDDEN",
        404: "NOT_FOUND",
        405: "METHOD_NOT_ALLOWED",
        409: "CONFLICT",
        422: "VALIDATION_ERROR",
        500: "INTERNAL_SERVER_ERROR",
    }
    return code_map.get(status_code, f"HTTP_{status_code}")

def _request_id(request: Request) -> str:
    return getattr(request.state, "request_id", None) or str(uuid.uuid4())

def _render(request: Request, request_id: str, status_code: int, detail: ErrorDetail, headers=None) -> JSONResponse:
    error_response = ErrorResponse.build(detail, path=request.url.path, request_id=request_id)
    return JSONResponse(status_code=status_code, content=jsonable_encoder(error_response), headers=headers)

async def app_error_handler(request: Request, exc: AppError):
    request_id = _request_id(request)
    logger.warning(f"{exc.status_code} {exc.code}: {exc.message}", extra={"request_id": request_id})
    headers = {"WWW-Authenticate": "Bearer"} if exc.status_code == 401 else None
    return _render(
        request,
        request_id,
        exc.status_code,
        ErrorDetail(code=exc.code, message=exc.message, details=exc.details),
        headers=headers,
    )

async def validation_exception_handler(request: Request, exc: RequestValidationError):
    request_id = _request_id(request)
    logger.warning(f"Validation error: {exc.errors()}", extra={"request_id": request_id})
    return _render(
        request,
        request_id,
        422,
        ErrorDetail(
            code="VALIDATION_ERROR",
            message="Request validation failed",
            details={"validation_errors": jsonable_encoder(exc.errors())}
        ),
    )

async def http_exception_handler(request: Request, exc: HTTPException):
    request_id = _request_id(request)
    logger.warning(f"HTTP {exc.status_code}: {exc.detail}", extra={"request_id": request_id})
    return _render(
        request,
        request_id,
        exc.status_code,
        ErrorDetail(
            code=_get_error_code(exc.status_code),
            message=exc.detail if isinstance(exc.detail, str) else str(exc.detail)
        ),
        headers=getattr(exc, "headers", None),
    )

async def global_exception_handler(request: Request, exc: Exception):
    request_id = _request_id(request)
    logger.error(f"Unhandled exception: {exc}", exc_info=True, extra={"request_id": request_id})
    # internals stay out of production responses
    details = None if settings.is_production else {"error_type": type(exc).__name__}
    return _render(
        request,
        request_id,
        500,
        ErrorDetail(code="INTERNAL_SERVER_ERROR", message="An unexpected error occurred", details=details),
    )
