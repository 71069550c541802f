"""Map core errors to HTTP responses."""

import logging
from typing import Any, Dict, List

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from app.errors import (
    ContentError,
    JobConflictError,
    JobExecutionError,
    NotFoundError,
    UnsupportedJobTypeError,
    ValidationError,
)
from app.schemas.job import JobRead

logger = logging.getLogger(__name__)

STATUS_CODES = {
    NotFoundError: 404,
    ValidationError: 400,
    UnsupportedJobTypeError: 400,
    JobConflictError: 409,
    JobExecutionError: 400,
}


def status_code_for(exc: ContentError) -> int:
    for error_type in type(exc).__mro__:
        if error_type in STATUS_CODES:
            return STATUS_CODES[error_type]
    return 500


def _sanitize_validation_errors(errors: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """Drop raw input values and stringify exception contexts."""
    sanitized = []
    for error in errors:
        scrubbed = {key: value for key, value in error.items() if key not in ("input", "url")}
        if isinstance(scrubbed.get("ctx"), dict):
            scrubbed["ctx"] = {
                key: str(value) for key, value in scrubbed["ctx"].items() if key != "input"
            }
        scrubbed["loc"] = [str(part) for part in scrubbed.get("loc", ())]
        sanitized.append(scrubbed)
    return sanitized


async def content_error_handler(request: Request, exc: ContentError) -> JSONResponse:
    content: Dict[str, Any] = {"error": exc.message}
    if isinstance(exc, JobExecutionError) and exc.job is not None:
        content["job"] = JobRead.model_validate(exc.job).model_dump(mode="json")
    return JSONResponse(status_code=status_code_for(exc), content=content)


async def request_validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    details = _sanitize_validation_errors(exc.errors())
    logger.warning(f"Request validation failed path={request.url.path} errors={details}")
    return JSONResponse(status_code=400, content={"error": "invalid request", "details": details})


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(f"Unhandled error path={request.url.path}: {exc}", exc_info=exc)
    return JSONResponse(status_code=500, content={"error": "internal server error"})


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ContentError, content_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
