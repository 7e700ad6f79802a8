"""Build the JSON bodies returned by the application's exception handlers."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from fastapi import status
from fastapi.responses import JSONResponse

from movietrack.schemas.error import (
    ErrorResponse,
    ErrorType,
    ValidationErrorDetail,
    ValidationErrorResponse,
)
from movietrack.utils.request_context import get_request_id

__all__ = [
    "build_error_response",
    "build_validation_error_response",
    "error_json",
]


def build_error_response(
    *,
    error_type: ErrorType,
    message: str,
    detail: str,
    status_code: int,
    path: str,
    retry_after: int | None = None,
) -> ErrorResponse:
    return ErrorResponse(
        error_type=error_type,
        message=message,
        detail=detail,
        status_code=status_code,
        request_id=get_request_id() or None,
        path=path,
        retry_after=retry_after,
    )


def build_validation_error_response(
    *,
    raw_errors: Iterable[Mapping[str, Any]],
    path: str,
) -> ValidationErrorResponse:
    """Flatten pydantic error dicts into ``field``/``message``/``value`` rows."""

    errors = [
        ValidationErrorDetail(
            field=".".join(str(part) for part in error["loc"]),
            message=error["msg"],
            value=error.get("input"),
        )
        for error in raw_errors
    ]
    return ValidationErrorResponse(
        message="Request validation failed",
        detail=f"{len(errors)} validation error(s)",
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        request_id=get_request_id() or None,
        path=path,
        errors=errors,
    )


def error_json(payload: ErrorResponse) -> JSONResponse:
    headers = None
    if payload.retry_after is not None:
        headers = {"Retry-After": str(payload.retry_after)}
    return JSONResponse(
        status_code=payload.status_code,
        content=payload.model_dump(mode="json"),
        headers=headers,
    )
