"""DRF exception handler producing the standard error body.

Every error response has the shape::

    {"type": "client_error", "errors": [{"code": "...", "detail": "...", "attr": null}]}

``type`` is ``validation_error`` for request validation problems,
``client_error`` for other 4xx responses and ``server_error`` for 5xx.
Domain exceptions raised by the Service Layer are mapped here so views
do not have to catch them one by one.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

import structlog
from pydantic import ValidationError as PydanticValidationError
from rest_framework import exceptions, status
from rest_framework.response import Response
from rest_framework.views import exception_handler

from shared.domain.exceptions import AlreadyExistsError, DomainException, NotFoundError

logger = structlog.get_logger(__name__)

DOMAIN_STATUS_CODES = {
    NotFoundError: status.HTTP_404_NOT_FOUND,
    AlreadyExistsError: status.HTTP_409_CONFLICT,
}


def _camel_to_snake(name: str) -> str:
    return "".join(f"_{c.lower()}" if c.isupper() else c for c in name).lstrip("_")


def _flatten(detail: Any, attr: Optional[str] = None) -> List[Dict[str, Any]]:
    """Turn DRF's nested ``detail`` structure into a flat list of errors."""
    if isinstance(detail, dict):
        errors = []
        for key, value in detail.items():
            nested = key if attr is None else f"{attr}.{key}"
            if key == "non_field_errors":
                nested = attr
            errors.extend(_flatten(value, nested))
        return errors
    if isinstance(detail, list):
        errors = []
        for index, value in enumerate(detail):
            nested = attr
            if isinstance(value, (dict, list)):
                nested = f"{attr}.{index}" if attr else str(index)
            errors.extend(_flatten(value, nested))
        return errors
    return [
        {
            "code": getattr(detail, "code", "error"),
            "detail": str(detail),
            "attr": attr,
        }
    ]


def _error_type(status_code: int, exc: Exception) -> str:
    if status_code >= 500:
        return "server_error"
    if isinstance(exc, (exceptions.ValidationError, PydanticValidationError)):
        return "validation_error"
    return "client_error"


def _domain_status(exc: DomainException) -> int:
    for klass, code in DOMAIN_STATUS_CODES.items():
        if isinstance(exc, klass):
            return code
    return status.HTTP_400_BAD_REQUEST


def standard_exception_handler(exc: Exception, context: Dict[str, Any]) -> Response:
    """``REST_FRAMEWORK["EXCEPTION_HANDLER"]`` entry point."""
    view = context.get("view")
    view_name = type(view).__name__ if view is not None else None

    if isinstance(exc, DomainException):
        status_code = _domain_status(exc)
        logger.info(
            "api.domain_error",
            view=view_name,
            error=type(exc).__name__,
            status_code=status_code,
        )
        return Response(
            {
                "type": "client_error",
                "errors": [
                    {
                        "code": _camel_to_snake(type(exc).__name__),
                        "detail": str(exc),
                        "attr": None,
                    }
                ],
            },
            status=status_code,
        )

    if isinstance(exc, PydanticValidationError):
        errors = [
            {
                "code": err["type"],
                "detail": err["msg"],
                "attr": ".".join(str(part) for part in err["loc"]) or None,
            }
            for err in exc.errors()
        ]
        return Response(
            {"type": "validation_error", "errors": errors},
            status=status.HTTP_400_BAD_REQUEST,
        )

    response = exception_handler(exc, context)
    if response is None:
        logger.exception("api.unhandled_error", view=view_name)
        return Response(
            {
                "type": "server_error",
                "errors": [
                    {"code": "error", "detail": "A server error occurred.", "attr": None}
                ],
            },
            status=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    detail = response.data
    if not isinstance(exc, exceptions.ValidationError) and isinstance(detail, dict):
        detail = detail.get("detail", detail)
    response.data = {
        "type": _error_type(response.status_code, exc),
        "errors": _flatten(detail),
    }
    return response
