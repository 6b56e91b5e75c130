import logging
from typing import Any, cast

from fastapi import Request
from fastapi.exception_handlers import request_validation_exception_handler
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, Response

from coffee_tracker.errors import BusinessRuleError, NotFoundError, ValidationError
from coffee_tracker.web.deps import apply_pending_session_cookie

logger = logging.getLogger(__name__)


def create_json_error_response(
    status_code: int, message: str, error_type: str | None = None, extra: dict[str, Any] | None = None
) -> JSONResponse:
    """Create JSON error response with optional type and context for machine parsing."""
    content: dict[str, Any] = {"message": message}
    if error_type:
        content["type"] = error_type
    if extra:
        content.update(extra)
    return JSONResponse(status_code=status_code, content=content)


async def user_error_handler(request: Request, exc: Exception) -> Response:
    """Handle all UserError subclasses with appropriate status codes."""
    if isinstance(exc, BusinessRuleError):
        response = create_json_error_response(
            status_code=422,
            message=str(exc),
            error_type="business_rule_violation",
            extra={"rule": exc.rule_name, **exc.details()},
        )
        apply_pending_session_cookie(request, response)
        return response

    if isinstance(exc, NotFoundError):
        status_code = 404
        error_type = "not_found"
    elif isinstance(exc, ValidationError):
        status_code = 400
        error_type = "validation_error"
    else:
        # Default for any other UserError subclass
        status_code = 400
        error_type = "bad_request"

    response = create_json_error_response(status_code=status_code, message=str(exc), error_type=error_type)
    apply_pending_session_cookie(request, response)
    return response


async def request_validation_error_handler(request: Request, exc: Exception) -> Response:
    """FastAPI's default 422 for malformed requests, keeping a newly issued session cookie."""
    response = await request_validation_exception_handler(request, cast(RequestValidationError, exc))
    apply_pending_session_cookie(request, response)
    return response


async def general_exception_handler(request: Request, exc: Exception) -> Response:
    """Handle unexpected errors (500) without exposing their details."""
    logger.exception("Unexpected error: %s", exc)
    response = create_json_error_response(
        status_code=500, message="An unexpected error occurred.", error_type="internal_server_error"
    )
    apply_pending_session_cookie(request, response)
    return response
