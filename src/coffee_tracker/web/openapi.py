from typing import Any

from fastapi import FastAPI
from fastapi.openapi.utils import get_openapi
from pydantic import BaseModel, Field

from coffee_tracker.core.modules.session.models import SESSION_COOKIE_NAME


def set_custom_openapi(app: FastAPI) -> None:
    def custom_openapi() -> dict[str, Any]:
        if app.openapi_schema:
            return app.openapi_schema

        openapi_schema = get_openapi(
            title="Coffee Tracker API",
            version="0.1.0",
            summary="Anonymous coffee consumption tracking with daily caffeine limits",
            routes=app.routes,
        )

        openapi_schema.setdefault("components", {})["securitySchemes"] = {
            "SessionCookie": {
                "type": "apiKey",
                "in": "cookie",
                "name": SESSION_COOKIE_NAME,
                "description": "Anonymous session token; issued automatically when missing or invalid",
            },
        }

        app.openapi_schema = openapi_schema
        return app.openapi_schema

    app.openapi = custom_openapi  # type: ignore[method-assign]


class ErrorResponse(BaseModel):
    """Standard error response format."""

    message: str = Field(..., description="Human-readable error message")
    type: str = Field(..., description="Machine-readable error type")

    model_config = {
        "json_schema_extra": {
            "examples": [
                {"message": "Invalid coffee type: Tea", "type": "validation_error"},
                {"message": "An unexpected error occurred.", "type": "internal_server_error"},
            ]
        }
    }


class BusinessRuleErrorResponse(ErrorResponse):
    """Error response for rejected entries, with the numbers behind the rejection."""

    rule: str = Field(..., description="Broken rule: InvalidTimestamp, DailyEntryLimit or DailyCaffeineLimit")

    model_config = {
        "extra": "allow",
        "json_schema_extra": {
            "examples": [
                {
                    "message": "Daily entry limit exceeded. Current: 10, Maximum allowed: 10",
                    "type": "business_rule_violation",
                    "rule": "DailyEntryLimit",
                    "current": 10,
                    "max": 10,
                },
                {
                    "message": "Daily caffeine limit would be exceeded. Current: 950mg, Adding: 156mg, Maximum allowed: 1000mg",
                    "type": "business_rule_violation",
                    "rule": "DailyCaffeineLimit",
                    "current": 950,
                    "adding": 156,
                    "max": 1000,
                },
            ]
        },
    }
