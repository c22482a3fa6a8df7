from typing import Any

from fastapi import FastAPI
from fastapi.openapi.utils import get_openapi
from pydantic import BaseModel, Field


def set_custom_openapi(app: FastAPI) -> None:
    def custom_openapi() -> dict[str, Any]:
        if app.openapi_schema:
            return app.openapi_schema

        openapi_schema = get_openapi(
            title="stampverify API",
            version="0.1.0",
            summary="Wallet address verification for credential stamps",
            routes=app.routes,
        )

        # Session token travels in the request body or query, not in headers
        openapi_schema["security"] = []

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
                {"message": "session not found or expired", "type": "not_found"},
                {"message": "authentication not passed", "type": "authentication_error"},
                {"message": "Upstream service returned status 500", "type": "upstream_error"},
            ]
        }
    }
