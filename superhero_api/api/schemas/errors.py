"""Body returned by failing requests.

Conflicts, rejected updates, invalid bodies, unknown routes and unexpected
exceptions all answer with an ``ErrorResponse``. Superhero lookups that
find nothing answer 404 without a body.
"""

from datetime import UTC, datetime
from typing import Any

from pydantic import BaseModel, Field


class ServiceInfo(BaseModel):
    """Which deployment of the service produced the error."""

    name: str = Field(examples=["Superhero API"])
    version: str = Field(examples=["1.0.0"])
    environment: str = Field(examples=["production"])


class ErrorResponse(BaseModel):
    """Error envelope.

    ``debug_info`` is only filled in outside production, for unexpected
    exceptions.
    """

    error_code: str = Field(
        description="Stable code clients can branch on",
        examples=["CONFLICT", "INVALID_REQUEST", "VALIDATION_ERROR"],
    )
    message: str = Field(
        description="Explanation meant for people",
        examples=["Cannot create the Id because it already exists."],
    )
    details: dict[str, Any] | None = Field(
        default=None,
        description="Error specific data, such as the superhero ID or field errors",
        examples=[{"superhero_id": 1}],
    )
    correlation_id: str | None = Field(
        default=None, description="Value of the X-Correlation-ID response header"
    )
    request_id: str | None = Field(
        default=None, description="Value of the X-Request-ID response header"
    )
    timestamp: datetime = Field(default_factory=lambda: datetime.now(UTC))
    service_info: ServiceInfo | None = None
    debug_info: dict[str, Any] | None = None
