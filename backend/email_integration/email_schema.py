"""
Email Schema - API Models

Request/response models for the password reset endpoint. Field names
follow the wire format used by the auth backend (camelCase).
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


MISSING_FIELDS_ERROR = "Missing required fields: to, resetLink, login"

INTERNAL_ERROR = "Internal server error"

REQUIRED_FIELDS = ("to", "resetLink", "login")


class ResetEmailRequest(BaseModel):
    """
    Request model for sending a password reset email.

    Values are taken as sent; a field that is absent or falsy (``""``,
    ``false``, ``0``, ``[]``, ``null``) counts as missing.
    """
    model_config = ConfigDict(extra="ignore")

    to: Optional[Any] = Field(None, description="Recipient email address")
    resetLink: Optional[Any] = Field(None, description="Password reset URL, embedded verbatim")
    login: Optional[Any] = Field(None, description="Account login, embedded verbatim")

    @classmethod
    def from_payload(cls, payload: Any) -> "ResetEmailRequest":
        """Build from a decoded JSON body; anything but an object has no fields."""
        if not isinstance(payload, dict):
            return cls()
        return cls.model_validate(payload)

    def missing_fields(self) -> List[str]:
        return [name for name in REQUIRED_FIELDS if not getattr(self, name)]


class SendResetEmailResponse(BaseModel):
    """Response model for a delivered send"""
    success: bool = True
    messageId: str


class ErrorResponse(BaseModel):
    """Response model for validation, provider and internal errors"""
    error: Any
    message: Optional[str] = None


class HealthResponse(BaseModel):
    status: str = "ok"
    service: str = "email-service"


def missing_fields_body() -> Dict[str, Any]:
    return {"error": MISSING_FIELDS_ERROR}


def internal_error_body(exc: BaseException) -> Dict[str, Any]:
    return {"error": INTERNAL_ERROR, "message": str(exc)}
