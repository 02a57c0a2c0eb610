"""
Email Client - Resend Provider Implementation

This module provides email sending via the Resend API.

Resend API Reference:
- Endpoint: POST https://api.resend.com/emails
- Auth: Bearer token in Authorization header
- Response: { id: "message_id" }

A rejected message comes back from the SDK as a ``ResendError``; it is
turned into ``SendResult.error`` carrying the provider's error object.
Anything else (network failures, an unparseable reply, a response without
an id) propagates.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

import resend
from resend.exceptions import ResendError
from fastapi.concurrency import run_in_threadpool

from config import get_settings

logger = logging.getLogger(__name__)


@dataclass
class EmailMessage:
    """Represents an email message to send"""
    to: str
    subject: str
    html: str
    from_address: Optional[str] = None


@dataclass
class SendResult:
    """Outcome of a single send: provider message id or provider error"""
    id: Optional[str] = None
    error: Optional[Dict[str, Any]] = None

    @property
    def success(self) -> bool:
        return self.error is None


def is_provider_rejection(exc: ResendError) -> bool:
    """
    True when the error mirrors an HTTP error response from the API.

    The SDK also raises ResendError when it cannot parse the API reply;
    that has no usable error object and is treated as unexpected.
    """
    try:
        code = int(getattr(exc, "code", None))
    except (TypeError, ValueError):
        return False
    if not 400 <= code < 600:
        return False
    return "failed to parse" not in str(getattr(exc, "message", "") or exc).lower()


def provider_error_payload(exc: ResendError) -> Dict[str, Any]:
    """Shape a ResendError like the error object of the Resend HTTP API."""
    return {
        "statusCode": getattr(exc, "code", None),
        "name": getattr(exc, "error_type", None),
        "message": getattr(exc, "message", None) or str(exc),
    }


class EmailClient:
    """
    Email Client - Resend Provider Implementation.

    Built once at startup and shared across requests; nothing on the
    instance changes after construction.

    Usage:
        client = EmailClient()
        result = await client.send_email(EmailMessage(
            to="user@example.com",
            subject="Hello",
            html="<p>Welcome!</p>"
        ))
    """

    provider = "resend"

    def __init__(
        self,
        api_key: Optional[str] = None,
        from_address: Optional[str] = None,
    ):
        """
        Initialize email client.

        Args:
            api_key: Resend API key (defaults to RESEND_API_KEY)
            from_address: Default sender address (defaults to FROM_EMAIL)
        """
        settings = get_settings()
        self.api_key = api_key if api_key is not None else settings.RESEND_API_KEY
        self.from_address = from_address if from_address is not None else settings.FROM_EMAIL

        if self.api_key:
            resend.api_key = self.api_key
            logger.info(f"Email client initialized (provider: {self.provider})")
        else:
            logger.warning("Email client not initialized - RESEND_API_KEY not set")

    def is_configured(self) -> bool:
        """Check if email client is properly configured."""
        return bool(self.api_key and self.from_address)

    def get_status(self) -> Dict[str, Any]:
        """Get client configuration status."""
        return {
            "provider": self.provider,
            "configured": self.is_configured(),
            "from_address": self.from_address or "Not set",
            "api_key_set": bool(self.api_key)
        }

    async def send_email(self, message: EmailMessage) -> SendResult:
        """
        Send an email via Resend.

        Single attempt; the caller decides whether to retry.

        Args:
            message: EmailMessage to send

        Returns:
            SendResult with the provider message id or provider error
        """
        params: Dict[str, Any] = {
            "from": message.from_address or self.from_address,
            "to": message.to,
            "subject": message.subject,
            "html": message.html,
        }

        try:
            response = await run_in_threadpool(resend.Emails.send, params)
        except ResendError as e:
            if not is_provider_rejection(e):
                raise
            return SendResult(error=provider_error_payload(e))

        provider_msg_id = None
        if isinstance(response, dict):
            provider_msg_id = response.get("id")
        elif hasattr(response, "id"):
            provider_msg_id = response.id

        if not provider_msg_id:
            raise ValueError("Resend response did not contain a message id")

        return SendResult(id=provider_msg_id)
