"""
Email Sender - Password Reset Use Case

validate -> render -> dispatch -> map. One attempt per request; every
failure is reported straight back to the caller, who owns retries.

Outcome mapping:
- missing to/resetLink/login   -> 400 {"error": "Missing required fields: ..."}
- provider rejected message    -> 400 {"error": <provider error>}
- delivered                    -> 200 {"success": true, "messageId": <id>}
- anything raised on the way   -> 500 {"error": "Internal server error", "message": ...}
"""

import logging
from typing import Any, Dict, Optional, Tuple

from sentry_integration import capture_exception

from .email_client import EmailClient, EmailMessage
from .email_schema import ResetEmailRequest, internal_error_body, missing_fields_body
from .template_engine import RESET_EMAIL_SUBJECT, render_reset_email

logger = logging.getLogger(__name__)


class ResetEmailSender:
    """Sends password reset emails through the shared email client."""

    def __init__(self, client: EmailClient, from_address: Optional[str] = None):
        self.client = client
        self.from_address = from_address or client.from_address

    async def send_reset_email(self, request: ResetEmailRequest) -> Tuple[int, Dict[str, Any]]:
        """
        Handle one password reset request.

        Returns:
            (HTTP status code, JSON body)
        """
        if request.missing_fields():
            logger.warning(
                "Reset email rejected: missing %s", ", ".join(request.missing_fields())
            )
            return 400, missing_fields_body()

        try:
            logger.info(f"Sending password reset email to: {request.to}")

            html = render_reset_email(request.login, request.resetLink)
            result = await self.client.send_email(EmailMessage(
                to=request.to,
                subject=RESET_EMAIL_SUBJECT,
                html=html,
                from_address=self.from_address,
            ))

            if not result.success:
                logger.error(f"Resend error: {result.error}")
                return 400, {"error": result.error}

            logger.info(f"Email sent successfully: {result.id}")
            return 200, {"success": True, "messageId": result.id}

        except Exception as e:
            logger.error(f"Server error: {e}", exc_info=True)
            capture_exception(e, operation="send_reset_email")
            return 500, internal_error_body(e)
