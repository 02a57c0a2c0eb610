"""
Email Integration - API Router

- POST /send-reset-email - Send a password reset email via Resend

No caller authentication: the service is reachable only by the
application's own auth backend.
"""

import logging
from typing import Any

from fastapi import APIRouter, Body, Request
from fastapi.responses import JSONResponse

from .email_client import EmailClient
from .email_schema import ErrorResponse, ResetEmailRequest, SendResetEmailResponse
from .email_sender import ResetEmailSender

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Email"])


def get_email_client(request: Request) -> EmailClient:
    """Shared client built during application startup."""
    return request.app.state.email_client


@router.post(
    "/send-reset-email",
    response_model=SendResetEmailResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def send_reset_email(
    request: Request,
    payload: Any = Body(None),
):
    """
    Send a password reset email.

    Body: `{to, resetLink, login}`, all required and non-empty. The body is
    read loosely so that any missing or falsy field answers 400.
    """
    sender = ResetEmailSender(client=get_email_client(request))
    status_code, body = await sender.send_reset_email(ResetEmailRequest.from_payload(payload))
    return JSONResponse(status_code=status_code, content=body)
