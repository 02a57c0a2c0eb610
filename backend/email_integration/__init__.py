"""
Email Integration Module

Password reset emails delivered through Resend.

Features:
- Fixed HTML reset template with literal substitution
- Single-attempt send via the Resend API
- Provider errors passed through to the caller unchanged
"""

from .email_client import EmailClient, EmailMessage, SendResult
from .email_sender import ResetEmailSender
from .email_router import router
from .template_engine import RESET_EMAIL_SUBJECT, render_reset_email

__all__ = [
    # Client
    'EmailClient',
    'EmailMessage',
    'SendResult',
    # Sender
    'ResetEmailSender',
    'router',
    # Template
    'RESET_EMAIL_SUBJECT',
    'render_reset_email',
]
