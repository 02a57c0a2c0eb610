"""
Unit Tests for the password reset email template

Run with: pytest tests/test_template_engine.py -v
"""

import pytest

from email_integration.template_engine import (
    RESET_BUTTON_LABEL,
    RESET_EMAIL_SUBJECT,
    render_reset_email,
)

LOGIN = "anna@example.com"
RESET_LINK = "https://shop.example.com/reset?token=YW5uYUBleGFtcGxlLmNvbQ=="


class TestRenderResetEmail:
    """Test render_reset_email."""

    def test_is_complete_html_document(self):
        """Rendered body is a full HTML document."""
        html = render_reset_email(LOGIN, RESET_LINK)

        assert html.startswith("<!DOCTYPE html>")
        assert "<html>" in html
        assert "<head>" in html and "</head>" in html
        assert "<body" in html and "</body>" in html
        assert html.rstrip().endswith("</html>")

    def test_contains_login(self):
        """Login appears verbatim."""
        html = render_reset_email(LOGIN, RESET_LINK)

        assert f"<strong>{LOGIN}</strong>" in html

    def test_reset_link_in_button_and_plain_text(self):
        """Reset link is the button href and is repeated as text."""
        html = render_reset_email(LOGIN, RESET_LINK)

        assert f'<a href="{RESET_LINK}"' in html
        assert f'<span style="word-break: break-all;">{RESET_LINK}</span>' in html
        assert html.count(RESET_LINK) == 2

    def test_static_blocks(self):
        """Header, button label, disclaimer and footer are present."""
        html = render_reset_email(LOGIN, RESET_LINK)

        assert "PASSWORD RESET" in html
        assert "COSMETICS SHOP" in html
        assert RESET_BUTTON_LABEL in html
        assert "Если вы не запрашивали сброс пароля" in html
        assert "Cosmetics Shop - Your Beauty Destination" in html

    def test_rendering_is_idempotent(self):
        """Same input renders byte-identical output."""
        first = render_reset_email(LOGIN, RESET_LINK)
        second = render_reset_email(LOGIN, RESET_LINK)

        assert first == second

    def test_different_inputs_render_differently(self):
        html_a = render_reset_email("a", RESET_LINK)
        html_b = render_reset_email("b", RESET_LINK)

        assert html_a != html_b

    @pytest.mark.parametrize("login,reset_link", [
        ("", ""),
        ("<b>bold</b>", "javascript:alert(1)"),
        ('"quoted" & more', "https://x.test/?a=1&b=2"),
    ])
    def test_values_are_not_escaped(self, login, reset_link):
        """Markup and special characters pass through unchanged."""
        html = render_reset_email(login, reset_link)

        assert f"<strong>{login}</strong>" in html
        assert f'<a href="{reset_link}"' in html
        assert "&amp;" not in html
        assert "&lt;" not in html

    def test_subject(self):
        assert RESET_EMAIL_SUBJECT == "Сброс пароля - Cosmetics Shop"
