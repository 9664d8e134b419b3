"""
Outgoing email through Resend.

Sending never raises: every outcome is reported as an EmailResult so callers
can decide how to surface a failed delivery.
"""
import asyncio
import logging
from html import escape
from typing import List, Optional

import resend
from pydantic import BaseModel

from gallery_admin.config import settings

logger = logging.getLogger(__name__)

INVITATION_SUBJECT = "You're Invited to Join The Friendship Center Gallery"


class EmailResult(BaseModel):
    success: bool
    message_id: Optional[str] = None
    error: Optional[str] = None


class EmailSender:
    """Sends HTML email with the Resend API."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        from_address: Optional[str] = None,
        bcc: Optional[List[str]] = None,
    ):
        self.api_key = api_key if api_key is not None else settings.RESEND_API_KEY
        self.from_address = from_address or settings.EMAIL_FROM_ARTISTS
        self.bcc = list(bcc if bcc is not None else settings.EMAIL_BCC)

    async def send(self, to: List[str], subject: str, html: str) -> EmailResult:
        if not self.api_key:
            logger.warning(f"RESEND_API_KEY not configured, email '{subject}' to {to} not sent")
            return EmailResult(success=False, error="Email service not configured")

        params = {
            "from": self.from_address,
            "to": to,
            "subject": subject,
            "html": html,
        }
        if self.bcc:
            params["bcc"] = self.bcc

        resend.api_key = self.api_key
        try:
            response = await asyncio.to_thread(resend.Emails.send, params)
        except Exception as e:
            logger.error(f"Failed to send email '{subject}' to {to}: {str(e)}", exc_info=True)
            return EmailResult(success=False, error=str(e))

        message_id = response.get("id") if isinstance(response, dict) else None
        logger.info(f"Email '{subject}' sent to {to} (id: {message_id})")
        return EmailResult(success=True, message_id=message_id)


def render_artist_invitation(artist_name: str, admin_name: str, invitation_code: str, setup_url: str) -> str:
    """HTML body of the artist invitation email. All values are escaped."""
    return f"""\
<div style="font-family: Arial, sans-serif; color: #1f2937; max-width: 600px; margin: 0 auto;">
  <h1 style="font-size: 26px;">You're Invited to Join Our Gallery!</h1>
  <p>Hello {escape(artist_name)},</p>
  <p>{escape(admin_name)} has invited you to become an artist at The Friendship Center Gallery.
     We're excited to showcase your work and help you connect with art enthusiasts in our community.</p>
  <p style="background: #f3f4f6; padding: 12px 16px; border-radius: 6px;">
    Your invitation code: <strong>{escape(invitation_code)}</strong>
  </p>
  <ul>
    <li>Set up your artist account</li>
    <li>Create your artist profile with bio and specialty</li>
    <li>Upload your first artwork to the gallery</li>
  </ul>
  <p>
    <a href="{escape(setup_url, quote=True)}"
       style="background: #1f2937; color: #ffffff; padding: 12px 20px; border-radius: 6px; text-decoration: none;">
      Set Up Your Artist Account
    </a>
  </p>
  <p>Welcome to our creative community!<br>The Friendship Center Gallery Team</p>
</div>
"""


async def send_artist_invitation(
    sender: EmailSender,
    artist_name: str,
    artist_email: str,
    invitation_code: str,
    admin_name: str,
    setup_url: str,
) -> EmailResult:
    html = render_artist_invitation(artist_name, admin_name, invitation_code, setup_url)
    return await sender.send([f"{artist_name} <{artist_email}>"], INVITATION_SUBJECT, html)


def get_email_sender() -> EmailSender:
    """FastAPI dependency providing the configured email sender."""
    return EmailSender()
