"""
Email service using fastapi-mail.

Only one message exists: the "new lead" notification sent to the business
inbox. It runs through FastAPI BackgroundTasks, so the visitor never waits
for SMTP, and an SMTP failure is logged without touching the response.

fastapi-mail settings:
  - MAIL_STARTTLS=True, MAIL_SSL_TLS=False for port 587
  - MAIL_SSL_TLS=True, MAIL_STARTTLS=False for port 465
"""
import html
import logging
from datetime import datetime, timezone
from typing import Optional

from fastapi_mail import FastMail, MessageSchema, ConnectionConfig, MessageType
from fastapi_mail.errors import ConnectionErrors

from app.config import settings

logger = logging.getLogger(__name__)

# Built once at import, shared by every send
mail_config = ConnectionConfig(
    MAIL_USERNAME=settings.mail_username,
    MAIL_PASSWORD=settings.mail_password,
    MAIL_FROM=settings.mail_from,
    MAIL_PORT=settings.mail_port,
    MAIL_SERVER=settings.mail_server,
    MAIL_STARTTLS=settings.mail_port == 587,
    MAIL_SSL_TLS=settings.mail_port == 465,
    USE_CREDENTIALS=bool(settings.mail_username),
    VALIDATE_CERTS=True,
    SUPPRESS_SEND=1 if settings.mail_suppress_send else 0,
)

fast_mail = FastMail(mail_config)


def build_lead_body(name: str, email: str, phone: Optional[str], message: Optional[str]) -> str:
    timestamp = datetime.now(timezone.utc).strftime("%Y-%m-%d %H:%M UTC")
    return (
        "<h1>New Lead Captured</h1>"
        f"<p><strong>Name:</strong> {html.escape(name)}</p>"
        f"<p><strong>Email:</strong> {html.escape(email)}</p>"
        f"<p><strong>Phone:</strong> {html.escape(phone or 'N/A')}</p>"
        f"<p><strong>Message/Purpose:</strong><br/>{html.escape(message or 'N/A')}</p>"
        f"<p><small>Timestamp: {timestamp}</small></p>"
    )


async def send_lead_notification(
    name: str,
    email: str,
    phone: Optional[str] = None,
    message: Optional[str] = None,
) -> None:
    """Notify the business inbox. No-op when LEAD_NOTIFY_EMAIL is unset."""
    if not settings.lead_notify_email:
        return

    mail = MessageSchema(
        subject=f"New Lead: {name}",
        recipients=[settings.lead_notify_email],
        body=build_lead_body(name, email, phone, message),
        subtype=MessageType.html,
    )
    try:
        await fast_mail.send_message(mail)
    except ConnectionErrors as exc:
        logger.error(f"Lead notification for {email} failed: {exc}")
    else:
        logger.info(f"Lead notification sent for {email}")
