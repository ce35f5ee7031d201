import time
from typing import Any, Dict
from jinja2 import Environment, FileSystemLoader
from pathlib import Path
import smtplib
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from app.core.config import settings
import logging

logger = logging.getLogger(__name__)

VERIFY_EMAIL_TEMPLATE = "verify_email.html"

class EmailService:
    max_retries = 3
    retry_delay_seconds = 2

    def __init__(self):
        self.template_dir = Path(__file__).resolve().parent.parent / "email-templates" / "src"
        self.env = Environment(loader=FileSystemLoader(str(self.template_dir)), autoescape=True)

    def render_template(self, template_name: str, context: Dict[str, Any]) -> str:
        template = self.env.get_template(template_name)
        return template.render(**context)

    def build_message(self, *, email_to: str, subject: str, html_content: str) -> MIMEMultipart:
        msg = MIMEMultipart("alternative")
        msg["Subject"] = subject
        msg["From"] = f"{settings.EMAILS_FROM_NAME} <{settings.EMAILS_FROM_EMAIL}>"
        msg["To"] = email_to
        msg.attach(MIMEText(html_content, "html"))
        return msg

    def send_email(
        self,
        *,
        email_to: str,
        subject: str,
        template_name: str,
        context: Dict[str, Any] | None = None,
    ) -> None:
        assert settings.EMAILS_FROM_EMAIL, "EMAILS_FROM_EMAIL is not configured"
        if not settings.SMTP_HOST:
            logger.warning(f"SMTP_HOST not configured, skipping email to {email_to}")
            return

        html_content = self.render_template(template_name, context or {})
        msg = self.build_message(email_to=email_to, subject=subject, html_content=html_content)

        for attempt in range(self.max_retries):
            try:
                logger.info(f"Connecting to SMTP server: {settings.SMTP_HOST}:{settings.SMTP_PORT} (Attempt {attempt+1}/{self.max_retries})")
                with smtplib.SMTP(settings.SMTP_HOST, settings.SMTP_PORT, timeout=60) as server:
                    server.ehlo()
                    if settings.SMTP_TLS:
                        server.starttls()
                        server.ehlo()
                    if settings.SMTP_USER and settings.SMTP_PASSWORD:
                        server.login(settings.SMTP_USER, settings.SMTP_PASSWORD)
                    server.sendmail(settings.EMAILS_FROM_EMAIL, [email_to], msg.as_string())
                logger.info(f"Email sent to {email_to} with type: {template_name}")
                return
            except (smtplib.SMTPServerDisconnected, smtplib.SMTPConnectError, smtplib.SMTPResponseException) as e:
                logger.warning(f"SMTP connection error on attempt {attempt+1}: {e}")
                if attempt == self.max_retries - 1:
                    logger.error(f"Failed to send email to {email_to} after {self.max_retries} attempts")
                    raise
                time.sleep(self.retry_delay_seconds)

    def verification_context(self, name: str, token: str) -> Dict[str, Any]:
        return {
            "project_name": settings.PROJECT_NAME,
            "name": name,
            "link": f"{settings.FRONTEND_URL}/auth/verify?token={token}",
            "valid_hours": settings.VERIFICATION_TOKEN_EXPIRE_HOURS,
        }

email_service = EmailService()
