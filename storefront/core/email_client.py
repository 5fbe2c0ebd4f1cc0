"""
Email client utilities for the storefront.

Responsibilities:
  - Read SMTP configuration (SMTP_* environment variables / .env).
  - Provide a single send_email(...) function for the SMTP notifier.
  - Support both TLS (STARTTLS) and SSL connections.

Typical .env configuration:

    NOTIFIER_BACKEND=smtp
    SMTP_HOST=smtp.gmail.com
    SMTP_PORT=465
    SMTP_USERNAME=orders@example.com
    SMTP_PASSWORD=<app password>
    SMTP_FROM_NAME=Ge'ez Shirts
    SMTP_USE_TLS=false
    SMTP_USE_SSL=true
"""

import smtplib
from email.message import EmailMessage
from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class SmtpSettings(BaseSettings):
    HOST: str | None = None
    PORT: int = 587
    USERNAME: str | None = None
    PASSWORD: str | None = None
    # Falls back to USERNAME when empty
    FROM_EMAIL: str = ""
    FROM_NAME: str = "Ge'ez Shirts"
    USE_TLS: bool = True
    USE_SSL: bool = False
    TIMEOUT_SECONDS: float = 30.0

    model_config = SettingsConfigDict(
        env_prefix="SMTP_",
        env_file=".env",
        extra="ignore",
    )

    @property
    def is_configured(self) -> bool:
        return bool(self.HOST and self.USERNAME and self.PASSWORD)

    @property
    def from_header(self) -> str:
        address = self.FROM_EMAIL or self.USERNAME or ""
        return f"{self.FROM_NAME} <{address}>" if address else self.FROM_NAME


@lru_cache
def get_smtp_settings() -> SmtpSettings:
    return SmtpSettings()


def _create_smtp_client(cfg: SmtpSettings) -> smtplib.SMTP:
    """
    Create and return an SMTP client configured for TLS or SSL.

    Priority:
      - USE_SSL → smtplib.SMTP_SSL (e.g., Gmail on 465).
      - Else → smtplib.SMTP + optional STARTTLS if USE_TLS.
    """
    if cfg.USE_SSL:
        return smtplib.SMTP_SSL(cfg.HOST, cfg.PORT, timeout=cfg.TIMEOUT_SECONDS)

    server = smtplib.SMTP(cfg.HOST, cfg.PORT, timeout=cfg.TIMEOUT_SECONDS)
    if cfg.USE_TLS:
        server.starttls()
    return server


def send_email(
    to_email: str,
    subject: str,
    text_body: str,
    html_body: str | None = None,
    cfg: SmtpSettings | None = None,
) -> None:
    """
    Send an email to a single recipient (blocking).

    Raises
    ------
    RuntimeError:
        If SMTP_HOST, SMTP_USERNAME or SMTP_PASSWORD is missing.
    smtplib.SMTPException:
        If the underlying SMTP connection or send fails.
    """
    cfg = cfg or get_smtp_settings()
    if not cfg.is_configured:
        raise RuntimeError(
            "SMTP is not configured correctly. "
            "Please set SMTP_HOST, SMTP_USERNAME, and SMTP_PASSWORD in .env."
        )

    msg = EmailMessage()
    msg["From"] = cfg.from_header
    msg["To"] = to_email
    msg["Subject"] = subject
    msg.set_content(text_body)
    if html_body:
        msg.add_alternative(html_body, subtype="html")

    server = _create_smtp_client(cfg)
    try:
        server.login(cfg.USERNAME, cfg.PASSWORD)  # type: ignore[arg-type]
        server.send_message(msg)
    finally:
        try:
            server.quit()
        except smtplib.SMTPException:
            # Connection is being torn down anyway.
            pass
