from __future__ import annotations

import logging
import smtplib
from email.message import EmailMessage

logger = logging.getLogger(__name__)

PASSWORD_RESET_SUBJECT = "Reset your password"


class SmtpPasswordResetMailer:
    def __init__(
        self,
        *,
        host: str | None,
        port: int = 587,
        user: str | None = None,
        password: str | None = None,
        sender: str | None = None,
        timeout_seconds: float = 10.0,
    ) -> None:
        self._host = host
        self._port = port
        self._user = user
        self._password = password
        self._sender = sender or user
        self._timeout_seconds = timeout_seconds

    @property
    def enabled(self) -> bool:
        return bool(self._host and self._sender)

    def send_password_reset(self, *, email: str, reset_url: str, expires_in_minutes: int) -> bool:
        if not self.enabled:
            logger.warning("SMTP is not configured; password reset email not sent", extra={"email": email})
            return False

        message = EmailMessage()
        message["Subject"] = PASSWORD_RESET_SUBJECT
        message["From"] = self._sender
        message["To"] = email
        message.set_content(
            "We received a request to reset your password.\n\n"
            f"Open this link to choose a new password: {reset_url}\n\n"
            f"The link expires in {expires_in_minutes} minutes. "
            "If you did not request a reset you can ignore this email.\n"
        )

        with smtplib.SMTP(self._host, self._port, timeout=self._timeout_seconds) as client:
            client.starttls()
            if self._user and self._password:
                client.login(self._user, self._password)
            client.send_message(message)
        logger.info("Password reset email sent", extra={"email": email})
        return True
