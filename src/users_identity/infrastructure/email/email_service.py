"""SMTP email adapter for activation and password reset mails."""

import logging
import smtplib
import ssl
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText

from users_config.settings import Settings
from users_identity.application.ports import Notifier

logger = logging.getLogger(__name__)

ACTIVATION_SUBJECT = "Activate your account"

ACTIVATION_TEXT = """Hello,

Thanks for signing up. Please confirm your email address by opening
the link below:
{activation_link}

If you didn't create an account, you can safely ignore this email.
"""

ACTIVATION_HTML = """
<!DOCTYPE html>
<html>
<head>
    <meta charset="utf-8">
</head>
<body style="font-family: sans-serif; margin: 0; padding: 20px;">
    <div style="max-width: 600px; margin: 0 auto;">
        <h2>Activate your account</h2>
        <p>Thanks for signing up. Please confirm your email address.</p>
        <p><a href="{activation_link}">Activate account</a></p>
        <p style="color: #6b7280; font-size: 14px;">Or paste this link into your browser:</p>
        <p style="word-break: break-all; font-size: 14px;">{activation_link}</p>
    </div>
</body>
</html>
"""

PASSWORD_RESET_SUBJECT = "Password reset request"

PASSWORD_RESET_TEXT = """Hello,

Someone asked to reset the password of your account.

Open the link below to choose a new password (valid for 1 hour):
{reset_link}

If you didn't request this, you can safely ignore this email.
"""

PASSWORD_RESET_HTML = """
<!DOCTYPE html>
<html>
<head>
    <meta charset="utf-8">
</head>
<body style="font-family: sans-serif; margin: 0; padding: 20px;">
    <div style="max-width: 600px; margin: 0 auto;">
        <h2>Password reset request</h2>
        <p>Open the link below to choose a new password. It is valid for 1 hour.</p>
        <p><a href="{reset_link}">Reset password</a></p>
        <p style="color: #6b7280; font-size: 14px;">If you didn't request this, you can safely ignore this email.</p>
    </div>
</body>
</html>
"""


class EmailService(Notifier):
    """SMTP notifier.

    With ``smtp_enabled`` off, messages are logged and dropped so local
    setups work without a mail server. Delivery errors are re-raised.
    """

    def __init__(self, settings: Settings):
        self._settings = settings

    def send_activation_email(self, to_email: str, activation_link: str) -> None:
        self._deliver(
            to_email=to_email,
            subject=ACTIVATION_SUBJECT,
            text_body=ACTIVATION_TEXT.format(activation_link=activation_link),
            html_body=ACTIVATION_HTML.format(activation_link=activation_link),
        )

    def send_password_reset_email(self, to_email: str, reset_link: str) -> None:
        self._deliver(
            to_email=to_email,
            subject=PASSWORD_RESET_SUBJECT,
            text_body=PASSWORD_RESET_TEXT.format(reset_link=reset_link),
            html_body=PASSWORD_RESET_HTML.format(reset_link=reset_link),
        )

    def _deliver(
        self,
        to_email: str,
        subject: str,
        text_body: str,
        html_body: str,
    ) -> None:
        if not self._settings.smtp_enabled:
            # Links carry live tokens and are never logged
            logger.warning(
                "SMTP disabled, '%s' email not sent to %s",
                subject,
                to_email,
            )
            return

        message = self._create_message(to_email, subject, text_body, html_body)
        self._send_email(to_email, message)

    def _create_message(
        self,
        to_email: str,
        subject: str,
        text_body: str,
        html_body: str | None = None,
    ) -> MIMEMultipart:
        msg = MIMEMultipart("alternative")
        msg["Subject"] = subject
        settings = self._settings
        msg["From"] = f"{settings.smtp_from_name} <{settings.smtp_from_email}>"
        msg["To"] = to_email

        msg.attach(MIMEText(text_body, "plain"))
        if html_body:
            msg.attach(MIMEText(html_body, "html"))

        return msg

    def _send_email(self, to_email: str, message: MIMEMultipart) -> None:
        settings = self._settings
        if not settings.smtp_host:
            msg = "SMTP is enabled but SMTP_HOST is not configured"
            raise RuntimeError(msg)

        password = (
            settings.smtp_password.get_secret_value() if settings.smtp_password else ""
        )

        try:
            if settings.smtp_use_tls and not settings.smtp_starttls:
                # Implicit TLS (port 465)
                server = smtplib.SMTP_SSL(
                    settings.smtp_host,
                    settings.smtp_port,
                    context=ssl.create_default_context(),
                )
            else:
                server = smtplib.SMTP(settings.smtp_host, settings.smtp_port)

            with server:
                if settings.smtp_starttls and not isinstance(server, smtplib.SMTP_SSL):
                    server.starttls(context=ssl.create_default_context())
                if settings.smtp_user:
                    server.login(settings.smtp_user, password)
                server.send_message(message)

            logger.info("Email sent to %s", to_email)

        except Exception as e:
            logger.error("Failed to send email to %s: %s", to_email, e)
            raise
