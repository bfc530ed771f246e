"""
Notification Service - Email notifications sent after the response

All sends are best effort: failures are logged and never raised,
so a broken mail server cannot fail a registration or a certificate issue.
"""
import smtplib
from email.message import EmailMessage

from atams.logging import get_logger

logger = get_logger(__name__)


class EmailNotifier:
    def __init__(self, settings) -> None:
        self.host = settings.SMTP_HOST
        self.port = settings.SMTP_PORT
        self.username = settings.SMTP_USERNAME
        self.password = settings.SMTP_PASSWORD
        self.use_tls = settings.SMTP_USE_TLS
        self.timeout = settings.SMTP_TIMEOUT_SECONDS
        self.mail_from = settings.MAIL_FROM

    def send(self, to: str, subject: str, body: str) -> bool:
        """
        Send a plain text email

        Returns:
            bool: True when delivered (or logged in mock mode), False on failure
        """
        if not self.host:
            logger.info(
                "Email (mock delivery)",
                extra={'extra_data': {'to': to, 'subject': subject}}
            )
            return True

        try:
            message = EmailMessage()
            message["From"] = self.mail_from
            message["To"] = to
            message["Subject"] = subject
            message.set_content(body)

            with smtplib.SMTP(self.host, self.port, timeout=self.timeout) as smtp:
                if self.use_tls:
                    smtp.starttls()
                if self.username:
                    smtp.login(self.username, self.password)
                smtp.send_message(message)
        except Exception as e:
            # Never raises; a failing background task stops the ones queued after it
            logger.error(
                f"Failed to send email: {str(e)}",
                extra={'extra_data': {
                    'to': to,
                    'subject': subject,
                    'error_type': type(e).__name__
                }}
            )
            return False

        logger.info("Email sent", extra={'extra_data': {'to': to, 'subject': subject}})
        return True

    def notify_registration_confirmed(self, email: str, name: str, event_title: str) -> bool:
        body = (
            f"Hello {name},\n\n"
            f"Your registration for \"{event_title}\" has been received.\n"
            f"You will be notified when the organizer reviews it.\n\n"
            f"See you there!"
        )
        return self.send(email, f"Registration received: {event_title}", body)

    def notify_certificate_issued(
        self,
        email: str,
        name: str,
        event_title: str,
        certificate_number: str
    ) -> bool:
        body = (
            f"Hello {name},\n\n"
            f"Your certificate of participation for \"{event_title}\" is ready.\n"
            f"Certificate number: {certificate_number}\n\n"
            f"You can download it from your certificates page."
        )
        return self.send(email, f"Your certificate for {event_title}", body)

    def notify_announcement(self, email: str, event_title: str, title: str, message: str) -> bool:
        body = f"{message}\n\n-- {event_title}"
        return self.send(email, f"[{event_title}] {title}", body)
