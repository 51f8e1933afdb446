import logging
import smtplib
from email.message import EmailMessage

logger = logging.getLogger(__name__)


class LogMailer:
    """Writes outgoing mail to the log instead of sending it (local/dev)."""

    def send(self, message):
        logger.info(
            "[EMAIL] to=%s subject=%s\n%s",
            message.recipient,
            message.subject,
            message.body,
        )


class SmtpMailer:
    def __init__(self, host, port, username="", password="", from_addr=""):
        self.host = host
        self.port = port
        self.username = username
        self.password = password
        self.from_addr = from_addr

    def send(self, message):
        msg = EmailMessage()
        msg["From"] = self.from_addr
        msg["To"] = message.recipient
        msg["Subject"] = message.subject
        msg.set_content(message.body)

        with smtplib.SMTP(self.host, self.port, timeout=10) as smtp:
            if self.username:
                smtp.login(self.username, self.password)
            smtp.send_message(msg)


def mailer_from_config(config):
    if config.get("MAIL_BACKEND") == "smtp":
        return SmtpMailer(
            host=config.get("SMTP_HOST", "localhost"),
            port=int(config.get("SMTP_PORT", 25)),
            username=config.get("SMTP_USERNAME", ""),
            password=config.get("SMTP_PASSWORD", ""),
            from_addr=config.get("SMTP_FROM", ""),
        )
    return LogMailer()
