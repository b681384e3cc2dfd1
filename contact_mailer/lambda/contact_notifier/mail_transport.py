import smtplib
from dataclasses import dataclass
from email.mime.text import MIMEText
from typing import Optional, Tuple

from mail_config import MailConfig


class MailTransportError(Exception):
    """The relay refused the message or could not be reached."""


@dataclass(frozen=True)
class OutboundEmail:
    sender: str
    to: Tuple[str, ...]
    subject: str
    html: Optional[str] = None
    text: Optional[str] = None

    def to_mime(self) -> MIMEText:
        if self.html is not None:
            message = MIMEText(self.html, "html", "utf-8")
        else:
            message = MIMEText(self.text or "", "plain", "utf-8")
        message["From"] = self.sender
        message["To"] = ", ".join(self.to)
        message["Subject"] = self.subject
        return message


class SmtpTransport:
    """Sends over an implicit-TLS SMTP session authenticated with user and password.

    Holds settings only; each send opens its own connection, so one instance
    can be shared by every invocation in the process.
    """

    def __init__(self, config: MailConfig, timeout: float = 30.0):
        self.config = config
        self.timeout = timeout

    def send(self, email: OutboundEmail) -> None:
        message = email.to_mime()
        try:
            with smtplib.SMTP_SSL(self.config.host, self.config.port, timeout=self.timeout) as server:
                server.login(self.config.user, self.config.password)
                server.sendmail(self.config.user, list(email.to), message.as_string())
        except (smtplib.SMTPException, OSError) as e:
            raise MailTransportError(f"Could not send '{email.subject}': {e}") from e
