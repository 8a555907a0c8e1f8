"""SMTP email adapter for production delivery."""

import smtplib
from email.message import EmailMessage
from uuid import uuid4

from storefront.mail.port import FAILED, SENT, Delivery, EmailPort


class SMTPEmailAdapter(EmailPort):
    """Delivers messages through an SMTP relay using STARTTLS when credentials are set."""

    def __init__(
        self,
        host: str,
        port: int,
        sender: str,
        username: str | None = None,
        password: str | None = None,
        timeout: float = 10.0,
    ) -> None:
        self.host = host
        self.port = port
        self.sender = sender
        self.username = username
        self.password = password
        self.timeout = timeout

    def send(
        self,
        to: str,
        subject: str,
        body: str,
        *,
        html_body: str | None = None,
    ) -> Delivery:
        message = EmailMessage()
        message["From"] = self.sender
        message["To"] = to
        message["Subject"] = subject
        message_id = f"<{uuid4().hex}@storefront>"
        message["Message-ID"] = message_id
        message.set_content(body)
        if html_body:
            message.add_alternative(html_body, subtype="html")

        try:
            with smtplib.SMTP(self.host, self.port, timeout=self.timeout) as client:
                if self.username:
                    client.starttls()
                    client.login(self.username, self.password or "")
                client.send_message(message)
        except (smtplib.SMTPException, OSError) as exc:
            return {"message_id": None, "status": FAILED, "error": str(exc)}

        return {"message_id": message_id, "status": SENT}
