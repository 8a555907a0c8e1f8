"""Fake email adapter: records sent emails for testing."""

from uuid import uuid4

from storefront.mail.port import FAILED, SENT, Delivery, EmailPort


class FakeEmailAdapter(EmailPort):
    """Email adapter that records messages in memory for test assertions."""

    def __init__(self):
        self.sent_emails: list[dict] = []
        self.should_succeed = True
        self.failure_reason = "Email delivery failed"
        self.raise_on_send = False

    def configure(
        self,
        should_succeed: bool = True,
        failure_reason: str = "Email delivery failed",
        raise_on_send: bool = False,
    ):
        """Configure the fake adapter behavior for testing."""
        self.should_succeed = should_succeed
        self.failure_reason = failure_reason
        self.raise_on_send = raise_on_send

    def send(
        self,
        to: str,
        subject: str,
        body: str,
        *,
        html_body: str | None = None,
    ) -> Delivery:
        if self.raise_on_send:
            raise ConnectionError(self.failure_reason)

        if not self.should_succeed:
            return {
                "message_id": None,
                "status": FAILED,
                "error": self.failure_reason,
            }

        message_id = f"email-{uuid4().hex[:12]}"
        self.sent_emails.append(
            {
                "message_id": message_id,
                "to": to,
                "subject": subject,
                "body": body,
                "html_body": html_body,
            }
        )

        return {"message_id": message_id, "status": SENT}

    def sent_to(self, recipient: str) -> list[dict]:
        return [e for e in self.sent_emails if e["to"] == recipient]

    def reset(self):
        """Clear sent emails (useful between tests)."""
        self.sent_emails.clear()
        self.should_succeed = True
        self.failure_reason = "Email delivery failed"
        self.raise_on_send = False
