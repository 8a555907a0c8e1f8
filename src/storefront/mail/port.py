"""Outbound mail interface shared by the fake and SMTP adapters."""

from abc import ABC, abstractmethod
from typing import NotRequired, TypedDict

SENT = "sent"
FAILED = "failed"


class Delivery(TypedDict):
    message_id: str | None
    status: str
    error: NotRequired[str]


class EmailPort(ABC):
    @abstractmethod
    def send(self, to: str, subject: str, body: str, *, html_body: str | None = None) -> Delivery:
        """Deliver one message. ``status`` is ``SENT`` or ``FAILED``; a failure carries ``error``."""
