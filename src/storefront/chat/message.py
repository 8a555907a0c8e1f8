"""Chat message aggregate."""

from datetime import datetime

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, Identifier, String, Text

from storefront.domain import storefront


@storefront.aggregate
class Message:
    user = String(required=True, max_length=254)  # sender label shown in the chat
    sender_id = Identifier()
    message = Text(required=True)
    created_at = DateTime(default=datetime.now)

    @invariant.post
    def message_must_not_be_blank(self):
        if not (self.message or "").strip():
            raise ValidationError({"message": ["Message cannot be empty"]})

    def to_payload(self) -> dict:
        return {
            "id": str(self.id),
            "user": self.user,
            "message": self.message,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }
