"""Ticket aggregate: the immutable receipt of a purchase."""

import json
from datetime import datetime
from uuid import uuid4

from protean.fields import DateTime, Float, String, Text

from storefront.domain import storefront
from storefront.ticket.events import TicketIssued


def generate_ticket_code() -> str:
    return uuid4().hex.upper()


@storefront.aggregate
class Ticket:
    code = String(required=True, max_length=32, unique=True)
    purchase_datetime = DateTime(required=True)
    amount = Float(required=True, min_value=0.0)
    purchaser = String(required=True, max_length=254)
    items = Text()  # JSON array of {product_id, name, description, price, quantity}

    @classmethod
    def issue(cls, cart_id, purchaser, lines):
        """Record a purchase of ``lines`` (product snapshots with quantity).

        The amount is the sum of unit price times quantity over ``lines``.
        """
        amount = round(sum(line["price"] * line["quantity"] for line in lines), 2)
        now = datetime.now()
        items = json.dumps(lines)

        ticket = cls(
            code=generate_ticket_code(),
            purchase_datetime=now,
            amount=amount,
            purchaser=purchaser,
            items=items,
        )
        ticket.raise_(
            TicketIssued(
                ticket_id=str(ticket.id),
                code=ticket.code,
                cart_id=str(cart_id),
                purchaser=purchaser,
                amount=amount,
                items=items,
                purchase_datetime=now,
            )
        )
        return ticket

    def line_items(self) -> list[dict]:
        return json.loads(self.items) if self.items else []

    def to_payload(self) -> dict:
        return {
            "id": str(self.id),
            "code": self.code,
            "purchase_datetime": self.purchase_datetime.isoformat() if self.purchase_datetime else None,
            "amount": self.amount,
            "purchaser": self.purchaser,
            "items": self.line_items(),
        }
