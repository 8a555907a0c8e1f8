"""Domain events for the Ticket aggregate."""

from protean.fields import DateTime, Float, Identifier, String, Text

from storefront.domain import storefront


@storefront.event(part_of="Ticket")
class TicketIssued:
    """A purchase was completed and its receipt recorded."""

    __version__ = 1

    ticket_id = Identifier(required=True)
    code = String(required=True)
    cart_id = Identifier(required=True)
    purchaser = String(required=True)
    amount = Float(required=True)
    items = Text(required=True)  # JSON array of purchased lines
    purchase_datetime = DateTime(required=True)
