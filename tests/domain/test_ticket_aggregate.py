"""Tests for the Ticket aggregate."""

from storefront.ticket.events import TicketIssued
from storefront.ticket.ticket import Ticket


def _lines():
    return [
        {"product_id": "prod-001", "name": "Lamp", "description": None, "price": 10.0, "quantity": 3},
        {"product_id": "prod-002", "name": "Bulb", "description": "E27", "price": 2.25, "quantity": 2},
    ]


class TestTicketIssue:
    def test_amount_is_sum_of_price_times_quantity(self):
        ticket = Ticket.issue(cart_id="cart-001", purchaser="ada@example.com", lines=_lines())
        assert ticket.amount == 34.5

    def test_codes_are_unique(self):
        codes = {Ticket.issue(cart_id="cart-001", purchaser="ada@example.com", lines=_lines()).code for _ in range(20)}
        assert len(codes) == 20

    def test_items_snapshot(self):
        ticket = Ticket.issue(cart_id="cart-001", purchaser="ada@example.com", lines=_lines())
        assert [line["name"] for line in ticket.line_items()] == ["Lamp", "Bulb"]

    def test_raises_ticket_issued(self):
        ticket = Ticket.issue(cart_id="cart-001", purchaser="ada@example.com", lines=_lines())
        events = [e for e in ticket._events if isinstance(e, TicketIssued)]
        assert len(events) == 1
        assert events[0].code == ticket.code
        assert events[0].cart_id == "cart-001"
        assert events[0].amount == 34.5

    def test_payload(self):
        ticket = Ticket.issue(cart_id="cart-001", purchaser="ada@example.com", lines=_lines())
        payload = ticket.to_payload()
        assert payload["purchaser"] == "ada@example.com"
        assert payload["purchase_datetime"] is not None
        assert len(payload["items"]) == 2
