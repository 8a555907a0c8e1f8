"""Emails the itemized receipt once a ticket has been issued.

Runs after the purchase has been committed, so a delivery failure is logged
and never affects the ticket or the stock changes.
"""

import structlog
from protean import handle
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.mail.dispatch import send_email
from storefront.mail.templates import PurchaseReceiptTemplate
from storefront.ticket.events import TicketIssued
from storefront.ticket.ticket import Ticket

logger = structlog.get_logger(__name__)


@storefront.event_handler(part_of=Ticket)
class PurchaseReceiptHandler:
    @handle(TicketIssued)
    def send_receipt(self, event: TicketIssued) -> None:
        from storefront.user.user import User

        user = current_domain.repository_for(User).find_by_email(event.purchaser)
        rendered = PurchaseReceiptTemplate.render(
            {
                "first_name": user.first_name if user else None,
                "code": event.code,
                "amount": event.amount,
                "items": event.items,
            }
        )

        if not send_email(event.purchaser, **rendered):
            logger.warning("Purchase receipt not delivered", ticket_code=event.code, purchaser=event.purchaser)
