"""Chat commands and history."""

from datetime import datetime

import structlog
from protean import handle
from protean.fields import Identifier, String, Text
from protean.utils.globals import current_domain

from storefront.chat.message import Message
from storefront.domain import storefront

logger = structlog.get_logger(__name__)


@storefront.command(part_of="Message")
class PostMessage:
    user = String(required=True, max_length=254)
    sender_id = Identifier()
    message = Text(required=True)


@storefront.command(part_of="Message")
class DeleteMessage:
    message_id = Identifier(required=True)


@storefront.command_handler(part_of=Message)
class ChatHandler:
    @handle(PostMessage)
    def post_message(self, command):
        message = Message(
            user=command.user,
            sender_id=command.sender_id,
            message=command.message.strip(),
            created_at=datetime.now(),
        )
        current_domain.repository_for(Message).add(message)
        return message.to_payload()

    @handle(DeleteMessage)
    def delete_message(self, command):
        repo = current_domain.repository_for(Message)
        message = repo.get(command.message_id)
        repo._dao.delete(message)
        logger.info("Chat message deleted", message_id=str(command.message_id))


def chat_history() -> list[dict]:
    messages = current_domain.repository_for(Message)._dao.query.order_by("created_at").all().items
    return [message.to_payload() for message in messages]
