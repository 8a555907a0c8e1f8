"""Tests for the chat Message aggregate."""

import pytest
from protean.exceptions import ValidationError
from storefront.chat.message import Message


class TestMessage:
    def test_valid_message(self):
        message = Message(user="ada@example.com", message="Hello!")
        assert message.to_payload()["message"] == "Hello!"
        assert message.created_at is not None

    @pytest.mark.parametrize("text", ["", "   "])
    def test_blank_message_rejected(self, text):
        with pytest.raises(ValidationError):
            Message(user="ada@example.com", message=text)
