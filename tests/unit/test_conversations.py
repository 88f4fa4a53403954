"""Tests for conversation storage."""

from polaris.core.config import settings
from polaris.core.types import MessageRole, MessageStatus


class TestConversationStore:
    """Tests for ConversationStore."""

    def test_create_with_default_title(self, conversation_store):
        conv_id = conversation_store.create_conversation("p1")

        conversation = conversation_store.get_conversation(conv_id)
        assert conversation.project_id == "p1"
        assert conversation.title == settings.default_conversation_title

    def test_update_title(self, conversation_store):
        conv_id = conversation_store.create_conversation("p1")

        assert conversation_store.update_conversation_title(conv_id, "Build a todo app")
        assert conversation_store.get_conversation(conv_id).title == "Build a todo app"
        assert conversation_store.update_conversation_title("missing", "x") is False

    def test_recent_messages_are_chronological_and_limited(self, conversation_store):
        conv_id = conversation_store.create_conversation("p1")
        for i in range(5):
            conversation_store.add_message(conv_id, MessageRole.USER, f"m{i}")

        recent = conversation_store.get_recent_messages(conv_id, limit=3)

        assert [m.content for m in recent] == ["m2", "m3", "m4"]

    def test_update_message_content_completes_message(self, conversation_store):
        conv_id = conversation_store.create_conversation("p1")
        msg_id = conversation_store.add_message(
            conv_id, MessageRole.ASSISTANT, status=MessageStatus.PROCESSING
        )

        assert conversation_store.get_message(msg_id).status == MessageStatus.PROCESSING

        conversation_store.update_message_content(msg_id, "Done")

        message = conversation_store.get_message(msg_id)
        assert message.content == "Done"
        assert message.status == MessageStatus.COMPLETED
        assert message.role == MessageRole.ASSISTANT

    def test_set_message_status(self, conversation_store):
        conv_id = conversation_store.create_conversation("p1")
        msg_id = conversation_store.add_message(conv_id, "assistant", status="processing")

        conversation_store.set_message_status(msg_id, MessageStatus.CANCELLED)

        assert conversation_store.get_message(msg_id).status == "cancelled"
