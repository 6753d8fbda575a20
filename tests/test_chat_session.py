"""
Tests for the client-side transcript model (app/chat_session.py).
"""

from app.chat_session import (
    INITIAL_MESSAGE,
    LOADING_MESSAGE,
    ChatSession,
    build_conversation_history,
)
from app.models import ChatMessage, MessageType, Source, TripContext, TripPlannerResponse


def make_response(**overrides):
    data = {
        "reply": "Rome plan\n\nWhen are you planning to visit? 📅",
        "sources": [Source(title="Rome Guide", url="https://lonelyplanet.com/rome", snippet="Colosseum...")],
        "needsFollowUp": True,
        "followUpQuestion": "\n\nWhen are you planning to visit? 📅",
        "context": TripContext(destination="Rome", dates="Flexible", budget="Flexible"),
    }
    data.update(overrides)
    return TripPlannerResponse(**data)


class TestConversationHistory:
    def test_only_finished_ai_messages(self):
        messages = [
            ChatMessage(type=MessageType.AI, content="one"),
            ChatMessage(type=MessageType.USER, content="user text"),
            ChatMessage(type=MessageType.AI, content=LOADING_MESSAGE, isLoading=True),
            ChatMessage(type=MessageType.AI, content="two"),
        ]
        assert build_conversation_history(messages) == "one\ntwo"

    def test_empty(self):
        assert build_conversation_history([]) == ""


class TestChatSession:
    def test_starts_with_welcome_and_empty_context(self):
        session = ChatSession()
        assert [m.content for m in session.messages] == [INITIAL_MESSAGE]
        assert session.context == TripContext()

    def test_build_request_uses_prior_history(self):
        session = ChatSession()
        request = session.build_request("  Plan a trip to Rome.  ")
        assert request.userMessage == "Plan a trip to Rome."
        assert request.conversationHistory == INITIAL_MESSAGE

    def test_successful_turn(self):
        session = ChatSession()
        session.add_user_message("Plan a trip to Rome.")
        session.add_loading_message()
        assert session.is_loading is True

        session.apply_response(make_response())

        assert session.is_loading is False
        assert [m.type for m in session.messages] == [
            MessageType.AI, MessageType.USER, MessageType.AI, MessageType.AI,
        ]
        reply, follow_up = session.messages[2], session.messages[3]
        assert reply.sources[0].title == "Rome Guide"
        assert follow_up.isFollowUp is True
        assert session.context.destination == "Rome"

    def test_no_follow_up_message_when_not_needed(self):
        session = ChatSession()
        session.add_loading_message()
        session.apply_response(make_response(needsFollowUp=False, followUpQuestion=""))
        assert not any(m.isFollowUp for m in session.messages)

    def test_empty_reply_gets_fallback_text(self):
        session = ChatSession()
        session.apply_response(make_response(reply=""))
        assert "trouble processing" in session.messages[-1].content

    def test_error_keeps_context(self):
        session = ChatSession()
        session.context = TripContext(destination="Paris", dates="June", budget="1000 USD")
        session.add_user_message("Actually, let's go to Tokyo instead")
        session.add_loading_message()

        session.apply_error("Tavily API error: 500")

        assert session.is_loading is False
        assert session.messages[-1].isError is True
        assert "Tavily API error: 500" in session.messages[-1].content
        assert session.context.destination == "Paris"
