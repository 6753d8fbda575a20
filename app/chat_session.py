"""
Chat transcript model, as held by the chat UI.

The backend never stores a conversation. This class mirrors what the client
keeps between turns (message bubbles and the current trip context) and how
it derives the conversationHistory string sent with each turn.
"""
import logging
from typing import List

from .models import ChatMessage, MessageType, TripContext, TripPlannerRequest, TripPlannerResponse

logger = logging.getLogger(__name__)

INITIAL_MESSAGE = (
    "Hi! I'm your travel planning assistant. I can help you plan your perfect trip! "
    "Just tell me where you'd like to go, and I'll help you create an amazing itinerary. "
    "For example, you can say 'Plan me a trip to Mumbai'."
)

LOADING_MESSAGE = "Searching the web and planning your trip..."

FALLBACK_REPLY = "I'm having trouble processing your request. Please try again."


def build_conversation_history(messages: List[ChatMessage]) -> str:
    """Join the contents of finished AI messages with newlines."""
    return "\n".join(
        m.content for m in messages
        if m.type == MessageType.AI and not m.isLoading
    )


class ChatSession:
    """Append-only transcript plus the caller-held trip context."""

    def __init__(self):
        self.messages: List[ChatMessage] = [
            ChatMessage(type=MessageType.AI, content=INITIAL_MESSAGE)
        ]
        self.context = TripContext()

    @property
    def is_loading(self) -> bool:
        return any(m.isLoading for m in self.messages)

    def _drop_loading(self) -> None:
        self.messages = [m for m in self.messages if not m.isLoading]

    def build_request(self, text: str) -> TripPlannerRequest:
        """Request for the next turn; history is taken before the new message is added."""
        return TripPlannerRequest(
            userMessage=text.strip(),
            context=self.context,
            conversationHistory=build_conversation_history(self.messages),
        )

    def add_user_message(self, text: str) -> ChatMessage:
        message = ChatMessage(type=MessageType.USER, content=text.strip())
        self.messages.append(message)
        return message

    def add_loading_message(self) -> ChatMessage:
        message = ChatMessage(type=MessageType.AI, content=LOADING_MESSAGE, isLoading=True)
        self.messages.append(message)
        return message

    def apply_response(self, response: TripPlannerResponse) -> None:
        """Replace the loading placeholder with the reply and adopt the new context."""
        self._drop_loading()
        self.messages.append(ChatMessage(
            type=MessageType.AI,
            content=response.reply or FALLBACK_REPLY,
            sources=response.sources,
        ))
        self.context = response.context

        if response.needsFollowUp and response.followUpQuestion:
            self.messages.append(ChatMessage(
                type=MessageType.AI,
                content=response.followUpQuestion,
                isFollowUp=True,
            ))

    def apply_error(self, error: str) -> None:
        """Replace the loading placeholder with an error bubble. Context is left as it was."""
        logger.warning(f"Turn failed: {error}")
        self._drop_loading()
        self.messages.append(ChatMessage(
            type=MessageType.AI,
            content=f"Sorry, I encountered an error: {error}. Please try again.",
            isError=True,
        ))
