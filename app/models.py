"""
Pydantic models for the Trip Planner API.
Python 3.9 compatible - uses typing.List, typing.Optional
"""

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class MessageType(str, Enum):
    USER = "user"
    AI = "ai"


class TripContext(BaseModel):
    """Caller-held trip context. Unknown keys are carried through untouched."""
    model_config = ConfigDict(extra="allow")

    destination: Optional[str] = None
    dates: Optional[str] = None  # "Flexible" once a turn has run
    budget: Optional[str] = None  # "<amount> <currency>" or "Flexible"


class Source(BaseModel):
    """Citation rendered under an assistant reply."""
    title: str
    url: str
    snippet: str


class ChatMessage(BaseModel):
    """One bubble in the chat transcript (UI-side)."""
    type: MessageType
    content: str
    sources: Optional[List[Source]] = None
    isLoading: bool = False
    isFollowUp: bool = False
    isError: bool = False


# ============================================================
# Trip Planner turn (POST /api/trip-planner)
# ============================================================

class TripPlannerRequest(BaseModel):
    userMessage: str
    context: Optional[TripContext] = Field(default_factory=TripContext)
    # Prior AI replies joined with newlines; LLM context only, never parsed
    conversationHistory: str = ""
    # Used to build conversationHistory when the client sends the transcript instead
    messageHistory: List[ChatMessage] = Field(default_factory=list)

    @field_validator("userMessage")
    @classmethod
    def user_message_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("userMessage must not be empty")
        return value


class TripPlannerResponse(BaseModel):
    reply: str
    sources: List[Source] = Field(default_factory=list)
    needsFollowUp: bool
    followUpQuestion: str = ""
    context: TripContext


class ErrorResponse(BaseModel):
    """Returned with 400 (malformed request) or 500 (provider failure)."""
    error: str
    details: Optional[str] = None


class StatusResponse(BaseModel):
    """Response from GET /api/trip-planner."""
    status: str
    timestamp: str
    tavilyConfigured: bool
    groqConfigured: bool


# ============================================================
# Search provider payload (Tavily)
# ============================================================

class SearchResult(BaseModel):
    title: str = ""
    url: str = ""
    content: str = ""


class SearchResponse(BaseModel):
    answer: str = ""  # Provider-synthesized answer, "" when absent
    results: List[SearchResult] = Field(default_factory=list)
