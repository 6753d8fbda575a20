"""
Prompts for the completion provider.

The system prompt is fixed; the user prompt embeds the numbered search
results so the model can cite them as "Source N".
"""

from typing import List

from .models import SearchResult

SYSTEM_PROMPT = """You are a helpful travel planning assistant.
Use the provided web search results to give accurate, detailed travel recommendations.
Always cite your sources by mentioning the source number.
Be specific with recommendations for hotels, restaurants, and attractions.
Include estimated costs when available in the search results."""

RESPONSE_INSTRUCTION = "Provide a detailed, helpful response based on the search results."


def get_system_prompt() -> str:
    return SYSTEM_PROMPT


def build_search_context(results: List[SearchResult]) -> str:
    """Number each result as [Source N: title] followed by its content and URL."""
    blocks = []
    for idx, result in enumerate(results, start=1):
        blocks.append(f"[Source {idx}: {result.title}]\n{result.content}\nURL: {result.url}\n")
    return "\n".join(blocks)


def build_user_prompt(
    results: List[SearchResult],
    user_query: str,
    conversation_history: str = "",
) -> str:
    """
    Build the user prompt for one turn.

    The conversation history is prepended as "Previous context" only when
    it is non-empty.
    """
    prompt = (
        f"Search Results:\n{build_search_context(results)}\n\n"
        f"User question: {user_query}\n\n"
        f"{RESPONSE_INSTRUCTION}"
    )
    if conversation_history:
        prompt = f"Previous context: {conversation_history}\n\n{prompt}"
    return prompt
