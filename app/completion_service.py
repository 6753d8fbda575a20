"""
Groq completion service for the trip planner.

Groq exposes an OpenAI-compatible API, so the AsyncOpenAI client is used
with Groq's base URL. The model writes the final travel answer from the
search results; it makes no flow decisions.

Any failure raises CompletionProviderError; there are no retries.

Python 3.9 compatible - uses typing.List, typing.Optional
"""

import logging
from typing import Any, List, Optional

import httpx
from openai import APIError, APIStatusError, AsyncOpenAI

from .config import TripPlannerConfig
from .errors import CompletionProviderError
from .models import SearchResult
from .prompts import build_user_prompt, get_system_prompt

logger = logging.getLogger(__name__)


class GroqCompletionService:
    """Service for calling Groq to write the assistant reply."""

    def __init__(
        self,
        config: TripPlannerConfig,
        client: Optional[Any] = None,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        self.config = config
        self.model = config.groq_model
        # No client without a key: the error is reported per turn instead
        self.client = client
        if self.client is None and config.groq_api_key:
            self.client = AsyncOpenAI(
                api_key=config.groq_api_key,
                base_url=config.groq_base_url,
                max_retries=config.max_retries,
                http_client=http_client,
            )
        logger.info(f"Groq completion service configured with model: {self.model}")

    async def close(self):
        if isinstance(self.client, AsyncOpenAI):
            await self.client.close()

    async def generate_reply(
        self,
        results: List[SearchResult],
        user_query: str,
        conversation_history: str = "",
    ) -> str:
        """
        Generate the assistant reply from search results.

        Args:
            results: Ordered search results (numbered in the prompt)
            user_query: The user's raw message
            conversation_history: Prior transcript text, may be ""

        Returns:
            Content of the first choice

        Raises:
            CompletionProviderError: key missing, non-2xx status, network
                failure or an empty completion (no retries)
        """
        if self.client is None:
            raise CompletionProviderError(
                "Groq API key not configured. Add GROQ_API_KEY to .env"
            )

        messages = [
            {"role": "system", "content": get_system_prompt()},
            {"role": "user", "content": build_user_prompt(results, user_query, conversation_history)},
        ]

        logger.info("Generating AI response with Groq...")

        try:
            response = await self.client.chat.completions.create(
                model=self.model,
                messages=messages,
                max_tokens=self.config.max_tokens,
                temperature=self.config.temperature,
            )
        except APIStatusError as e:
            logger.error(f"Groq error: {e}")
            raise CompletionProviderError(f"Groq API error: {e.status_code}") from e
        except APIError as e:
            logger.error(f"Groq request failed: {e}")
            raise CompletionProviderError(f"Groq request failed: {e}") from e

        if not response.choices:
            raise CompletionProviderError("Groq returned no choices")

        content = response.choices[0].message.content
        if content is None:
            raise CompletionProviderError("Groq returned an empty completion")

        logger.info("AI response generated")
        return content
