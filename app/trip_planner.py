"""
Trip planner turn controller.

One turn:
1. Run the deterministic planner (context merge, greeting check, search query)
2. GREET => fixed welcome reply, no provider calls
3. SEARCH => Tavily search, then Groq completion (strictly sequential)
4. Append the follow-up question and build the display sources

A ProviderError from step 3 aborts the turn: nothing is returned, so the
caller keeps the context it sent and may simply retry.
"""
import logging
from typing import Any, Dict, Optional

from engine.planner import NextAction, PlannerResult, build_sources, decide_turn

from .completion_service import GroqCompletionService
from .config import TripPlannerConfig
from .models import Source, TripContext, TripPlannerResponse
from .search_service import TavilySearchService

logger = logging.getLogger(__name__)


def _log_turn_summary(
    action: str,
    destination: Optional[str],
    dates: Optional[str],
    budget: Optional[str],
    sources: int,
    needs_follow_up: bool,
    destination_changed: bool = False,
) -> None:
    """Single-line summary for each completed turn."""
    logger.info(
        "[TRIP-SUMMARY] "
        f"action={action} "
        f"destination={destination or 'none'} "
        f"dates={dates} "
        f"budget={budget} "
        f"sources={sources} "
        f"follow_up={needs_follow_up} "
        f"destination_changed={destination_changed}"
    )


class TripPlanner:
    """Runs conversation turns against the search and completion providers."""

    def __init__(
        self,
        config: TripPlannerConfig,
        search_service: Optional[TavilySearchService] = None,
        completion_service: Optional[GroqCompletionService] = None,
    ):
        self.config = config
        self.search_service = search_service or TavilySearchService(config)
        self.completion_service = completion_service or GroqCompletionService(config)

    async def close(self):
        await self.search_service.close()
        await self.completion_service.close()

    async def process_turn(
        self,
        user_message: str,
        context: Optional[Dict[str, Any]] = None,
        conversation_history: str = "",
    ) -> TripPlannerResponse:
        """
        Process one conversation turn.

        Args:
            user_message: The user's message
            context: Caller-held trip context (may be empty)
            conversation_history: Prior transcript, passed to the LLM only

        Returns:
            TripPlannerResponse with reply, sources and the updated context

        Raises:
            ProviderError: search or completion failed; no partial reply
        """
        msg_preview = user_message[:50] + "..." if len(user_message) > 50 else user_message
        logger.info(f"[TRIP] Received message: '{msg_preview}'")
        logger.info(f"[TRIP] Current context: {context}")

        planner_result = decide_turn(user_message, context)
        logger.info(f"[TRIP] Updated context: {planner_result.context}")

        if planner_result.next_action == NextAction.GREET:
            _log_turn_summary(
                action=planner_result.next_action.value,
                destination=planner_result.context.get("destination"),
                dates=planner_result.context.get("dates"),
                budget=planner_result.context.get("budget"),
                sources=0,
                needs_follow_up=True,
                destination_changed=planner_result.destination_changed,
            )
            return TripPlannerResponse(
                reply=planner_result.assistant_message,
                sources=[],
                needsFollowUp=True,
                followUpQuestion="",
                context=TripContext(**planner_result.context),
            )

        return await self._search_and_answer(user_message, conversation_history, planner_result)

    async def _search_and_answer(
        self,
        user_message: str,
        conversation_history: str,
        planner_result: PlannerResult,
    ) -> TripPlannerResponse:
        # Step 1: real-time web data
        search_response = await self.search_service.search(planner_result.search_query)

        # Step 2: answer grounded on the search results
        ai_reply = await self.completion_service.generate_reply(
            search_response.results,
            user_message,
            conversation_history,
        )

        sources = [
            Source(title=s.title, url=s.url, snippet=s.snippet)
            for s in build_sources([r.model_dump() for r in search_response.results])
        ]

        _log_turn_summary(
            action=planner_result.next_action.value,
            destination=planner_result.context.get("destination"),
            dates=planner_result.context.get("dates"),
            budget=planner_result.context.get("budget"),
            sources=len(sources),
            needs_follow_up=planner_result.needs_follow_up,
            destination_changed=planner_result.destination_changed,
        )

        return TripPlannerResponse(
            reply=ai_reply + planner_result.follow_up_question,
            sources=sources,
            needsFollowUp=planner_result.needs_follow_up,
            followUpQuestion=planner_result.follow_up_question,
            context=TripContext(**planner_result.context),
        )
