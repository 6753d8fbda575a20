"""
Deterministic trip planner.

This module is the SINGLE SOURCE OF TRUTH for per-turn decisions:
- How the caller-held trip context is updated
- Whether the turn is a greeting (no search at all)
- What to search for
- Whether to ask a follow-up question, and which one

NO network calls are made in this module. All logic is deterministic.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional
import logging

from .extract import FLEXIBLE, TripHints, extract_trip_hints

logger = logging.getLogger(__name__)

WELCOME_MESSAGE = (
    "Hello! 👋 I'm your AI travel assistant. I can help you plan amazing trips "
    "with real-time information from the web.\n\n"
    "Which destination would you like to explore?"
)

DATES_QUESTION = "\n\nWhen are you planning to visit? 📅"
BUDGET_QUESTION = "\n\nWhat's your budget for this trip? 💰"

SNIPPET_LENGTH = 150


class NextAction(str, Enum):
    """What the turn controller should do with this turn."""
    GREET = "GREET"
    SEARCH = "SEARCH"


@dataclass
class PlannerResult:
    """Result of the planner decision."""
    next_action: NextAction
    context: Dict[str, Any]
    search_query: Optional[str] = None
    assistant_message: str = ""
    needs_follow_up: bool = False
    follow_up_question: str = ""
    destination_changed: bool = False


@dataclass
class Source:
    """A citation shown under the assistant reply."""
    title: str
    url: str
    snippet: str


# =============================================================================
# CONTEXT MERGING
# =============================================================================

def _destination_changed(new_destination: str, previous: Optional[str]) -> bool:
    if not new_destination or not previous:
        return False
    return new_destination.lower() != previous.lower()


def merge_context(
    previous: Optional[Dict[str, Any]],
    user_message: str,
    hints: Optional[TripHints] = None,
) -> Dict[str, Any]:
    """
    Build the updated trip context for this turn.

    Rules:
    1. destination = newly extracted destination, else the previous one
    2. dates/budget = previous value if set, else extracted from this message
       (a previous "Flexible" counts as set)
    3. If the destination changed (case-insensitive), dates/budget are
       re-extracted from THIS message and nothing is carried over

    Extra keys on the previous context are kept as-is.

    Args:
        previous: Context from the last turn (may be None or empty)
        user_message: The user's message
        hints: Hints already extracted from user_message, if any

    Returns:
        A new context dict; the previous dict is not mutated
    """
    previous = previous or {}
    hints = hints or extract_trip_hints(user_message)
    new_destination = hints.destination

    updated = dict(previous)
    updated["destination"] = new_destination or previous.get("destination")
    updated["dates"] = previous.get("dates") or hints.dates
    updated["budget"] = previous.get("budget") or hints.budget

    if _destination_changed(new_destination, previous.get("destination")):
        logger.info(
            f"Planner: new destination {new_destination!r} "
            f"(was {previous.get('destination')!r}), resetting dates/budget"
        )
        updated["destination"] = new_destination
        updated["dates"] = hints.dates or FLEXIBLE
        updated["budget"] = hints.budget or FLEXIBLE

    return updated


# =============================================================================
# SEARCH QUERY
# =============================================================================

def build_search_query(context: Dict[str, Any], user_message: str) -> str:
    """
    Compose the web search query for this turn.

    With a known destination the query is a travel-guide template with the
    dates/budget clauses appended when they are not "Flexible". Without one,
    the raw user message is searched verbatim.
    """
    destination = context.get("destination")
    if not destination:
        return user_message

    query = f"Travel guide for {destination}: "
    query += "best attractions, hotels, restaurants, things to do. "
    if context.get("dates") != FLEXIBLE:
        query += f"Travel dates: {context.get('dates')}. "
    if context.get("budget") != FLEXIBLE:
        query += f"Budget: {context.get('budget')}."
    return query


# =============================================================================
# FOLLOW-UP
# =============================================================================

def _is_unresolved(value: Any) -> bool:
    # Empty and "Flexible" both count as unresolved
    return not value or value == FLEXIBLE


def needs_follow_up(context: Dict[str, Any]) -> bool:
    """True when dates or budget are still unresolved."""
    return _is_unresolved(context.get("dates")) or _is_unresolved(context.get("budget"))


def build_follow_up_question(context: Dict[str, Any]) -> str:
    """
    Pick the follow-up question. Dates are asked for before budget.

    Returns:
        The question text (with its leading blank line), or ""
    """
    if _is_unresolved(context.get("dates")):
        return DATES_QUESTION
    if _is_unresolved(context.get("budget")):
        return BUDGET_QUESTION
    return ""


# =============================================================================
# SOURCES
# =============================================================================

def build_sources(results: List[Dict[str, Any]]) -> List[Source]:
    """
    Turn search results into display sources, preserving order.

    Every result is kept; only its content is cut down to a snippet.
    """
    sources = []
    for result in results:
        content = result.get("content") or ""
        sources.append(Source(
            title=result.get("title") or "",
            url=result.get("url") or "",
            snippet=content[:SNIPPET_LENGTH] + "...",
        ))
    return sources


# =============================================================================
# MAIN PLANNER
# =============================================================================

def decide_turn(
    user_message: str,
    previous_context: Optional[Dict[str, Any]] = None,
) -> PlannerResult:
    """
    Decide what to do with one conversation turn.

    Rules:
    1. Merge the context (including the destination-change reset)
    2. Greeting => GREET with the fixed welcome message, follow-up needed
    3. Otherwise => SEARCH with the composed query and follow-up decision

    The greeting check runs after the merge, so a greeting that also names
    a destination still updates the context.

    Args:
        user_message: The user's message
        previous_context: Caller-held context from the previous turn

    Returns:
        PlannerResult with the decision and the updated context
    """
    hints = extract_trip_hints(user_message)
    context = merge_context(previous_context, user_message, hints)
    changed = _destination_changed(
        hints.destination,
        (previous_context or {}).get("destination"),
    )

    if hints.is_greeting:
        logger.info("Planner: greeting => GREET")
        return PlannerResult(
            next_action=NextAction.GREET,
            context=context,
            assistant_message=WELCOME_MESSAGE,
            needs_follow_up=True,
            destination_changed=changed,
        )

    search_query = build_search_query(context, user_message)
    follow_up = needs_follow_up(context)
    logger.info(f"Planner: SEARCH query={search_query!r} needs_follow_up={follow_up}")

    return PlannerResult(
        next_action=NextAction.SEARCH,
        context=context,
        search_query=search_query,
        needs_follow_up=follow_up,
        follow_up_question=build_follow_up_question(context) if follow_up else "",
        destination_changed=changed,
    )
