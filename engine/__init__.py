"""
Trip planning engine - extractor and planner.
"""
from .planner import (
    NextAction,
    PlannerResult,
    Source,
    merge_context,
    build_search_query,
    needs_follow_up,
    build_follow_up_question,
    build_sources,
    decide_turn,
)
from .extract import (
    FLEXIBLE,
    TripHints,
    is_greeting,
    extract_destination,
    extract_dates,
    extract_budget,
    extract_trip_hints,
)

__all__ = [
    "NextAction",
    "PlannerResult",
    "Source",
    "merge_context",
    "build_search_query",
    "needs_follow_up",
    "build_follow_up_question",
    "build_sources",
    "decide_turn",
    "FLEXIBLE",
    "TripHints",
    "is_greeting",
    "extract_destination",
    "extract_dates",
    "extract_budget",
    "extract_trip_hints",
]
