"""
Trip hint extraction logic.

This module extracts trip parameters from free-text user messages:
- destination (free text place name)
- dates (free text, "Flexible" when unknown)
- budget ("<amount> <currency>", "Flexible" when unknown)

Every extractor is a pure function over a single message. Patterns are tried
in order and the FIRST match wins, so more specific forms come first.

NO LLM or network calls are made in this module.
"""
import logging
import re
from dataclasses import dataclass
from typing import List, Optional, Pattern

logger = logging.getLogger(__name__)

# Sentinel for "not yet specified" dates/budget
FLEXIBLE = "Flexible"

DEFAULT_CURRENCY = "USD"

GREETINGS = ["hi", "hello", "hey", "hola", "greetings"]

# Trailing words that are not part of a place name ("go to Tokyo instead")
TRAILING_FILLER_WORDS = {"instead", "please", "now", "too", "again"}

_CURRENCY = r"(?:USD|INR|EUR|\$|₹|€)"
_AMOUNT = r"([0-9,]+)"


@dataclass
class TripHints:
    """Everything the extractor could read from one message."""
    destination: str = ""
    dates: str = FLEXIBLE
    budget: str = FLEXIBLE
    is_greeting: bool = False


# =============================================================================
# PATTERNS (order encodes priority)
# =============================================================================

DESTINATION_PATTERNS: List[Pattern[str]] = [
    # "to Paris.", "visit Kyoto", "going to New York?"
    re.compile(r"(?:to|in|at|visit|going to) ([A-Za-z\s]+)(?=[,.?!]|$)", re.IGNORECASE),
    # "Bali trip", "Goa vacation"
    re.compile(r"([A-Za-z\s]+) (?:trip|vacation|holiday)", re.IGNORECASE),
]

DATE_PATTERNS: List[Pattern[str]] = [
    # "from June 5 to June 12", "between May and July"
    re.compile(
        r"(?:from|between|on) ([A-Za-z0-9\s,-]+) (?:to|and|until|through) ([A-Za-z0-9\s,-]+)",
        re.IGNORECASE,
    ),
    # "in July", "during December 2025"
    re.compile(r"(?:in|during) ([A-Za-z]+)(?: [0-9]{4})?", re.IGNORECASE),
    # "March 3rd", "Oct 12, 2025"
    re.compile(r"([A-Za-z]+\s+[0-9]{1,2}(?:st|nd|rd|th)?(?:,\s*[0-9]{4})?)", re.IGNORECASE),
]

BUDGET_PATTERNS: List[Pattern[str]] = [
    re.compile(rf"budget (?:of |is )?{_AMOUNT}\s*{_CURRENCY}", re.IGNORECASE),
    re.compile(rf"{_AMOUNT}\s*{_CURRENCY}\s*budget", re.IGNORECASE),
    re.compile(rf"spend(?:ing)? {_AMOUNT}\s*{_CURRENCY}", re.IGNORECASE),
    # Currency before amount: "budget is $2000", "spend ₹50,000"
    re.compile(rf"budget (?:of |is )?{_CURRENCY}\s*{_AMOUNT}", re.IGNORECASE),
    re.compile(rf"spend(?:ing)? {_CURRENCY}\s*{_AMOUNT}", re.IGNORECASE),
    # Amount only, currency defaults
    re.compile(rf"budget (?:of |is )?{_AMOUNT}", re.IGNORECASE),
]

CURRENCY_PATTERN: Pattern[str] = re.compile(_CURRENCY, re.IGNORECASE)


def _first_match(patterns: List[Pattern[str]], message: str) -> Optional["re.Match[str]"]:
    """Return the match of the first pattern that matches, or None."""
    for pattern in patterns:
        match = pattern.search(message)
        if match:
            return match
    return None


# =============================================================================
# EXTRACTORS
# =============================================================================

def is_greeting(message: str) -> bool:
    """
    Check whether a message opens with a greeting.

    Only surrounding whitespace is ignored; "Hello!" and "  hey there" are
    greetings, "Oh hi" is not.
    """
    message_lower = message.lower().strip()
    return any(message_lower.startswith(greeting) for greeting in GREETINGS)


def _strip_trailing_filler(place: str) -> str:
    words = place.split()
    while len(words) > 1 and words[-1].lower() in TRAILING_FILLER_WORDS:
        words.pop()
    return " ".join(words)


def extract_destination(message: str) -> str:
    """
    Extract a destination from the user message.

    Args:
        message: Raw user message

    Returns:
        The destination, or "" if no pattern matched. An empty string means
        "no signal", not "the user has no destination".
    """
    match = _first_match(DESTINATION_PATTERNS, message)
    if match and match.group(1):
        return _strip_trailing_filler(match.group(1).strip())
    return ""


def extract_dates(message: str) -> str:
    """
    Extract travel dates from the user message.

    A range is returned as "<start> to <end>"; month mentions return just
    the month.

    Returns:
        The dates fragment, or FLEXIBLE if nothing matched
    """
    match = _first_match(DATE_PATTERNS, message)
    if not match:
        return FLEXIBLE

    dates = match.group(1)
    if match.re.groups > 1 and match.group(2):
        dates += f" to {match.group(2)}"
    return dates


def extract_budget(message: str) -> str:
    """
    Extract a budget as "<amount> <currency>".

    The currency is the first currency token anywhere in the message, as
    typed, falling back to USD when the amount was given without one.

    Returns:
        The budget string, or FLEXIBLE if nothing matched
    """
    match = _first_match(BUDGET_PATTERNS, message)
    if not match or not match.group(1):
        return FLEXIBLE

    currency_match = CURRENCY_PATTERN.search(message)
    currency = currency_match.group(0) if currency_match else DEFAULT_CURRENCY
    return f"{match.group(1).strip()} {currency}"


def extract_trip_hints(message: str) -> TripHints:
    """Run every extractor over one message."""
    hints = TripHints(
        destination=extract_destination(message),
        dates=extract_dates(message),
        budget=extract_budget(message),
        is_greeting=is_greeting(message),
    )
    logger.debug(f"Extracted hints: {hints}")
    return hints
