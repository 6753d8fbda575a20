"""
Tests for trip hint extraction (engine/extract.py).

These tests verify:
1. Greeting detection ignores case and surrounding whitespace only
2. Destination/dates/budget patterns are first-match-wins
3. Unmatched dates/budget fall back to "Flexible"
4. Extraction is pure: same input, same output
"""

import pytest

from engine.extract import (
    FLEXIBLE,
    extract_budget,
    extract_dates,
    extract_destination,
    extract_trip_hints,
    is_greeting,
)


class TestIsGreeting:
    """Tests for is_greeting."""

    @pytest.mark.parametrize("message", [
        "Hello",
        "hi",
        "  HEY there  ",
        "hola amigo",
        "Greetings!",
        "Hello, plan a trip to Rome",
    ])
    def test_greetings_detected(self, message):
        assert is_greeting(message) is True

    @pytest.mark.parametrize("message", [
        "Plan a trip to Paris",
        "Oh hi",
        "",
        "   ",
        "What's the weather like?",
    ])
    def test_non_greetings(self, message):
        assert is_greeting(message) is False


class TestExtractDestination:
    """Tests for extract_destination."""

    def test_stops_at_punctuation(self):
        assert extract_destination("Plan a trip to Paris.") == "Paris"

    def test_stops_at_comma(self):
        assert extract_destination("Take me to Kyoto, please") == "Kyoto"

    def test_runs_to_end_of_message(self):
        assert extract_destination("I want to see Lisbon") == "see Lisbon"

    def test_trailing_filler_dropped(self):
        """'instead' is not part of the place name."""
        assert extract_destination("Actually, let's go to Tokyo instead") == "Tokyo"

    def test_trip_noun_pattern(self):
        assert extract_destination("Bali vacation ideas") == "Bali"

    def test_no_match_is_empty_string(self):
        assert extract_destination("Recommend some good food") == ""

    def test_preposition_pattern_wins_over_trip_noun(self):
        """Pattern order is priority: the prepositional form is tried first."""
        assert extract_destination("Goa trip to Mumbai!") == "Mumbai"


class TestExtractDates:
    """Tests for extract_dates."""

    def test_month_mention(self):
        assert extract_dates("I am traveling in July") == "July"

    def test_month_with_year_returns_month(self):
        assert extract_dates("Visiting during December 2025") == "December"

    def test_range_joined_with_to(self):
        assert extract_dates("We fly from June 5 to June 12") == "June 5 to June 12"

    def test_range_with_until(self):
        assert extract_dates("Staying from May 1 until May 9") == "May 1 to May 9"

    def test_calendar_date(self):
        assert extract_dates("Arriving March 3rd") == "March 3rd"

    def test_no_match_is_flexible(self):
        assert extract_dates("no date info here") == FLEXIBLE


class TestExtractBudget:
    """Tests for extract_budget."""

    def test_budget_amount_currency(self):
        assert extract_budget("My budget is 2000 USD") == "2000 USD"

    def test_spend_with_symbol(self):
        assert extract_budget("I want to spend 500€") == "500 €"

    def test_amount_currency_budget(self):
        assert extract_budget("about 1,500 EUR budget") == "1,500 EUR"

    def test_currency_before_amount(self):
        assert extract_budget("My budget is $3000") == "3000 $"

    def test_lowercase_currency_kept_as_typed(self):
        assert extract_budget("spending 20000 inr") == "20000 inr"

    def test_amount_without_currency_defaults_to_usd(self):
        assert extract_budget("my budget is 1000") == "1000 USD"

    def test_no_match_is_flexible(self):
        assert extract_budget("no money talk") == FLEXIBLE


class TestPurity:
    """Extraction has no hidden state."""

    @pytest.mark.parametrize("message", [
        "Plan a trip to Paris.",
        "I am traveling in July",
        "My budget is 2000 USD",
        "Hello",
    ])
    def test_repeated_extraction_is_identical(self, message):
        assert extract_trip_hints(message) == extract_trip_hints(message)

    def test_hints_bundle(self):
        hints = extract_trip_hints("Hey, take me to Rome.")
        assert hints.is_greeting is True
        assert hints.destination == "Rome"
        assert hints.dates == FLEXIBLE
        assert hints.budget == FLEXIBLE
