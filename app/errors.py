"""
Errors raised by the external provider clients.

Any ProviderError fails the whole turn; the API layer reports it as HTTP 500.
"""


class ProviderError(RuntimeError):
    """A search or completion provider could not produce a result."""

    provider = "provider"


class SearchProviderError(ProviderError):
    """Tavily search failed (missing key, non-2xx, transport error)."""

    provider = "tavily"


class CompletionProviderError(ProviderError):
    """Groq completion failed (missing key, non-2xx, transport error)."""

    provider = "groq"
