"""Currencies that accounts may hold."""

USD = "USD"
EUR = "EUR"
CAD = "CAD"

SUPPORTED_CURRENCIES = frozenset({USD, EUR, CAD})


def is_supported_currency(currency: str) -> bool:
    """Return True if ``currency`` is one of the supported currency codes."""
    return currency in SUPPORTED_CURRENCIES