"""Random values for accounts, used to fill test data."""

import random
import string

from simplebank.currency import CAD, EUR, USD

ALPHABET = string.ascii_lowercase

_CURRENCIES = (USD, EUR, CAD)


def random_int(min_value: int, max_value: int) -> int:
    """Return a random integer in the closed range [min_value, max_value].

    Raises ValueError when the range is empty.
    """
    return random.randint(min_value, max_value)


def random_string(n: int) -> str:
    """Return a string of ``n`` random lowercase letters."""
    return "".join(random.choices(ALPHABET, k=max(n, 0)))


def random_owner() -> str:
    """Return a random six-letter owner name."""
    return random_string(6)


def random_money() -> int:
    """Return a random amount of money between 0 and 1000."""
    return random_int(0, 1000)


def random_currency() -> str:
    """Return one of the supported currency codes at random."""
    return random.choice(_CURRENCIES)


def random_email() -> str:
    """Return a random e-mail address."""
    return f"{random_string(6)}@example.com"