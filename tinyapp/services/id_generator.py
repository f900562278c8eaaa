"""
Random identifier generation for user IDs, short keys and visitor tokens.

The generators don't guarantee uniqueness on their own. Callers that need a
fresh key go through generate_unique_id with a check against the target store.
"""

import logging
import random
import secrets
import string
from typing import Callable

logger = logging.getLogger(__name__)

ALPHABET = string.ascii_letters + string.digits  # 62 characters


def generate_random_string(length: int) -> str:
    """
    Generate a random alphanumeric string of exactly `length` characters.

    Not cryptographically secure; fine for short keys and user IDs, which
    are public anyway. Use generate_token for anything secret-ish.
    """
    return ''.join(random.choice(ALPHABET) for _ in range(length))


def generate_token(length: int) -> str:
    """Same alphabet as generate_random_string, drawn from `secrets`"""
    return ''.join(secrets.choice(ALPHABET) for _ in range(length))


def generate_unique_id(
    length: int,
    is_taken: Callable[[str], bool],
    generator: Callable[[int], str] = generate_random_string
) -> str:
    """
    Generate an ID that `is_taken` reports as unused.

    Loops until a free candidate turns up. With 62**6 possible keys the
    expected number of attempts stays at ~1 for any realistic store size.
    Collisions are retried silently.

    Args:
        length: Length of the ID
        is_taken: Predicate checking the target store
        generator: Candidate source (swappable in tests)

    Returns:
        An ID not currently in use
    """
    candidate = generator(length)
    while is_taken(candidate):
        logger.debug("ID collision on %r, regenerating", candidate)
        candidate = generator(length)
    return candidate
