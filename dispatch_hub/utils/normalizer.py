"""
Input normalization for operator-entered values.

CRITICAL: These are deterministic functions - same input always produces
same output. Queue keys, category sets and search terms all go through
normalize_key so that "Central " and "central" address the same district.
"""

import logging
from typing import Optional, Union

from dispatch_hub.models.incident import Priority

logger = logging.getLogger(__name__)


def normalize_key(value: Optional[str]) -> str:
    """
    Case-fold and trim a category, district or search term.

    Args:
        value: Raw operator input (may be None)

    Returns:
        Lowercase, trimmed string ("" for None)
    """
    if value is None:
        return ""
    return value.strip().lower()


def parse_priority(raw: Union[str, int]) -> Priority:
    """
    Parse operator input into a Priority.

    Accepts 0 / 1 as int or numeric text. This is adapter-level validation:
    the console reprompts on ValueError so bad values never reach the core.

    Raises:
        ValueError: If the input is not a number, or is a number other than 0 or 1
    """
    if isinstance(raw, str):
        text = raw.strip()
        try:
            number = int(text)
        except ValueError:
            logger.debug(f"Rejected non-numeric priority input: {raw!r}")
            raise ValueError("Invalid input. Please enter a number (0 or 1).")
    else:
        number = raw

    try:
        return Priority(number)
    except ValueError:
        logger.debug(f"Rejected out-of-range priority: {number!r}")
        raise ValueError("Invalid priority. Please enter 0 or 1.")
