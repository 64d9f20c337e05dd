import logging
import math
from datetime import date, datetime
from typing import Any, Optional

logger = logging.getLogger(__name__)

_GENDER_ALIASES = {
    'm': 'male',
    'f': 'female',
}

_TRUTHY_FLAGS = {'1', 'yes', 'true'}


def normalize_gender(value: Optional[str]) -> Optional[str]:
    """Lowercase/trim a gender value and map legacy single-letter aliases.

    Returns None for empty values and for "any", which both mean
    "no restriction" when used as a preference.
    """
    if value is None:
        return None
    normalized = str(value).strip().lower()
    if not normalized or normalized == 'any':
        return None
    return _GENDER_ALIASES.get(normalized, normalized)


def is_truthy_flag(value: Any) -> bool:
    """Normalize free-form yes/no columns ("1", "yes", "true", ...) to bool."""
    return str(value).strip().lower() in _TRUTHY_FLAGS


def is_unset(value: Any) -> bool:
    """Categorical ids use 0 / "" / "null" for "not specified"."""
    if value is None:
        return True
    text = str(value).strip()
    return text in ('', '0', 'null')


def calculate_age(birthdate: Any, today: Optional[date] = None) -> Optional[int]:
    """Age in whole years on ``today`` (defaults to the current date)."""
    if not birthdate:
        return None

    if isinstance(birthdate, datetime):
        birthdate = birthdate.date()
    elif isinstance(birthdate, str):
        try:
            birthdate = date.fromisoformat(birthdate[:10])
        except ValueError:
            logger.warning(f"Unparseable birthdate: {birthdate!r}")
            return None

    today = today or date.today()
    age = today.year - birthdate.year
    if (today.month, today.day) < (birthdate.month, birthdate.day):
        age -= 1
    return age


def round_half_up(value: float) -> int:
    """Round .5 upwards (Python's round() rounds half to even)."""
    return int(math.floor(value + 0.5))
