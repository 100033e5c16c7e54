"""
Proficiency scale used to compare a person's skill level with a project's minimum
"""
import logging
from types import MappingProxyType
from typing import Literal

from errors import UnknownProficiency

logger = logging.getLogger(__name__)

ProficiencyLevel = Literal["Beginner", "Intermediate", "Advanced", "Expert"]

PROFICIENCY_LEVELS = MappingProxyType({
    "Beginner": 1,
    "Intermediate": 2,
    "Advanced": 3,
    "Expert": 4,
})
PROFICIENCY_LABELS = tuple(PROFICIENCY_LEVELS)

# Unrecognized names rank below every real level
UNKNOWN_LEVEL = 0


def level_of(name) -> int:
    """
    Ordinal (1-4) of a proficiency name.

    Never raises: anything outside the scale is logged and ranked as
    UNKNOWN_LEVEL so that malformed stored data cannot abort a scoring run.
    """
    level = PROFICIENCY_LEVELS.get(name)
    if level is None:
        logger.warning(f"Unknown proficiency {name!r}, treating as level {UNKNOWN_LEVEL}")
        return UNKNOWN_LEVEL
    return level


def parse_proficiency(name) -> str:
    """Validate a proficiency name on the write path; raises UnknownProficiency."""
    value = (name or "").strip() if isinstance(name, str) else name
    if value not in PROFICIENCY_LEVELS:
        raise UnknownProficiency(name)
    return value
