"""Centralized role normalization utility.

All role handling in the codebase goes through this module so that the
five lanes are always the same ``Role`` members, whatever spelling the
roster data, the knowledge files or the client happen to use.
"""

from enum import Enum
from typing import Optional


class Role(str, Enum):
    """The five lanes, used for both player identity and champion eligibility."""

    TOP = "TOP"
    JUNGLE = "JUNGLE"
    MID = "MID"
    ADC = "ADC"
    SUPPORT = "SUPPORT"


# Pick slot i belongs to the player in ROLE_ORDER[i]
ROLE_ORDER: tuple[Role, ...] = (
    Role.TOP,
    Role.JUNGLE,
    Role.MID,
    Role.ADC,
    Role.SUPPORT,
)

# Mapping from known role spellings (lowercased) to the canonical Role
ROLE_ALIASES: dict[str, Role] = {
    # Top lane
    "top": Role.TOP,
    "top laner": Role.TOP,
    "toplane": Role.TOP,
    "topside": Role.TOP,

    # Jungle
    "jungle": Role.JUNGLE,
    "jungler": Role.JUNGLE,
    "jng": Role.JUNGLE,
    "jgl": Role.JUNGLE,
    "jg": Role.JUNGLE,

    # Mid lane
    "mid": Role.MID,
    "middle": Role.MID,
    "mid laner": Role.MID,
    "midlane": Role.MID,

    # Bot carry
    "adc": Role.ADC,
    "bot": Role.ADC,
    "bottom": Role.ADC,
    "bot laner": Role.ADC,
    "ad carry": Role.ADC,
    "marksman": Role.ADC,
    "carry": Role.ADC,

    # Support
    "support": Role.SUPPORT,
    "sup": Role.SUPPORT,
    "supp": Role.SUPPORT,
    "utility": Role.SUPPORT,
}


def normalize_role(role: Optional[str]) -> Optional[Role]:
    """Normalize a role string to a ``Role`` member.

    Args:
        role: Role string in any known format (e.g., "JGL", "jungle", "bot")

    Returns:
        The matching Role, or None if the role is missing or unknown

    Examples:
        >>> normalize_role("JGL")
        <Role.JUNGLE: 'JUNGLE'>
        >>> normalize_role("bot")
        <Role.ADC: 'ADC'>
        >>> normalize_role(None)
    """
    if role is None:
        return None
    if isinstance(role, Role):
        return role

    return ROLE_ALIASES.get(role.strip().lower())


def normalize_role_strict(role: str) -> Role:
    """Normalize a role string, raising ValueError if unknown."""
    normalized = normalize_role(role)
    if normalized is None:
        raise ValueError(f"Unknown role: {role}")
    return normalized


def role_for_pick_slot(slot_index: int) -> Optional[Role]:
    """Role that owns a pick slot in the fixed role order."""
    if 0 <= slot_index < len(ROLE_ORDER):
        return ROLE_ORDER[slot_index]
    return None
