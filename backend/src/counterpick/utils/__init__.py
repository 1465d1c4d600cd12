"""Utility modules for counterpick."""

from counterpick.utils.role_normalizer import (
    ROLE_ALIASES,
    ROLE_ORDER,
    Role,
    normalize_role,
    normalize_role_strict,
    role_for_pick_slot,
)
from counterpick.utils.champion_ids import normalize_champion_id

__all__ = [
    "ROLE_ALIASES",
    "ROLE_ORDER",
    "Role",
    "normalize_role",
    "normalize_role_strict",
    "role_for_pick_slot",
    "normalize_champion_id",
]
