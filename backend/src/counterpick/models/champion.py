"""Champion reference data models."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from counterpick.utils.champion_ids import normalize_champion_id
from counterpick.utils.role_normalizer import ROLE_ORDER, Role, normalize_role


class DamageType(str, Enum):
    """Primary damage type of a champion."""

    AP = "AP"
    AD = "AD"
    TRUE = "TRUE"
    MIXED = "MIXED"


class PowerSpike(str, Enum):
    """Game window in which a champion or composition is unusually strong."""

    EARLY = "EARLY"
    MID = "MID"
    LATE = "LATE"


@dataclass(frozen=True)
class Champion:
    """Immutable champion reference entry, looked up by ``id``."""

    id: str
    name: str
    roles: frozenset[Role]
    damage_type: Optional[DamageType] = None
    tags: frozenset[str] = field(default_factory=frozenset)
    power_spikes: frozenset[PowerSpike] = field(default_factory=frozenset)

    def __post_init__(self):
        if not self.id:
            raise ValueError("Champion id must be non-empty")
        if not self.name:
            raise ValueError(f"Champion {self.id} must have a name")
        if not self.roles:
            raise ValueError(f"Champion {self.id} must have at least one role")

    @property
    def sorted_roles(self) -> list[Role]:
        """Roles in lane order (top to support)."""
        return [role for role in ROLE_ORDER if role in self.roles]

    def has_tag(self, tag: str) -> bool:
        return tag in self.tags

    @classmethod
    def from_dict(cls, data: dict) -> "Champion":
        """Build a champion from a knowledge-file entry.

        Unknown role strings are dropped; a champion left with no
        recognised role fails validation.
        """
        name = data.get("name", "")
        roles = frozenset(
            role for role in (normalize_role(r) for r in data.get("roles", [])) if role
        )
        damage_type = data.get("damage_type")
        return cls(
            id=normalize_champion_id(data.get("id") or name),
            name=name,
            roles=roles,
            damage_type=DamageType(damage_type.upper()) if damage_type else None,
            tags=frozenset(t.lower() for t in data.get("tags", [])),
            power_spikes=frozenset(
                PowerSpike(s.upper()) for s in data.get("power_spikes", [])
            ),
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "roles": [role.value for role in self.sorted_roles],
            "damage_type": self.damage_type.value if self.damage_type else None,
            "tags": sorted(self.tags),
            "power_spikes": [s.value for s in PowerSpike if s in self.power_spikes],
        }
