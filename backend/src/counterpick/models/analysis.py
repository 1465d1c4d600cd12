"""Team composition analysis models."""

from dataclasses import dataclass, field
from enum import Enum

from counterpick.models.champion import PowerSpike
from counterpick.models.draft import Side


class CompositionArchetype(str, Enum):
    TEAMFIGHT = "TEAMFIGHT"
    POKE = "POKE"
    SPLITPUSH = "SPLITPUSH"
    PICK = "PICK"
    MIXED = "MIXED"


@dataclass(frozen=True)
class DamageProfile:
    """Integer damage percentages; sum to 100, or all 0 with no damage data."""

    ap: int = 0
    ad: int = 0
    true: int = 0

    def __post_init__(self):
        total = self.ap + self.ad + self.true
        if total not in (0, 100):
            raise ValueError(f"Damage percentages must sum to 100 (or 0), got {total}")

    def to_dict(self) -> dict:
        return {"ap": self.ap, "ad": self.ad, "true": self.true}


@dataclass
class CompositionAnalysis:
    """Derived summary of one team's picks."""

    team: Side
    archetype: CompositionArchetype
    damage_profile: DamageProfile
    power_spikes: list[PowerSpike] = field(default_factory=list)
    strengths: list[str] = field(default_factory=list)
    weaknesses: list[str] = field(default_factory=list)
    engage_tools: list[str] = field(default_factory=list)
    disengage_tools: list[str] = field(default_factory=list)
    engage_level: int = 0
    peel_level: int = 0
    waveclear_level: int = 0
    pick_count: int = 0

    def to_dict(self) -> dict:
        return {
            "team": self.team.value,
            "archetype": self.archetype.value,
            "damage_profile": self.damage_profile.to_dict(),
            "power_spikes": [s.value for s in self.power_spikes],
            "strengths": list(self.strengths),
            "weaknesses": list(self.weaknesses),
            "engage_tools": list(self.engage_tools),
            "disengage_tools": list(self.disengage_tools),
            "engage_level": self.engage_level,
            "peel_level": self.peel_level,
            "waveclear_level": self.waveclear_level,
            "pick_count": self.pick_count,
        }
