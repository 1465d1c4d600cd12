"""Recommendation models for draft suggestions."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from counterpick.errors import DegradedRecommendationWarning
from counterpick.models.draft import ActionType, Side
from counterpick.utils.role_normalizer import Role


class RecommendationCategory(str, Enum):
    """Dominant reason a champion was recommended.

    Declaration order breaks ties between equally large factor bonuses.
    """

    COMFORT = "COMFORT"
    COUNTER = "COUNTER"
    META = "META"
    SYNERGY = "SYNERGY"
    DENY = "DENY"
    FLEX = "FLEX"


@dataclass
class Recommendation:
    """A recommended champion for the current ban or pick."""

    champion_id: str
    champion_name: str
    score: float  # 0-100
    category: RecommendationCategory
    reasons: list[str]  # largest contribution first
    flex_lanes: list[Role] = field(default_factory=list)
    team_needs: list[str] = field(default_factory=list)
    # Score breakdown
    components: dict[str, float] = field(default_factory=dict)
    mastery_level: Optional[str] = None  # "high", "medium", "low"
    target_player: Optional[str] = None  # Picking player, or who a ban denies
    off_role: bool = False

    def __post_init__(self):
        if not 0 <= self.score <= 100:
            raise ValueError(f"score must be in [0, 100], got {self.score}")
        if not self.reasons:
            raise ValueError(f"{self.champion_id} recommendation needs at least one reason")

    def to_dict(self) -> dict:
        return {
            "champion_id": self.champion_id,
            "champion_name": self.champion_name,
            "score": self.score,
            "category": self.category.value,
            "reasons": list(self.reasons),
            "flex_lanes": [role.value for role in self.flex_lanes],
            "team_needs": list(self.team_needs),
            "components": dict(self.components),
            "mastery_level": self.mastery_level,
            "target_player": self.target_player,
            "off_role": self.off_role,
        }


@dataclass
class RecommendationResult:
    """Ranked recommendations for one draft step."""

    action_type: ActionType
    team: Side
    target_role: Optional[Role] = None  # PICK only
    recommendations: list[Recommendation] = field(default_factory=list)
    warnings: list[DegradedRecommendationWarning] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "action_type": self.action_type.value,
            "team": self.team.value,
            "target_role": self.target_role.value if self.target_role else None,
            "recommendations": [r.to_dict() for r in self.recommendations],
            "warnings": [w.to_dict() for w in self.warnings],
        }
