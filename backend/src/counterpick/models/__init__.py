"""Data models for the Counterpick draft assistant."""

from counterpick.models.champion import Champion, DamageType, PowerSpike
from counterpick.models.draft import (
    PHASE_LABELS,
    ActionType,
    DraftAction,
    DraftPhase,
    DraftStep,
    Side,
)
from counterpick.models.team import (
    SLOTS_PER_TEAM,
    ChampionPoolEntry,
    DraftPlayer,
    TeamDraftState,
)
from counterpick.models.recommendations import (
    Recommendation,
    RecommendationCategory,
    RecommendationResult,
)
from counterpick.models.analysis import (
    CompositionAnalysis,
    CompositionArchetype,
    DamageProfile,
)
from counterpick.utils.role_normalizer import Role

__all__ = [
    "Champion",
    "DamageType",
    "PowerSpike",
    "Role",
    "PHASE_LABELS",
    "ActionType",
    "DraftAction",
    "DraftPhase",
    "DraftStep",
    "Side",
    "SLOTS_PER_TEAM",
    "ChampionPoolEntry",
    "DraftPlayer",
    "TeamDraftState",
    "Recommendation",
    "RecommendationCategory",
    "RecommendationResult",
    "CompositionAnalysis",
    "CompositionArchetype",
    "DamageProfile",
]
