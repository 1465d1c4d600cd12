"""Business logic services."""

from counterpick.services.champion_catalog import ChampionCatalog
from counterpick.services.composition_analyzer import CompositionAnalyzer
from counterpick.services.draft_service import DraftService
from counterpick.services.draft_state_machine import DraftStateMachine
from counterpick.services.narrative_client import NarrativeClient
from counterpick.services.recommendation_engine import RecommendationEngine
from counterpick.services.session_manager import DraftSession, SessionManager

__all__ = [
    "ChampionCatalog",
    "CompositionAnalyzer",
    "DraftService",
    "DraftStateMachine",
    "NarrativeClient",
    "RecommendationEngine",
    "DraftSession",
    "SessionManager",
]
