"""Core scoring components for recommendation engine."""
from counterpick.services.scorers.meta_scorer import MetaScorer
from counterpick.services.scorers.proficiency_scorer import ProficiencyScorer
from counterpick.services.scorers.matchup_calculator import MatchupCalculator

__all__ = [
    "MetaScorer",
    "ProficiencyScorer",
    "MatchupCalculator",
]
