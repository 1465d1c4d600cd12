"""Meta strength scorer based on tier and pick/ban presence."""
from pathlib import Path
from typing import Optional

from counterpick.utils.knowledge import default_knowledge_dir, load_knowledge_file


class MetaScorer:
    """Scores champions based on current meta strength."""

    TIER_SCORES = {"S": 1.0, "A": 0.8, "B": 0.6, "C": 0.4, "D": 0.2}

    def __init__(self, knowledge_dir: Optional[Path] = None, meta_stats: Optional[dict] = None):
        self.knowledge_dir = knowledge_dir or default_knowledge_dir()
        self._meta_stats: dict = {}
        if meta_stats is not None:
            self._meta_stats = dict(meta_stats)
        else:
            self._load_data()

    def _load_data(self):
        data = load_knowledge_file(self.knowledge_dir, "meta_stats.json")
        if data is not None:
            self._meta_stats = data.get("champions", {})

    @property
    def has_data(self) -> bool:
        return bool(self._meta_stats)

    def get_meta_score(self, champion_id: str) -> float:
        """Meta strength 0.0-1.0; 0.0 for champions outside the meta table.

        Uses the stored meta_score, falling back to the tier's score.
        """
        stats = self._meta_stats.get(champion_id)
        if not stats:
            return 0.0
        score = stats.get("meta_score")
        if score is None:
            score = self.TIER_SCORES.get((stats.get("meta_tier") or "").upper(), 0.0)
        return max(0.0, min(1.0, float(score)))

    def get_meta_tier(self, champion_id: str) -> Optional[str]:
        """Meta tier (S/A/B/C/D) for a champion."""
        stats = self._meta_stats.get(champion_id)
        if not stats:
            return None
        return stats.get("meta_tier")

    def get_presence(self, champion_id: str) -> float:
        stats = self._meta_stats.get(champion_id) or {}
        return stats.get("presence", 0.0)
