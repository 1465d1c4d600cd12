"""Synergy scoring from curated pair ratings."""
from pathlib import Path
from typing import Optional

from counterpick.utils.champion_ids import normalize_champion_id
from counterpick.utils.knowledge import default_knowledge_dir, load_knowledge_file


class SynergyService:
    """Scores champion synergies."""

    RATING_MULTIPLIERS = {"S": 1.0, "A": 0.8, "B": 0.6, "C": 0.4}

    def __init__(self, knowledge_dir: Optional[Path] = None, synergies: Optional[list] = None):
        self.knowledge_dir = knowledge_dir or default_knowledge_dir()
        self._curated_synergies: dict[tuple[str, str], str] = {}
        if synergies is None:
            data = load_knowledge_file(self.knowledge_dir, "synergies.json")
            synergies = data.get("synergies", []) if data else []
        self._load_pairs(synergies)

    def _load_pairs(self, synergies: list):
        for syn in synergies:
            champs = [normalize_champion_id(c) for c in syn.get("champions", [])]
            if len(champs) >= 2:
                key = tuple(sorted(champs[:2]))
                self._curated_synergies[key] = syn.get("strength", "C").upper()

    @property
    def has_data(self) -> bool:
        return bool(self._curated_synergies)

    def get_rating(self, champ_a: str, champ_b: str) -> Optional[str]:
        """Curated S/A/B/C rating for a pair, or None if unrated."""
        key = tuple(sorted([champ_a, champ_b]))
        return self._curated_synergies.get(key)

    def get_synergy_score(self, champ_a: str, champ_b: str) -> float:
        """Synergy 0.0-1.0 for a pair; 0.0 when unrated."""
        rating = self.get_rating(champ_a, champ_b)
        if rating is None:
            return 0.0
        return self.RATING_MULTIPLIERS.get(rating, 0.4)

    def calculate_team_synergy(self, picks: list[str]) -> dict:
        """Rated pairs within a team, strongest first."""
        synergy_pairs = []
        for i, champ_a in enumerate(picks):
            for champ_b in picks[i + 1:]:
                rating = self.get_rating(champ_a, champ_b)
                if rating:
                    synergy_pairs.append({"champions": [champ_a, champ_b], "rating": rating})

        synergy_pairs.sort(key=lambda x: -self.RATING_MULTIPLIERS.get(x["rating"], 0))
        return {"pair_count": len(synergy_pairs), "synergy_pairs": synergy_pairs[:5]}
