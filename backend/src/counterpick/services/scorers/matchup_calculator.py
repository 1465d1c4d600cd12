"""Champion-vs-champion matchup lookups."""
from pathlib import Path
from typing import Optional

from counterpick.utils.knowledge import default_knowledge_dir, load_knowledge_file


class MatchupCalculator:
    """Calculates matchup scores between champions."""

    NEUTRAL = {"score": 0.5, "games": 0, "data_source": "none"}

    def __init__(self, knowledge_dir: Optional[Path] = None, counters: Optional[dict] = None):
        self.knowledge_dir = knowledge_dir or default_knowledge_dir()
        self._counters: dict = {}
        if counters is not None:
            self._counters = dict(counters)
        else:
            self._load_data()
        self._known: set[str] = set(self._counters)
        for opponents in self._counters.values():
            self._known.update(opponents)

    def _load_data(self):
        data = load_knowledge_file(self.knowledge_dir, "matchup_stats.json")
        if data is not None:
            self._counters = data.get("counters", {})

    @property
    def has_data(self) -> bool:
        return bool(self._counters)

    def knows(self, champion_id: str) -> bool:
        """Whether the table holds any matchup involving ``champion_id``."""
        return champion_id in self._known

    def get_matchup(self, our_champion: str, enemy_champion: str) -> dict:
        """Win rate of ``our_champion`` against ``enemy_champion``.

        1. DIRECT LOOKUP: our_champion vs enemy_champion, returned as stored.
        2. REVERSE LOOKUP: enemy_champion vs our_champion, inverted
           (1.0 - win_rate). Matchup win rates are complementary: if A
           beats B 60% of the time, B beats A 40%.

        Returns a neutral 0.5 with ``data_source="none"`` when neither
        direction is known.
        """
        direct = self._counters.get(our_champion, {}).get(enemy_champion)
        if direct is not None:
            return {
                "score": direct.get("win_rate", 0.5),
                "games": direct.get("games", 0),
                "data_source": "direct_lookup",
            }

        reverse = self._counters.get(enemy_champion, {}).get(our_champion)
        if reverse is not None:
            return {
                "score": round(1.0 - reverse.get("win_rate", 0.5), 3),
                "games": reverse.get("games", 0),
                "data_source": "reverse_lookup",
            }

        return dict(self.NEUTRAL)
