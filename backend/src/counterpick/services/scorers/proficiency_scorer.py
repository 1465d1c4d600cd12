"""Player comfort scoring from champion pools."""
from pathlib import Path
from typing import Optional

from counterpick.models.team import ChampionPoolEntry, DraftPlayer
from counterpick.utils.champion_ids import normalize_champion_id
from counterpick.utils.knowledge import default_knowledge_dir, load_knowledge_file


class ProficiencyScorer:
    """Scores player comfort on champions.

    A roster entry's own ``champion_pool`` wins; when it is empty the pool
    recorded for that player name in ``player_pools.json`` is used.
    """

    MASTERY_THRESHOLDS = (("high", 8), ("medium", 4), ("low", 1))
    FULL_CONFIDENCE_GAMES = 10

    def __init__(self, knowledge_dir: Optional[Path] = None, player_pools: Optional[dict] = None):
        self.knowledge_dir = knowledge_dir or default_knowledge_dir()
        self._pools: dict[str, list[ChampionPoolEntry]] = {}
        if player_pools is not None:
            self._pools = self._parse_pools(player_pools)
        else:
            self._load_data()

    def _load_data(self):
        data = load_knowledge_file(self.knowledge_dir, "player_pools.json")
        if data is not None:
            self._pools = self._parse_pools(data.get("players", {}))

    @staticmethod
    def _parse_pools(raw: dict) -> dict[str, list[ChampionPoolEntry]]:
        pools = {}
        for player_name, entries in raw.items():
            pools[player_name.lower()] = [ChampionPoolEntry.from_dict(e) for e in entries]
        return pools

    def known_pool(self, player_name: str) -> list[ChampionPoolEntry]:
        return list(self._pools.get(player_name.lower(), []))

    def pool_for(self, player: Optional[DraftPlayer]) -> list[ChampionPoolEntry]:
        if player is None:
            return []
        if player.champion_pool:
            return player.champion_pool
        return self.known_pool(player.name)

    def entry_for(self, player: Optional[DraftPlayer], champion_id: str) -> Optional[ChampionPoolEntry]:
        champion_id = normalize_champion_id(champion_id)
        for entry in self.pool_for(player):
            if entry.champion_id == champion_id:
                return entry
        return None

    def comfort_score(self, player: Optional[DraftPlayer], champion_id: str) -> float:
        """Comfort 0.0-1.0: games factor scaled by win rate; 0 with no games."""
        entry = self.entry_for(player, champion_id)
        if entry is None or entry.games_played == 0:
            return 0.0
        games_factor = min(1.0, entry.games_played / self.FULL_CONFIDENCE_GAMES)
        return round(games_factor * (0.5 + 0.5 * entry.win_rate / 100), 4)

    def mastery_level(self, player: Optional[DraftPlayer], champion_id: str) -> Optional[str]:
        entry = self.entry_for(player, champion_id)
        if entry is None:
            return None
        return self.games_to_mastery(entry.games_played)

    @classmethod
    def games_to_mastery(cls, games: int) -> Optional[str]:
        for level, threshold in cls.MASTERY_THRESHOLDS:
            if games >= threshold:
                return level
        return None

    def enrich_player(self, player: DraftPlayer) -> DraftPlayer:
        """Return ``player`` with its pool filled from the provider when empty."""
        if player.champion_pool:
            return player
        return DraftPlayer(
            id=player.id,
            name=player.name,
            role=player.role,
            champion_pool=self.known_pool(player.name),
        )
