"""Champion catalog loaded from champions.json."""

import logging
from pathlib import Path
from typing import Iterator, Optional

from counterpick.models.champion import Champion
from counterpick.utils.champion_ids import normalize_champion_id
from counterpick.utils.knowledge import default_knowledge_dir, load_knowledge_file
from counterpick.utils.role_normalizer import Role, normalize_role

logger = logging.getLogger(__name__)


class ChampionCatalog:
    """Read-only champion reference table, iterated in file order."""

    def __init__(self, knowledge_dir: Optional[Path] = None, champions: Optional[list[Champion]] = None):
        self.knowledge_dir = knowledge_dir or default_knowledge_dir()
        self._champions: dict[str, Champion] = {}
        if champions is not None:
            for champ in champions:
                self._champions[champ.id] = champ
        else:
            self._load_data()

    def _load_data(self):
        data = load_knowledge_file(self.knowledge_dir, "champions.json")
        if data is None:
            return
        for entry in data.get("champions", []):
            try:
                champ = Champion.from_dict(entry)
            except ValueError as e:
                logger.warning(f"Skipping invalid champion entry {entry.get('name')!r}: {e}")
                continue
            self._champions[champ.id] = champ
        logger.info(f"Loaded {len(self._champions)} champions")

    def get(self, champion: Optional[str]) -> Optional[Champion]:
        """Look up by id or display name ("K'Sante" and "ksante" both work)."""
        return self._champions.get(normalize_champion_id(champion))

    def all(self) -> list[Champion]:
        return list(self._champions.values())

    def by_role(self, role: str) -> list[Champion]:
        normalized = normalize_role(role)
        if normalized is None:
            return []
        return [c for c in self._champions.values() if normalized in c.roles]

    def roles_for(self, champion_id: str) -> frozenset[Role]:
        champ = self._champions.get(champion_id)
        return champ.roles if champ else frozenset()

    def __contains__(self, champion_id: str) -> bool:
        return normalize_champion_id(champion_id) in self._champions

    def __iter__(self) -> Iterator[Champion]:
        return iter(self._champions.values())

    def __len__(self) -> int:
        return len(self._champions)
