"""Team, player and champion pool models."""

from dataclasses import dataclass, field
from typing import Optional

from counterpick.models.champion import Champion
from counterpick.utils.champion_ids import normalize_champion_id
from counterpick.utils.role_normalizer import (
    ROLE_ORDER,
    Role,
    normalize_role_strict,
    role_for_pick_slot,
)

SLOTS_PER_TEAM = 5


@dataclass(frozen=True)
class ChampionPoolEntry:
    """A player's record on one champion."""

    champion_id: str
    games_played: int
    win_rate: float  # percent, 0-100

    def __post_init__(self):
        if not self.champion_id:
            raise ValueError("Pool entry needs a champion id")
        if self.games_played < 0:
            raise ValueError(f"games_played must be >= 0, got {self.games_played}")
        if not 0 <= self.win_rate <= 100:
            raise ValueError(f"win_rate must be in [0, 100], got {self.win_rate}")

    @classmethod
    def from_dict(cls, data: dict) -> "ChampionPoolEntry":
        return cls(
            champion_id=normalize_champion_id(data.get("champion_id") or data.get("champion")),
            games_played=int(data.get("games_played", data.get("games", 0))),
            win_rate=float(data.get("win_rate", 0.0)),
        )

    def to_dict(self) -> dict:
        return {
            "champion_id": self.champion_id,
            "games_played": self.games_played,
            "win_rate": self.win_rate,
        }


@dataclass
class DraftPlayer:
    """A rostered player and their champion pool."""

    id: str
    name: str
    role: Role
    champion_pool: list[ChampionPoolEntry] = field(default_factory=list)

    def pool_entry(self, champion_id: str) -> Optional[ChampionPoolEntry]:
        for entry in self.champion_pool:
            if entry.champion_id == champion_id:
                return entry
        return None

    @classmethod
    def from_dict(cls, data: dict) -> "DraftPlayer":
        name = data.get("name", "")
        return cls(
            id=data.get("id") or normalize_champion_id(name),
            name=name,
            role=normalize_role_strict(data.get("role")),
            champion_pool=[
                ChampionPoolEntry.from_dict(entry)
                for entry in data.get("champion_pool", [])
            ],
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "role": self.role.value,
            "champion_pool": [entry.to_dict() for entry in self.champion_pool],
        }


def _empty_slots() -> list[Optional[Champion]]:
    return [None] * SLOTS_PER_TEAM


@dataclass
class TeamDraftState:
    """One side's bans, picks and roster during a draft.

    Pick slot ``i`` belongs to the i-th role in lane order and to the
    rostered player of that role. Players are kept in lane order.
    """

    team_name: str
    bans: list[Optional[Champion]] = field(default_factory=_empty_slots)
    picks: list[Optional[Champion]] = field(default_factory=_empty_slots)
    players: list[DraftPlayer] = field(default_factory=list)

    def __post_init__(self):
        if len(self.bans) != SLOTS_PER_TEAM or len(self.picks) != SLOTS_PER_TEAM:
            raise ValueError(f"{self.team_name} needs exactly {SLOTS_PER_TEAM} ban and pick slots")
        if len(self.players) > SLOTS_PER_TEAM:
            raise ValueError(f"{self.team_name} roster has more than {SLOTS_PER_TEAM} players")
        roles = [p.role for p in self.players]
        duplicates = sorted({r.value for r in roles if roles.count(r) > 1})
        if duplicates:
            raise ValueError(f"{self.team_name} roster has more than one {', '.join(duplicates)} player")
        self.players = sorted(self.players, key=lambda p: ROLE_ORDER.index(p.role))

    @property
    def filled_picks(self) -> list[Champion]:
        return [c for c in self.picks if c is not None]

    @property
    def filled_bans(self) -> list[Champion]:
        return [c for c in self.bans if c is not None]

    @property
    def pick_count(self) -> int:
        return len(self.filled_picks)

    def first_empty_pick(self) -> Optional[int]:
        for i, champ in enumerate(self.picks):
            if champ is None:
                return i
        return None

    def player_for_role(self, role: Role) -> Optional[DraftPlayer]:
        for player in self.players:
            if player.role == role:
                return player
        return None

    def player_at(self, slot_index: int) -> Optional[DraftPlayer]:
        """Player who owns a pick slot, matched by role."""
        role = role_for_pick_slot(slot_index)
        return self.player_for_role(role) if role is not None else None

    def unpicked_players(self) -> list[DraftPlayer]:
        """Players whose role slot has no champion yet."""
        return [p for p in self.players if self.picks[ROLE_ORDER.index(p.role)] is None]

    def clear(self) -> None:
        """Empty every ban and pick slot, keeping the roster."""
        self.bans = _empty_slots()
        self.picks = _empty_slots()

    def to_dict(self) -> dict:
        return {
            "team_name": self.team_name,
            "bans": [c.to_dict() if c else None for c in self.bans],
            "picks": [c.to_dict() if c else None for c in self.picks],
            "players": [p.to_dict() for p in self.players],
        }
