"""Champion availability: a champion can be banned or picked at most once per draft."""

from typing import Iterable

from counterpick.models.champion import Champion
from counterpick.models.team import TeamDraftState


def excluded_set(blue: TeamDraftState, red: TeamDraftState) -> set[str]:
    """Ids of every champion already banned or picked by either team.

    Recomputed from the slots on every call.
    """
    excluded: set[str] = set()
    for team in (blue, red):
        for champ in (*team.bans, *team.picks):
            if champ is not None and champ.id:
                excluded.add(champ.id)
    return excluded


def is_available(champion_id: str, blue: TeamDraftState, red: TeamDraftState) -> bool:
    return champion_id not in excluded_set(blue, red)


def available_champions(
    catalog: Iterable[Champion], blue: TeamDraftState, red: TeamDraftState
) -> list[Champion]:
    """Catalog entries not yet banned or picked, in catalog order."""
    excluded = excluded_set(blue, red)
    return [champ for champ in catalog if champ.id not in excluded]
