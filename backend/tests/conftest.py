"""Shared fixtures: a small in-memory champion table and scorers built from it."""

import pytest

from counterpick.models.champion import Champion
from counterpick.models.team import ChampionPoolEntry, DraftPlayer, TeamDraftState
from counterpick.services.champion_catalog import ChampionCatalog
from counterpick.services.composition_analyzer import CompositionAnalyzer
from counterpick.services.recommendation_engine import RecommendationEngine
from counterpick.services.scorers import MatchupCalculator, MetaScorer, ProficiencyScorer
from counterpick.services.synergy_service import SynergyService
from counterpick.utils.role_normalizer import Role


@pytest.fixture
def anyio_backend():
    return "asyncio"

CHAMPION_ROWS = [
    # id, name, roles, damage, tags, spikes
    ("ksante", "K'Sante", ["TOP"], "AD", ["engage", "frontline", "teamfight"], ["MID"]),
    ("rumble", "Rumble", ["TOP", "MID"], "AP", ["teamfight", "waveclear"], ["EARLY", "MID"]),
    ("jax", "Jax", ["TOP", "JUNGLE"], "MIXED", ["splitpush"], ["MID", "LATE"]),
    ("renekton", "Renekton", ["TOP"], "AD", ["engage"], ["EARLY"]),
    ("gnar", "Gnar", ["TOP"], "AD", ["engage", "teamfight"], ["MID"]),
    ("fiora", "Fiora", ["TOP"], "TRUE", ["splitpush"], ["LATE"]),
    ("leesin", "Lee Sin", ["JUNGLE"], "AD", ["engage", "pick"], ["EARLY"]),
    ("viego", "Viego", ["JUNGLE"], "AD", ["pick"], ["MID"]),
    ("sejuani", "Sejuani", ["JUNGLE"], "AP", ["engage", "teamfight"], ["MID"]),
    ("jarvaniv", "Jarvan IV", ["JUNGLE"], "AD", ["engage", "teamfight"], ["EARLY"]),
    ("vi", "Vi", ["JUNGLE"], "AD", ["engage", "pick"], ["EARLY"]),
    ("azir", "Azir", ["MID"], "AP", ["poke", "teamfight", "disengage"], ["LATE"]),
    ("orianna", "Orianna", ["MID"], "AP", ["teamfight", "peel", "waveclear"], ["MID", "LATE"]),
    ("syndra", "Syndra", ["MID"], "AP", ["pick", "poke"], ["MID"]),
    ("ahri", "Ahri", ["MID"], "AP", ["pick", "waveclear"], ["MID"]),
    ("leblanc", "LeBlanc", ["MID"], "AP", ["pick"], ["EARLY"]),
    ("jinx", "Jinx", ["ADC"], "AD", ["teamfight", "waveclear"], ["LATE"]),
    ("aphelios", "Aphelios", ["ADC"], "AD", ["teamfight"], ["LATE"]),
    ("kaisa", "Kai'Sa", ["ADC"], "MIXED", ["pick"], ["MID", "LATE"]),
    ("varus", "Varus", ["ADC", "MID"], "AD", ["poke", "pick"], ["MID"]),
    ("ezreal", "Ezreal", ["ADC"], "AD", ["poke"], ["MID"]),
    ("nautilus", "Nautilus", ["SUPPORT"], "AP", ["engage", "peel", "pick"], ["EARLY"]),
    ("rakan", "Rakan", ["SUPPORT"], "AP", ["engage", "disengage", "peel"], ["MID"]),
    ("thresh", "Thresh", ["SUPPORT"], "MIXED", ["engage", "disengage", "peel"], ["EARLY", "MID"]),
    ("lulu", "Lulu", ["SUPPORT"], "AP", ["disengage", "peel"], ["MID"]),
    ("braum", "Braum", ["SUPPORT"], "AP", ["disengage", "peel"], ["EARLY"]),
]

META_STATS = {
    "ksante": {"meta_tier": "S", "meta_score": 0.92},
    "azir": {"meta_tier": "S", "meta_score": 0.90},
    "aphelios": {"meta_tier": "S", "meta_score": 0.89},
    "viego": {"meta_tier": "S", "meta_score": 0.88},
    "rakan": {"meta_tier": "S", "meta_score": 0.87},
    "kaisa": {"meta_tier": "A", "meta_score": 0.82},
    "rumble": {"meta_tier": "A", "meta_score": 0.81},
    "orianna": {"meta_tier": "A", "meta_score": 0.80},
    "jax": {"meta_tier": "A", "meta_score": 0.80},
    "nautilus": {"meta_tier": "A", "meta_score": 0.80},
    "leesin": {"meta_tier": "A", "meta_score": 0.79},
    "jinx": {"meta_tier": "A", "meta_score": 0.78},
    "varus": {"meta_tier": "A", "meta_score": 0.73},
    "syndra": {"meta_tier": "A", "meta_score": 0.76},
    "thresh": {"meta_tier": "B"},
}

MATCHUPS = {
    "varus": {"jinx": {"win_rate": 0.56, "games": 26}},
    "jax": {"ksante": {"win_rate": 0.55, "games": 35}},
    "syndra": {"azir": {"win_rate": 0.55, "games": 37}},
    "braum": {"nautilus": {"win_rate": 0.56, "games": 19}},
}

SYNERGIES = [
    {"champions": ["Orianna", "Jarvan IV"], "strength": "S"},
    {"champions": ["Jinx", "Lulu"], "strength": "A"},
    {"champions": ["Aphelios", "Lulu"], "strength": "B"},
]

C9_POOLS = {
    "Thanatos": [
        {"champion": "Rumble", "games": 10, "win_rate": 70.0},
        {"champion": "K'Sante", "games": 8, "win_rate": 62.5},
    ],
    "Blaber": [
        {"champion": "Lee Sin", "games": 12, "win_rate": 66.7},
        {"champion": "Viego", "games": 7, "win_rate": 57.1},
    ],
    "APA": [
        {"champion": "Ahri", "games": 10, "win_rate": 70.0},
        {"champion": "Azir", "games": 8, "win_rate": 62.5},
    ],
    "Zven": [
        {"champion": "Jinx", "games": 11, "win_rate": 72.7},
        {"champion": "Kai'Sa", "games": 9, "win_rate": 66.7},
        {"champion": "Varus", "games": 2, "win_rate": 0.0},
    ],
    "Vulcan": [
        {"champion": "Nautilus", "games": 10, "win_rate": 70.0},
        {"champion": "Rakan", "games": 7, "win_rate": 71.4},
    ],
}

C9_ROSTER = [
    ("Thanatos", Role.TOP),
    ("Blaber", Role.JUNGLE),
    ("APA", Role.MID),
    ("Zven", Role.ADC),
    ("Vulcan", Role.SUPPORT),
]


def make_champion(row) -> Champion:
    champion_id, name, roles, damage, tags, spikes = row
    return Champion.from_dict({
        "id": champion_id,
        "name": name,
        "roles": roles,
        "damage_type": damage,
        "tags": tags,
        "power_spikes": spikes,
    })


def make_players(roster=C9_ROSTER, pools=None) -> list[DraftPlayer]:
    """Roster players; with ``pools`` each player carries its pool inline."""
    players = []
    for name, role in roster:
        entries = (pools or {}).get(name, [])
        players.append(DraftPlayer(
            id=name.lower(),
            name=name,
            role=role,
            champion_pool=[ChampionPoolEntry.from_dict(e) for e in entries],
        ))
    return players


@pytest.fixture
def champions() -> list[Champion]:
    return [make_champion(row) for row in CHAMPION_ROWS]


@pytest.fixture
def catalog(champions) -> ChampionCatalog:
    return ChampionCatalog(champions=champions)


@pytest.fixture
def champ(catalog):
    """Look up a test champion by name or id."""
    def _get(name: str) -> Champion:
        found = catalog.get(name)
        assert found is not None, f"{name} missing from the test catalog"
        return found
    return _get


@pytest.fixture
def proficiency_scorer() -> ProficiencyScorer:
    return ProficiencyScorer(player_pools=C9_POOLS)


@pytest.fixture
def engine(catalog, proficiency_scorer) -> RecommendationEngine:
    return RecommendationEngine(
        catalog=catalog,
        meta_scorer=MetaScorer(meta_stats=META_STATS),
        matchup_calculator=MatchupCalculator(counters=MATCHUPS),
        synergy_service=SynergyService(synergies=SYNERGIES),
        proficiency_scorer=proficiency_scorer,
        composition_analyzer=CompositionAnalyzer(),
    )


@pytest.fixture
def bare_engine(catalog) -> RecommendationEngine:
    """Engine with an empty meta table, no matchups, no synergies and no known pools."""
    return RecommendationEngine(
        catalog=catalog,
        meta_scorer=MetaScorer(meta_stats={}),
        matchup_calculator=MatchupCalculator(counters={}),
        synergy_service=SynergyService(synergies=[]),
        proficiency_scorer=ProficiencyScorer(player_pools={}),
        composition_analyzer=CompositionAnalyzer(),
    )


@pytest.fixture
def blue_team() -> TeamDraftState:
    return TeamDraftState(team_name="Cloud9", players=make_players())


@pytest.fixture
def red_team() -> TeamDraftState:
    return TeamDraftState(team_name="Team Liquid")
