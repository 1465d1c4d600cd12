"""Tests for proficiency scorer."""
import pytest

from counterpick.models.team import ChampionPoolEntry, DraftPlayer
from counterpick.services.scorers.proficiency_scorer import ProficiencyScorer
from counterpick.utils.role_normalizer import Role


@pytest.fixture
def scorer():
    return ProficiencyScorer()


@pytest.fixture
def zven():
    return DraftPlayer(id="zven", name="Zven", role=Role.ADC)


def test_known_pool_is_case_insensitive(scorer):
    pool = scorer.known_pool("zven")
    assert pool[0].champion_id == "jinx"
    assert pool[0].games_played == 11


def test_comfort_score_scales_with_games_and_win_rate(scorer, zven):
    jinx = scorer.comfort_score(zven, "Jinx")
    lucian = scorer.comfort_score(zven, "Lucian")
    assert 0.0 < lucian < jinx <= 1.0
    # 11 games caps the games factor; 72.7% WR gives 0.5 + 0.3635
    assert jinx == pytest.approx(0.8635)


def test_comfort_zero_outside_pool(scorer, zven):
    assert scorer.comfort_score(zven, "azir") == 0.0
    assert scorer.comfort_score(None, "jinx") == 0.0


def test_roster_pool_overrides_provider(scorer):
    player = DraftPlayer(
        id="zven", name="Zven", role=Role.ADC,
        champion_pool=[ChampionPoolEntry("ezreal", 20, 55.0)],
    )
    assert scorer.comfort_score(player, "jinx") == 0.0
    assert scorer.comfort_score(player, "ezreal") > 0.0


@pytest.mark.parametrize("games,level", [(12, "high"), (8, "high"), (5, "medium"), (2, "low"), (0, None)])
def test_games_to_mastery(games, level):
    assert ProficiencyScorer.games_to_mastery(games) == level


def test_mastery_level(scorer, zven):
    assert scorer.mastery_level(zven, "jinx") == "high"
    assert scorer.mastery_level(zven, "varus") == "low"
    assert scorer.mastery_level(zven, "azir") is None


def test_enrich_player_fills_empty_pool(scorer, zven):
    enriched = scorer.enrich_player(zven)
    assert len(enriched.champion_pool) == 7
    assert zven.champion_pool == []

    unknown = DraftPlayer(id="x", name="Rookie", role=Role.MID)
    assert scorer.enrich_player(unknown).champion_pool == []
