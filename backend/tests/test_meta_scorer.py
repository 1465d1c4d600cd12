"""Tests for meta scorer."""
import pytest
from counterpick.services.scorers.meta_scorer import MetaScorer


@pytest.fixture
def scorer():
    return MetaScorer()


def test_get_meta_score_high_tier(scorer):
    """High-tier champion should have high meta score."""
    score = scorer.get_meta_score("azir")
    assert 0.7 <= score <= 1.0


def test_get_meta_score_unknown(scorer):
    """Champions outside the meta table contribute nothing."""
    assert scorer.get_meta_score("nonexistentchamp") == 0.0


def test_get_meta_tier(scorer):
    assert scorer.get_meta_tier("azir") == "S"
    assert scorer.get_meta_tier("nonexistentchamp") is None


def test_tier_fallback_when_score_missing():
    scorer = MetaScorer(meta_stats={"thresh": {"meta_tier": "b"}})
    assert scorer.get_meta_score("thresh") == 0.6


def test_score_clamped():
    scorer = MetaScorer(meta_stats={"broken": {"meta_tier": "S", "meta_score": 1.7}})
    assert scorer.get_meta_score("broken") == 1.0


def test_presence(scorer):
    assert 0.0 < scorer.get_presence("ksante") <= 1.0
    assert scorer.get_presence("nonexistentchamp") == 0.0


def test_missing_file_means_no_data(tmp_path):
    scorer = MetaScorer(tmp_path)
    assert not scorer.has_data
    assert scorer.get_meta_score("azir") == 0.0
