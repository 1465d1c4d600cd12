"""Tests for the draft service (session operations)."""
import json

import pytest

from counterpick.errors import (
    DraftIncompleteError,
    InvalidActionError,
    SequenceDesyncFault,
    SessionInvalidatedError,
    SessionNotFoundError,
)
from counterpick.models.draft import Side
from counterpick.services.draft_service import DraftService
from counterpick.services.narrative_client import NarrativeClient
from counterpick.services.session_manager import SessionManager
from counterpick.utils.role_normalizer import Role

from conftest import make_players


@pytest.fixture
def service(engine):
    return DraftService(
        engine,
        session_manager=SessionManager(),
        narrative_client=NarrativeClient(enabled=False),
    )


@pytest.fixture
def session_id(service):
    session = service.create_session("Cloud9", "Team Liquid", blue_players=make_players())
    return session.id


def play(service, session_id, catalog, count=20):
    for champ in catalog.all()[:count]:
        result = service.apply_action(session_id, champ.id)
    return result


def test_create_session_fills_known_pools(service, session_id):
    state = service.get_state(session_id)
    assert state["session_id"] == session_id
    assert state["invalidated"] is False
    assert state["action_count"] == 0
    assert state["current_step"]["label"] == "Blue Ban 1"
    zven = state["blue"]["players"][3]
    assert zven["name"] == "Zven"
    assert zven["champion_pool"][0]["champion_id"] == "jinx"


def test_partial_roster_player_gets_their_role_slot(service, catalog):
    zven = make_players([("Zven", Role.ADC)], pools={"Zven": [{"champion": "Jinx", "games": 11, "win_rate": 72.7}]})
    session = service.create_session("Cloud9", "Team Liquid", blue_players=zven)
    for champ in [c for c in catalog.all() if c.id != "jinx"][:17]:
        service.apply_action(session.id, champ.id)

    payload = service.get_recommendations(session.id)
    assert payload["target_role"] == "ADC"
    assert "picking ADC for Zven" in payload["analysis_text"]
    assert "comfort" not in {w["factor"] for w in payload["warnings"]}
    jinx = next(r for r in payload["recommendations"] if r["champion_id"] == "jinx")
    assert jinx["components"]["comfort"] > 0
    assert jinx["target_player"] == "Zven"


def test_duplicate_roles_rejected(service):
    roster = make_players([("Zven", Role.ADC), ("Berserker", Role.ADC)])
    with pytest.raises(ValueError):
        service.create_session("Cloud9", blue_players=roster)


def test_red_first_pick(service):
    session = service.create_session(first_pick=Side.RED)
    state = service.get_state(session.id)
    assert state["acting_team"] == "RED"


def test_apply_and_undo(service, session_id):
    result = service.apply_action(session_id, "K'Sante")
    assert result["is_complete"] is False
    assert result["draft_state"]["blue"]["bans"][0]["name"] == "K'Sante"

    result = service.undo_action(session_id)
    assert result["draft_state"]["action_count"] == 0
    assert result["draft_state"]["blue"]["bans"][0] is None


def test_invalid_action_leaves_state(service, session_id):
    service.apply_action(session_id, "azir")
    with pytest.raises(InvalidActionError):
        service.apply_action(session_id, "azir")
    assert service.get_state(session_id)["action_count"] == 1


def test_unknown_session(service):
    with pytest.raises(SessionNotFoundError):
        service.apply_action("nope", "azir")
    with pytest.raises(SessionNotFoundError):
        service.get_recommendations("nope")


def test_recommendations_payload(service, session_id):
    payload = service.get_recommendations(session_id)
    assert payload["for_action_count"] == 0
    assert payload["action_type"] == "BAN"
    assert payload["team"] == "BLUE"
    assert payload["target_role"] is None
    assert 0 < len(payload["recommendations"]) <= 8
    assert payload["analysis_text"].startswith("Blue Ban 1 (Ban Phase 1). Top option:")
    assert payload["composition_summary"] == {"blue": None, "red": None}
    # Team Liquid has no roster
    assert payload["warnings"][0]["factor"] == "denial"


def test_recommendations_follow_the_pick_slot(service, session_id, catalog):
    play(service, session_id, catalog, count=6)
    payload = service.get_recommendations(session_id)
    assert payload["for_action_count"] == 6
    assert payload["action_type"] == "PICK"
    assert payload["target_role"] == "TOP"
    assert "picking TOP for Thanatos" in payload["analysis_text"]


def test_complete_draft(service, session_id, catalog):
    result = play(service, session_id, catalog)
    assert result["is_complete"] is True

    payload = service.get_recommendations(session_id)
    assert payload["recommendations"] == []
    assert payload["analysis_text"] == "Draft complete."

    with pytest.raises(InvalidActionError):
        service.apply_action(session_id, catalog.all()[20].id)


def test_composition_analysis(service, session_id, catalog):
    play(service, session_id, catalog, count=8)
    analysis = service.get_composition_analysis(session_id)
    assert analysis["for_action_count"] == 8
    assert analysis["blue_analysis"]["pick_count"] == 1
    assert analysis["red_analysis"]["pick_count"] == 1
    assert analysis["matchup"] is not None


def test_desync_invalidates_session(service, session_id, champ):
    session = service.sessions.get_session(session_id)
    session.machine.blue.bans[:] = [champ(n) for n in ("Jinx", "Azir", "Viego", "Rakan", "Jax")]

    with pytest.raises(SequenceDesyncFault):
        service.apply_action(session_id, "ksante")
    assert service.get_state(session_id)["invalidated"] is True

    with pytest.raises(SessionInvalidatedError):
        service.apply_action(session_id, "ksante")
    with pytest.raises(SessionInvalidatedError):
        service.get_recommendations(session_id)
    with pytest.raises(SessionInvalidatedError):
        service.undo_action(session_id)

    state = service.reset_draft(session_id)["draft_state"]
    assert state["invalidated"] is False
    assert state["blue"]["bans"] == [None] * 5
    service.apply_action(session_id, "ksante")


def test_delete_session(service, session_id):
    assert service.delete_session(session_id)
    with pytest.raises(SessionNotFoundError):
        service.get_state(session_id)


@pytest.mark.anyio
async def test_strategy_needs_complete_draft(service, session_id):
    with pytest.raises(DraftIncompleteError):
        await service.get_strategy(session_id)


@pytest.mark.anyio
async def test_strategy_template_narrative(service, session_id, catalog):
    play(service, session_id, catalog)
    result = await service.get_strategy(session_id)
    assert result["source"] == "template"
    assert result["narrative"].startswith("Cloud9 (Blue) drafted a")
    assert result["blue_analysis"]["pick_count"] == 5
    assert result["matchup"]["description"]


def test_diagnostics_written_on_completion(engine, catalog, tmp_path):
    service = DraftService(engine, diagnostics_enabled=True, diagnostics_dir=tmp_path)
    session = service.create_session("Cloud9", "Team Liquid")
    service.get_recommendations(session.id)
    play(service, session.id, catalog)

    saved = list(tmp_path.glob("*_complete.json"))
    assert len(saved) == 1
    data = json.loads(saved[0].read_text())
    assert data["metadata"]["blue_team"] == "Cloud9"
    assert data["summary"]["ban_accuracy"]["total"] == 10
    assert data["summary"]["pick_accuracy"]["total"] == 10
    assert data["summary"]["total_recommendation_events"] == 1


def test_diagnostics_saved_once_per_draft(engine, catalog, tmp_path):
    service = DraftService(engine, diagnostics_enabled=True, diagnostics_dir=tmp_path)
    session = service.create_session("Cloud9", "Team Liquid")
    play(service, session.id, catalog)
    service.undo_action(session.id)
    service.apply_action(session.id, catalog.all()[19].id)
    service.delete_session(session.id)

    saved = list(tmp_path.glob("*.json"))
    assert len(saved) == 1
    assert saved[0].name.endswith("_complete.json")
