"""Draft session business logic: mutations, recommendations and analysis."""

import logging
from pathlib import Path
from typing import Optional

from counterpick.errors import (
    DraftIncompleteError,
    SequenceDesyncFault,
    SessionInvalidatedError,
)
from counterpick.models.analysis import CompositionAnalysis
from counterpick.models.draft import DraftStep, Side
from counterpick.models.recommendations import RecommendationResult
from counterpick.models.team import DraftPlayer, TeamDraftState
from counterpick.services.composition_analyzer import CompositionAnalyzer
from counterpick.services.draft_sequence import build_sequence
from counterpick.services.draft_state_machine import DraftStateMachine
from counterpick.services.narrative_client import NarrativeClient
from counterpick.services.recommendation_engine import RecommendationEngine
from counterpick.services.scoring_logger import ScoringLogger
from counterpick.services.session_manager import DraftSession, SessionManager
from counterpick.utils.role_normalizer import role_for_pick_slot

logger = logging.getLogger(__name__)


class DraftService:
    """Owns per-session drafts and serves the operations clients call.

    Mutations run under the session lock. Reads copy the state under the
    lock and score the copy outside it.
    """

    def __init__(
        self,
        engine: RecommendationEngine,
        session_manager: Optional[SessionManager] = None,
        narrative_client: Optional[NarrativeClient] = None,
        diagnostics_enabled: bool = False,
        diagnostics_dir: Optional[Path] = None,
    ):
        self.engine = engine
        self.catalog = engine.catalog
        self.analyzer: CompositionAnalyzer = engine.composition_analyzer
        self.sessions = session_manager or SessionManager()
        self.narrative_client = narrative_client or NarrativeClient(enabled=False)
        self.diagnostics_enabled = diagnostics_enabled
        self.diagnostics_dir = diagnostics_dir

    # ------------------------------------------------------------ lifecycle

    def create_session(
        self,
        blue_team_name: str = "Blue",
        red_team_name: str = "Red",
        blue_players: Optional[list[DraftPlayer]] = None,
        red_players: Optional[list[DraftPlayer]] = None,
        first_pick: Side = Side.BLUE,
    ) -> DraftSession:
        """Start a new draft; each roster player owns the pick slot of their role.

        Raises:
            ValueError: a roster has two players for the same role
        """
        scorer = self.engine.proficiency_scorer
        blue = TeamDraftState(
            team_name=blue_team_name,
            players=[scorer.enrich_player(p) for p in blue_players or []],
        )
        red = TeamDraftState(
            team_name=red_team_name,
            players=[scorer.enrich_player(p) for p in red_players or []],
        )
        machine = DraftStateMachine(self.catalog, blue, red, sequence=build_sequence(first_pick))

        scoring_logger = None
        if self.diagnostics_enabled:
            scoring_logger = ScoringLogger(self.diagnostics_dir, enabled=True)

        session = self.sessions.create_session(machine, scoring_logger)
        if scoring_logger:
            scoring_logger.start_session(
                session.id, blue_team_name, red_team_name, {"first_pick": first_pick.value}
            )
        return session

    def get_state(self, session_id: str) -> dict:
        session = self.sessions.get_session(session_id)
        with session.lock:
            return self._state_dict(session)

    def delete_session(self, session_id: str) -> bool:
        return self.sessions.remove_session(session_id)

    # ------------------------------------------------------------ mutations

    def apply_action(self, session_id: str, champion_id: str) -> dict:
        """Ban or pick for the team on the clock.

        Raises:
            InvalidActionError: champion unavailable/unknown or draft complete
            SessionInvalidatedError: session needs a reset
            SequenceDesyncFault: bookkeeping broke; the session is invalidated
        """
        session = self.sessions.get_session(session_id)
        with session.lock:
            self._ensure_valid(session)
            machine = session.machine
            action_count = machine.cursor
            try:
                action = machine.apply(champion_id)
            except SequenceDesyncFault:
                self._invalidate(session)
                raise

            if session.scoring_logger:
                session.scoring_logger.log_actual_action(
                    action_count, action.action_type.value, action.team.value, action.champion.id
                )
                if machine.is_complete:
                    session.scoring_logger.save(suffix="_complete")

            logger.info(
                f"Session {session.id}: {action.team.value} {action.action_type.value} "
                f"{action.champion.name} (step {action.step_index})"
            )
            return {"draft_state": self._state_dict(session), "is_complete": machine.is_complete}

    def undo_action(self, session_id: str) -> dict:
        """Revert the last action; no-op on an empty draft."""
        session = self.sessions.get_session(session_id)
        with session.lock:
            self._ensure_valid(session)
            try:
                action = session.machine.undo()
            except SequenceDesyncFault:
                self._invalidate(session)
                raise
            if action is not None:
                if session.scoring_logger:
                    session.scoring_logger.log_undo(action.step_index, action.champion.id)
                logger.info(f"Session {session.id}: undid {action.champion.name}")
            return {"draft_state": self._state_dict(session)}

    def reset_draft(self, session_id: str) -> dict:
        """Clear the draft; also clears an invalidated session."""
        session = self.sessions.get_session(session_id)
        with session.lock:
            session.machine.reset()
            session.invalidated = False
            logger.info(f"Session {session.id}: draft reset")
            return {"draft_state": self._state_dict(session)}

    # ---------------------------------------------------------------- reads

    def snapshot(self, session_id: str) -> DraftStateMachine:
        """Consistent copy of a session's draft, taken under its lock."""
        session = self.sessions.get_session(session_id)
        with session.lock:
            self._ensure_valid(session)
            return session.machine.snapshot()

    def get_recommendations(self, session_id: str) -> dict:
        """Fresh recommendations for the step on the clock."""
        session = self.sessions.get_session(session_id)
        with session.lock:
            self._ensure_valid(session)
            snapshot = session.machine.snapshot()

        action_count = snapshot.cursor
        step = snapshot.current_step()
        blue_analysis, red_analysis = self._analyze(snapshot)
        composition_summary = {
            "blue": self._summarize(blue_analysis),
            "red": self._summarize(red_analysis),
        }

        if step is None:
            return {
                "for_action_count": action_count,
                "action_type": None,
                "team": None,
                "target_role": None,
                "recommendations": [],
                "analysis_text": "Draft complete.",
                "composition_summary": composition_summary,
                "warnings": [],
            }

        result = self.engine.get_recommendations(snapshot.blue, snapshot.red, step)

        if session.scoring_logger:
            with session.lock:
                session.scoring_logger.log_recommendations(action_count, snapshot.phase.value, result)

        payload = result.to_dict()
        return {
            "for_action_count": action_count,
            "action_type": payload["action_type"],
            "team": payload["team"],
            "target_role": payload["target_role"],
            "recommendations": payload["recommendations"],
            "analysis_text": self._analysis_text(step, result, snapshot),
            "composition_summary": composition_summary,
            "warnings": payload["warnings"],
        }

    def get_composition_analysis(self, session_id: str) -> dict:
        snapshot = self.snapshot(session_id)
        blue_analysis, red_analysis = self._analyze(snapshot)
        matchup = self.analyzer.compare(blue_analysis, red_analysis)
        return {
            "for_action_count": snapshot.cursor,
            "blue_analysis": blue_analysis.to_dict() if blue_analysis else None,
            "red_analysis": red_analysis.to_dict() if red_analysis else None,
            "matchup": matchup,
        }

    async def get_strategy(self, session_id: str) -> dict:
        """Post-draft strategy narrative.

        Raises:
            DraftIncompleteError: the draft has steps left
        """
        snapshot = self.snapshot(session_id)
        if not snapshot.is_complete:
            raise DraftIncompleteError(
                f"Strategy needs a complete draft ({snapshot.cursor}/20 actions taken)"
            )
        blue_analysis, red_analysis = self._analyze(snapshot)
        matchup = self.analyzer.compare(blue_analysis, red_analysis)
        result = await self.narrative_client.generate(
            self._draft_summary(snapshot), blue_analysis, red_analysis, matchup
        )
        return {
            **result,
            "blue_analysis": blue_analysis.to_dict() if blue_analysis else None,
            "red_analysis": red_analysis.to_dict() if red_analysis else None,
            "matchup": matchup,
        }

    # -------------------------------------------------------------- helpers

    def _ensure_valid(self, session: DraftSession):
        if session.invalidated:
            raise SessionInvalidatedError(
                f"Draft session {session.id} is invalidated; reset it before continuing"
            )

    def _invalidate(self, session: DraftSession):
        session.invalidated = True
        logger.critical(f"Session {session.id} invalidated after sequence desync")

    def _state_dict(self, session: DraftSession) -> dict:
        return {"session_id": session.id, "invalidated": session.invalidated, **session.machine.to_dict()}

    def _analyze(
        self, snapshot: DraftStateMachine
    ) -> tuple[Optional[CompositionAnalysis], Optional[CompositionAnalysis]]:
        return (
            self.analyzer.analyze(Side.BLUE, snapshot.blue.picks),
            self.analyzer.analyze(Side.RED, snapshot.red.picks),
        )

    @staticmethod
    def _summarize(analysis: Optional[CompositionAnalysis]) -> Optional[str]:
        if analysis is None:
            return None
        profile = analysis.damage_profile
        return (
            f"{analysis.archetype.value.title()} ({analysis.pick_count} picks): "
            f"{profile.ap}% AP / {profile.ad}% AD / {profile.true}% true"
        )

    @staticmethod
    def _analysis_text(step: DraftStep, result: RecommendationResult, snapshot: DraftStateMachine) -> str:
        heading = f"{step.label} ({step.phase_label})"
        team = snapshot.team_state(step.team)
        if result.target_role is not None:
            slot = team.first_empty_pick()
            player = team.player_at(slot) if slot is not None else None
            who = f" for {player.name}" if player else ""
            heading += f": picking {result.target_role.value}{who}"

        if not result.recommendations:
            return f"{heading}. No suggestions available."

        top = result.recommendations[0]
        text = f"{heading}. Top option: {top.champion_name} ({top.score:.1f}), {top.reasons[0]}."
        if len(result.recommendations) > 1:
            others = ", ".join(r.champion_name for r in result.recommendations[1:3])
            text += f" Also consider {others}."
        if result.warnings:
            text += " Limited data for some factors."
        return text

    @staticmethod
    def _draft_summary(snapshot: DraftStateMachine) -> dict:
        summary = {}
        for side, team in (("blue", snapshot.blue), ("red", snapshot.red)):
            picks = []
            for i, champ in enumerate(team.picks):
                if champ is None:
                    continue
                player = team.player_at(i)
                picks.append({
                    "role": role_for_pick_slot(i).value,
                    "champion": champ.name,
                    "player": player.name if player else None,
                })
            summary[side] = {
                "team_name": team.team_name,
                "picks": picks,
                "bans": [c.name for c in team.filled_bans],
            }
        return summary
