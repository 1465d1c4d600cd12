"""Draft state machine: applies bans/picks in sequence order, with undo and reset."""

import copy
import logging
from typing import Optional

from counterpick.errors import InvalidActionError, SequenceDesyncFault
from counterpick.models.draft import ActionType, DraftAction, DraftPhase, DraftStep, Side
from counterpick.models.team import TeamDraftState
from counterpick.services.availability import excluded_set
from counterpick.services.champion_catalog import ChampionCatalog
from counterpick.services.draft_sequence import (
    DRAFT_SEQUENCE,
    TOTAL_STEPS,
    phase_for,
    progress,
    step_at,
)
from counterpick.utils.champion_ids import normalize_champion_id

logger = logging.getLogger(__name__)


class DraftStateMachine:
    """Owns both teams' slots, the cursor and the action log of one draft.

    ``len(actions) == cursor`` holds after every operation, and a failed
    ``apply`` or ``undo`` leaves the state exactly as it was.
    """

    def __init__(
        self,
        catalog: ChampionCatalog,
        blue: TeamDraftState,
        red: TeamDraftState,
        sequence: tuple[DraftStep, ...] = DRAFT_SEQUENCE,
    ):
        if len(sequence) != TOTAL_STEPS:
            raise ValueError(f"Draft sequence must have {TOTAL_STEPS} steps, got {len(sequence)}")
        self.catalog = catalog
        self.blue = blue
        self.red = red
        self.sequence = sequence
        self.cursor = 0
        self.actions: list[DraftAction] = []

    def team_state(self, side: Side) -> TeamDraftState:
        return self.blue if side == Side.BLUE else self.red

    def current_step(self) -> Optional[DraftStep]:
        return step_at(self.cursor, self.sequence)

    @property
    def is_complete(self) -> bool:
        return self.cursor >= TOTAL_STEPS

    @property
    def phase(self) -> DraftPhase:
        return phase_for(self.cursor)

    @property
    def acting_team(self) -> Optional[Side]:
        step = self.current_step()
        return step.team if step else None

    def apply(self, champion_id: str) -> DraftAction:
        """Ban or pick ``champion_id`` for the team whose turn it is.

        Raises:
            InvalidActionError: draft complete, empty/unknown id, or the
                champion is already banned or picked.
            SequenceDesyncFault: the acting team has no empty slot left for
                this step's action.
        """
        step = self.current_step()
        if step is None:
            raise InvalidActionError("Draft is already complete", champion_id)

        normalized = normalize_champion_id(champion_id)
        if not normalized:
            raise InvalidActionError("Champion id must not be empty", champion_id)

        champion = self.catalog.get(normalized)
        if champion is None:
            raise InvalidActionError(f"Unknown champion: {champion_id}", champion_id)

        if champion.id in excluded_set(self.blue, self.red):
            raise InvalidActionError(
                f"{champion.name} is already banned or picked", champion.id
            )

        team = self.team_state(step.team)
        slots = team.bans if step.action_type == ActionType.BAN else team.picks
        try:
            slot_index = slots.index(None)
        except ValueError:
            logger.critical(
                f"Sequence desync at step {step.index} ({step.label}): "
                f"{step.team.value} has no empty {step.action_type.value.lower()} slot"
            )
            raise SequenceDesyncFault(
                f"No empty {step.action_type.value.lower()} slot for {step.label}",
                step.index,
            )

        slots[slot_index] = champion
        action = DraftAction(
            step_index=step.index,
            team=step.team,
            action_type=step.action_type,
            champion=champion,
        )
        self.actions.append(action)
        self.cursor += 1
        return action

    def undo(self) -> Optional[DraftAction]:
        """Revert the most recent action; no-op returning None on an empty log."""
        if not self.actions:
            return None

        action = self.actions[-1]
        team = self.team_state(action.team)
        slots = team.bans if action.action_type == ActionType.BAN else team.picks
        for i in range(len(slots) - 1, -1, -1):
            champ = slots[i]
            if champ is not None and champ.id == action.champion.id:
                slots[i] = None
                break
        else:
            logger.critical(
                f"Sequence desync on undo of step {action.step_index}: "
                f"{action.champion.name} not found in {action.team.value} "
                f"{action.action_type.value.lower()} slots"
            )
            raise SequenceDesyncFault(
                f"Cannot undo {action.champion.name}: slot not found",
                action.step_index,
            )

        self.actions.pop()
        self.cursor -= 1
        return action

    def reset(self) -> None:
        """Clear every slot and the log; rosters and team names stay."""
        self.blue.clear()
        self.red.clear()
        self.actions = []
        self.cursor = 0

    def snapshot(self) -> "DraftStateMachine":
        """Independent copy for read-only consumers (catalog shared)."""
        clone = copy.copy(self)
        clone.blue = copy.deepcopy(self.blue)
        clone.red = copy.deepcopy(self.red)
        clone.actions = list(self.actions)
        return clone

    def to_dict(self) -> dict:
        step = self.current_step()
        return {
            "blue": self.blue.to_dict(),
            "red": self.red.to_dict(),
            "action_count": self.cursor,
            "phase": self.phase.value,
            "current_step": step.to_dict() if step else None,
            "acting_team": self.acting_team.value if self.acting_team else None,
            "is_complete": self.is_complete,
            "progress": progress(self.cursor),
            "actions": [a.to_dict() for a in self.actions],
        }
