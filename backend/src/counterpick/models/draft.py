"""Draft sequence and action models."""

from dataclasses import dataclass
from enum import Enum

from counterpick.models.champion import Champion


class Side(str, Enum):
    """The two teams of a draft."""

    BLUE = "BLUE"
    RED = "RED"

    @property
    def opponent(self) -> "Side":
        return Side.RED if self is Side.BLUE else Side.BLUE


class ActionType(str, Enum):
    """What a draft step does."""

    BAN = "BAN"
    PICK = "PICK"


class DraftPhase(str, Enum):
    """Phases of a professional LoL draft."""

    BAN_1 = "BAN_1"  # Bans 1-6
    PICK_1 = "PICK_1"  # Picks 1-6
    BAN_2 = "BAN_2"  # Bans 7-10
    PICK_2 = "PICK_2"  # Picks 7-10
    COMPLETE = "COMPLETE"


PHASE_LABELS = {
    DraftPhase.BAN_1: "Ban Phase 1",
    DraftPhase.PICK_1: "Pick Phase 1",
    DraftPhase.BAN_2: "Ban Phase 2",
    DraftPhase.PICK_2: "Pick Phase 2",
    DraftPhase.COMPLETE: "Draft Complete",
}


@dataclass(frozen=True)
class DraftStep:
    """One entry of the fixed draft sequence."""

    index: int  # 0-19
    team: Side
    action_type: ActionType
    phase: DraftPhase
    label: str  # e.g. "Blue Ban 1"

    @property
    def phase_label(self) -> str:
        return PHASE_LABELS[self.phase]

    def to_dict(self) -> dict:
        return {
            "index": self.index,
            "team": self.team.value,
            "action_type": self.action_type.value,
            "phase": self.phase.value,
            "phase_label": self.phase_label,
            "label": self.label,
        }


@dataclass(frozen=True)
class DraftAction:
    """Append-only log entry for an applied ban or pick."""

    step_index: int
    team: Side
    action_type: ActionType
    champion: Champion

    def to_dict(self) -> dict:
        return {
            "step_index": self.step_index,
            "team": self.team.value,
            "action_type": self.action_type.value,
            "champion_id": self.champion.id,
            "champion_name": self.champion.name,
        }
