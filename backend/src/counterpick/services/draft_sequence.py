"""Fixed professional draft order.

Twenty steps in four phases. Ban phase 1 and pick phase 1 follow the
pattern first/second/second/first/first/second; ban phase 2 and pick
phase 2 follow second/first/first/second, where "first" is the team with
first pick (Blue in the standard sequence).
"""

from typing import Literal, Optional

from counterpick.models.draft import ActionType, DraftPhase, DraftStep, Side

TOTAL_STEPS = 20

# (phase, action, positions) where 1 = first-pick team, 2 = the other team
_PHASE_PATTERNS: tuple[tuple[DraftPhase, ActionType, tuple[int, ...]], ...] = (
    (DraftPhase.BAN_1, ActionType.BAN, (1, 2, 2, 1, 1, 2)),
    (DraftPhase.PICK_1, ActionType.PICK, (1, 2, 2, 1, 1, 2)),
    (DraftPhase.BAN_2, ActionType.BAN, (2, 1, 1, 2)),
    (DraftPhase.PICK_2, ActionType.PICK, (2, 1, 1, 2)),
)

# Cursor value at which each phase ends
_PHASE_BOUNDARIES: tuple[tuple[int, DraftPhase], ...] = (
    (6, DraftPhase.BAN_1),
    (12, DraftPhase.PICK_1),
    (16, DraftPhase.BAN_2),
    (20, DraftPhase.PICK_2),
)


def build_sequence(first_pick_team: Side = Side.BLUE) -> tuple[DraftStep, ...]:
    """Generate the 20-step sequence with ``first_pick_team`` acting first."""
    second_pick_team = first_pick_team.opponent
    counts = {
        (team, action): 0
        for team in Side
        for action in ActionType
    }

    steps: list[DraftStep] = []
    for phase, action, pattern in _PHASE_PATTERNS:
        for position in pattern:
            team = first_pick_team if position == 1 else second_pick_team
            counts[(team, action)] += 1
            steps.append(
                DraftStep(
                    index=len(steps),
                    team=team,
                    action_type=action,
                    phase=phase,
                    label=f"{team.value.title()} {action.value.title()} {counts[(team, action)]}",
                )
            )
    return tuple(steps)


DRAFT_SEQUENCE: tuple[DraftStep, ...] = build_sequence(Side.BLUE)


def step_at(
    index: int, sequence: tuple[DraftStep, ...] = DRAFT_SEQUENCE
) -> Optional[DraftStep]:
    """Step at ``index``, or None outside [0, len(sequence))."""
    if 0 <= index < len(sequence):
        return sequence[index]
    return None


def phase_for(cursor: int) -> DraftPhase:
    """Draft phase for a number of completed actions."""
    for boundary, phase in _PHASE_BOUNDARIES:
        if cursor < boundary:
            return phase
    return DraftPhase.COMPLETE


def first_pick_team(
    our_side: Side,
    our_choice: Literal["side", "pick_order"],
    pick_order: Literal["first", "second"],
) -> Side:
    """Resolve which side picks first under side/pick-order selection.

    One team chooses its side and the other chooses pick order. When we
    chose the side, ``pick_order`` is the opponent's choice; when we chose
    pick order, it is ours.
    """
    opponent_side = our_side.opponent
    if our_choice == "side":
        return opponent_side if pick_order == "first" else our_side
    if our_choice == "pick_order":
        return our_side if pick_order == "first" else opponent_side
    raise ValueError(f"Unknown choice type: {our_choice}")


def team_slot_index(
    index: int, sequence: tuple[DraftStep, ...] = DRAFT_SEQUENCE
) -> Optional[int]:
    """Which of the acting team's ban or pick slots a step fills."""
    step = step_at(index, sequence)
    if step is None:
        return None
    return sum(
        1
        for prior in sequence[:index]
        if prior.team == step.team and prior.action_type == step.action_type
    )


def steps_for_team(
    team: Side, sequence: tuple[DraftStep, ...] = DRAFT_SEQUENCE
) -> list[DraftStep]:
    return [step for step in sequence if step.team == team]


def progress(cursor: int) -> float:
    """Percentage of the draft completed."""
    clamped = max(0, min(cursor, TOTAL_STEPS))
    return round(clamped / TOTAL_STEPS * 100, 1)
