"""REST endpoints for draft sessions."""

from typing import Literal, Optional

from fastapi import APIRouter, HTTPException, Request, Response
from pydantic import BaseModel, Field, field_validator, model_validator

from counterpick.errors import (
    CounterpickError,
    DraftIncompleteError,
    InvalidActionError,
    SequenceDesyncFault,
    SessionInvalidatedError,
    SessionNotFoundError,
)
from counterpick.models.draft import Side
from counterpick.models.team import ChampionPoolEntry, DraftPlayer
from counterpick.services.draft_sequence import first_pick_team
from counterpick.services.draft_service import DraftService
from counterpick.utils.champion_ids import normalize_champion_id
from counterpick.utils.role_normalizer import normalize_role

router = APIRouter(prefix="/api/drafts", tags=["drafts"])


class PoolEntryPayload(BaseModel):
    champion: str
    games: int = Field(ge=0)
    win_rate: float = Field(ge=0, le=100)


class PlayerPayload(BaseModel):
    name: str
    role: str
    id: Optional[str] = None
    champion_pool: list[PoolEntryPayload] = Field(default_factory=list)

    @field_validator("role")
    @classmethod
    def _known_role(cls, value: str) -> str:
        role = normalize_role(value)
        if role is None:
            raise ValueError(f"Unknown role: {value}")
        return role.value

    def to_player(self) -> DraftPlayer:
        return DraftPlayer(
            id=self.id or normalize_champion_id(self.name),
            name=self.name,
            role=normalize_role(self.role),
            champion_pool=[
                ChampionPoolEntry(
                    champion_id=normalize_champion_id(entry.champion),
                    games_played=entry.games,
                    win_rate=entry.win_rate,
                )
                for entry in self.champion_pool
            ],
        )


class TeamPayload(BaseModel):
    name: str
    players: list[PlayerPayload] = Field(default_factory=list, max_length=5)

    @model_validator(mode="after")
    def _one_player_per_role(self) -> "TeamPayload":
        roles = [p.role for p in self.players]
        duplicates = sorted({r for r in roles if roles.count(r) > 1})
        if duplicates:
            raise ValueError(f"More than one player for role: {', '.join(duplicates)}")
        return self


class PickOrderSelection(BaseModel):
    """Side/pick-order selection: one team picks its side, the other its pick order."""

    our_side: Side
    our_choice: Literal["side", "pick_order"]
    pick_order: Literal["first", "second"]


class CreateDraftRequest(BaseModel):
    blue_team: TeamPayload = Field(default_factory=lambda: TeamPayload(name="Blue"))
    red_team: TeamPayload = Field(default_factory=lambda: TeamPayload(name="Red"))
    first_pick: Side = Side.BLUE
    selection: Optional[PickOrderSelection] = None


class ActionRequest(BaseModel):
    champion: str


def get_draft_service(request: Request) -> DraftService:
    return request.app.state.draft_service


def to_http_error(error: CounterpickError) -> HTTPException:
    """Map a draft error to its HTTP status."""
    if isinstance(error, SessionNotFoundError):
        return HTTPException(status_code=404, detail=str(error))
    if isinstance(error, InvalidActionError):
        return HTTPException(status_code=400, detail=str(error))
    if isinstance(error, (SequenceDesyncFault, SessionInvalidatedError, DraftIncompleteError)):
        return HTTPException(status_code=409, detail=str(error))
    return HTTPException(status_code=500, detail=str(error))


@router.post("", status_code=201)
async def create_draft(request: Request, body: CreateDraftRequest):
    """Create a new draft session."""
    service = get_draft_service(request)
    first_pick = body.first_pick
    if body.selection is not None:
        first_pick = first_pick_team(
            body.selection.our_side, body.selection.our_choice, body.selection.pick_order
        )

    try:
        session = service.create_session(
            blue_team_name=body.blue_team.name,
            red_team_name=body.red_team.name,
            blue_players=[p.to_player() for p in body.blue_team.players],
            red_players=[p.to_player() for p in body.red_team.players],
            first_pick=first_pick,
        )
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    return {"session_id": session.id, "draft_state": service.get_state(session.id)}


@router.get("/{session_id}")
async def get_draft(request: Request, session_id: str):
    try:
        return get_draft_service(request).get_state(session_id)
    except CounterpickError as e:
        raise to_http_error(e)


@router.post("/{session_id}/actions")
async def apply_action(request: Request, session_id: str, body: ActionRequest):
    """Ban or pick for the team on the clock."""
    try:
        return get_draft_service(request).apply_action(session_id, body.champion)
    except CounterpickError as e:
        raise to_http_error(e)


@router.post("/{session_id}/undo")
async def undo_action(request: Request, session_id: str):
    try:
        return get_draft_service(request).undo_action(session_id)
    except CounterpickError as e:
        raise to_http_error(e)


@router.post("/{session_id}/reset")
async def reset_draft(request: Request, session_id: str):
    try:
        return get_draft_service(request).reset_draft(session_id)
    except CounterpickError as e:
        raise to_http_error(e)


@router.get("/{session_id}/recommendations")
async def get_recommendations(request: Request, session_id: str):
    try:
        return get_draft_service(request).get_recommendations(session_id)
    except CounterpickError as e:
        raise to_http_error(e)


@router.get("/{session_id}/analysis")
async def get_analysis(request: Request, session_id: str):
    try:
        return get_draft_service(request).get_composition_analysis(session_id)
    except CounterpickError as e:
        raise to_http_error(e)


@router.post("/{session_id}/strategy")
async def get_strategy(request: Request, session_id: str):
    """Post-draft strategy narrative; the draft must be complete."""
    try:
        return await get_draft_service(request).get_strategy(session_id)
    except CounterpickError as e:
        raise to_http_error(e)


@router.delete("/{session_id}", status_code=204)
async def delete_draft(request: Request, session_id: str):
    if not get_draft_service(request).delete_session(session_id):
        raise HTTPException(status_code=404, detail=f"Draft session {session_id} not found")
    return Response(status_code=204)
