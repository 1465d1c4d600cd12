"""WebSocket handler for live draft sessions."""

import json
import logging

from fastapi import WebSocket, WebSocketDisconnect

from counterpick.errors import (
    InvalidActionError,
    SequenceDesyncFault,
    SessionInvalidatedError,
    SessionNotFoundError,
)
from counterpick.services.draft_service import DraftService

logger = logging.getLogger(__name__)


async def _send_error(websocket: WebSocket, code: str, message: str):
    await websocket.send_json({"type": "error", "code": code, "message": message})


async def _send_recommendations(websocket: WebSocket, service: DraftService, session_id: str):
    payload = service.get_recommendations(session_id)
    await websocket.send_json({"type": "recommendations", **payload})


async def _send_after_mutation(websocket: WebSocket, service: DraftService, session_id: str, result: dict):
    await websocket.send_json({"type": "draft_state", "draft_state": result["draft_state"]})
    if result["draft_state"]["is_complete"]:
        await websocket.send_json({
            "type": "draft_complete",
            "analysis": service.get_composition_analysis(session_id),
        })
    else:
        await _send_recommendations(websocket, service, session_id)


async def _handle_message(websocket: WebSocket, service: DraftService, session_id: str, msg: dict):
    msg_type = msg.get("type")

    if msg_type == "apply":
        champion = msg.get("champion")
        if not isinstance(champion, str):
            await _send_error(websocket, "BAD_MESSAGE", "apply needs a champion")
            return
        result = service.apply_action(session_id, champion)
        await _send_after_mutation(websocket, service, session_id, result)

    elif msg_type == "undo":
        result = service.undo_action(session_id)
        await _send_after_mutation(websocket, service, session_id, result)

    elif msg_type == "reset":
        result = service.reset_draft(session_id)
        await _send_after_mutation(websocket, service, session_id, result)

    elif msg_type == "request_recommendations":
        await _send_recommendations(websocket, service, session_id)

    else:
        await _send_error(websocket, "BAD_MESSAGE", f"Unknown message type: {msg_type}")


async def draft_websocket(websocket: WebSocket, session_id: str, service: DraftService):
    """Handle a WebSocket connection for one draft session.

    Clients send ``apply``, ``undo``, ``reset`` and
    ``request_recommendations`` messages. Every recommendations event
    carries ``for_action_count`` so clients can drop stale results.

    Args:
        websocket: The WebSocket connection
        session_id: ID of the draft session
        service: DraftService instance
    """
    try:
        state = service.get_state(session_id)
    except SessionNotFoundError:
        await websocket.close(code=4004, reason="Session not found")
        return

    await websocket.accept()
    logger.info(f"WebSocket connected for session {session_id}")

    try:
        await websocket.send_json({"type": "draft_state", "draft_state": state})
        if not state["is_complete"] and not state["invalidated"]:
            await _send_recommendations(websocket, service, session_id)

        while True:
            data = await websocket.receive_text()
            try:
                msg = json.loads(data)
            except json.JSONDecodeError:
                logger.warning(f"Invalid JSON received: {data}")
                await _send_error(websocket, "BAD_MESSAGE", "Message is not valid JSON")
                continue
            if not isinstance(msg, dict):
                await _send_error(websocket, "BAD_MESSAGE", "Message must be a JSON object")
                continue

            try:
                await _handle_message(websocket, service, session_id, msg)
            except InvalidActionError as e:
                await _send_error(websocket, "INVALID_ACTION", str(e))
            except (SessionInvalidatedError, SequenceDesyncFault) as e:
                await _send_error(websocket, "SESSION_INVALIDATED", str(e))
            except SessionNotFoundError as e:
                await _send_error(websocket, "SESSION_NOT_FOUND", str(e))
                await websocket.close(code=4004, reason="Session not found")
                return

    except WebSocketDisconnect:
        logger.info(f"WebSocket disconnected for session {session_id}")
