"""Websocket endpoint carrying relay events."""

from __future__ import annotations

import logging

from fastapi import APIRouter, WebSocket, WebSocketDisconnect

from relay.application.context import RelayContext
from relay.application.use_cases.sessions import (
    AuthenticationError,
    Handshake,
    authenticate_session,
    end_session,
    reject_session,
)
from relay.infrastructure.realtime import RelaySession
from relay.interfaces.api.socket_events import dispatch_frame

logger = logging.getLogger(__name__)

router = APIRouter(tags=["relay"])

AUTH_HEADER = "x-auth-token"
POLICY_VIOLATION = 1008


def _handshake_from(websocket: WebSocket) -> Handshake:
    headers = {key.lower(): value for key, value in websocket.headers.items()}
    auth = {"token": headers[AUTH_HEADER]} if headers.get(AUTH_HEADER) else {}
    return Handshake(
        cookies=dict(websocket.cookies),
        auth=auth,
        query=dict(websocket.query_params),
        headers=headers,
    )


@router.websocket("/ws")
async def relay_websocket(websocket: WebSocket) -> None:
    """Authenticate the connection, then handle each frame as its own task."""

    context: RelayContext = websocket.app.state.relay
    await websocket.accept()
    session = RelaySession(sender=websocket.send_json)

    try:
        authenticate_session(context, session, _handshake_from(websocket))
    except AuthenticationError as exc:
        await reject_session(
            context,
            session,
            exc,
            disconnect=lambda: websocket.close(code=POLICY_VIOLATION),
        )
        return

    try:
        while True:
            try:
                frame = await websocket.receive_json()
            except (TypeError, ValueError):
                logger.debug("Discarding malformed frame from session %s", session.id)
                continue
            context.tasks.spawn(
                dispatch_frame(context, session, frame, reply=websocket.send_json),
                name=f"frame:{session.id}",
            )
    except WebSocketDisconnect:
        pass
    finally:
        end_session(context, session)
