"""WebSocket endpoint relaying recipe assistant progress."""

import asyncio
import logging

from fastapi import APIRouter, WebSocket, WebSocketDisconnect

from foodkeeper.services.realtime import RealtimeService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/ws", tags=["websocket"])

PING_INTERVAL = 30


@router.websocket("/recipes")
async def websocket_recipe_progress(websocket: WebSocket) -> None:
    """Forward assistant stage, message and reset events as they are published."""
    realtime_service = RealtimeService()
    await websocket.accept()
    logger.info("Recipe progress WebSocket connected")

    async def handle_messages() -> None:
        async for message in realtime_service.subscribe():
            try:
                await websocket.send_json(message)
            except (WebSocketDisconnect, RuntimeError) as e:
                logger.debug(f"Stopped forwarding recipe events: {e}")
                break

    async def handle_ping() -> None:
        while True:
            await asyncio.sleep(PING_INTERVAL)
            await websocket.send_json({"type": "ping"})

    async def handle_client() -> None:
        while True:
            data = await websocket.receive_json()
            if data.get("type") == "pong":
                continue

    try:
        await asyncio.gather(handle_messages(), handle_ping(), handle_client(), return_exceptions=True)
    except WebSocketDisconnect:
        logger.info("Recipe progress WebSocket disconnected")
    finally:
        await realtime_service.cleanup()
