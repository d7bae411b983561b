"""WebSocket endpoint for host plugins.

The host streams the entries it currently shows on a surface and receives
``apply_order`` messages back. Once it has re-arranged its items it sends
``applied`` with the generation, which releases the next order.
"""

import json
import logging
from typing import Callable

from fastapi import APIRouter, WebSocket, WebSocketDisconnect
from pydantic import ValidationError

from ..models.common import BacklinkEntry
from ..models.sort import OrderUpdate, Surface
from ..services.sort_manager import sort_manager

logger = logging.getLogger(__name__)

router = APIRouter(tags=["websocket"])


@router.websocket("/ws")
async def websocket_endpoint(ws: WebSocket):
    await ws.accept()
    subscriptions: dict[Surface, Callable] = {}

    try:
        while True:
            data = await ws.receive_text()
            try:
                msg = json.loads(data)
            except json.JSONDecodeError:
                continue
            if not isinstance(msg, dict):
                continue

            action = msg.get("action")
            try:
                surface = Surface(msg.get("surface"))
            except ValueError:
                await ws.send_json({"type": "error", "detail": f"Unknown surface: {msg.get('surface')}"})
                continue

            if action == "subscribe":
                if surface in subscriptions:
                    continue

                async def order_cb(update: OrderUpdate):
                    await ws.send_json({"type": "apply_order", **update.model_dump(mode="json")})
                sort_manager.add_order_listener(surface, order_cb)
                subscriptions[surface] = order_cb

            elif action == "entries":
                try:
                    entries = [BacklinkEntry.model_validate(e) for e in msg.get("entries") or []]
                except ValidationError as e:
                    await ws.send_json({"type": "error", "detail": str(e)})
                    continue
                await sort_manager.notify(surface, entries, provenance=msg.get("provenance"))

            elif action == "applied":
                generation = msg.get("generation")
                if isinstance(generation, int):
                    await sort_manager.acknowledge(surface, generation)

    except WebSocketDisconnect:
        pass
    except Exception as e:
        logger.warning(f"WebSocket closed after error: {e}")
    finally:
        for surface, cb in subscriptions.items():
            sort_manager.remove_order_listener(surface, cb)
