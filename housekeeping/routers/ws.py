"""
WebSocket 推送端点

客户端帧：{"action": "subscribe" | "unsubscribe", "destination": "/topic/rooms"}
服务端帧：{"destination": "/topic/rooms", "body": {type, message, data, timestamp}}
确认帧：  {"type": "SUBSCRIBED" | "UNSUBSCRIBED", "destination": ...}
错误帧：  {"error": "..."}
"""
import asyncio
import json
import logging
from typing import Any, Dict

from fastapi import APIRouter, WebSocket, WebSocketDisconnect

from housekeeping.models.events import ALL_TOPICS
from housekeeping.services.message_broker import message_broker

logger = logging.getLogger(__name__)

router = APIRouter(tags=["实时推送"])


async def _pump(websocket: WebSocket, queue: asyncio.Queue) -> None:
    """将队列中的帧依次写入连接"""
    while True:
        frame = await queue.get()
        await websocket.send_json(frame)


@router.websocket("/ws")
async def websocket_endpoint(websocket: WebSocket):
    """订阅推送主题"""
    await websocket.accept()
    loop = asyncio.get_running_loop()
    queue: asyncio.Queue = asyncio.Queue()

    # 代理在工作线程中回调，需切回事件循环
    def deliver(destination: str, message: Dict[str, Any]) -> None:
        loop.call_soon_threadsafe(queue.put_nowait, {"destination": destination, "body": message})

    sender = asyncio.create_task(_pump(websocket, queue))
    logger.info("WebSocket client connected")
    try:
        while True:
            message = await websocket.receive()
            if message["type"] == "websocket.disconnect":
                raise WebSocketDisconnect(message.get("code", 1000))
            raw = message.get("text")
            if raw is None:
                queue.put_nowait({"error": "仅支持文本帧"})
                continue

            try:
                frame = json.loads(raw)
            except json.JSONDecodeError:
                queue.put_nowait({"error": "无效的 JSON 帧"})
                continue

            action = frame.get("action") if isinstance(frame, dict) else None
            destination = frame.get("destination") if isinstance(frame, dict) else None

            if action not in ("subscribe", "unsubscribe"):
                queue.put_nowait({"error": f"不支持的操作: {action}"})
                continue
            if destination not in ALL_TOPICS:
                queue.put_nowait({"error": f"未知主题: {destination}"})
                continue

            if action == "subscribe":
                message_broker.subscribe(destination, deliver)
                queue.put_nowait({"type": "SUBSCRIBED", "destination": destination})
            else:
                message_broker.unsubscribe(destination, deliver)
                queue.put_nowait({"type": "UNSUBSCRIBED", "destination": destination})
    except WebSocketDisconnect:
        logger.info("WebSocket client disconnected")
    finally:
        message_broker.unsubscribe_all(deliver)
        sender.cancel()
        await asyncio.gather(sender, return_exceptions=True)
