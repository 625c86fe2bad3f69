"""
推送通知服务
将变更事件包装为 {type, message, data, timestamp} 并逐个主题发布
"""
import logging
import time
from typing import Any, Callable, Dict, Iterable, Optional

from fastapi.encoders import jsonable_encoder

from housekeeping.models.events import NotificationType, Topic
from housekeeping.services.message_broker import message_broker

logger = logging.getLogger(__name__)

Publisher = Callable[[str, Dict[str, Any]], Any]


def build_envelope(event_type: str, message: str, data: Any = None) -> Dict[str, Any]:
    """构建推送消息体，timestamp 为服务端毫秒时间戳"""
    if isinstance(event_type, NotificationType):
        event_type = event_type.value
    return {
        "type": event_type,
        "message": message,
        "data": jsonable_encoder(data) if data is not None else None,
        "timestamp": int(time.time() * 1000),
    }


class NotificationService:
    """推送通知服务"""

    def __init__(self, publisher: Optional[Publisher] = None):
        # 支持依赖注入发布函数，便于测试
        self._publish = publisher or message_broker.publish

    def notify(self, event_type: NotificationType, message: str, data: Any = None,
               topics: Iterable[Topic] = (Topic.NOTIFICATIONS,)) -> Dict[str, Any]:
        """
        发布通知

        同一事件对每个主题单独发布，不保证原子性
        """
        envelope = build_envelope(event_type, message, data)
        for topic in topics:
            destination = topic.value if isinstance(topic, Topic) else topic
            try:
                self._publish(destination, envelope)
            except Exception as e:
                # 推送失败不影响业务操作
                logger.error(f"Failed to publish {envelope['type']} to {destination}: {e}")
        return envelope


notification_service = NotificationService()


def get_notification_service() -> NotificationService:
    """依赖注入：获取推送服务"""
    return notification_service
