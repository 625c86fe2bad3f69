"""
推送事件定义
事件类型与推送主题（订阅端按主题接收）
"""
from enum import Enum


class NotificationType(str, Enum):
    """推送事件类型"""
    # 房间相关
    ROOM_UPDATED = "ROOM_UPDATED"
    ROOM_STATUS_CHANGED = "ROOM_STATUS_CHANGED"
    ROOM_REASSIGNED = "ROOM_REASSIGNED"
    DAILY_RESET = "DAILY_RESET"
    MANUAL_RESET = "MANUAL_RESET"

    # 事件上报相关
    INCIDENT_CREATED = "INCIDENT_CREATED"
    INCIDENT_UPDATED = "INCIDENT_UPDATED"
    INCIDENT_RESOLVED = "INCIDENT_RESOLVED"


class Topic(str, Enum):
    """推送主题"""
    INCIDENTS = "/topic/incidents"
    ROOMS = "/topic/rooms"
    NOTIFICATIONS = "/topic/notifications"


ALL_TOPICS = frozenset(t.value for t in Topic)
