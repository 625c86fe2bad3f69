"""
消息代理 - 内存级主题发布/订阅
推送主题：/topic/incidents、/topic/rooms、/topic/notifications
无持久化：发布时没有订阅者则消息丢弃
"""
from typing import Callable, Dict, List, Any, Optional
from collections import deque
import logging
import threading

logger = logging.getLogger(__name__)

Subscriber = Callable[[str, Dict[str, Any]], None]


class MessageBroker:
    """
    内存级消息代理（线程安全单例模式）

    使用方式：
    1. 订阅主题：broker.subscribe("/topic/rooms", callback)
    2. 发布消息：broker.publish("/topic/rooms", envelope)
    3. 取消订阅：broker.unsubscribe("/topic/rooms", callback)

    callback 签名为 callback(destination, message)
    """

    _instance = None
    _lock = threading.Lock()

    def __new__(cls):
        if cls._instance is None:
            with cls._lock:
                if cls._instance is None:
                    cls._instance = super().__new__(cls)
                    cls._instance._initialized = False
        return cls._instance

    def __init__(self):
        if self._initialized:
            return
        self._subscribers: Dict[str, List[Subscriber]] = {}
        self._history: deque = deque(maxlen=100)  # 保留最近100条用于调试
        self._subscriber_lock = threading.Lock()
        self._initialized = True
        logger.info("MessageBroker initialized")

    def subscribe(self, destination: str, subscriber: Subscriber) -> None:
        """订阅主题"""
        with self._subscriber_lock:
            subscribers = self._subscribers.setdefault(destination, [])
            if subscriber not in subscribers:
                subscribers.append(subscriber)
                logger.debug(f"Subscriber added to {destination} ({len(subscribers)} total)")

    def unsubscribe(self, destination: str, subscriber: Subscriber) -> None:
        """取消订阅"""
        with self._subscriber_lock:
            subscribers = self._subscribers.get(destination)
            if subscribers and subscriber in subscribers:
                subscribers.remove(subscriber)
                logger.debug(f"Subscriber removed from {destination}")
            if subscribers == []:
                del self._subscribers[destination]

    def unsubscribe_all(self, subscriber: Subscriber) -> None:
        """从所有主题移除订阅者（连接断开时调用）"""
        with self._subscriber_lock:
            for destination in list(self._subscribers):
                subscribers = self._subscribers[destination]
                if subscriber in subscribers:
                    subscribers.remove(subscriber)
                if not subscribers:
                    del self._subscribers[destination]

    def publish(self, destination: str, message: Dict[str, Any]) -> int:
        """
        发布消息到主题（同步调用所有订阅者）

        订阅者异常不会影响其他订阅者

        Returns:
            成功投递的订阅者数量
        """
        self._history.append((destination, message))

        with self._subscriber_lock:
            subscribers = self._subscribers.get(destination, []).copy()

        if not subscribers:
            logger.debug(f"No subscribers for {destination}, message dropped")
            return 0

        logger.info(f"Publishing {message.get('type')} to {destination} ({len(subscribers)} subscribers)")

        delivered = 0
        for subscriber in subscribers:
            try:
                subscriber(destination, message)
                delivered += 1
            except Exception as e:
                logger.error(f"Subscriber error for {destination}: {e}", exc_info=True)
        return delivered

    def subscriber_count(self, destination: Optional[str] = None) -> int:
        """订阅者数量（用于调试）"""
        with self._subscriber_lock:
            if destination is not None:
                return len(self._subscribers.get(destination, []))
            return sum(len(s) for s in self._subscribers.values())

    def get_history(self, destination: Optional[str] = None, limit: int = 50) -> List[Dict[str, Any]]:
        """获取最近发布的消息（最新的在前）"""
        history = list(self._history)
        if destination:
            history = [h for h in history if h[0] == destination]
        return [message for _, message in reversed(history)][:limit]

    def clear_subscribers(self) -> None:
        """清空所有订阅（用于测试）"""
        with self._subscriber_lock:
            self._subscribers.clear()

    def clear_history(self) -> None:
        """清空消息历史"""
        self._history.clear()


# 全局消息代理实例
message_broker = MessageBroker()
