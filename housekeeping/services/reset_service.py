"""
每日房态重置
将所有 CLEAN 房间改为 DIRTY：
- 服务员分配（assigned_to / assigned_at）保持不变
- OCCUPIED / DIRTY 房间不处理
- 每个房间单独提交；中途失败时已提交的房间保持 DIRTY，异常携带已更新数量
- 同一时刻只允许一个重置在执行，重叠的调用直接跳过
"""
import logging
import threading
from datetime import datetime
from typing import Callable, Optional

from sqlalchemy.orm import Session

from housekeeping.models.events import NotificationType, Topic
from housekeeping.models.ontology import Room, RoomStatus
from housekeeping.services.exceptions import ResetFailedError, ResetInProgressError
from housekeeping.services.notification_service import NotificationService, notification_service

logger = logging.getLogger(__name__)

DAILY_RESET_JOB_ID = "daily_room_reset"

_reset_lock = threading.Lock()


class RoomResetService:
    """房态重置服务"""

    def __init__(self, db: Session, notifier: NotificationService = None):
        self.db = db
        self.notifier = notifier or notification_service

    def reset_clean_rooms(self) -> int:
        """
        将 CLEAN 房间逐个改为 DIRTY 并提交

        Returns:
            实际更新的房间数

        Raises:
            ResetFailedError: 某个房间提交失败，updated_count 为此前已提交数量
        """
        clean_rooms = self.db.query(Room).filter(Room.status == RoomStatus.CLEAN).all()

        updated_count = 0
        for room in clean_rooms:
            try:
                room.status = RoomStatus.DIRTY
                room.updated_at = datetime.utcnow()
                self.db.commit()
            except Exception as e:
                self.db.rollback()
                raise ResetFailedError(updated_count, e) from e
            updated_count += 1

            logger.debug(
                f"Room {room.number} marked DIRTY, assigned to: "
                f"{room.assigned_to.username if room.assigned_to else 'unassigned'}"
            )

        return updated_count

    def run(self, event_type: NotificationType, message_format: str) -> int:
        if not _reset_lock.acquire(blocking=False):
            raise ResetInProgressError("房态重置正在执行中")
        try:
            try:
                count = self.reset_clean_rooms()
            except ResetFailedError as e:
                # 部分房间已改为 DIRTY，仍然通知订阅端
                self._notify(event_type, message_format, e.updated_count)
                raise
        finally:
            _reset_lock.release()

        self._notify(event_type, message_format, count)
        return count

    def _notify(self, event_type: NotificationType, message_format: str, count: int) -> None:
        if count <= 0:
            return
        self.notifier.notify(
            event_type,
            message_format.format(count=count),
            None,
            topics=(Topic.ROOMS, Topic.NOTIFICATIONS)
        )

    def manual_reset(self) -> int:
        """手动重置，异常向调用方传播"""
        logger.info("Manual room reset requested")
        count = self.run(NotificationType.MANUAL_RESET, "手动重置：{count} 间房间标记为待清洁")
        logger.info(f"Manual room reset completed: {count} rooms updated")
        return count


def daily_room_reset(session_factory: Optional[Callable[[], Session]] = None,
                     notifier: NotificationService = None) -> int:
    """
    定时任务入口：每天固定时间执行

    任务本身不持有状态；所有异常记录日志后吞掉，不影响进程
    """
    if session_factory is None:
        from housekeeping.database import SessionLocal
        session_factory = SessionLocal

    logger.info("Daily room reset started")
    db = session_factory()
    try:
        service = RoomResetService(db, notifier)
        count = service.run(NotificationType.DAILY_RESET, "每日重置：{count} 间房间标记为待清洁")
        logger.info(f"Daily room reset completed: {count} rooms marked DIRTY")
        return count
    except ResetInProgressError:
        logger.warning("Daily room reset skipped, another reset is in progress")
        return 0
    except ResetFailedError as e:
        logger.error(f"Daily room reset failed after {e.updated_count} rooms", exc_info=True)
        return e.updated_count
    except Exception:
        logger.error("Daily room reset failed", exc_info=True)
        return 0
    finally:
        db.close()
