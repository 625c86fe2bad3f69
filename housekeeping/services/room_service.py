"""
房间服务
管理 Room 对象，变更后向订阅端推送事件
"""
from typing import List, Optional
from datetime import datetime
import logging
from sqlalchemy.orm import Session
from housekeeping.models.ontology import Room, RoomStatus, Building, User
from housekeeping.models.schemas import RoomCreate, RoomUpdate, RoomResponse
from housekeeping.models.events import NotificationType, Topic
from housekeeping.services.exceptions import EntityNotFoundError
from housekeeping.services.notification_service import NotificationService, notification_service

logger = logging.getLogger(__name__)


class RoomService:
    """房间服务"""

    def __init__(self, db: Session, notifier: NotificationService = None):
        self.db = db
        # 支持依赖注入推送服务，便于测试
        self.notifier = notifier or notification_service

    def get_rooms(self, building_id: Optional[int] = None,
                  status: Optional[RoomStatus] = None,
                  assigned_to_id: Optional[int] = None,
                  is_active: Optional[bool] = None) -> List[Room]:
        """获取房间列表"""
        query = self.db.query(Room)

        if building_id is not None:
            query = query.filter(Room.building_id == building_id)
        if status is not None:
            query = query.filter(Room.status == status)
        if assigned_to_id is not None:
            query = query.filter(Room.assigned_to_id == assigned_to_id)
        if is_active is not None:
            query = query.filter(Room.is_active == is_active)

        return query.order_by(Room.floor, Room.number).all()

    def get_room(self, room_id: int) -> Optional[Room]:
        return self.db.query(Room).filter(Room.id == room_id).first()

    def _get_building(self, building_id: int) -> Building:
        building = self.db.query(Building).filter(Building.id == building_id).first()
        if not building:
            raise EntityNotFoundError("楼栋", building_id)
        return building

    def _get_user(self, user_id: int) -> User:
        user = self.db.query(User).filter(User.id == user_id).first()
        if not user:
            raise EntityNotFoundError("用户", user_id)
        return user

    def create_room(self, data: RoomCreate) -> Room:
        """创建房间"""
        if not data.number.strip():
            raise ValueError("房间号不能为空")
        self._get_building(data.building_id)

        room = Room(**data.model_dump(), is_active=True)
        self.db.add(room)
        self.db.commit()
        self.db.refresh(room)
        return room

    def update_room(self, room_id: int, data: RoomUpdate) -> Room:
        """更新房间"""
        room = self.get_room(room_id)
        if not room:
            raise EntityNotFoundError("房间", room_id)

        update_data = data.model_dump(exclude_unset=True)

        for key in ('number', 'floor', 'building_id', 'status', 'is_active'):
            if key in update_data and update_data[key] is None:
                raise ValueError(f"{key} 不能为空")
        if 'number' in update_data and not update_data['number'].strip():
            raise ValueError("房间号不能为空")
        if 'building_id' in update_data:
            self._get_building(update_data['building_id'])
        if update_data.get('assigned_to_id') is not None:
            self._get_user(update_data['assigned_to_id'])

        for key, value in update_data.items():
            setattr(room, key, value)
        room.updated_at = datetime.utcnow()

        self.db.commit()
        self.db.refresh(room)

        self.notifier.notify(
            NotificationType.ROOM_UPDATED,
            f"房间 {room.number} 已更新",
            RoomResponse.model_validate(room),
            topics=(Topic.ROOMS,)
        )
        return room

    def update_room_status(self, room_id: int, status: RoomStatus) -> Room:
        """更新房间状态"""
        room = self.get_room(room_id)
        if not room:
            raise EntityNotFoundError("房间", room_id)

        old_status = room.status
        room.status = status
        room.updated_at = datetime.utcnow()
        self.db.commit()
        self.db.refresh(room)

        logger.info(f"Room {room.number} status {old_status.value} -> {status.value}")
        self.notifier.notify(
            NotificationType.ROOM_STATUS_CHANGED,
            f"房间 {room.number} 当前状态为 {status.value}",
            RoomResponse.model_validate(room),
            topics=(Topic.ROOMS, Topic.NOTIFICATIONS)
        )
        return room

    def assign_room(self, room_id: int, maid_id: Optional[int]) -> Room:
        """分配房间给服务员；maid_id 为空时取消分配"""
        room = self.get_room(room_id)
        if not room:
            raise EntityNotFoundError("房间", room_id)

        now = datetime.utcnow()
        if maid_id is not None:
            maid = self._get_user(maid_id)
            room.assigned_to_id = maid.id
            room.assigned_at = now
        else:
            room.assigned_to_id = None
            room.assigned_at = None
        room.updated_at = now

        self.db.commit()
        self.db.refresh(room)

        self.notifier.notify(
            NotificationType.ROOM_REASSIGNED,
            f"房间 {room.number} 已重新分配",
            RoomResponse.model_validate(room),
            topics=(Topic.ROOMS, Topic.NOTIFICATIONS)
        )
        return room

    def delete_room(self, room_id: int) -> bool:
        """永久删除房间（连同其事件记录）"""
        room = self.get_room(room_id)
        if not room:
            raise EntityNotFoundError("房间", room_id)

        self.db.delete(room)
        self.db.commit()
        return True
