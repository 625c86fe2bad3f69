"""
房间事件服务
上报时按 id 查找房间与上报人，任一不存在则整个操作失败
"""
from typing import List, Optional
from datetime import datetime
import logging
from sqlalchemy.orm import Session
from housekeeping.models.ontology import Incident, IncidentStatus, Room, User
from housekeeping.models.schemas import IncidentCreate, IncidentUpdate, IncidentResponse
from housekeeping.models.events import NotificationType, Topic
from housekeeping.services.exceptions import EntityNotFoundError
from housekeeping.services.notification_service import NotificationService, notification_service

logger = logging.getLogger(__name__)


class IncidentService:
    """房间事件服务"""

    def __init__(self, db: Session, notifier: NotificationService = None):
        self.db = db
        self.notifier = notifier or notification_service

    def get_incidents(self, room_id: Optional[int] = None,
                      reported_by_id: Optional[int] = None,
                      status: Optional[IncidentStatus] = None) -> List[Incident]:
        """获取事件列表（最新的在前）"""
        query = self.db.query(Incident)

        if room_id is not None:
            query = query.filter(Incident.room_id == room_id)
        if reported_by_id is not None:
            query = query.filter(Incident.reported_by_id == reported_by_id)
        if status is not None:
            query = query.filter(Incident.status == status)

        return query.order_by(Incident.created_at.desc(), Incident.id.desc()).all()

    def get_incident(self, incident_id: int) -> Optional[Incident]:
        return self.db.query(Incident).filter(Incident.id == incident_id).first()

    def create_incident(self, data: IncidentCreate) -> Incident:
        """上报事件"""
        room = self.db.query(Room).filter(Room.id == data.room_id).first()
        if not room:
            raise EntityNotFoundError("房间", data.room_id)

        reporter = self.db.query(User).filter(User.id == data.reported_by_id).first()
        if not reporter:
            raise EntityNotFoundError("用户", data.reported_by_id)

        incident = Incident(
            room_id=room.id,
            reported_by_id=reporter.id,
            description=data.description,
            photos=data.photos,
            status=IncidentStatus.OPEN
        )
        self.db.add(incident)
        self.db.commit()
        self.db.refresh(incident)

        logger.info(f"Incident {incident.id} reported in room {room.number} by {reporter.username}")
        self.notifier.notify(
            NotificationType.INCIDENT_CREATED,
            f"房间 {room.number} 有新的事件上报",
            IncidentResponse.model_validate(incident),
            topics=(Topic.INCIDENTS, Topic.NOTIFICATIONS)
        )
        return incident

    def update_incident(self, incident_id: int, data: IncidentUpdate) -> Incident:
        """更新事件"""
        incident = self.get_incident(incident_id)
        if not incident:
            raise EntityNotFoundError("事件", incident_id)

        update_data = data.model_dump(exclude_unset=True)
        for key in ('description', 'status'):
            if key in update_data and update_data[key] is None:
                raise ValueError(f"{key} 不能为空")

        for key, value in update_data.items():
            setattr(incident, key, value)
        incident.updated_at = datetime.utcnow()

        self.db.commit()
        self.db.refresh(incident)

        self.notifier.notify(
            NotificationType.INCIDENT_UPDATED,
            "事件已更新",
            IncidentResponse.model_validate(incident),
            topics=(Topic.INCIDENTS,)
        )
        return incident

    def resolve_incident(self, incident_id: int, resolution_notes: Optional[str]) -> Incident:
        """处理完成事件"""
        incident = self.get_incident(incident_id)
        if not incident:
            raise EntityNotFoundError("事件", incident_id)

        now = datetime.utcnow()
        incident.status = IncidentStatus.RESOLVED
        incident.resolution_notes = resolution_notes
        incident.resolved_at = now
        incident.updated_at = now

        self.db.commit()
        self.db.refresh(incident)

        room_number = incident.room.number if incident.room else "N/A"
        self.notifier.notify(
            NotificationType.INCIDENT_RESOLVED,
            f"房间 {room_number} 的事件已处理",
            IncidentResponse.model_validate(incident),
            topics=(Topic.INCIDENTS, Topic.NOTIFICATIONS)
        )
        return incident

    def delete_incident(self, incident_id: int) -> bool:
        """永久删除事件"""
        incident = self.get_incident(incident_id)
        if not incident:
            raise EntityNotFoundError("事件", incident_id)

        self.db.delete(incident)
        self.db.commit()
        return True
