"""
房间事件路由
"""
from typing import List
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from housekeeping.database import get_db
from housekeeping.models.ontology import User, IncidentStatus
from housekeeping.models.schemas import (
    IncidentCreate, IncidentUpdate, IncidentResolve, IncidentResponse
)
from housekeeping.services.exceptions import EntityNotFoundError
from housekeeping.services.incident_service import IncidentService
from housekeeping.services.notification_service import NotificationService, get_notification_service
from housekeeping.security.auth import get_current_user

router = APIRouter(prefix="/api/incidents", tags=["事件管理"])


def get_incident_service(
    db: Session = Depends(get_db),
    notifier: NotificationService = Depends(get_notification_service)
) -> IncidentService:
    return IncidentService(db, notifier)


@router.get("", response_model=List[IncidentResponse])
def list_incidents(
    service: IncidentService = Depends(get_incident_service),
    current_user: User = Depends(get_current_user)
):
    """获取事件列表"""
    return service.get_incidents()


@router.get("/room/{room_id}", response_model=List[IncidentResponse])
def list_incidents_by_room(
    room_id: int,
    service: IncidentService = Depends(get_incident_service),
    current_user: User = Depends(get_current_user)
):
    return service.get_incidents(room_id=room_id)


@router.get("/maid/{maid_id}", response_model=List[IncidentResponse])
def list_incidents_by_maid(
    maid_id: int,
    service: IncidentService = Depends(get_incident_service),
    current_user: User = Depends(get_current_user)
):
    """获取某服务员上报的事件"""
    return service.get_incidents(reported_by_id=maid_id)


@router.get("/status/{incident_status}", response_model=List[IncidentResponse])
def list_incidents_by_status(
    incident_status: IncidentStatus,
    service: IncidentService = Depends(get_incident_service),
    current_user: User = Depends(get_current_user)
):
    return service.get_incidents(status=incident_status)


@router.get("/{incident_id}", response_model=IncidentResponse)
def get_incident(
    incident_id: int,
    service: IncidentService = Depends(get_incident_service),
    current_user: User = Depends(get_current_user)
):
    """获取事件详情"""
    incident = service.get_incident(incident_id)
    if not incident:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="事件不存在")
    return incident


@router.post("", response_model=IncidentResponse)
def create_incident(
    data: IncidentCreate,
    service: IncidentService = Depends(get_incident_service),
    current_user: User = Depends(get_current_user)
):
    """上报事件"""
    try:
        return service.create_incident(data)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.put("/{incident_id}", response_model=IncidentResponse)
def update_incident(
    incident_id: int,
    data: IncidentUpdate,
    service: IncidentService = Depends(get_incident_service),
    current_user: User = Depends(get_current_user)
):
    """更新事件"""
    try:
        return service.update_incident(incident_id, data)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@router.patch("/{incident_id}/resolve", response_model=IncidentResponse)
def resolve_incident(
    incident_id: int,
    data: IncidentResolve,
    service: IncidentService = Depends(get_incident_service),
    current_user: User = Depends(get_current_user)
):
    """处理完成事件"""
    try:
        return service.resolve_incident(incident_id, data.resolution_notes)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.delete("/{incident_id}")
def delete_incident(
    incident_id: int,
    service: IncidentService = Depends(get_incident_service),
    current_user: User = Depends(get_current_user)
):
    """删除事件"""
    try:
        service.delete_incident(incident_id)
        return {"message": "删除成功"}
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
