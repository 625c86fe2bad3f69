"""
房间管理路由
"""
from typing import List
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from housekeeping.database import get_db
from housekeeping.models.ontology import User, RoomStatus
from housekeeping.models.schemas import (
    RoomCreate, RoomUpdate, RoomResponse, RoomStatusUpdate, RoomAssign, RoomResetResponse
)
from housekeeping.services.exceptions import EntityNotFoundError, ResetInProgressError
from housekeeping.services.notification_service import NotificationService, get_notification_service
from housekeeping.services.reset_service import RoomResetService
from housekeeping.services.room_service import RoomService
from housekeeping.security.auth import get_current_user

router = APIRouter(prefix="/api/rooms", tags=["房间管理"])


def get_room_service(
    db: Session = Depends(get_db),
    notifier: NotificationService = Depends(get_notification_service)
) -> RoomService:
    """获取房间服务实例"""
    return RoomService(db, notifier)


@router.get("", response_model=List[RoomResponse])
def list_rooms(
    service: RoomService = Depends(get_room_service),
    current_user: User = Depends(get_current_user)
):
    """获取房间列表"""
    return service.get_rooms()


@router.post("/reset", response_model=RoomResetResponse)
def reset_rooms(
    db: Session = Depends(get_db),
    notifier: NotificationService = Depends(get_notification_service),
    current_user: User = Depends(get_current_user)
):
    """手动执行房态重置（已清洁 → 待清洁）"""
    try:
        count = RoomResetService(db, notifier).manual_reset()
    except ResetInProgressError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    return RoomResetResponse(success=True, message=f"{count} 间房间已标记为待清洁", count=count)


@router.get("/building/{building_id}", response_model=List[RoomResponse])
def list_rooms_by_building(
    building_id: int,
    service: RoomService = Depends(get_room_service),
    current_user: User = Depends(get_current_user)
):
    """按楼栋获取房间"""
    return service.get_rooms(building_id=building_id)


@router.get("/status/{room_status}", response_model=List[RoomResponse])
def list_rooms_by_status(
    room_status: RoomStatus,
    service: RoomService = Depends(get_room_service),
    current_user: User = Depends(get_current_user)
):
    """按状态获取房间"""
    return service.get_rooms(status=room_status)


@router.get("/maid/{maid_id}", response_model=List[RoomResponse])
def list_rooms_by_maid(
    maid_id: int,
    service: RoomService = Depends(get_room_service),
    current_user: User = Depends(get_current_user)
):
    """获取分配给某服务员的房间"""
    return service.get_rooms(assigned_to_id=maid_id)


@router.get("/{room_id}", response_model=RoomResponse)
def get_room(
    room_id: int,
    service: RoomService = Depends(get_room_service),
    current_user: User = Depends(get_current_user)
):
    """获取房间详情"""
    room = service.get_room(room_id)
    if not room:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="房间不存在")
    return room


@router.post("", response_model=RoomResponse)
def create_room(
    data: RoomCreate,
    service: RoomService = Depends(get_room_service),
    current_user: User = Depends(get_current_user)
):
    """创建房间"""
    try:
        return service.create_room(data)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@router.put("/{room_id}", response_model=RoomResponse)
def update_room(
    room_id: int,
    data: RoomUpdate,
    service: RoomService = Depends(get_room_service),
    current_user: User = Depends(get_current_user)
):
    """更新房间"""
    try:
        return service.update_room(room_id, data)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@router.patch("/{room_id}/status", response_model=RoomResponse)
def update_room_status(
    room_id: int,
    data: RoomStatusUpdate,
    service: RoomService = Depends(get_room_service),
    current_user: User = Depends(get_current_user)
):
    """更新房间状态"""
    try:
        return service.update_room_status(room_id, data.status)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.patch("/{room_id}/assign", response_model=RoomResponse)
def assign_room(
    room_id: int,
    data: RoomAssign,
    service: RoomService = Depends(get_room_service),
    current_user: User = Depends(get_current_user)
):
    """分配或取消分配服务员"""
    try:
        return service.assign_room(room_id, data.maid_id)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.delete("/{room_id}")
def delete_room(
    room_id: int,
    service: RoomService = Depends(get_room_service),
    current_user: User = Depends(get_current_user)
):
    """删除房间"""
    try:
        service.delete_room(room_id)
        return {"message": "删除成功"}
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
