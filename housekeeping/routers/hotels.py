"""
酒店与楼栋管理路由
"""
from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from housekeeping.database import get_db
from housekeeping.models.ontology import User
from housekeeping.models.schemas import (
    HotelCreate, HotelUpdate, HotelResponse,
    BuildingCreate, BuildingUpdate, BuildingResponse
)
from housekeeping.services.exceptions import EntityNotFoundError
from housekeeping.services.hotel_service import HotelService
from housekeeping.security.auth import get_current_user

router = APIRouter(prefix="/api/hotels", tags=["酒店管理"])
building_router = APIRouter(prefix="/api/buildings", tags=["楼栋管理"])


# ============== 酒店管理 ==============

@router.get("", response_model=List[HotelResponse])
def list_hotels(
    is_active: Optional[bool] = None,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """获取酒店列表"""
    return HotelService(db).get_hotels(is_active)


@router.get("/{hotel_id}", response_model=HotelResponse)
def get_hotel(
    hotel_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    hotel = HotelService(db).get_hotel(hotel_id)
    if not hotel:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="酒店不存在")
    return hotel


@router.post("", response_model=HotelResponse)
def create_hotel(
    data: HotelCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """创建酒店"""
    try:
        return HotelService(db).create_hotel(data)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@router.put("/{hotel_id}", response_model=HotelResponse)
def update_hotel(
    hotel_id: int,
    data: HotelUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """更新酒店"""
    try:
        return HotelService(db).update_hotel(hotel_id, data)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@router.delete("/{hotel_id}")
def delete_hotel(
    hotel_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """停用酒店"""
    try:
        HotelService(db).deactivate_hotel(hotel_id)
        return {"message": "酒店已停用"}
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


# ============== 楼栋管理 ==============

@building_router.get("", response_model=List[BuildingResponse])
def list_buildings(
    is_active: Optional[bool] = None,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """获取楼栋列表"""
    return HotelService(db).get_buildings(is_active=is_active)


@building_router.get("/hotel/{hotel_id}", response_model=List[BuildingResponse])
def list_buildings_by_hotel(
    hotel_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return HotelService(db).get_buildings(hotel_id=hotel_id)


@building_router.get("/{building_id}", response_model=BuildingResponse)
def get_building(
    building_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    building = HotelService(db).get_building(building_id)
    if not building:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="楼栋不存在")
    return building


@building_router.post("", response_model=BuildingResponse)
def create_building(
    data: BuildingCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """创建楼栋"""
    try:
        return HotelService(db).create_building(data)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@building_router.put("/{building_id}", response_model=BuildingResponse)
def update_building(
    building_id: int,
    data: BuildingUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """更新楼栋"""
    try:
        return HotelService(db).update_building(building_id, data)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@building_router.delete("/{building_id}")
def delete_building(
    building_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """停用楼栋"""
    try:
        HotelService(db).deactivate_building(building_id)
        return {"message": "楼栋已停用"}
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
