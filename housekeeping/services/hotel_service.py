"""
酒店/楼栋服务
删除均为停用（is_active=False）
"""
from typing import List, Optional
from sqlalchemy.orm import Session
from housekeeping.models.ontology import Hotel, Building
from housekeeping.models.schemas import HotelCreate, HotelUpdate, BuildingCreate, BuildingUpdate
from housekeeping.services.exceptions import EntityNotFoundError


class HotelService:
    """酒店与楼栋服务"""

    def __init__(self, db: Session):
        self.db = db

    # ============== 酒店操作 ==============

    def get_hotels(self, is_active: Optional[bool] = None) -> List[Hotel]:
        query = self.db.query(Hotel)
        if is_active is not None:
            query = query.filter(Hotel.is_active == is_active)
        return query.order_by(Hotel.id).all()

    def get_hotel(self, hotel_id: int) -> Optional[Hotel]:
        return self.db.query(Hotel).filter(Hotel.id == hotel_id).first()

    def create_hotel(self, data: HotelCreate) -> Hotel:
        if not data.name.strip():
            raise ValueError("酒店名称不能为空")
        hotel = Hotel(**data.model_dump(), is_active=True)
        self.db.add(hotel)
        self.db.commit()
        self.db.refresh(hotel)
        return hotel

    def update_hotel(self, hotel_id: int, data: HotelUpdate) -> Hotel:
        hotel = self.get_hotel(hotel_id)
        if not hotel:
            raise EntityNotFoundError("酒店", hotel_id)

        update_data = data.model_dump(exclude_unset=True)
        if 'name' in update_data and not (update_data['name'] or '').strip():
            raise ValueError("酒店名称不能为空")
        if 'is_active' in update_data and update_data['is_active'] is None:
            raise ValueError("is_active 不能为空")

        for key, value in update_data.items():
            setattr(hotel, key, value)

        self.db.commit()
        self.db.refresh(hotel)
        return hotel

    def deactivate_hotel(self, hotel_id: int) -> Hotel:
        hotel = self.get_hotel(hotel_id)
        if not hotel:
            raise EntityNotFoundError("酒店", hotel_id)
        hotel.is_active = False
        self.db.commit()
        self.db.refresh(hotel)
        return hotel

    # ============== 楼栋操作 ==============

    def get_buildings(self, hotel_id: Optional[int] = None,
                      is_active: Optional[bool] = None) -> List[Building]:
        query = self.db.query(Building)
        if hotel_id is not None:
            query = query.filter(Building.hotel_id == hotel_id)
        if is_active is not None:
            query = query.filter(Building.is_active == is_active)
        return query.order_by(Building.id).all()

    def get_building(self, building_id: int) -> Optional[Building]:
        return self.db.query(Building).filter(Building.id == building_id).first()

    def create_building(self, data: BuildingCreate) -> Building:
        if not data.name.strip():
            raise ValueError("楼栋名称不能为空")
        if not self.get_hotel(data.hotel_id):
            raise EntityNotFoundError("酒店", data.hotel_id)

        building = Building(**data.model_dump(), is_active=True)
        self.db.add(building)
        self.db.commit()
        self.db.refresh(building)
        return building

    def update_building(self, building_id: int, data: BuildingUpdate) -> Building:
        building = self.get_building(building_id)
        if not building:
            raise EntityNotFoundError("楼栋", building_id)

        update_data = data.model_dump(exclude_unset=True)
        if 'name' in update_data and not (update_data['name'] or '').strip():
            raise ValueError("楼栋名称不能为空")
        if update_data.get('hotel_id') is not None and not self.get_hotel(update_data['hotel_id']):
            raise EntityNotFoundError("酒店", update_data['hotel_id'])
        if 'hotel_id' in update_data and update_data['hotel_id'] is None:
            raise ValueError("楼栋必须属于一个酒店")
        if 'is_active' in update_data and update_data['is_active'] is None:
            raise ValueError("is_active 不能为空")

        for key, value in update_data.items():
            setattr(building, key, value)

        self.db.commit()
        self.db.refresh(building)
        return building

    def deactivate_building(self, building_id: int) -> Building:
        building = self.get_building(building_id)
        if not building:
            raise EntityNotFoundError("楼栋", building_id)
        building.is_active = False
        self.db.commit()
        self.db.refresh(building)
        return building
