"""
实体对象定义
酒店 → 楼栋 → 房间，用户（管理员/前台/客房服务员），房间事件上报
"""
from datetime import datetime
from enum import Enum
from sqlalchemy import (
    Column, Integer, String, DateTime, ForeignKey, Text, Enum as SQLEnum, Boolean
)
from sqlalchemy.orm import relationship
from housekeeping.database import Base


# ============== 枚举定义 ==============

class RoomStatus(str, Enum):
    """房间状态枚举"""
    CLEAN = "CLEAN"          # 已清洁
    DIRTY = "DIRTY"          # 待清洁
    OCCUPIED = "OCCUPIED"    # 入住中（不参与每日重置）


class UserRole(str, Enum):
    """用户角色"""
    ADMIN = "ADMIN"            # 管理员
    RECEPTION = "RECEPTION"    # 前台
    MAID = "MAID"              # 客房服务员


class IncidentStatus(str, Enum):
    """事件状态"""
    OPEN = "OPEN"
    RESOLVED = "RESOLVED"


# ============== 实体定义 ==============

class Hotel(Base):
    """酒店"""
    __tablename__ = "hotels"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False)
    address = Column(String(255))
    phone = Column(String(30))
    email = Column(String(100))
    is_active = Column(Boolean, default=True)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # 链接
    buildings = relationship("Building", back_populates="hotel")
    users = relationship("User", back_populates="hotel")


class Building(Base):
    """楼栋"""
    __tablename__ = "buildings"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False)
    floors = Column(Integer)                                   # 楼层数
    hotel_id = Column(Integer, ForeignKey("hotels.id"), nullable=False)
    is_active = Column(Boolean, default=True)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # 链接
    hotel = relationship("Hotel", back_populates="buildings")
    rooms = relationship("Room", back_populates="building")


class Room(Base):
    """
    房间对象
    status 由前台/服务员手动变更，或由每日重置任务从 CLEAN 改为 DIRTY
    """
    __tablename__ = "rooms"

    id = Column(Integer, primary_key=True, index=True)
    number = Column(String(10), nullable=False)                        # 房间号
    floor = Column(Integer, nullable=False)                            # 楼层
    status = Column(SQLEnum(RoomStatus), nullable=False, default=RoomStatus.DIRTY, index=True)
    building_id = Column(Integer, ForeignKey("buildings.id"), nullable=False)
    assigned_to_id = Column(Integer, ForeignKey("users.id"), nullable=True)
    assigned_at = Column(DateTime, nullable=True)                      # 分配时间
    is_active = Column(Boolean, default=True)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # 链接
    building = relationship("Building", back_populates="rooms")
    assigned_to = relationship("User", back_populates="assigned_rooms")
    incidents = relationship("Incident", back_populates="room", cascade="all, delete-orphan")


class User(Base):
    """
    用户对象
    password_hash 不对外序列化
    """
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String(50), unique=True, nullable=False)    # 登录账号
    password_hash = Column(String(255), nullable=False)          # 密码哈希
    name = Column(String(100), nullable=False)                   # 姓名
    email = Column(String(100))
    role = Column(SQLEnum(UserRole), nullable=False)
    hotel_id = Column(Integer, ForeignKey("hotels.id"), nullable=True)
    is_active = Column(Boolean, default=True)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # 链接
    hotel = relationship("Hotel", back_populates="users")
    assigned_rooms = relationship("Room", back_populates="assigned_to")
    reported_incidents = relationship(
        "Incident", back_populates="reported_by", cascade="all, delete-orphan"
    )


class Incident(Base):
    """房间事件（损坏、遗留物品等），由服务员上报"""
    __tablename__ = "incidents"

    id = Column(Integer, primary_key=True, index=True)
    room_id = Column(Integer, ForeignKey("rooms.id"), nullable=False)
    reported_by_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    description = Column(String(2000), nullable=False)
    status = Column(SQLEnum(IncidentStatus), nullable=False, default=IncidentStatus.OPEN, index=True)
    photos = Column(Text)                                   # base64 图片的 JSON 数组
    resolution_notes = Column(String(2000))
    resolved_at = Column(DateTime)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # 链接
    room = relationship("Room", back_populates="incidents")
    reported_by = relationship("User", back_populates="reported_incidents")
