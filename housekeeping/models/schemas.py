"""
Pydantic 模式定义
用于 API 请求/响应验证
"""
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field, ConfigDict
from housekeeping.models.ontology import RoomStatus, UserRole, IncidentStatus


# ============== 认证 Schemas ==============

class LoginRequest(BaseModel):
    username: str
    password: str


class RegisterRequest(BaseModel):
    username: str = Field(..., max_length=50)
    password: str
    name: str = Field(..., max_length=100)
    email: Optional[str] = Field(None, max_length=100)
    role: UserRole = UserRole.MAID
    hotel_id: Optional[int] = None


# ============== 酒店 Schemas ==============

class HotelBase(BaseModel):
    name: str = Field(..., max_length=100)
    address: Optional[str] = Field(None, max_length=255)
    phone: Optional[str] = Field(None, max_length=30)
    email: Optional[str] = Field(None, max_length=100)


class HotelCreate(HotelBase):
    pass


class HotelUpdate(BaseModel):
    name: Optional[str] = Field(None, max_length=100)
    address: Optional[str] = Field(None, max_length=255)
    phone: Optional[str] = Field(None, max_length=30)
    email: Optional[str] = Field(None, max_length=100)
    is_active: Optional[bool] = None


class HotelResponse(HotelBase):
    id: int
    is_active: bool
    created_at: datetime
    updated_at: datetime
    model_config = ConfigDict(from_attributes=True)


# ============== 楼栋 Schemas ==============

class BuildingBase(BaseModel):
    name: str = Field(..., max_length=100)
    floors: Optional[int] = Field(None, ge=1)
    hotel_id: int


class BuildingCreate(BuildingBase):
    pass


class BuildingUpdate(BaseModel):
    name: Optional[str] = Field(None, max_length=100)
    floors: Optional[int] = Field(None, ge=1)
    hotel_id: Optional[int] = None
    is_active: Optional[bool] = None


class BuildingResponse(BuildingBase):
    id: int
    is_active: bool
    created_at: datetime
    updated_at: datetime
    model_config = ConfigDict(from_attributes=True)


# ============== 用户 Schemas ==============

class UserCreate(BaseModel):
    """字段均可缺省，由服务层给出具体的校验信息"""
    username: Optional[str] = Field(None, max_length=50)
    password: Optional[str] = None
    name: Optional[str] = Field(None, max_length=100)
    email: Optional[str] = Field(None, max_length=100)
    role: Optional[UserRole] = None
    hotel_id: Optional[int] = None


class UserUpdate(BaseModel):
    username: Optional[str] = Field(None, max_length=50)
    password: Optional[str] = None
    name: Optional[str] = Field(None, max_length=100)
    email: Optional[str] = Field(None, max_length=100)
    role: Optional[UserRole] = None
    hotel_id: Optional[int] = None


class UserActivate(BaseModel):
    active: bool


class UserBrief(BaseModel):
    id: int
    username: str
    name: str
    role: UserRole
    model_config = ConfigDict(from_attributes=True)


class UserResponse(UserBrief):
    email: Optional[str] = None
    hotel_id: Optional[int] = None
    is_active: bool
    created_at: datetime
    updated_at: datetime


class LoginResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user: UserResponse


# ============== 房间 Schemas ==============

class RoomBase(BaseModel):
    number: str = Field(..., max_length=10)
    floor: int
    building_id: int


class RoomCreate(RoomBase):
    status: RoomStatus = RoomStatus.DIRTY


class RoomUpdate(BaseModel):
    number: Optional[str] = Field(None, max_length=10)
    floor: Optional[int] = None
    building_id: Optional[int] = None
    status: Optional[RoomStatus] = None
    assigned_to_id: Optional[int] = None
    assigned_at: Optional[datetime] = None
    is_active: Optional[bool] = None


class RoomStatusUpdate(BaseModel):
    status: RoomStatus


class RoomAssign(BaseModel):
    """maid_id 为空表示取消分配"""
    maid_id: Optional[int] = None


class RoomResponse(RoomBase):
    id: int
    status: RoomStatus
    assigned_to_id: Optional[int] = None
    assigned_to: Optional[UserBrief] = None
    assigned_at: Optional[datetime] = None
    is_active: bool
    created_at: datetime
    updated_at: datetime
    model_config = ConfigDict(from_attributes=True)


class RoomResetResponse(BaseModel):
    success: bool = True
    message: str
    count: int


# ============== 事件 Schemas ==============

class IncidentCreate(BaseModel):
    room_id: int
    reported_by_id: int
    description: str = Field(..., min_length=1, max_length=2000)
    photos: Optional[str] = None


class IncidentUpdate(BaseModel):
    description: Optional[str] = Field(None, min_length=1, max_length=2000)
    status: Optional[IncidentStatus] = None
    photos: Optional[str] = None
    resolution_notes: Optional[str] = Field(None, max_length=2000)
    resolved_at: Optional[datetime] = None


class IncidentResolve(BaseModel):
    resolution_notes: Optional[str] = Field(None, max_length=2000)


class RoomBrief(BaseModel):
    id: int
    number: str
    floor: int
    status: RoomStatus
    model_config = ConfigDict(from_attributes=True)


class IncidentResponse(BaseModel):
    id: int
    room_id: int
    room: Optional[RoomBrief] = None
    reported_by_id: int
    reported_by: Optional[UserBrief] = None
    description: str
    status: IncidentStatus
    photos: Optional[str] = None
    resolution_notes: Optional[str] = None
    resolved_at: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime
    model_config = ConfigDict(from_attributes=True)
