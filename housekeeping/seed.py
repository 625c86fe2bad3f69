"""
演示数据初始化
仅在没有任何用户时写入：

默认账号（密码均为 password）：
  admin      管理员
  mucama1    客房服务员
"""
import logging
from sqlalchemy.orm import Session
from housekeeping.models.ontology import Hotel, Building, Room, RoomStatus, User, UserRole
from housekeeping.security.auth import get_password_hash

logger = logging.getLogger(__name__)

DEFAULT_PASSWORD = "password"


def seed_demo_data(db: Session) -> bool:
    """写入演示数据，已有用户时跳过

    Returns:
        是否写入了数据
    """
    if db.query(User).count() > 0:
        return False

    hotel = Hotel(
        name="Hotel Example", address="123 Main St",
        phone="555-0100", email="info@hotelexample.com", is_active=True
    )
    db.add(hotel)
    db.flush()

    building = Building(name="主楼", floors=5, hotel_id=hotel.id, is_active=True)
    db.add(building)
    db.flush()

    # 3 层，每层 5 间：101-105, 201-205, 301-305
    for floor in range(1, 4):
        for num in range(1, 6):
            db.add(Room(
                number=f"{floor}0{num}", floor=floor, status=RoomStatus.DIRTY,
                building_id=building.id, is_active=True
            ))

    db.add(User(
        username="admin", password_hash=get_password_hash(DEFAULT_PASSWORD),
        name="管理员", email="admin@hotel.com", role=UserRole.ADMIN,
        hotel_id=hotel.id, is_active=True
    ))
    db.add(User(
        username="mucama1", password_hash=get_password_hash(DEFAULT_PASSWORD),
        name="Ana García", email="ana@hotel.com", role=UserRole.MAID,
        hotel_id=hotel.id, is_active=True
    ))

    db.commit()
    logger.info("Demo data loaded: admin / mucama1")
    return True
