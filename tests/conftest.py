"""
Pytest 配置和共享 fixtures
"""
import os

# 测试环境：内存数据库，不启动调度器，不写入演示数据
os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")
os.environ["SCHEDULER_ENABLED"] = "false"
os.environ["SEED_DEMO_DATA"] = "false"

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from fastapi.testclient import TestClient

from housekeeping.database import Base, get_db
from housekeeping.models import ontology  # noqa
from housekeeping.models.ontology import Hotel, Building, Room, RoomStatus, User, UserRole
from housekeeping.security.auth import get_password_hash, create_access_token
from housekeeping.services.message_broker import message_broker
from housekeeping.services.notification_service import NotificationService, get_notification_service
from housekeeping.main import app


class RecordingPublisher:
    """记录发布调用的发布函数"""

    def __init__(self):
        self.published = []

    def __call__(self, destination, message):
        self.published.append((destination, message))
        return 1

    def types(self, destination=None):
        return [m["type"] for d, m in self.published if destination is None or d == destination]


@pytest.fixture(scope="function")
def db_engine():
    """创建内存数据库引擎"""
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def session_factory(db_engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=db_engine)


@pytest.fixture(scope="function")
def db_session(session_factory):
    """创建数据库会话"""
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def publisher():
    return RecordingPublisher()


@pytest.fixture
def notifier(publisher):
    """使用记录发布函数的推送服务"""
    return NotificationService(publisher=publisher)


@pytest.fixture(autouse=True)
def clean_broker():
    """每个测试前后清空消息代理"""
    message_broker.clear_subscribers()
    message_broker.clear_history()
    yield
    message_broker.clear_subscribers()
    message_broker.clear_history()


@pytest.fixture(scope="function")
def client(db_session, notifier):
    """创建测试客户端"""
    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_notification_service] = lambda: notifier
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


# ============== 认证相关 Fixtures ==============

def _create_user(db_session, username, role, hotel_id=None):
    user = User(
        username=username,
        password_hash=get_password_hash("123456"),
        name=username.capitalize(),
        role=role,
        hotel_id=hotel_id,
        is_active=True
    )
    db_session.add(user)
    db_session.commit()
    db_session.refresh(user)
    return user


@pytest.fixture
def admin_user(db_session):
    return _create_user(db_session, "admin", UserRole.ADMIN)


@pytest.fixture
def reception_user(db_session):
    return _create_user(db_session, "front1", UserRole.RECEPTION)


@pytest.fixture
def maid_user(db_session):
    return _create_user(db_session, "mucama1", UserRole.MAID)


@pytest.fixture
def admin_headers(admin_user):
    token = create_access_token(admin_user.id, admin_user.role)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def reception_headers(reception_user):
    token = create_access_token(reception_user.id, reception_user.role)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def maid_headers(maid_user):
    token = create_access_token(maid_user.id, maid_user.role)
    return {"Authorization": f"Bearer {token}"}


# ============== 实体相关 Fixtures ==============

@pytest.fixture
def sample_hotel(db_session):
    hotel = Hotel(name="Hotel Example", address="123 Main St", phone="555-0100", is_active=True)
    db_session.add(hotel)
    db_session.commit()
    db_session.refresh(hotel)
    return hotel


@pytest.fixture
def sample_building(db_session, sample_hotel):
    building = Building(name="主楼", floors=5, hotel_id=sample_hotel.id, is_active=True)
    db_session.add(building)
    db_session.commit()
    db_session.refresh(building)
    return building


@pytest.fixture
def sample_room(db_session, sample_building):
    room = Room(number="101", floor=1, status=RoomStatus.DIRTY,
                building_id=sample_building.id, is_active=True)
    db_session.add(room)
    db_session.commit()
    db_session.refresh(room)
    return room


@pytest.fixture
def make_rooms(db_session, sample_building):
    """按状态批量创建房间：make_rooms(RoomStatus.CLEAN, 5)"""
    counter = {"n": 0}

    def _make(status: RoomStatus, count: int, assigned_to_id=None):
        rooms = []
        for _ in range(count):
            counter["n"] += 1
            room = Room(
                number=f"{100 + counter['n']}", floor=1, status=status,
                building_id=sample_building.id, assigned_to_id=assigned_to_id,
                is_active=True
            )
            db_session.add(room)
            rooms.append(room)
        db_session.commit()
        for room in rooms:
            db_session.refresh(room)
        return rooms

    return _make
