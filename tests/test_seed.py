"""
演示数据初始化测试
"""
from housekeeping.models.ontology import Building, Hotel, Room, RoomStatus, User, UserRole
from housekeeping.security.auth import verify_password
from housekeeping.seed import DEFAULT_PASSWORD, seed_demo_data


def test_seed_empty_database(db_session):
    assert seed_demo_data(db_session) is True

    assert db_session.query(Hotel).count() == 1
    assert db_session.query(Building).count() == 1

    rooms = db_session.query(Room).order_by(Room.floor, Room.number).all()
    assert len(rooms) == 15
    assert rooms[0].number == "101"
    assert rooms[-1].number == "305"
    assert all(r.status == RoomStatus.DIRTY for r in rooms)

    admin = db_session.query(User).filter(User.username == "admin").one()
    maid = db_session.query(User).filter(User.username == "mucama1").one()
    assert admin.role == UserRole.ADMIN
    assert maid.role == UserRole.MAID
    assert verify_password(DEFAULT_PASSWORD, admin.password_hash)


def test_seed_skipped_when_users_exist(db_session, maid_user):
    assert seed_demo_data(db_session) is False
    assert db_session.query(Room).count() == 0
    assert db_session.query(User).count() == 1
