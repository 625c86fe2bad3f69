"""
用户服务
管理 User 对象和认证；管理员账号不可停用或删除
"""
import logging
from typing import List, Optional
from sqlalchemy.orm import Session
from housekeeping.models.ontology import User, UserRole, Hotel, Room
from housekeeping.models.schemas import UserCreate, UserUpdate, UserResponse
from housekeeping.security.auth import get_password_hash, verify_password, create_access_token
from housekeeping.services.exceptions import EntityNotFoundError

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 4


def _is_blank(value: Optional[str]) -> bool:
    return value is None or not value.strip()


class UserService:
    """用户服务"""

    def __init__(self, db: Session):
        self.db = db

    def get_users(self, role: Optional[UserRole] = None,
                  hotel_id: Optional[int] = None,
                  is_active: Optional[bool] = None) -> List[User]:
        """获取用户列表"""
        query = self.db.query(User)

        if role:
            query = query.filter(User.role == role)
        if hotel_id is not None:
            query = query.filter(User.hotel_id == hotel_id)
        if is_active is not None:
            query = query.filter(User.is_active == is_active)

        return query.order_by(User.id).all()

    def get_user(self, user_id: int) -> Optional[User]:
        return self.db.query(User).filter(User.id == user_id).first()

    def get_user_by_username(self, username: str) -> Optional[User]:
        return self.db.query(User).filter(User.username == username).first()

    def _check_hotel(self, hotel_id: Optional[int]) -> None:
        if hotel_id is not None and not self.db.query(Hotel).filter(Hotel.id == hotel_id).first():
            raise EntityNotFoundError("酒店", hotel_id)

    def create_user(self, data: UserCreate) -> User:
        """创建用户"""
        if _is_blank(data.username):
            raise ValueError("用户名不能为空")
        if _is_blank(data.name):
            raise ValueError("姓名不能为空")
        if data.role is None:
            raise ValueError("角色不能为空")
        if self.get_user_by_username(data.username):
            raise ValueError(f"用户名 '{data.username}' 已存在")
        if _is_blank(data.password):
            raise ValueError("密码不能为空")
        if len(data.password) < MIN_PASSWORD_LENGTH:
            raise ValueError(f"密码至少需要 {MIN_PASSWORD_LENGTH} 个字符")
        self._check_hotel(data.hotel_id)

        user = User(
            username=data.username,
            password_hash=get_password_hash(data.password),
            name=data.name,
            email=data.email,
            role=data.role,
            hotel_id=data.hotel_id,
            is_active=True
        )
        self.db.add(user)
        self.db.commit()
        self.db.refresh(user)
        logger.info(f"User created: {user.username} ({user.role.value})")
        return user

    def update_user(self, user_id: int, data: UserUpdate) -> User:
        """更新用户，仅修改提交的字段；密码非空时才重新哈希"""
        user = self.get_user(user_id)
        if not user:
            raise EntityNotFoundError("用户", user_id)

        update_data = data.model_dump(exclude_unset=True)

        new_role = update_data.get('role')
        if user.role == UserRole.ADMIN and new_role is not None and new_role != UserRole.ADMIN:
            raise ValueError("不能变更管理员账号的角色")

        if 'name' in update_data and update_data['name'] is not None and not update_data['name'].strip():
            raise ValueError("姓名不能为空")

        username = update_data.get('username')
        if username is not None and username != user.username:
            if not username.strip():
                raise ValueError("用户名不能为空")
            if self.get_user_by_username(username):
                raise ValueError(f"用户名 '{username}' 已存在")
            user.username = username

        password = update_data.get('password')
        if not _is_blank(password):
            if len(password.strip()) < MIN_PASSWORD_LENGTH:
                raise ValueError(f"密码至少需要 {MIN_PASSWORD_LENGTH} 个字符")
            user.password_hash = get_password_hash(password)

        if update_data.get('hotel_id') is not None:
            self._check_hotel(update_data['hotel_id'])
            user.hotel_id = update_data['hotel_id']

        for key in ('name', 'email', 'role'):
            if update_data.get(key) is not None:
                setattr(user, key, update_data[key])

        self.db.commit()
        self.db.refresh(user)
        return user

    def set_active(self, user_id: int, active: bool) -> User:
        """启用/停用用户"""
        user = self.get_user(user_id)
        if not user:
            raise EntityNotFoundError("用户", user_id)

        if user.role == UserRole.ADMIN and not active:
            raise ValueError("不能停用管理员账号")

        user.is_active = active
        self.db.commit()
        self.db.refresh(user)
        return user

    def deactivate_user(self, user_id: int) -> User:
        """删除用户（实际上是停用）"""
        user = self.get_user(user_id)
        if not user:
            raise EntityNotFoundError("用户", user_id)

        if user.role == UserRole.ADMIN:
            raise ValueError("不能删除管理员账号")

        user.is_active = False
        self.db.commit()
        self.db.refresh(user)
        return user

    def hard_delete_user(self, user_id: int) -> bool:
        """永久删除用户，同时解除其房间分配"""
        user = self.get_user(user_id)
        if not user:
            raise EntityNotFoundError("用户", user_id)

        if user.role == UserRole.ADMIN:
            raise ValueError("不能删除管理员账号")

        self.db.query(Room).filter(Room.assigned_to_id == user_id).update(
            {Room.assigned_to_id: None, Room.assigned_at: None},
            synchronize_session=False
        )
        self.db.delete(user)
        self.db.commit()
        logger.info(f"User {user_id} permanently deleted")
        return True

    def authenticate(self, username: str, password: str) -> Optional[dict]:
        """认证登录，失败返回 None；账号停用时抛出 ValueError"""
        user = self.get_user_by_username(username)
        if not user:
            return None

        if not verify_password(password, user.password_hash):
            return None

        if not user.is_active:
            raise ValueError("账号已停用")

        token = create_access_token(user.id, user.role, user.username)

        return {
            'access_token': token,
            'token_type': 'bearer',
            'user': UserResponse.model_validate(user)
        }
