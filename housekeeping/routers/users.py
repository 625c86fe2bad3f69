"""
用户管理路由
"""
from typing import List
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from housekeeping.database import get_db
from housekeeping.models.ontology import User, UserRole
from housekeeping.models.schemas import UserCreate, UserUpdate, UserActivate, UserResponse
from housekeeping.services.exceptions import EntityNotFoundError
from housekeeping.services.user_service import UserService
from housekeeping.security.auth import get_current_user, require_admin

router = APIRouter(prefix="/api/users", tags=["用户管理"])


@router.get("", response_model=List[UserResponse])
def list_users(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """获取全部用户"""
    return UserService(db).get_users()


@router.get("/active", response_model=List[UserResponse])
def list_active_users(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """获取启用中的用户"""
    return UserService(db).get_users(is_active=True)


@router.get("/role/{role}", response_model=List[UserResponse])
def list_users_by_role(
    role: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """按角色获取用户，未知角色返回空列表"""
    try:
        role_enum = UserRole(role.upper())
    except ValueError:
        return []
    return UserService(db).get_users(role=role_enum)


@router.get("/hotel/{hotel_id}", response_model=List[UserResponse])
def list_users_by_hotel(
    hotel_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return UserService(db).get_users(hotel_id=hotel_id)


@router.get("/{user_id}", response_model=UserResponse)
def get_user(
    user_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """获取用户详情"""
    user = UserService(db).get_user(user_id)
    if not user:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="用户不存在")
    return user


@router.post("", response_model=UserResponse)
def create_user(
    data: UserCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """创建用户"""
    try:
        return UserService(db).create_user(data)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@router.put("/{user_id}", response_model=UserResponse)
def update_user(
    user_id: int,
    data: UserUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """更新用户"""
    try:
        return UserService(db).update_user(user_id, data)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@router.patch("/{user_id}/activate", response_model=UserResponse)
def set_user_active(
    user_id: int,
    data: UserActivate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """启用/停用用户"""
    try:
        return UserService(db).set_active(user_id, data.active)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@router.delete("/{user_id}")
def delete_user(
    user_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """停用用户"""
    try:
        UserService(db).deactivate_user(user_id)
        return {"message": "用户已停用"}
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@router.delete("/{user_id}/hard")
def hard_delete_user(
    user_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin)
):
    """永久删除用户（仅管理员可操作）"""
    try:
        UserService(db).hard_delete_user(user_id)
        return {"message": "用户已删除"}
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
