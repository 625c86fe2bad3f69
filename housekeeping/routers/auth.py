"""
认证路由
"""
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from housekeeping.database import get_db
from housekeeping.models.ontology import User
from housekeeping.models.schemas import LoginRequest, LoginResponse, RegisterRequest, UserCreate, UserResponse
from housekeeping.services.exceptions import EntityNotFoundError
from housekeeping.services.user_service import UserService
from housekeeping.security.auth import get_current_user

router = APIRouter(prefix="/api/auth", tags=["认证"])


@router.post("/login", response_model=LoginResponse)
def login(data: LoginRequest, db: Session = Depends(get_db)):
    """用户登录"""
    service = UserService(db)
    try:
        result = service.authenticate(data.username, data.password)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=str(e))
    if not result:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="用户名或密码错误"
        )
    return result


@router.post("/register", response_model=UserResponse)
def register(data: RegisterRequest, db: Session = Depends(get_db)):
    """注册用户，返回结果不包含密码"""
    service = UserService(db)
    try:
        return service.create_user(UserCreate(**data.model_dump()))
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@router.get("/verify")
def verify_token(current_user: User = Depends(get_current_user)):
    """校验 token 是否有效"""
    return {"valid": True}


@router.get("/me", response_model=UserResponse)
def get_current_user_info(current_user: User = Depends(get_current_user)):
    """获取当前用户信息"""
    return current_user
