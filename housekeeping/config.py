"""
应用配置
从环境变量 / .env 读取配置
"""
from typing import List
from pydantic import ConfigDict
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """应用设置"""

    # 应用基础配置
    APP_NAME: str = "Housekeeping"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # 数据库配置
    DATABASE_URL: str = "sqlite:///./housekeeping.db"

    # JWT 配置
    SECRET_KEY: str = "housekeeping-secret-key-change-in-production"
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_HOURS: int = 24

    # CORS
    CORS_ORIGINS: List[str] = [
        "http://localhost:3000",
        "http://localhost:5173",
        "http://localhost:5500",
        "http://127.0.0.1:5500",
    ]

    # 定时任务：每天 8:00 将已清洁房间重置为待清洁
    SCHEDULER_ENABLED: bool = True
    DAILY_RESET_CRON: str = "0 8 * * *"

    # 首次启动时写入演示数据
    SEED_DEMO_DATA: bool = True

    model_config = ConfigDict(env_file=".env", case_sensitive=True)


# 全局设置实例
settings = Settings()
