"""
应用入口
酒店客房清洁管理：REST 接口 + WebSocket 推送 + 每日房态重置
"""
import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from housekeeping.config import settings
from housekeeping.database import init_db, SessionLocal
from housekeeping.routers import auth, hotels, rooms, users, incidents, ws

logger = logging.getLogger(__name__)


def setup_logging(level: str = "INFO"):
    """日志配置"""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """应用生命周期管理"""
    setup_logging(settings.LOG_LEVEL)

    # 启动时执行
    init_db()

    if settings.SEED_DEMO_DATA:
        from housekeeping.seed import seed_demo_data
        db = SessionLocal()
        try:
            seed_demo_data(db)
        finally:
            db.close()

    if settings.SCHEDULER_ENABLED:
        from housekeeping.services.scheduler_backend import start_daily_reset_scheduler
        start_daily_reset_scheduler(settings.DAILY_RESET_CRON)
        logger.info(f"Daily room reset scheduled: {settings.DAILY_RESET_CRON}")

    yield

    # 关闭时执行
    if settings.SCHEDULER_ENABLED:
        from housekeeping.services.scheduler_backend import stop_scheduler
        stop_scheduler()


# 创建应用
app = FastAPI(
    title="Housekeeping - 酒店客房清洁管理",
    description="酒店/楼栋/房间/用户/事件管理，每日房态重置与实时推送",
    version="1.0.0",
    lifespan=lifespan
)

# CORS 配置
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# 注册路由
app.include_router(auth.router)
app.include_router(hotels.router)
app.include_router(hotels.building_router)
app.include_router(rooms.router)
app.include_router(users.router)
app.include_router(incidents.router)
app.include_router(ws.router)


@app.get("/")
def root():
    """根路径"""
    return {
        "name": settings.APP_NAME,
        "version": "1.0.0",
        "description": "酒店客房清洁管理后端"
    }


@app.get("/health")
def health_check():
    """健康检查"""
    return {"status": "healthy"}
