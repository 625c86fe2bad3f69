"""
APScheduler 调度后端，实现 ISchedulerBackend 接口
"""
import logging
from typing import Callable, Dict, List, Optional

from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.triggers.cron import CronTrigger

from housekeeping.core.scheduler import ISchedulerBackend, SchedulerRegistry

logger = logging.getLogger(__name__)


class APSchedulerBackend(ISchedulerBackend):
    """基于 APScheduler 的调度后端"""

    def __init__(self, scheduler: Optional[BackgroundScheduler] = None):
        self._scheduler = scheduler or BackgroundScheduler()

    @property
    def scheduler(self) -> BackgroundScheduler:
        return self._scheduler

    def start(self) -> None:
        """启动调度器"""
        if not self._scheduler.running:
            self._scheduler.start()
            logger.info("APScheduler started")

    def shutdown(self) -> None:
        """关闭调度器"""
        if self._scheduler.running:
            self._scheduler.shutdown(wait=False)
            logger.info("APScheduler shut down")

    def add_job(self, job_id: str, func: Callable, cron_expression: str) -> None:
        """添加 cron 定时任务；同一 job_id 重复添加时替换"""
        self._scheduler.add_job(
            func,
            trigger=CronTrigger.from_crontab(cron_expression),
            id=job_id,
            name=job_id,
            replace_existing=True,
            max_instances=1,
            coalesce=True,
        )
        logger.info(f"Job added: {job_id} ({cron_expression})")

    def remove_job(self, job_id: str) -> None:
        """移除任务"""
        try:
            self._scheduler.remove_job(job_id)
            logger.info(f"Job removed: {job_id}")
        except Exception:
            logger.warning(f"Job not found for removal: {job_id}")

    def get_jobs(self) -> List[Dict]:
        """获取所有任务"""
        return [self._job_to_dict(j) for j in self._scheduler.get_jobs()]

    def trigger_job(self, job_id: str) -> None:
        """立即触发一次任务"""
        job = self._scheduler.get_job(job_id)
        if job is None:
            raise ValueError(f"Job not found: {job_id}")
        job.func()

    @staticmethod
    def _job_to_dict(job) -> Dict:
        next_run_time = getattr(job, "next_run_time", None)
        return {
            "id": job.id,
            "name": job.name or job.id,
            "trigger": str(job.trigger),
            "next_run_time": next_run_time.isoformat() if next_run_time else None,
            "status": "paused" if next_run_time is None else "active",
        }


def start_daily_reset_scheduler(cron_expression: str) -> APSchedulerBackend:
    """注册每日房态重置任务并启动调度器"""
    from housekeeping.services.reset_service import DAILY_RESET_JOB_ID, daily_room_reset

    backend = APSchedulerBackend()
    backend.add_job(DAILY_RESET_JOB_ID, daily_room_reset, cron_expression)
    backend.start()
    SchedulerRegistry().set_backend(backend)
    return backend


def stop_scheduler() -> None:
    """关闭已注册的调度后端"""
    registry = SchedulerRegistry()
    backend = registry.get_backend()
    if backend is not None:
        backend.shutdown()
        registry.clear()
