"""
调度器后端接口

定时任务本身是无状态函数，由外部调度后端按 cron 表达式触发。
"""
from abc import ABC, abstractmethod
from typing import Callable, Dict, List, Optional


class ISchedulerBackend(ABC):
    """调度后端接口"""

    @abstractmethod
    def start(self) -> None:
        """启动调度器"""

    @abstractmethod
    def shutdown(self) -> None:
        """关闭调度器"""

    @abstractmethod
    def add_job(self, job_id: str, func: Callable, cron_expression: str) -> None:
        """添加 cron 定时任务

        Args:
            job_id: 任务唯一标识
            func: 要执行的函数（无参数）
            cron_expression: 5 段 crontab 表达式，如 "0 8 * * *"
        """

    @abstractmethod
    def remove_job(self, job_id: str) -> None:
        """移除任务"""

    @abstractmethod
    def get_jobs(self) -> List[Dict]:
        """获取所有任务

        Returns:
            任务列表，每项包含 id, name, trigger, next_run_time, status
        """

    @abstractmethod
    def trigger_job(self, job_id: str) -> None:
        """立即触发一次任务执行"""


class SchedulerRegistry:
    """调度器注册表（单例模式）

    应用在 lifespan 中注册实现：
        registry = SchedulerRegistry()
        registry.set_backend(APSchedulerBackend())
    """

    _instance: Optional["SchedulerRegistry"] = None

    def __new__(cls) -> "SchedulerRegistry":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._backend: Optional[ISchedulerBackend] = None
        return cls._instance

    def set_backend(self, backend: ISchedulerBackend) -> None:
        """注册调度后端"""
        self._backend = backend

    def get_backend(self) -> Optional[ISchedulerBackend]:
        """获取调度后端"""
        return self._backend

    def clear(self) -> None:
        """清除后端（用于测试）"""
        self._backend = None
