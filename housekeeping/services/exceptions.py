"""
服务层异常
ValueError 映射为 400；EntityNotFoundError 映射为 404
"""


class EntityNotFoundError(ValueError):
    """引用的实体不存在"""

    def __init__(self, entity: str, entity_id):
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"{entity}不存在: {entity_id}")


class ResetInProgressError(RuntimeError):
    """房态重置正在执行中"""


class ResetFailedError(RuntimeError):
    """房态重置中途失败，已提交的房间保持 DIRTY"""

    def __init__(self, updated_count: int, cause: Exception):
        self.updated_count = updated_count
        self.cause = cause
        super().__init__(f"房态重置失败（已更新 {updated_count} 间）: {cause}")
