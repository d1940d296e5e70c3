from .task_service import TaskService
from .worker_service import WorkerService

__all__ = [
    "TaskService",
    "WorkerService",
]
