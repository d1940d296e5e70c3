"""Task submission and lookup."""

from __future__ import annotations

import uuid

from sqlmodel import Session

from clustertasks.models import TaskInfo
from clustertasks.repositories import get_task_info
from clustertasks.schemas import TaskInfoSummary, TaskSubmitRequest
from clustertasks.subtasks import SubtaskRegistry
from clustertasks.time_utils import now_utc


class TaskService:
    def __init__(self, subtask_registry: SubtaskRegistry):
        self.subtask_registry = subtask_registry

    def submit_task(self, session: Session, payload: TaskSubmitRequest) -> TaskInfo:
        subtask = self.subtask_registry.get(payload.task_type)
        if subtask is None:
            raise ValueError(f"unknown task_type: {payload.task_type}")
        params = subtask.params_type.model_validate(payload.params)
        universe_uuid = getattr(params, "universe_uuid", None)

        task_info = TaskInfo(
            task_uuid=str(uuid.uuid4()),
            task_type=payload.task_type,
            universe_uuid=None if universe_uuid is None else str(universe_uuid),
            state="Created",
            task_params=params.model_dump(mode="json"),
            created_at=now_utc(),
            updated_at=now_utc(),
        )
        session.add(task_info)
        session.flush()
        return task_info

    def get_task_summary(self, session: Session, task_uuid: str) -> TaskInfoSummary | None:
        task_info = get_task_info(session, task_uuid)
        if task_info is None:
            return None
        return TaskInfoSummary(
            task_uuid=task_info.task_uuid,
            task_type=task_info.task_type,
            universe_uuid=task_info.universe_uuid,
            state=task_info.state,
            task_params=dict(task_info.task_params or {}),
            error_message=task_info.error_message,
            claimed_by=task_info.claimed_by,
            duration_ms=task_info.duration_ms,
            created_at=task_info.created_at,
            started_at=task_info.started_at,
            completed_at=task_info.completed_at,
        )
