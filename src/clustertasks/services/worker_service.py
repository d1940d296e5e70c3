"""Worker task-claim and execution service."""

from __future__ import annotations

import logging

from pydantic import ValidationError
from sqlmodel import Session, select

from clustertasks.errors import ClusterTaskError
from clustertasks.models import TaskInfo
from clustertasks.repositories import get_task_info
from clustertasks.schemas import WorkerRunResponse
from clustertasks.settings import settings
from clustertasks.subtasks import SubtaskRegistry
from clustertasks.time_utils import elapsed_ms, now_utc

logger = logging.getLogger(__name__)


class WorkerService:
    """Claims one queued task at a time and runs it exactly once."""

    def __init__(self, subtask_registry: SubtaskRegistry):
        self.subtask_registry = subtask_registry

    def process_once(self, session: Session, worker_id: str | None = None) -> WorkerRunResponse:
        effective_worker_id = worker_id or settings.worker_id
        bind = session.get_bind()

        with Session(bind=bind, expire_on_commit=False) as claim_session:
            task_info = self._claim_next_task(claim_session, effective_worker_id)
            if task_info is None:
                claim_session.commit()
                return WorkerRunResponse(processed=False, message="no queued task")
            task_uuid = str(task_info.task_uuid)
            task_type = str(task_info.task_type)
            claim_session.commit()

        subtask = self.subtask_registry.get(task_type)
        if subtask is None:
            return self._finalize(bind, task_uuid, "Failure", f"unknown task_type: {task_type}")

        try:
            params = subtask.params_type.model_validate(task_info.task_params or {})
        except ValidationError as exc:
            return self._finalize(bind, task_uuid, "Failure", f"invalid task params: {exc.error_count()} error(s)")

        logger.info("task %s: running %s", task_uuid, task_type)
        try:
            subtask.run(params, task_info)
        except ClusterTaskError as exc:
            logger.error("task %s: %s failed: %s", task_uuid, task_type, exc)
            return self._finalize(bind, task_uuid, "Failure", str(exc))
        except Exception as exc:  # noqa: BLE001
            logger.exception("task %s: %s raised", task_uuid, task_type)
            return self._finalize(bind, task_uuid, "Failure", f"execution raised: {exc}")

        logger.info("task %s: %s succeeded", task_uuid, task_type)
        return self._finalize(bind, task_uuid, "Success", "completed")

    def _claim_next_task(self, session: Session, worker_id: str) -> TaskInfo | None:
        statement = (
            select(TaskInfo)
            .where(TaskInfo.state == "Created")
            .order_by(TaskInfo.created_at.asc(), TaskInfo.id.asc())
            .with_for_update(skip_locked=True)
        )
        task_info = session.exec(statement).first()
        if task_info is None:
            return None
        now = now_utc()
        task_info.state = "Running"
        task_info.claimed_by = worker_id
        task_info.started_at = now
        task_info.updated_at = now
        session.add(task_info)
        return task_info

    def _finalize(self, bind, task_uuid: str, state: str, message: str) -> WorkerRunResponse:
        with Session(bind=bind, expire_on_commit=False) as finalize_session:
            live_task = get_task_info(finalize_session, task_uuid)
            if live_task is None:
                finalize_session.commit()
                return WorkerRunResponse(
                    processed=True,
                    task_uuid=task_uuid,
                    message="task disappeared before finalization",
                )
            now = now_utc()
            live_task.state = state
            live_task.error_message = None if state == "Success" else message
            live_task.completed_at = now
            live_task.updated_at = now
            live_task.duration_ms = elapsed_ms(live_task.started_at, now)
            finalize_session.add(live_task)
            finalize_session.commit()
        return WorkerRunResponse(processed=True, task_uuid=task_uuid, state=state, message=message)
