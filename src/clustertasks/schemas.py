"""Request and response schemas for clustertasks."""

from __future__ import annotations

import uuid
from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


class UniverseTaskParams(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    universe_uuid: uuid.UUID


class TaskSubmitRequest(BaseModel):
    task_type: str = Field(..., min_length=1)
    params: dict[str, Any] = Field(default_factory=dict)


class TaskInfoSummary(BaseModel):
    task_uuid: str
    task_type: str
    universe_uuid: Optional[str]
    state: str
    task_params: dict[str, Any]
    error_message: Optional[str]
    claimed_by: Optional[str]
    duration_ms: Optional[int]
    created_at: datetime
    started_at: Optional[datetime]
    completed_at: Optional[datetime]


class WorkerRunResponse(BaseModel):
    processed: bool
    task_uuid: Optional[str] = None
    state: Optional[str] = None
    message: str
