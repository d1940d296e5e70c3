"""SQLModel entities for clustertasks."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Optional, Dict

from sqlalchemy import Column, JSON, Text
from sqlmodel import Field, SQLModel

from .time_utils import now_utc


class Universe(SQLModel, table=True):
    __tablename__ = "universes"

    id: Optional[int] = Field(default=None, primary_key=True)
    universe_uuid: str = Field(index=True, unique=True)
    name: str = Field(index=True)
    ysql_enabled: bool = Field(default=True)
    software_version: Optional[str] = None
    created_at: datetime = Field(default_factory=now_utc)
    updated_at: datetime = Field(default_factory=now_utc)


class UniverseNode(SQLModel, table=True):
    __tablename__ = "universe_nodes"

    id: Optional[int] = Field(default=None, primary_key=True)
    universe_uuid: str = Field(index=True, foreign_key="universes.universe_uuid")
    node_name: str = Field(index=True)
    private_ip: str
    is_master: bool = Field(default=False, index=True)
    is_tserver: bool = Field(default=True)
    is_master_leader: bool = Field(default=False, index=True)
    state: str = Field(default="Live", index=True)
    created_at: datetime = Field(default_factory=now_utc)
    updated_at: datetime = Field(default_factory=now_utc)


class TaskInfo(SQLModel, table=True):
    __tablename__ = "task_info"

    id: Optional[int] = Field(default=None, primary_key=True)
    task_uuid: str = Field(index=True, unique=True)
    task_type: str = Field(index=True)
    universe_uuid: Optional[str] = Field(default=None, index=True)
    state: str = Field(default="Created", index=True)
    task_params: Dict[str, Any] = Field(default_factory=dict, sa_column=Column(JSON))
    error_message: Optional[str] = Field(default=None, sa_column=Column(Text))
    claimed_by: Optional[str] = Field(default=None, index=True)
    duration_ms: Optional[int] = Field(default=None)
    created_at: datetime = Field(default_factory=now_utc)
    started_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None
    updated_at: datetime = Field(default_factory=now_utc)
