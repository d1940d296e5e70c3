"""Subtask registry keyed by task type."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict

from sqlmodel import Session

from clustertasks.execution import Subtask
from clustertasks.node_manager import NodeUniverseManager
from clustertasks.settings import Settings
from clustertasks.universes import DatabaseUniverseRegistry

from .catalog_upgrade import YsqlMajorVersionCatalogUpgrade


@dataclass
class SubtaskRegistry:
    subtasks: Dict[str, Subtask]

    @classmethod
    def default(
        cls,
        session_factory: Callable[[], Session],
        settings: Settings | None = None,
    ) -> "SubtaskRegistry":
        universe_registry = DatabaseUniverseRegistry(session_factory)
        node_manager = NodeUniverseManager(settings)
        return cls(
            subtasks={
                YsqlMajorVersionCatalogUpgrade.task_type: YsqlMajorVersionCatalogUpgrade(
                    universe_registry, node_manager
                ),
            }
        )

    def get(self, task_type: str) -> Subtask | None:
        return self.subtasks.get(task_type)

    def register(self, subtask: Subtask, task_type: str | None = None) -> None:
        self.subtasks[task_type or subtask.task_type] = subtask
