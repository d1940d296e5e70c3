"""Subtask protocol and collaborator contracts."""

from __future__ import annotations

import uuid
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING, ClassVar

from pydantic import BaseModel

from .models import TaskInfo, UniverseNode

if TYPE_CHECKING:
    from .universes import UniverseHandle


@dataclass(frozen=True)
class ShellResponse:
    code: int
    message: str = ""

    @property
    def is_success(self) -> bool:
        return self.code == 0


class NodeCommandExecutor(ABC):
    @abstractmethod
    def run_yb_admin_command(
        self,
        node: UniverseNode,
        universe: UniverseHandle,
        task_info: TaskInfo,
        args: list[str],
        timeout_ms: int,
    ) -> ShellResponse:
        """Run a yb-admin command on ``node``.

        Implementations report command and transport problems through a
        non-zero ``ShellResponse.code`` instead of raising.
        """


class UniverseRegistry(ABC):
    @abstractmethod
    def lookup(self, universe_uuid: uuid.UUID | str) -> UniverseHandle:
        """Return the universe or raise ``UniverseNotFoundError``."""


class Subtask(ABC):
    task_type: ClassVar[str]
    params_type: ClassVar[type[BaseModel]]

    @abstractmethod
    def run(self, params: BaseModel, task_info: TaskInfo) -> None:
        """Run once; raise ``ClusterTaskError`` on failure."""
