"""Cluster orchestration subtasks."""

from .errors import ClusterTaskError, CommandFailedError, NoMasterLeaderError, UniverseNotFoundError
from .execution import NodeCommandExecutor, ShellResponse, Subtask, UniverseRegistry

__all__ = [
    "__version__",
    "ClusterTaskError",
    "CommandFailedError",
    "NoMasterLeaderError",
    "UniverseNotFoundError",
    "NodeCommandExecutor",
    "ShellResponse",
    "Subtask",
    "UniverseRegistry",
]

__version__ = "0.1.0"
