"""Failure types raised by cluster subtasks."""

from __future__ import annotations


class ClusterTaskError(RuntimeError):
    """Base class for failures that abort a subtask."""


class UniverseNotFoundError(ClusterTaskError):
    def __init__(self, universe_uuid):
        self.universe_uuid = universe_uuid
        super().__init__(f"Cannot find universe {universe_uuid}")


class NoMasterLeaderError(ClusterTaskError):
    def __init__(self, universe_uuid):
        self.universe_uuid = universe_uuid
        super().__init__(f"No master leader found for universe {universe_uuid}")


class CommandFailedError(ClusterTaskError):
    """Raised when an admin command exits non-zero.

    The message only points at the logs; raw command output can be large or
    sensitive and is never carried on the exception.
    """

    def __init__(self, command: str, code: int):
        self.command = command
        self.code = code
        super().__init__(f"Failed to run {command}. Check logs for more info.")
