"""Runs yb-admin on universe nodes."""

from __future__ import annotations

import logging
import shlex
import subprocess
from typing import Callable

from .execution import NodeCommandExecutor, ShellResponse
from .models import TaskInfo, UniverseNode
from .settings import Settings, settings as default_settings
from .universes import UniverseHandle

logger = logging.getLogger(__name__)

TIMEOUT_EXIT_CODE = 124
LAUNCH_FAILURE_EXIT_CODE = 127


class NodeUniverseManager(NodeCommandExecutor):
    """Builds the yb-admin command line for a node and runs it over ssh."""

    def __init__(
        self,
        settings: Settings | None = None,
        runner: Callable[..., subprocess.CompletedProcess] = subprocess.run,
    ):
        self.settings = settings or default_settings
        self._runner = runner

    def build_yb_admin_command(
        self,
        universe: UniverseHandle,
        args: list[str],
        timeout_ms: int,
    ) -> list[str]:
        return [
            str(self.settings.yb_admin_path),
            "--master_addresses",
            universe.master_addresses(self.settings.master_rpc_port),
            "--timeout_ms",
            str(int(timeout_ms)),
            *args,
        ]

    def wrap_for_node(self, node: UniverseNode, command: list[str]) -> list[str]:
        if not self.settings.ssh_enabled:
            return command
        ssh_command = [
            "ssh",
            "-o",
            "BatchMode=yes",
            "-o",
            "StrictHostKeyChecking=no",
            "-p",
            str(self.settings.ssh_port),
        ]
        if self.settings.ssh_key_path:
            ssh_command += ["-i", self.settings.ssh_key_path]
        ssh_command.append(f"{self.settings.ssh_user}@{node.private_ip}")
        ssh_command.append(shlex.join(command))
        return ssh_command

    def run_yb_admin_command(
        self,
        node: UniverseNode,
        universe: UniverseHandle,
        task_info: TaskInfo,
        args: list[str],
        timeout_ms: int,
    ) -> ShellResponse:
        command = self.wrap_for_node(node, self.build_yb_admin_command(universe, args, timeout_ms))
        logger.debug(
            "task %s: running yb-admin on %s (%s): %s",
            task_info.task_uuid,
            node.node_name,
            universe.universe_uuid,
            shlex.join(command),
        )
        try:
            completed = self._runner(
                command,
                capture_output=True,
                text=True,
                timeout=timeout_ms / 1000.0,
                check=False,
            )
        except subprocess.TimeoutExpired:
            logger.warning(
                "task %s: yb-admin on %s timed out after %sms",
                task_info.task_uuid,
                node.node_name,
                timeout_ms,
            )
            return ShellResponse(code=TIMEOUT_EXIT_CODE, message=f"timeout after {timeout_ms}ms")
        except OSError as exc:
            return ShellResponse(
                code=LAUNCH_FAILURE_EXIT_CODE,
                message=f"failed to launch {command[0]}: {exc}",
            )

        stdout = (completed.stdout or "").strip()
        stderr = (completed.stderr or "").strip()
        if completed.returncode == 0:
            return ShellResponse(code=0, message=stdout)
        return ShellResponse(code=completed.returncode, message=stderr or stdout)
