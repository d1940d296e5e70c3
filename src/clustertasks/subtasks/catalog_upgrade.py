"""Subtask that migrates the YSQL catalog across a major version."""

from __future__ import annotations

import logging

from clustertasks.errors import CommandFailedError, NoMasterLeaderError
from clustertasks.execution import NodeCommandExecutor, Subtask, UniverseRegistry
from clustertasks.models import TaskInfo
from clustertasks.schemas import UniverseTaskParams

CATALOG_UPGRADE_COMMAND = "ysql_major_version_catalog_upgrade"
TIMEOUT_MS = 600000


class YsqlMajorVersionCatalogUpgrade(Subtask):
    """Runs ``yb-admin ysql_major_version_catalog_upgrade`` on the master leader.

    The leader is resolved once and the command is dispatched once. Failures
    are raised to the caller; nothing is retried here.
    """

    task_type = CATALOG_UPGRADE_COMMAND
    params_type = UniverseTaskParams

    def __init__(
        self,
        universe_registry: UniverseRegistry,
        node_manager: NodeCommandExecutor,
        logger: logging.Logger | None = None,
    ):
        self.universe_registry = universe_registry
        self.node_manager = node_manager
        self.log = logger or logging.getLogger(__name__)

    def run(self, params: UniverseTaskParams, task_info: TaskInfo) -> None:
        universe = self.universe_registry.lookup(params.universe_uuid)
        master_leader = universe.master_leader_node()
        if master_leader is None:
            self.log.error("No master leader found for universe %s", universe.universe_uuid)
            raise NoMasterLeaderError(universe.universe_uuid)

        response = self.node_manager.run_yb_admin_command(
            master_leader,
            universe,
            task_info,
            [CATALOG_UPGRADE_COMMAND],
            TIMEOUT_MS,
        )
        if response.code != 0:
            self.log.error("Failed to run %s. Error: %s", CATALOG_UPGRADE_COMMAND, response.message)
            raise CommandFailedError(CATALOG_UPGRADE_COMMAND, response.code)

        self.log.info("Successfully ran %s.", CATALOG_UPGRADE_COMMAND)
