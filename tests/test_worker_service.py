import unittest
import uuid

from _test_support import reset_database, seed_universe
from fakes import RecordingNodeManager
from clustertasks.db import get_session, session_scope
from clustertasks.execution import ShellResponse
from clustertasks.models import TaskInfo
from clustertasks.repositories import get_task_info
from clustertasks.schemas import TaskSubmitRequest
from clustertasks.services import TaskService, WorkerService
from clustertasks.subtasks import SubtaskRegistry, YsqlMajorVersionCatalogUpgrade
from clustertasks.universes import DatabaseUniverseRegistry

TASK_TYPE = "ysql_major_version_catalog_upgrade"


class WorkerServiceTests(unittest.TestCase):
    def setUp(self):
        reset_database()
        self.node_manager = RecordingNodeManager()
        subtask = YsqlMajorVersionCatalogUpgrade(DatabaseUniverseRegistry(get_session), self.node_manager)
        self.registry = SubtaskRegistry(subtasks={TASK_TYPE: subtask})
        self.task_service = TaskService(self.registry)
        self.worker_service = WorkerService(self.registry)

    def _submit(self, universe_uuid):
        with session_scope() as session:
            task_info = self.task_service.submit_task(
                session,
                TaskSubmitRequest(task_type=TASK_TYPE, params={"universe_uuid": universe_uuid}),
            )
            return task_info.task_uuid

    def _process(self):
        with session_scope() as session:
            return self.worker_service.process_once(session, worker_id="worker-test")

    def _load(self, task_uuid):
        with session_scope() as session:
            row = get_task_info(session, task_uuid)
            return row.state, row.error_message, row.claimed_by, row.duration_ms

    def test_no_tasks(self):
        result = self._process()
        self.assertFalse(result.processed)
        self.assertEqual(result.message, "no queued task")

    def test_success_marks_task_and_dispatches_to_leader(self):
        with session_scope() as session:
            universe_uuid = seed_universe(session, leader="n2")
        task_uuid = self._submit(universe_uuid)

        result = self._process()

        self.assertTrue(result.processed)
        self.assertEqual(result.state, "Success")
        state, error_message, claimed_by, duration_ms = self._load(task_uuid)
        self.assertEqual(state, "Success")
        self.assertIsNone(error_message)
        self.assertEqual(claimed_by, "worker-test")
        self.assertIsNotNone(duration_ms)
        self.assertEqual(len(self.node_manager.calls), 1)
        node, universe, task_info, args, timeout_ms = self.node_manager.calls[0]
        self.assertEqual(node.node_name, "n2")
        self.assertEqual(universe.universe_uuid, universe_uuid)
        self.assertEqual(task_info.task_uuid, task_uuid)
        self.assertEqual(args, [TASK_TYPE])
        self.assertEqual(timeout_ms, 600000)

    def test_command_failure_is_recorded_without_raw_output_and_not_retried(self):
        with session_scope() as session:
            universe_uuid = seed_universe(session)
        self.node_manager.default = ShellResponse(code=2, message="migration aborted")
        task_uuid = self._submit(universe_uuid)

        with self.assertLogs("clustertasks.subtasks.catalog_upgrade", level="ERROR"):
            result = self._process()

        self.assertEqual(result.state, "Failure")
        state, error_message, _, _ = self._load(task_uuid)
        self.assertEqual(state, "Failure")
        self.assertEqual(
            error_message,
            "Failed to run ysql_major_version_catalog_upgrade. Check logs for more info.",
        )
        self.assertNotIn("migration aborted", error_message)
        self.assertFalse(self._process().processed)
        self.assertEqual(len(self.node_manager.calls), 1)

    def test_no_leader_fails_task(self):
        with session_scope() as session:
            universe_uuid = seed_universe(session, leader=None)
        task_uuid = self._submit(universe_uuid)

        self._process()

        state, error_message, _, _ = self._load(task_uuid)
        self.assertEqual(state, "Failure")
        self.assertEqual(error_message, f"No master leader found for universe {universe_uuid}")
        self.assertEqual(self.node_manager.calls, [])

    def test_unknown_universe_fails_task(self):
        missing = str(uuid.uuid4())
        task_uuid = self._submit(missing)

        self._process()

        state, error_message, _, _ = self._load(task_uuid)
        self.assertEqual(state, "Failure")
        self.assertIn(missing, error_message)
        self.assertEqual(self.node_manager.calls, [])

    def test_unknown_task_type_fails_task(self):
        with session_scope() as session:
            session.add(TaskInfo(task_uuid="t-unknown", task_type="bogus", task_params={}))

        result = self._process()

        self.assertTrue(result.processed)
        state, error_message, _, _ = self._load("t-unknown")
        self.assertEqual(state, "Failure")
        self.assertIn("unknown task_type: bogus", error_message)

    def test_invalid_params_fail_task(self):
        with session_scope() as session:
            session.add(TaskInfo(task_uuid="t-invalid", task_type=TASK_TYPE, task_params={}))

        self._process()

        state, error_message, _, _ = self._load("t-invalid")
        self.assertEqual(state, "Failure")
        self.assertIn("invalid task params", error_message)
        self.assertEqual(self.node_manager.calls, [])

    def test_tasks_run_in_submission_order(self):
        with session_scope() as session:
            first_universe = seed_universe(session)
            second_universe = seed_universe(session)
        self._submit(first_universe)
        self._submit(second_universe)

        self._process()
        self._process()

        dispatched = [universe.universe_uuid for _, universe, _, _, _ in self.node_manager.calls]
        self.assertEqual(dispatched, [first_universe, second_universe])


if __name__ == "__main__":
    unittest.main()
