"""clustertasks worker loop."""

from __future__ import annotations

import logging
import time

from clustertasks.db import create_db_and_tables, get_session, session_scope
from clustertasks.services import WorkerService
from clustertasks.settings import settings
from clustertasks.subtasks import SubtaskRegistry

logger = logging.getLogger(__name__)


def main() -> None:
    logging.basicConfig(level=settings.log_level.upper())
    create_db_and_tables()

    service = WorkerService(SubtaskRegistry.default(get_session, settings))
    logger.info("starting clustertasks worker: %s", settings.worker_id)

    while True:
        try:
            with session_scope() as session:
                result = service.process_once(session, worker_id=settings.worker_id)
            if not result.processed:
                time.sleep(settings.worker_poll_interval_seconds)
        except KeyboardInterrupt:
            logger.info("worker interrupted, exiting")
            break
        except Exception as exc:  # noqa: BLE001
            logger.exception("worker loop failure: %s", exc)
            time.sleep(settings.worker_poll_interval_seconds)


if __name__ == "__main__":
    main()
