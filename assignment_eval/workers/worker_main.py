# assignment_eval/workers/worker_main.py
import logging

from rq import Queue, SimpleWorker

from assignment_eval.core.config import settings
from assignment_eval.core.logging_config import setup_logging
from assignment_eval.db.session import SessionLocal
from assignment_eval.services.submission_service import requeue_pending_submissions
from assignment_eval.workers.queue import get_redis_connection

logger = logging.getLogger(__name__)


def requeue_stuck_submissions() -> list[int]:
    db = SessionLocal()
    try:
        return requeue_pending_submissions(
            db, older_than_seconds=settings.PENDING_REQUEUE_AFTER_SECONDS
        )
    finally:
        db.close()


def main():
    setup_logging()
    redis_conn = get_redis_connection()

    if settings.REQUEUE_PENDING_ON_STARTUP:
        requeue_stuck_submissions()

    queues = [Queue(settings.EVALUATION_QUEUE_NAME, connection=redis_conn)]

    logger.info(f"Worker listening on queue '{settings.EVALUATION_QUEUE_NAME}'")
    worker = SimpleWorker(queues, connection=redis_conn)

    worker.work()


if __name__ == "__main__":
    main()
