# assignment_eval/workers/queue.py

from redis import Redis
from rq import Queue

from assignment_eval.core.config import settings

_redis_conn: Redis | None = None


def get_redis_connection() -> Redis:
    global _redis_conn
    if _redis_conn is None:
        redis_url = settings.REDIS_URL
        _redis_conn = Redis.from_url(redis_url)
    return _redis_conn


def get_queue(name: str | None = None) -> Queue:
    return Queue(name or settings.EVALUATION_QUEUE_NAME, connection=get_redis_connection())


def enqueue_evaluation_task(submission_id: int) -> str:
    from assignment_eval.workers.tasks import evaluation_task

    q = get_queue()
    job = q.enqueue(
        evaluation_task,
        submission_id,
        job_timeout=settings.EVALUATION_JOB_TIMEOUT,
    )
    return job.id
