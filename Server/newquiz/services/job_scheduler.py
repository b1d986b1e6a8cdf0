"""
Job Scheduler

Fire-and-forget queue for end-of-game work. A job may name a predecessor and
then only runs after that predecessor completed successfully.
"""

import threading
import uuid
from collections import deque
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Deque, Dict, Optional

from ..utils.game_logger import game_logger


HISTORY_SIZE = 1000


class JobState(Enum):
    PENDING = "PENDING"
    DONE = "DONE"
    FAILED = "FAILED"
    DROPPED = "DROPPED"


@dataclass
class Job:
    name: str
    func: Callable[[], object]
    after: Optional["Job"] = None
    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    state: JobState = JobState.PENDING
    error: Optional[str] = None


class JobScheduler:
    """
    In-process job queue drained by ``run_pending``.

    Jobs run in enqueue order. A job whose predecessor is still pending waits;
    a job whose predecessor failed or was dropped is dropped too.
    """

    def __init__(self):
        self._queue: Deque[Job] = deque()
        self._lock = threading.Lock()
        self.history: Deque[Job] = deque(maxlen=HISTORY_SIZE)

    def enqueue(self, func: Callable[[], object], name: Optional[str] = None,
                after: Optional[Job] = None) -> Job:
        job = Job(name=name or getattr(func, "__name__", "job"), func=func, after=after)
        with self._lock:
            self._queue.append(job)
        return job

    @property
    def pending_count(self) -> int:
        with self._lock:
            return len(self._queue)

    def run_pending(self) -> Dict[str, int]:
        """
        Run every job that is ready, repeating until nothing more can run.

        Returns:
            Counts of jobs run, failed and dropped in this call
        """
        counts = {"run": 0, "failed": 0, "dropped": 0}
        progressed = True
        while progressed:
            progressed = False
            with self._lock:
                ready = [job for job in self._queue if self._is_ready(job) or self._is_orphaned(job)]
                for job in ready:
                    self._queue.remove(job)

            for job in ready:
                progressed = True
                if self._is_orphaned(job):
                    job.state = JobState.DROPPED
                    counts["dropped"] += 1
                    game_logger.logger.warning(
                        f"Job '{job.name}' dropped: predecessor '{job.after.name}' {job.after.state.value.lower()}"
                    )
                else:
                    self._run(job)
                    counts["run"] += 1
                    if job.state == JobState.FAILED:
                        counts["failed"] += 1
                self.history.append(job)
        return counts

    def _is_ready(self, job: Job) -> bool:
        return job.after is None or job.after.state == JobState.DONE

    def _is_orphaned(self, job: Job) -> bool:
        return job.after is not None and job.after.state in (JobState.FAILED, JobState.DROPPED)

    def _run(self, job: Job) -> None:
        try:
            job.func()
            job.state = JobState.DONE
        except Exception as e:
            job.state = JobState.FAILED
            job.error = str(e)
            game_logger.logger.error(f"Job '{job.name}' failed: {type(e).__name__}: {e}")
