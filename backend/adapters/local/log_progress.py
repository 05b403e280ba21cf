"""LogProgressAdapter — reports pipeline stages via logging with elapsed time."""

import logging
import time
from typing import Optional

from ports.progress import ProgressPort

logger = logging.getLogger(__name__)


class LogProgressAdapter(ProgressPort):
    def __init__(self, clock=time.monotonic):
        self._clock = clock
        self._started: dict[str, float] = {}

    def report(
        self,
        job_id: str,
        stage: str,
        progress: float = 0.0,
        detail: Optional[str] = None,
    ) -> None:
        now = self._clock()
        started = self._started.setdefault(job_id, now)
        msg = f"[{job_id} +{now - started:.1f}s] {stage}"
        if progress > 0:
            msg += f" {progress:.0%}"
        if detail:
            msg += f": {detail}"
        logger.info(msg)

    def finish(self, job_id: str) -> None:
        """Forget a job's start time once its pipeline is done."""
        self._started.pop(job_id, None)
