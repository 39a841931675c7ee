"""Deferred tasks for timed session transitions."""
import heapq
import itertools
import logging
import time

logger = logging.getLogger(__name__)


class Scheduler:
    """Runs callbacks once their delay has elapsed.

    Nothing runs on its own: the owner calls `run_due()` from its event loop.
    Tasks cannot be cancelled; callers that may go stale check their own
    state when the callback fires.
    """

    def __init__(self, clock=time.monotonic):
        self.clock = clock
        self._tasks = []
        self._counter = itertools.count()

    def schedule(self, delay: float, callback) -> None:
        due = self.clock() + delay
        heapq.heappush(self._tasks, (due, next(self._counter), callback))

    def next_due(self) -> float | None:
        return self._tasks[0][0] if self._tasks else None

    @property
    def pending(self) -> int:
        return len(self._tasks)

    def run_due(self) -> int:
        """Run every task whose due time has passed, in due order."""
        now = self.clock()
        ran = 0
        while self._tasks and self._tasks[0][0] <= now:
            _, _, callback = heapq.heappop(self._tasks)
            callback()
            ran += 1
        return ran

    def wait(self, sleep=time.sleep) -> int:
        """Sleep until the earliest task is due, then run what is due."""
        due = self.next_due()
        if due is None:
            return 0
        delay = due - self.clock()
        if delay > 0:
            sleep(delay)
        return self.run_due()
