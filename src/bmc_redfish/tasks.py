"""Polling long-running Redfish tasks until they finish."""

import logging
import time
from typing import TYPE_CHECKING, Callable, Optional

from .errors import OperationTimeoutError, RemoteError
from .model.task import Task

if TYPE_CHECKING:
    from .redfish import Redfish

logger = logging.getLogger(__name__)

DEFAULT_POLL_INTERVAL = 10.0


class TaskMonitor:
    """Polls a task until it reaches a terminal state."""

    def __init__(
        self,
        redfish: "Redfish",
        task_id: str,
        timeout: float,
        poll_interval: float = DEFAULT_POLL_INTERVAL,
        progress: Optional[Callable[[Task, int], None]] = None,
        sleep: Callable[[float], None] = time.sleep,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """
        Initialize task monitor.

        Args:
            redfish: Facade the task is read through
            task_id: Id under TaskService/Tasks
            timeout: Seconds to wait before giving up
            poll_interval: Seconds between two reads
            progress: Called after every read with the task and its percent
                complete. The percentage passed never goes down, even when the
                BMC reports a lower value.
            sleep: Replaces time.sleep, for tests
            clock: Replaces time.monotonic, for tests
        """
        self.redfish = redfish
        self.task_id = task_id
        self.timeout = timeout
        self.poll_interval = poll_interval
        self.progress = progress
        self._sleep = sleep
        self._clock = clock
        self.percent_complete = 0

    def run(self) -> Task:
        """
        Poll until the task is done.

        Returns:
            The Completed task

        Raises:
            RemoteError: If the task ends in Exception, Killed or Cancelled
            OperationTimeoutError: If the task is still running at the deadline
        """
        deadline = self._clock() + self.timeout

        while True:
            task = self.redfish.get_task(self.task_id)
            if task.percent_complete is not None:
                self.percent_complete = max(self.percent_complete, task.percent_complete)
            if self.progress is not None:
                self.progress(task, self.percent_complete)

            if task.is_failed():
                raise RemoteError(
                    task.odata_id or f"TaskService/Tasks/{self.task_id}",
                    None,
                    message=_failure_message(task),
                    messages=[m.message for m in task.messages if m.message],
                )
            if task.is_terminal():
                logger.debug("Task %s completed", self.task_id)
                return task

            remaining = deadline - self._clock()
            if remaining <= 0:
                raise OperationTimeoutError(
                    f"Task {self.task_id} still {task.task_state.value if task.task_state else 'unknown'} "
                    f"after {self.timeout}s"
                )
            logger.debug("Task %s is %s%%, polling again", self.task_id, self.percent_complete)
            self._sleep(min(self.poll_interval, remaining))


def wait_for_task(
    redfish: "Redfish",
    task_id: str,
    timeout: float,
    poll_interval: float = DEFAULT_POLL_INTERVAL,
    progress: Optional[Callable[[Task, int], None]] = None,
) -> Task:
    """Shortcut for ``TaskMonitor(...).run()``."""
    return TaskMonitor(redfish, task_id, timeout, poll_interval, progress).run()


def _failure_message(task: Task) -> str:
    state = task.task_state.value if task.task_state else "failed"
    details = "; ".join(m.message for m in task.messages if m.message)
    if details:
        return f"Task {task.id} {state}: {details}"
    return f"Task {task.id} {state}"
