from enum import Enum
from typing import List, Optional

from pydantic import Field

from . import Message, ODataLinks


class TaskState(str, Enum):
    New = "New"
    Starting = "Starting"
    Running = "Running"
    Suspended = "Suspended"
    Interrupted = "Interrupted"
    Pending = "Pending"
    Stopping = "Stopping"
    Completed = "Completed"
    Killed = "Killed"
    Exception = "Exception"
    Service = "Service"
    Cancelling = "Cancelling"
    Cancelled = "Cancelled"

    def is_terminal(self) -> bool:
        return self in TERMINAL_TASK_STATES


TERMINAL_TASK_STATES = frozenset(
    {TaskState.Completed, TaskState.Cancelled, TaskState.Exception, TaskState.Killed}
)


class Task(ODataLinks):
    id: str
    name: Optional[str] = None
    task_state: Optional[TaskState] = None
    task_status: Optional[str] = None
    task_monitor: Optional[str] = None
    percent_complete: Optional[int] = None
    start_time: Optional[str] = None
    end_time: Optional[str] = None
    messages: List[Message] = Field(default_factory=list)

    def is_terminal(self) -> bool:
        return self.task_state is not None and self.task_state.is_terminal()

    def is_failed(self) -> bool:
        return self.task_state in (TaskState.Exception, TaskState.Killed, TaskState.Cancelled)
