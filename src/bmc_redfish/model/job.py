"""
Jobs.

A Job is very similar to a Task but BMC job queues use their own state names
(Dell reports 'Scheduled', 'Failed', ...). Jobs are not exposed directly;
callers get a Task from ``Job.as_task()`` or a coarse ``JobState``.
"""

from enum import Enum
from typing import List, Optional

from pydantic import Field

from . import Message, ODataLinks
from .task import Task, TaskState


class JobState(str, Enum):
    Scheduled = "Scheduled"
    Running = "Running"
    Completed = "Completed"
    CompletedWithErrors = "CompletedWithErrors"
    Failed = "Failed"
    Unknown = "Unknown"

    @classmethod
    def from_wire(cls, value: Optional[str]) -> "JobState":
        if not value:
            return cls.Unknown
        return _JOB_STATE_NAMES.get(value.lower(), cls.Unknown)


_JOB_STATE_NAMES = {
    "new": JobState.Scheduled,
    "scheduled": JobState.Scheduled,
    "scheduling": JobState.Scheduled,
    "pending": JobState.Scheduled,
    "waiting": JobState.Scheduled,
    "downloaded": JobState.Scheduled,
    "readyforexecution": JobState.Scheduled,
    "starting": JobState.Running,
    "running": JobState.Running,
    "downloading": JobState.Running,
    "completed": JobState.Completed,
    "completedwitherrors": JobState.CompletedWithErrors,
    "failed": JobState.Failed,
    "exception": JobState.Failed,
    "killed": JobState.Failed,
    "cancelled": JobState.Failed,
}

_TASK_STATES = {
    JobState.Scheduled: TaskState.Pending,
    JobState.Running: TaskState.Running,
    JobState.Completed: TaskState.Completed,
    JobState.CompletedWithErrors: TaskState.Completed,
    JobState.Failed: TaskState.Exception,
}


class Job(ODataLinks):
    id: Optional[str] = None
    name: Optional[str] = None
    job_type: Optional[str] = None
    job_state: Optional[str] = None
    job_status: Optional[str] = None
    message: Optional[str] = None
    percent_complete: Optional[int] = None
    start_time: Optional[str] = None
    end_time: Optional[str] = None
    messages: List[Message] = Field(default_factory=list)

    @property
    def state(self) -> JobState:
        return JobState.from_wire(self.job_state)

    def as_task(self) -> Task:
        messages = list(self.messages)
        if self.message and not messages:
            messages.append(Message(message=self.message))
        return Task(
            odata_id=self.odata_id,
            id=self.id or "",
            name=self.name,
            task_state=_TASK_STATES.get(self.state),
            percent_complete=self.percent_complete,
            start_time=self.start_time,
            end_time=self.end_time,
            messages=messages,
        )
