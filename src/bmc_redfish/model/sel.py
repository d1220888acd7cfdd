from typing import List, Optional

from pydantic import Field

from . import ODataLinks


class LogEntry(ODataLinks):
    id: str
    name: Optional[str] = None
    created: Optional[str] = None
    entry_type: Optional[str] = None
    entry_code: Optional[str] = None
    message: Optional[str] = None
    message_id: Optional[str] = None
    sensor_type: Optional[str] = None
    sensor_number: Optional[int] = None
    severity: Optional[str] = None


class LogEntryCollection(ODataLinks):
    """SEL entries are returned expanded, not as links."""

    name: Optional[str] = None
    members: List[LogEntry] = Field(default_factory=list)
