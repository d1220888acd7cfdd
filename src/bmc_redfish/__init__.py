"""bmc-redfish - vendor-aware Redfish client for server BMCs."""

__version__ = "0.1.0"

from .client import Endpoint, RedfishClientPool, RedfishHttpClient, RetryPolicy
from .common import Boot, MachineSetupDiff, MachineSetupStatus, Status
from .errors import (
    AuthenticationError,
    FileError,
    InvariantError,
    JsonDeserializeError,
    NotFoundError,
    NotSupportedError,
    OperationTimeoutError,
    RedfishError,
    RemoteError,
    TransportError,
)
from .redfish import Redfish, Vendor, detect_vendor
from .tasks import TaskMonitor, wait_for_task

__all__ = [
    "Endpoint",
    "RedfishClientPool",
    "RedfishHttpClient",
    "RetryPolicy",
    "Boot",
    "MachineSetupDiff",
    "MachineSetupStatus",
    "Status",
    "AuthenticationError",
    "FileError",
    "InvariantError",
    "JsonDeserializeError",
    "NotFoundError",
    "NotSupportedError",
    "OperationTimeoutError",
    "RedfishError",
    "RemoteError",
    "TransportError",
    "Redfish",
    "Vendor",
    "detect_vendor",
    "TaskMonitor",
    "wait_for_task",
]
