"""
Redfish error kinds.

Every failing operation raises one of the classes below. The transport and
the standard backend raise them unchanged; vendor backends may turn a
NotFoundError into a NotSupportedError when the resource simply does not
exist on that platform.
"""

from typing import Any, List, Optional


class RedfishError(Exception):
    """Base exception for Redfish operations"""

    def __init__(self, message: str, url: Optional[str] = None):
        self.message = message
        self.url = url
        super().__init__(self.message)


class TransportError(RedfishError):
    """TCP/TLS failure, timeout or connection reset."""

    def __init__(self, url: str, source: Exception):
        super().__init__(f"Transport error on {url}: {source}", url=url)
        self.source = source


class AuthenticationError(RedfishError):
    """The BMC rejected our credentials (401/403)."""

    def __init__(self, url: str, status_code: int, body: str = ""):
        super().__init__(f"Authentication failed for {url}: HTTP {status_code}", url=url)
        self.status_code = status_code
        self.body = body


class NotFoundError(RedfishError):
    """Resource missing (404) or a selection found no match."""


class JsonDeserializeError(RedfishError):
    """A response body did not match the expected schema."""

    def __init__(self, url: str, body: str, source: Exception):
        super().__init__(f"Failed to decode response from {url}: {source}", url=url)
        self.body = body
        self.source = source


class RemoteError(RedfishError):
    """
    The BMC answered with an error.

    ``redfish_error`` holds the decoded ``{"error": {...}}`` body when the BMC
    sent one. Task failures observed while polling are also reported here,
    with ``status_code`` left as None and ``messages`` taken from the task.
    """

    def __init__(
        self,
        url: str,
        status_code: Optional[int],
        redfish_error: Optional[Any] = None,
        body: str = "",
        message: Optional[str] = None,
        messages: Optional[List[str]] = None,
    ):
        if message is None:
            detail = ""
            if redfish_error is not None:
                detail = f": {redfish_error.error.message}"
            message = f"HTTP {status_code} from {url}{detail}"
        super().__init__(message, url=url)
        self.status_code = status_code
        self.redfish_error = redfish_error
        self.body = body
        if messages is None:
            messages = _extended_messages(redfish_error)
        # Oldest first
        self.messages = list(messages)


def _extended_messages(redfish_error: Optional[Any]) -> List[str]:
    if redfish_error is None:
        return []
    return [m.message for m in redfish_error.error.extended if m.message]


class NotSupportedError(RedfishError):
    """The operation does not apply to this platform."""


class FileError(RedfishError):
    """Local file-system failure during a firmware upload."""


class OperationTimeoutError(RedfishError):
    """A caller-supplied deadline elapsed."""


class InvariantError(RedfishError):
    """A library invariant was violated. This is a bug."""
