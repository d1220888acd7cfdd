from typing import List, Optional

from pydantic import Field

from . import Message, RedfishModel


class ErrorDetail(RedfishModel):
    code: Optional[str] = None
    message: Optional[str] = None
    extended: List[Message] = Field(default_factory=list, alias="@Message.ExtendedInfo")


class RedfishErrorBody(RedfishModel):
    """``{"error": {"code": ..., "message": ..., "@Message.ExtendedInfo": [...]}}``"""

    error: ErrorDetail = Field(alias="error")
