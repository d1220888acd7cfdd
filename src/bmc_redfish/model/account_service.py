from enum import Enum
from typing import Optional

from pydantic import Field

from . import ODataLinks, RedfishModel


class RoleId(str, Enum):
    Administrator = "Administrator"
    Operator = "Operator"
    ReadOnly = "ReadOnly"
    NoAccess = "NoAccess"


class ManagerAccount(ODataLinks):
    """Accounts compare and sort by id."""

    id: str
    username: str = Field(alias="UserName")
    name: Optional[str] = None
    description: Optional[str] = None
    role_id: Optional[str] = None
    enabled: Optional[bool] = None
    locked: Optional[bool] = None
    password_change_required: Optional[bool] = None

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ManagerAccount):
            return NotImplemented
        return self.id == other.id

    def __lt__(self, other: "ManagerAccount") -> bool:
        return self.id < other.id

    def __hash__(self) -> int:
        return hash(self.id)


class AccountService(ODataLinks):
    id: Optional[str] = None
    account_lockout_threshold: Optional[int] = None
    account_lockout_duration: Optional[int] = None
    account_lockout_counter_reset_after: Optional[int] = None
    min_password_length: Optional[int] = None
    max_password_length: Optional[int] = None


class NewAccount(RedfishModel):
    """Body of a POST to AccountService/Accounts."""

    username: str = Field(alias="UserName")
    password: str
    role_id: RoleId
    enabled: bool = True
