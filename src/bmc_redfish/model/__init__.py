"""Redfish resource models shared by every backend."""

from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_pascal

REDFISH_ENDPOINT = "redfish/v1"


def odata_id_to_url(odata_id: str) -> str:
    """
    Strip the Redfish prefix from an @odata.id.

    Args:
        odata_id: Value like '/redfish/v1/Chassis/PDB_0' or a full
            'https://host/redfish/v1/Chassis/PDB_0' URL

    Returns:
        Path relative to the Redfish root, e.g. 'Chassis/PDB_0'
    """
    url = odata_id.strip()
    marker = f"/{REDFISH_ENDPOINT}"
    index = url.find(marker)
    if index != -1:
        url = url[index + len(marker):]
    elif url.startswith(REDFISH_ENDPOINT):
        url = url[len(REDFISH_ENDPOINT):]
    return url.strip("/")


class RedfishModel(BaseModel):
    """Wire names are PascalCase, Python names are snake_case."""

    model_config = ConfigDict(
        alias_generator=to_pascal,
        populate_by_name=True,
        extra="ignore",
    )

    def to_wire(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class ODataId(RedfishModel):
    odata_id: str = Field(alias="@odata.id")

    @property
    def url(self) -> str:
        return odata_id_to_url(self.odata_id)

    @property
    def id(self) -> str:
        return self.url.rsplit("/", 1)[-1]


class ODataLinks(RedfishModel):
    odata_context: Optional[str] = Field(None, alias="@odata.context")
    odata_id: Optional[str] = Field(None, alias="@odata.id")
    odata_type: Optional[str] = Field(None, alias="@odata.type")
    odata_etag: Optional[str] = Field(None, alias="@odata.etag")


class EnabledDisabled(str, Enum):
    Enabled = "Enabled"
    Disabled = "Disabled"

    def is_enabled(self) -> bool:
        return self is EnabledDisabled.Enabled


class EnableDisable(str, Enum):
    Enable = "Enable"
    Disable = "Disable"


class ResourceStatus(RedfishModel):
    state: Optional[str] = None
    health: Optional[str] = None
    health_rollup: Optional[str] = None


class Message(RedfishModel):
    message: Optional[str] = None
    message_id: Optional[str] = None
    message_args: List[Any] = Field(default_factory=list)
    severity: Optional[str] = None
    message_severity: Optional[str] = None
    resolution: Optional[str] = None
    related_properties: List[str] = Field(default_factory=list)


class Collection(ODataLinks):
    """Any ``{"Members": [...]}`` resource."""

    name: Optional[str] = None
    members: List[ODataId] = Field(default_factory=list)
    members_count: Optional[int] = Field(None, alias="Members@odata.count")

    def member_ids(self) -> List[str]:
        return [m.id for m in self.members]

    def member_urls(self) -> List[str]:
        return [m.url for m in self.members]


class Resource(RedfishModel):
    """A resource fetched without a schema; ``raw`` is the decoded body."""

    url: str
    raw: Dict[str, Any] = Field(default_factory=dict)

    @property
    def odata_type(self) -> Optional[str]:
        return self.raw.get("@odata.type")

    @property
    def id(self) -> Optional[str]:
        return self.raw.get("Id")


from .account_service import ManagerAccount, RoleId  # noqa: E402
from .bios import Bios  # noqa: E402
from .boot import (  # noqa: E402
    BootSourceOverrideEnabled,
    BootSourceOverrideTarget,
    SystemBoot,
)
from .chassis import Chassis, NetworkAdapter  # noqa: E402
from .ethernet_interface import EthernetInterface  # noqa: E402
from .manager import Manager  # noqa: E402
from .system import (  # noqa: E402
    BootOption,
    ComputerSystem,
    PCIeDevice,
    PowerState,
    SystemPowerControl,
)

__all__ = [
    "REDFISH_ENDPOINT",
    "odata_id_to_url",
    "RedfishModel",
    "ODataId",
    "ODataLinks",
    "EnabledDisabled",
    "EnableDisable",
    "ResourceStatus",
    "Message",
    "Collection",
    "Resource",
    "ManagerAccount",
    "RoleId",
    "Bios",
    "SystemBoot",
    "BootSourceOverrideEnabled",
    "BootSourceOverrideTarget",
    "Chassis",
    "NetworkAdapter",
    "EthernetInterface",
    "Manager",
    "BootOption",
    "ComputerSystem",
    "PCIeDevice",
    "PowerState",
    "SystemPowerControl",
]
