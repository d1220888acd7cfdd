from typing import Any, Dict, Optional

from pydantic import Field

from . import ODataId, ODataLinks, RedfishModel, ResourceStatus


class Ethernet(RedfishModel):
    mac_address: Optional[str] = Field(None, alias="MACAddress")
    permanent_mac_address: Optional[str] = Field(None, alias="PermanentMACAddress")
    mtu_size: Optional[int] = Field(None, alias="MTUSize")


class NetworkDeviceFunctionLinks(RedfishModel):
    physical_port_assignment: Optional[ODataId] = None
    pcie_function: Optional[ODataId] = Field(None, alias="PCIeFunction")


class NetworkDeviceFunction(ODataLinks):
    id: str
    name: Optional[str] = None
    description: Optional[str] = None
    device_enabled: Optional[bool] = None
    net_dev_func_type: Optional[str] = None
    ethernet: Optional[Ethernet] = None
    links: Optional[NetworkDeviceFunctionLinks] = None
    status: Optional[ResourceStatus] = None
    oem: Optional[Dict[str, Any]] = None
