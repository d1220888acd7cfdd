from typing import Any, Dict, List, Optional

from pydantic import Field

from . import ODataId, ODataLinks, RedfishModel, ResourceStatus


class ChassisLinks(RedfishModel):
    computer_systems: List[ODataId] = Field(default_factory=list)
    managed_by: List[ODataId] = Field(default_factory=list)
    contained_by: Optional[ODataId] = None


class Chassis(ODataLinks):
    id: str
    name: Optional[str] = None
    chassis_type: Optional[str] = None
    manufacturer: Optional[str] = None
    model: Optional[str] = None
    part_number: Optional[str] = None
    serial_number: Optional[str] = None
    sku: Optional[str] = Field(None, alias="SKU")
    power_state: Optional[str] = None
    status: Optional[ResourceStatus] = None
    network_adapters: Optional[ODataId] = None
    pcie_devices: Optional[ODataId] = Field(None, alias="PCIeDevices")
    power: Optional[ODataId] = None
    power_subsystem: Optional[ODataId] = None
    thermal: Optional[ODataId] = None
    thermal_subsystem: Optional[ODataId] = None
    sensors: Optional[ODataId] = None
    links: ChassisLinks = Field(default_factory=ChassisLinks)


class NetworkAdapter(ODataLinks):
    id: str
    name: Optional[str] = None
    manufacturer: Optional[str] = None
    model: Optional[str] = None
    part_number: Optional[str] = None
    serial_number: Optional[str] = None
    sku: Optional[str] = Field(None, alias="SKU")
    status: Optional[ResourceStatus] = None
    ports: Optional[ODataId] = None
    network_ports: Optional[ODataId] = None
    network_device_functions: Optional[ODataId] = None
    controllers: List[Dict[str, Any]] = Field(default_factory=list)


class NetworkInterfaceLinks(RedfishModel):
    network_adapter: Optional[ODataId] = None


class NetworkInterface(ODataLinks):
    """Systems/{id}/NetworkInterfaces/{id}: the host view of a NetworkAdapter."""

    id: str
    name: Optional[str] = None
    status: Optional[ResourceStatus] = None
    links: NetworkInterfaceLinks = Field(default_factory=NetworkInterfaceLinks)
