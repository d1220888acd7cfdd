from enum import Enum
from typing import List, Optional

from pydantic import Field

from . import Collection, ODataId, ODataLinks, RedfishModel, ResourceStatus
from .boot import SystemBoot


class PowerState(str, Enum):
    On = "On"
    Off = "Off"
    PoweringOn = "PoweringOn"
    PoweringOff = "PoweringOff"
    Paused = "Paused"
    Reset = "Reset"


class SystemPowerControl(str, Enum):
    """ResetType values accepted by ComputerSystem.Reset."""

    On = "On"
    ForceOn = "ForceOn"
    GracefulShutdown = "GracefulShutdown"
    ForceOff = "ForceOff"
    GracefulRestart = "GracefulRestart"
    ForceRestart = "ForceRestart"
    Nmi = "Nmi"
    PushPowerButton = "PushPowerButton"
    PowerCycle = "PowerCycle"


class SettingsObject(RedfishModel):
    settings_object: Optional[ODataId] = None


class SystemLinks(RedfishModel):
    chassis: List[ODataId] = Field(default_factory=list)
    managed_by: List[ODataId] = Field(default_factory=list)


class ComputerSystem(ODataLinks):
    id: str
    name: Optional[str] = None
    manufacturer: Optional[str] = None
    model: Optional[str] = None
    serial_number: Optional[str] = None
    sku: Optional[str] = Field(None, alias="SKU")
    uuid: Optional[str] = Field(None, alias="UUID")
    bios_version: Optional[str] = None
    power_state: Optional[PowerState] = None
    status: Optional[ResourceStatus] = None
    boot: SystemBoot = Field(default_factory=SystemBoot)
    bios: Optional[ODataId] = None
    secure_boot: Optional[ODataId] = None
    ethernet_interfaces: Optional[ODataId] = None
    network_interfaces: Optional[ODataId] = None
    storage: Optional[ODataId] = None
    log_services: Optional[ODataId] = None
    pcie_devices: List[ODataId] = Field(default_factory=list, alias="PCIeDevices")
    links: SystemLinks = Field(default_factory=SystemLinks)
    redfish_settings: Optional[SettingsObject] = Field(None, alias="@Redfish.Settings")


class BootOption(ODataLinks):
    id: str
    name: Optional[str] = None
    display_name: str = ""
    uefi_device_path: Optional[str] = None
    boot_option_enabled: Optional[bool] = None
    boot_option_reference: Optional[str] = None


class BootOptions(Collection):
    pass


class PCIeDevice(ODataLinks):
    id: Optional[str] = None
    name: Optional[str] = None
    description: Optional[str] = None
    manufacturer: Optional[str] = None
    model: Optional[str] = None
    part_number: Optional[str] = None
    serial_number: Optional[str] = None
    firmware_version: Optional[str] = None
    device_type: Optional[str] = None
    status: Optional[ResourceStatus] = None

    def is_enabled(self) -> bool:
        if self.id is None or self.status is None or self.status.state is None:
            return False
        return "enabled" in self.status.state.lower()


class PCIeDevices(Collection):
    pass
