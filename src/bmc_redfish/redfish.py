"""
Vendor identification and the facade every caller uses.

``Redfish`` exposes the whole operation surface and forwards each call to the
backend chosen for the BMC. It never wraps or renames errors.
"""

import logging
from enum import Enum
from typing import Any, BinaryIO, Dict, List, Optional

from .common import Boot, MachineSetupStatus, Status
from .dell import DellBmc
from .lenovo import LenovoBmc
from .model import Collection, EnabledDisabled, ODataId, Resource
from .model.account_service import ManagerAccount, RoleId
from .model.chassis import Chassis, NetworkAdapter
from .model.ethernet_interface import EthernetInterface
from .model.job import JobState
from .model.manager import Manager
from .model.network_device_function import NetworkDeviceFunction
from .model.port import NetworkPort
from .model.power import Power
from .model.secure_boot import SecureBoot
from .model.sel import LogEntry
from .model.sensor import GPUSensors
from .model.service_root import ServiceRoot
from .model.software_inventory import SoftwareInventory
from .model.storage import Drive
from .model.system import BootOption, BootOptions, ComputerSystem, PCIeDevice, PowerState, SystemPowerControl
from .model.task import Task
from .model.thermal import Thermal
from .model.update_service import ComponentType, TransferProtocolType, UpdateService
from .nvidia import NvidiaBmc
from .nvidia_gbx00 import Gbx00Bmc
from .standard import RedfishStandard

logger = logging.getLogger(__name__)

GB200_MODELS = ("GB200", "Bianca")


class Vendor(str, Enum):
    Standard = "Standard"
    Dell = "Dell"
    Lenovo = "Lenovo"
    Nvidia = "Nvidia"
    NvidiaGbx00 = "NvidiaGbx00"


def detect_vendor(service_root: ServiceRoot, manager: Manager) -> Vendor:
    """
    Pick the backend for a BMC.

    GB200 is recognised by the manager model first since it also reports
    NVIDIA as manufacturer. Then the manager Manufacturer is matched, then
    ServiceRoot.Vendor and the ServiceRoot OEM keys.

    Args:
        service_root: The BMC's service root
        manager: The BMC's first manager

    Returns:
        Vendor.Standard when nothing matches
    """
    model = manager.model or ""
    if any(name.lower() in model.lower() for name in GB200_MODELS):
        return Vendor.NvidiaGbx00

    hints = [manager.manufacturer, service_root.vendor, service_root.product]
    for hint in hints:
        if not hint:
            continue
        vendor = _vendor_from_name(hint)
        if vendor is not None:
            return vendor

    for name in ("Dell", "Lenovo", "Nvidia"):
        if service_root.has_oem(name):
            return Vendor(name)
    return Vendor.Standard


def _vendor_from_name(name: str) -> Optional[Vendor]:
    name = name.lower()
    if "dell" in name:
        return Vendor.Dell
    if "lenovo" in name:
        return Vendor.Lenovo
    if "nvidia" in name:
        return Vendor.Nvidia
    return None


def backend_for(vendor: Vendor, standard: RedfishStandard) -> Any:
    """Wrap ``standard`` in the backend of ``vendor``."""
    vendor = Vendor(vendor)
    if vendor is Vendor.Dell:
        return DellBmc(standard)
    if vendor is Vendor.Lenovo:
        return LenovoBmc(standard)
    if vendor is Vendor.Nvidia:
        return NvidiaBmc(standard)
    if vendor is Vendor.NvidiaGbx00:
        return Gbx00Bmc(standard)
    return standard


class Redfish:
    """
    The cross-vendor operation surface.

    Args:
        backend: A RedfishStandard or one of the vendor backends wrapping it
    """

    def __init__(self, backend: Any) -> None:
        self.backend = backend

    @property
    def system_id(self) -> str:
        return self.backend.system_id

    @property
    def manager_id(self) -> str:
        return self.backend.manager_id

    # Read-through

    def get_service_root(self) -> ServiceRoot:
        return self.backend.get_service_root()

    def get_systems(self) -> List[str]:
        return self.backend.get_systems()

    def get_managers(self) -> List[str]:
        return self.backend.get_managers()

    def get_manager(self) -> Manager:
        return self.backend.get_manager()

    def get_collection(self, odata_id: ODataId) -> Collection:
        return self.backend.get_collection(odata_id)

    def get_resource(self, odata_id: ODataId) -> Resource:
        return self.backend.get_resource(odata_id)

    # Accounts

    def get_accounts(self) -> List[ManagerAccount]:
        return self.backend.get_accounts()

    def create_user(self, username: str, password: str, role_id: RoleId) -> None:
        return self.backend.create_user(username, password, role_id)

    def change_username(self, old_name: str, new_name: str) -> None:
        return self.backend.change_username(old_name, new_name)

    def change_password(self, user: str, new_pass: str) -> None:
        return self.backend.change_password(user, new_pass)

    def change_password_by_id(self, account_id: str, new_pass: str) -> None:
        return self.backend.change_password_by_id(account_id, new_pass)

    def set_machine_password_policy(self) -> None:
        return self.backend.set_machine_password_policy()

    # Firmware and tasks

    def get_firmware(self, id: str) -> SoftwareInventory:
        return self.backend.get_firmware(id)

    def get_software_inventories(self) -> List[str]:
        return self.backend.get_software_inventories()

    def get_tasks(self) -> List[str]:
        return self.backend.get_tasks()

    def get_task(self, id: str) -> Task:
        return self.backend.get_task(id)

    def get_job_state(self, job_id: str) -> JobState:
        return self.backend.get_job_state(job_id)

    def get_update_service(self) -> UpdateService:
        return self.backend.get_update_service()

    def update_firmware(self, firmware: BinaryIO) -> Task:
        return self.backend.update_firmware(firmware)

    def update_firmware_multipart(
        self,
        filename: str,
        reboot: bool,
        timeout: float,
        component_type: ComponentType,
    ) -> str:
        return self.backend.update_firmware_multipart(filename, reboot, timeout, component_type)

    def update_firmware_simple_update(
        self,
        image_uri: str,
        targets: List[str],
        transfer_protocol: TransferProtocolType,
    ) -> Task:
        return self.backend.update_firmware_simple_update(image_uri, targets, transfer_protocol)

    # Power

    def get_system(self) -> ComputerSystem:
        return self.backend.get_system()

    def get_power_state(self) -> Optional[PowerState]:
        return self.backend.get_power_state()

    def power(self, action: SystemPowerControl) -> None:
        return self.backend.power(action)

    def bmc_reset(self) -> None:
        return self.backend.bmc_reset()

    def chassis_reset(self, chassis_id: str, reset_type: SystemPowerControl) -> None:
        return self.backend.chassis_reset(chassis_id, reset_type)

    def bmc_reset_to_defaults(self) -> None:
        return self.backend.bmc_reset_to_defaults()

    def get_power_metrics(self) -> Power:
        return self.backend.get_power_metrics()

    def get_thermal_metrics(self) -> Thermal:
        return self.backend.get_thermal_metrics()

    def get_gpu_sensors(self) -> List[GPUSensors]:
        return self.backend.get_gpu_sensors()

    # Logs and storage

    def get_system_event_log(self) -> List[LogEntry]:
        return self.backend.get_system_event_log()

    def get_drives_metrics(self) -> List[Drive]:
        return self.backend.get_drives_metrics()

    # Setup and lockdown

    def machine_setup(self, boot_interface_mac: Optional[str] = None) -> None:
        return self.backend.machine_setup(boot_interface_mac)

    def machine_setup_status(self, boot_interface_mac: Optional[str] = None) -> MachineSetupStatus:
        return self.backend.machine_setup_status(boot_interface_mac)

    def set_boot_order_dpu_first(self, boot_interface_mac: Optional[str] = None) -> None:
        return self.backend.set_boot_order_dpu_first(boot_interface_mac)

    def lockdown(self, target: EnabledDisabled) -> None:
        return self.backend.lockdown(target)

    def lockdown_status(self) -> Status:
        return self.backend.lockdown_status()

    def lockdown_bmc(self, target: EnabledDisabled) -> None:
        return self.backend.lockdown_bmc(target)

    def setup_serial_console(self) -> None:
        return self.backend.setup_serial_console()

    def serial_console_status(self) -> Status:
        return self.backend.serial_console_status()

    def enable_ipmi_over_lan(self, target: EnabledDisabled) -> None:
        return self.backend.enable_ipmi_over_lan(target)

    def is_ipmi_over_lan_enabled(self) -> bool:
        return self.backend.is_ipmi_over_lan_enabled()

    def enable_rshim_bmc(self) -> None:
        return self.backend.enable_rshim_bmc()

    def clear_nvram(self) -> None:
        return self.backend.clear_nvram()

    # Boot

    def get_boot_options(self) -> BootOptions:
        return self.backend.get_boot_options()

    def get_boot_option(self, option_id: str) -> BootOption:
        return self.backend.get_boot_option(option_id)

    def boot_once(self, target: Boot) -> None:
        return self.backend.boot_once(target)

    def boot_first(self, target: Boot) -> None:
        return self.backend.boot_first(target)

    def change_boot_order(self, boot_array: List[str]) -> None:
        return self.backend.change_boot_order(boot_array)

    # Security

    def clear_tpm(self) -> None:
        return self.backend.clear_tpm()

    def get_secure_boot(self) -> SecureBoot:
        return self.backend.get_secure_boot()

    def enable_secure_boot(self) -> None:
        return self.backend.enable_secure_boot()

    def disable_secure_boot(self) -> None:
        return self.backend.disable_secure_boot()

    def add_secure_boot_certificate(self, pem_cert: str) -> Task:
        return self.backend.add_secure_boot_certificate(pem_cert)

    def change_uefi_password(self, current_uefi_password: str, new_uefi_password: str) -> Optional[str]:
        return self.backend.change_uefi_password(current_uefi_password, new_uefi_password)

    def clear_uefi_password(self, current_uefi_password: str) -> Optional[str]:
        return self.backend.clear_uefi_password(current_uefi_password)

    # BIOS

    def bios(self) -> Dict[str, Any]:
        return self.backend.bios()

    def pending(self) -> Dict[str, Any]:
        return self.backend.pending()

    def clear_pending(self) -> None:
        return self.backend.clear_pending()

    # Inventory

    def pcie_devices(self) -> List[PCIeDevice]:
        return self.backend.pcie_devices()

    def get_chassis_all(self) -> List[str]:
        return self.backend.get_chassis_all()

    def get_chassis(self, id: str) -> Chassis:
        return self.backend.get_chassis(id)

    def get_chassis_network_adapters(self, chassis_id: str) -> List[str]:
        return self.backend.get_chassis_network_adapters(chassis_id)

    def get_chassis_network_adapter(self, chassis_id: str, id: str) -> NetworkAdapter:
        return self.backend.get_chassis_network_adapter(chassis_id, id)

    def get_base_network_adapters(self, system_id: str) -> List[str]:
        return self.backend.get_base_network_adapters(system_id)

    def get_base_network_adapter(self, system_id: str, id: str) -> NetworkAdapter:
        return self.backend.get_base_network_adapter(system_id, id)

    def get_ports(self, chassis_id: str, network_adapter: Optional[str] = None) -> List[str]:
        return self.backend.get_ports(chassis_id, network_adapter)

    def get_port(self, chassis_id: str, id: str, network_adapter: Optional[str] = None) -> NetworkPort:
        return self.backend.get_port(chassis_id, id, network_adapter)

    def get_network_device_functions(self, chassis_id: str, network_adapter: Optional[str] = None) -> List[str]:
        return self.backend.get_network_device_functions(chassis_id, network_adapter)

    def get_network_device_function(
        self,
        chassis_id: str,
        id: str,
        network_adapter: Optional[str] = None,
    ) -> NetworkDeviceFunction:
        return self.backend.get_network_device_function(chassis_id, id, network_adapter)

    def get_manager_ethernet_interfaces(self) -> List[str]:
        return self.backend.get_manager_ethernet_interfaces()

    def get_manager_ethernet_interface(self, id: str) -> EthernetInterface:
        return self.backend.get_manager_ethernet_interface(id)

    def get_system_ethernet_interfaces(self) -> List[str]:
        return self.backend.get_system_ethernet_interfaces()

    def get_system_ethernet_interface(self, id: str) -> EthernetInterface:
        return self.backend.get_system_ethernet_interface(id)

    def get_base_mac_address(self) -> Optional[str]:
        return self.backend.get_base_mac_address()
