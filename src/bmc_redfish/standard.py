"""
Reference implementation of every operation against a standard Redfish service.

Vendor backends hold a RedfishStandard and forward to it for everything they
do not override. The helpers below that take explicit URLs
(``pending_with_url``, ``set_boot_override``, ``boot_order_with_first``, ...)
exist so vendors can reuse a workflow with their own resource paths.
"""

import json
import logging
from enum import Enum
from typing import TYPE_CHECKING, Any, Callable, Dict, List, Optional

from .common import Boot, MachineSetupDiff, MachineSetupStatus, Status
from .errors import (
    FileError,
    InvariantError,
    JsonDeserializeError,
    NotFoundError,
    NotSupportedError,
)
from .model import (
    Collection,
    EnabledDisabled,
    ODataId,
    Resource,
    odata_id_to_url,
)
from .model.account_service import AccountService, ManagerAccount, NewAccount, RoleId
from .model.bios import Bios
from .model.boot import BootSourceOverrideEnabled, BootSourceOverrideTarget
from .model.chassis import Chassis, NetworkAdapter, NetworkInterface
from .model.ethernet_interface import EthernetInterface
from .model.job import Job, JobState
from .model.manager import Manager
from .model.manager_network_protocol import ManagerNetworkProtocol
from .model.network_device_function import NetworkDeviceFunction
from .model.port import NetworkPort
from .model.power import Power
from .model.secure_boot import SecureBoot
from .model.sel import LogEntry, LogEntryCollection
from .model.sensor import GPUSensors, Sensor
from .model.service_root import ServiceRoot
from .model.software_inventory import SoftwareInventory
from .model.storage import Drive, Storage
from .model.system import BootOption, BootOptions, ComputerSystem, PCIeDevice, PowerState, SystemPowerControl
from .model.task import Task, TaskState
from .model.thermal import Thermal
from .model.update_service import ComponentType, TransferProtocolType, UpdateService

if TYPE_CHECKING:
    from .client import RedfishHttpClient

logger = logging.getLogger(__name__)

UEFI_PASSWORD_NAME = "AdminPassword"


class BootOptionName(str, Enum):
    """Prefixes that identify a boot option."""

    Http = "UEFI HTTPv4"
    Pxe = "UEFI PXEv4"
    Hdd = "HD("


class BootOptionMatchField(Enum):
    DisplayName = "DisplayName"
    UefiDevicePath = "UefiDevicePath"


BOOT_FIRST_MATCH = {
    Boot.Pxe: (BootOptionName.Pxe, BootOptionMatchField.DisplayName),
    Boot.UefiHttp: (BootOptionName.Http, BootOptionMatchField.DisplayName),
    # UefiDevicePath looks like HD(1,GPT,A04D...,0x800,0x100000)/\EFI\ubuntu\shimaa64.efi
    # while the DisplayName is just the OS name.
    Boot.HardDisk: (BootOptionName.Hdd, BootOptionMatchField.UefiDevicePath),
}

BOOT_OVERRIDE_TARGETS = {
    Boot.Pxe: BootSourceOverrideTarget.Pxe,
    Boot.HardDisk: BootSourceOverrideTarget.Hdd,
    Boot.UefiHttp: BootSourceOverrideTarget.UefiHttp,
}


def dpu_boot_option_name(mac_address: str) -> str:
    """
    Display name of the HTTP boot option of a DPU.

    Args:
        mac_address: DPU MAC, with or without colons

    Returns:
        e.g. 'UEFI HTTPv4 (MAC:B83FD2909582)'
    """
    return f"{BootOptionName.Http.value} (MAC:{mac_address.replace(':', '').upper()})"


def put_first(boot_order: List[str], boot_id: str) -> List[str]:
    """
    Move ``boot_id`` to the front, keeping the others in order.

    Raises:
        InvariantError: If the result is not a permutation of ``boot_order``
    """
    ordered = [boot_id] + [b for b in boot_order if b != boot_id]
    if len(ordered) != len(boot_order) or sorted(ordered) != sorted(boot_order):
        raise InvariantError(f"Reordered boot list {ordered} is not a permutation of {boot_order}")
    return ordered


class RedfishStandard:
    """
    Operations against a standards-compliant Redfish service.

    Args:
        client: Transport for one BMC
        system_id: Id of the ComputerSystem to manage
        manager_id: Id of the Manager (the BMC itself)
    """

    def __init__(self, client: "RedfishHttpClient", system_id: str = "", manager_id: str = "") -> None:
        self.client = client
        self._system_id = system_id
        self._manager_id = manager_id

    @property
    def system_id(self) -> str:
        return self._system_id

    @property
    def manager_id(self) -> str:
        return self._manager_id

    def set_system_id(self, system_id: str) -> None:
        self._system_id = system_id

    def set_manager_id(self, manager_id: str) -> None:
        self._manager_id = manager_id

    def get_members(self, url: str) -> List[str]:
        """Member ids of the collection at ``url``."""
        _, collection = self.client.get(url, Collection)
        return collection.member_ids()

    # Read-through

    def get_service_root(self) -> ServiceRoot:
        _, root = self.client.get("", ServiceRoot)
        return root

    def get_systems(self) -> List[str]:
        return self.get_members("Systems")

    def get_managers(self) -> List[str]:
        return self.get_members("Managers")

    def get_manager(self) -> Manager:
        _, manager = self.client.get(f"Managers/{self.manager_id}", Manager)
        return manager

    def get_collection(self, odata_id: ODataId) -> Collection:
        _, collection = self.client.get(odata_id.url, Collection)
        return collection

    def get_resource(self, odata_id: ODataId) -> Resource:
        _, body = self.client.get(odata_id.url)
        return Resource(url=odata_id.url, raw=body or {})

    # Accounts

    def get_accounts(self) -> List[ManagerAccount]:
        accounts = []
        for account_id in self.get_members("AccountService/Accounts"):
            _, account = self.client.get(f"AccountService/Accounts/{account_id}", ManagerAccount)
            accounts.append(account)
        return sorted(accounts)

    def create_user(self, username: str, password: str, role_id: RoleId) -> None:
        body = NewAccount(username=username, password=password, role_id=role_id)
        self.client.post("AccountService/Accounts", body)

    def change_username(self, old_name: str, new_name: str) -> None:
        account = self._find_account(old_name)
        self.client.patch(f"AccountService/Accounts/{account.id}", {"UserName": new_name})

    def change_password(self, user: str, new_pass: str) -> None:
        account = self._find_account(user)
        self.change_password_by_id(account.id, new_pass)

    def change_password_by_id(self, account_id: str, new_pass: str) -> None:
        self.client.patch(f"AccountService/Accounts/{account_id}", {"Password": new_pass})

    def set_machine_password_policy(self) -> None:
        # Never lock the account out
        self.client.patch("AccountService", {"AccountLockoutThreshold": 0})

    def get_account_service(self) -> AccountService:
        _, service = self.client.get("AccountService", AccountService)
        return service

    def _find_account(self, username: str) -> ManagerAccount:
        for account in self.get_accounts():
            if account.username == username:
                return account
        raise NotFoundError(f"No account named {username}")

    # Firmware and tasks

    def get_firmware(self, id: str) -> SoftwareInventory:
        _, firmware = self.client.get(f"UpdateService/FirmwareInventory/{id}", SoftwareInventory)
        return firmware

    def get_software_inventories(self) -> List[str]:
        return self.get_members("UpdateService/FirmwareInventory")

    def get_tasks(self) -> List[str]:
        return self.get_members("TaskService/Tasks")

    def get_task(self, id: str) -> Task:
        _, task = self.client.get(f"TaskService/Tasks/{id}", Task)
        return task

    def get_job(self, url: str) -> Job:
        _, job = self.client.get(url, Job)
        return job

    def get_job_state(self, job_id: str) -> JobState:
        return self.get_job(f"JobService/Jobs/{job_id}").state

    def get_update_service(self) -> UpdateService:
        _, service = self.client.get("UpdateService", UpdateService)
        return service

    def update_firmware(self, firmware: Any) -> Task:
        """
        Push a firmware image to UpdateService.HttpPushUri.

        Args:
            firmware: The image, opened in binary mode

        Returns:
            The Task the BMC created for the update
        """
        update_service = self.get_update_service()
        if not update_service.http_push_uri:
            raise NotSupportedError("Host BMC does not support HTTP push")
        _, location, body = self.client.post_file(update_service.http_push_uri, firmware)
        return task_from_response(update_service.http_push_uri, location, body)

    def multipart_parameters(self, reboot: bool, component_type: ComponentType) -> Dict[str, Any]:
        """UpdateParameters sent with a multipart firmware push."""
        return {
            "Targets": [],
            "@Redfish.OperationApplyTime": "Immediate" if reboot else "OnReset",
        }

    def update_firmware_multipart(
        self,
        filename: str,
        reboot: bool,
        timeout: float,
        component_type: ComponentType,
        parameters: Optional[Dict[str, Any]] = None,
    ) -> str:
        """
        Upload a firmware image through UpdateService.MultipartHttpPushUri.

        Args:
            filename: Path of the image
            reboot: Apply immediately instead of on the next reset
            timeout: Upload timeout in seconds
            component_type: What the image is for
            parameters: UpdateParameters, ``multipart_parameters()`` if omitted

        Returns:
            Id of the Task tracking the update

        Raises:
            FileError: If the image cannot be opened
            NotSupportedError: If the BMC has no multipart push URI
        """
        if parameters is None:
            parameters = self.multipart_parameters(reboot, component_type)

        try:
            firmware = open(filename, "rb")
        except OSError as e:
            raise FileError(f"Could not open file: {e}") from e

        with firmware:
            update_service = self.get_update_service()
            push_uri = update_service.multipart_http_push_uri
            if not push_uri:
                raise NotSupportedError("Host BMC does not support HTTP multipart push")
            logger.debug("Uploading %s to %s", filename, push_uri)
            _, location, body = self.client.multipart_update(
                filename,
                firmware,
                json.dumps(parameters),
                push_uri,
                True,
                timeout,
            )
        return task_from_response(push_uri, location, body).id

    def update_firmware_simple_update(
        self,
        image_uri: str,
        targets: List[str],
        transfer_protocol: TransferProtocolType,
    ) -> Task:
        url = "UpdateService/Actions/UpdateService.SimpleUpdate"
        body = {
            "ImageURI": image_uri,
            "Targets": targets,
            "TransferProtocol": transfer_protocol.value,
        }
        _, location, response = self.client.post_with_location(url, body)
        if response and "Id" in response:
            return _validate_task(url, response)
        return task_from_response(url, location, "")

    # Power

    def get_system(self) -> ComputerSystem:
        _, system = self.client.get(f"Systems/{self.system_id}", ComputerSystem)
        return system

    def get_power_state(self) -> Optional[PowerState]:
        return self.get_system().power_state

    def power(self, action: SystemPowerControl) -> None:
        url = f"Systems/{self.system_id}/Actions/ComputerSystem.Reset"
        self.client.post(url, {"ResetType": SystemPowerControl(action).value})

    def bmc_reset(self) -> None:
        url = f"Managers/{self.manager_id}/Actions/Manager.Reset"
        self.client.post(url, {"ResetType": SystemPowerControl.GracefulRestart.value})

    def chassis_reset(self, chassis_id: str, reset_type: SystemPowerControl) -> None:
        url = f"Chassis/{chassis_id}/Actions/Chassis.Reset"
        self.client.post(url, {"ResetType": SystemPowerControl(reset_type).value})

    def bmc_reset_to_defaults(self) -> None:
        url = f"Managers/{self.manager_id}/Actions/Manager.ResetToDefaults"
        self.client.post(url, {"ResetType": "ResetAll"})

    def get_power_metrics(self) -> Power:
        _, power = self.client.get(f"Chassis/{self.primary_chassis_id()}/Power", Power)
        return power

    def get_thermal_metrics(self) -> Thermal:
        _, thermal = self.client.get(f"Chassis/{self.primary_chassis_id()}/Thermal", Thermal)
        return thermal

    def primary_chassis_id(self) -> str:
        """The chassis linked from the system, or the first chassis."""
        system = self.get_system()
        if system.links.chassis:
            return system.links.chassis[0].id
        chassis = self.get_chassis_all()
        if not chassis:
            raise NotFoundError("BMC reports no Chassis")
        return chassis[0]

    def get_gpu_sensors(self) -> List[GPUSensors]:
        gpus = []
        for chassis_id in self.get_chassis_all():
            if not chassis_id.startswith("HGX_GPU_"):
                continue
            sensors = [self.get_sensor(url) for url in self.member_urls(f"Chassis/{chassis_id}/Sensors")]
            gpus.append(GPUSensors(gpu_id=chassis_id, sensors=sensors))
        return gpus

    def get_sensor(self, url: str) -> Sensor:
        _, sensor = self.client.get(url, Sensor)
        return sensor

    def get_system_event_log(self) -> List[LogEntry]:
        return self.get_log_entries(f"Systems/{self.system_id}/LogServices/SEL/Entries")

    def get_log_entries(self, url: str) -> List[LogEntry]:
        _, entries = self.client.get(url, LogEntryCollection)
        return entries.members

    def get_drives_metrics(self) -> List[Drive]:
        system = self.get_system()
        if system.storage is None:
            return []
        drives = []
        for storage_url in self.member_urls(system.storage.url):
            _, storage = self.client.get(storage_url, Storage)
            for drive in storage.drives:
                _, d = self.client.get(drive.url, Drive)
                drives.append(d)
        return drives

    # Setup and lockdown

    def machine_setup(self, boot_interface_mac: Optional[str] = None) -> None:
        self.disable_secure_boot()
        self.set_boot_order_dpu_first(boot_interface_mac)

    def machine_setup_status(self, boot_interface_mac: Optional[str] = None) -> MachineSetupStatus:
        diffs = self.secure_boot_diffs()
        diffs.extend(self.first_boot_option_diffs(boot_interface_mac))
        return MachineSetupStatus(diffs=diffs)

    def secure_boot_diffs(self) -> List[MachineSetupDiff]:
        secure_boot = self.get_secure_boot()
        if secure_boot.secure_boot_enable:
            return [MachineSetupDiff(key="SecureBoot", expected="false", actual="true")]
        return []

    def first_boot_option_diffs(self, boot_interface_mac: Optional[str]) -> List[MachineSetupDiff]:
        expected = dpu_boot_option_name(boot_interface_mac) if boot_interface_mac else BootOptionName.Http.value
        boot_order = self.get_system().boot.boot_order
        actual = self.get_boot_option(boot_order[0]).display_name if boot_order else ""
        if not actual.startswith(expected):
            return [MachineSetupDiff(key="BootOrder[0]", expected=expected, actual=actual)]
        return []

    def set_boot_order_dpu_first(self, boot_interface_mac: Optional[str] = None) -> None:
        self.change_boot_order(self.dpu_first_boot_order(boot_interface_mac))

    def dpu_first_boot_order(self, boot_interface_mac: Optional[str]) -> List[str]:
        if boot_interface_mac:
            name = dpu_boot_option_name(boot_interface_mac)
        else:
            name = BootOptionName.Http.value
        return self.boot_order_with_first(name, BootOptionMatchField.DisplayName)

    def lockdown(self, target: EnabledDisabled) -> None:
        """
        Restrict the BMC and the host firmware for tenant use.

        Enabling turns IPMI over LAN off, then secure boot on. Disabling undoes
        the two steps in reverse order. Each step is idempotent so a call can
        resume from a Partial status.
        """
        if EnabledDisabled(target).is_enabled():
            self.lockdown_bmc(EnabledDisabled.Enabled)
            self.enable_secure_boot()
        else:
            self.disable_secure_boot()
            self.lockdown_bmc(EnabledDisabled.Disabled)

    def lockdown_status(self) -> Status:
        secure_boot = self.get_secure_boot()
        return Status.from_parts(
            {
                "ipmi_over_lan_disabled": not self.is_ipmi_over_lan_enabled(),
                "secure_boot": bool(secure_boot.secure_boot_enable),
            }
        )

    def lockdown_bmc(self, target: EnabledDisabled) -> None:
        if EnabledDisabled(target).is_enabled():
            self.enable_ipmi_over_lan(EnabledDisabled.Disabled)
        else:
            self.enable_ipmi_over_lan(EnabledDisabled.Enabled)

    def get_network_protocol(self) -> ManagerNetworkProtocol:
        _, protocol = self.client.get(f"Managers/{self.manager_id}/NetworkProtocol", ManagerNetworkProtocol)
        return protocol

    def enable_ipmi_over_lan(self, target: EnabledDisabled) -> None:
        body = {"IPMI": {"ProtocolEnabled": EnabledDisabled(target).is_enabled()}}
        self.client.patch(f"Managers/{self.manager_id}/NetworkProtocol", body)

    def is_ipmi_over_lan_enabled(self) -> bool:
        protocol = self.get_network_protocol()
        return protocol.ipmi is not None and bool(protocol.ipmi.protocol_enabled)

    def setup_serial_console(self) -> None:
        self.client.patch(f"Managers/{self.manager_id}", {"SerialConsole": {"ServiceEnabled": True}})
        self.client.patch(f"Managers/{self.manager_id}/NetworkProtocol", {"SSH": {"ProtocolEnabled": True}})

    def serial_console_status(self) -> Status:
        manager = self.get_manager()
        protocol = self.get_network_protocol()
        return Status.from_parts(
            {
                "serial_console": bool(manager.serial_console and manager.serial_console.service_enabled),
                "ssh": bool(protocol.ssh and protocol.ssh.protocol_enabled),
            }
        )

    def enable_rshim_bmc(self) -> None:
        body = {"BmcRShim": {"BmcRShimEnabled": True}}
        self.client.patch(f"Managers/{self.manager_id}/Oem/Nvidia", body)

    def clear_nvram(self) -> None:
        raise NotSupportedError("clear_nvram is not supported on this BMC")

    # Boot

    def get_boot_options(self) -> BootOptions:
        _, options = self.client.get(f"Systems/{self.system_id}/BootOptions", BootOptions)
        return options

    def get_boot_option(self, option_id: str) -> BootOption:
        _, option = self.client.get(f"Systems/{self.system_id}/BootOptions/{option_id}", BootOption)
        return option

    def boot_once(self, target: Boot) -> None:
        self.set_boot_override(BOOT_OVERRIDE_TARGETS[Boot(target)], BootSourceOverrideEnabled.Once)

    def set_boot_override(
        self,
        override_target: BootSourceOverrideTarget,
        override_enabled: BootSourceOverrideEnabled,
        url: Optional[str] = None,
    ) -> None:
        # UefiHttp is not always in AllowableValues but BMCs accept it, so no pre-validation
        body = {
            "Boot": {
                "BootSourceOverrideEnabled": override_enabled.value,
                "BootSourceOverrideTarget": override_target.value,
            }
        }
        self.client.patch(url or f"Systems/{self.system_id}", body)

    def boot_first(self, target: Boot) -> None:
        self.change_boot_order(self.boot_first_order(target))

    def boot_first_order(self, target: Boot) -> List[str]:
        """The current BootOrder with the first option matching ``target`` moved to the front."""
        name, match_field = BOOT_FIRST_MATCH[Boot(target)]
        return self.boot_order_with_first(name.value, match_field)

    def boot_order_with_first(self, name: str, match_field: BootOptionMatchField) -> List[str]:
        """
        Reorder the persistent boot list so a matching option comes first.

        Options are matched with a case-sensitive prefix test on either the
        DisplayName or the UefiDevicePath. The first match wins.

        Args:
            name: Prefix to look for
            match_field: Which BootOption field to test

        Returns:
            e.g. ['Boot0003', 'Boot0001', 'Boot0002'] when Boot0003 matched

        Raises:
            NotFoundError: If no boot option matches
        """
        boot_order = self.get_system().boot.boot_order
        for boot_id in boot_order:
            option = self.get_boot_option(boot_id)
            if match_field is BootOptionMatchField.DisplayName:
                value = option.display_name
            else:
                value = option.uefi_device_path or ""
            if value.startswith(name):
                return put_first(boot_order, boot_id)
        raise NotFoundError(f"No boot option matches {name!r} on {match_field.value}")

    def change_boot_order(self, boot_array: List[str]) -> None:
        self.client.patch(self.boot_settings_url(), {"Boot": {"BootOrder": list(boot_array)}})

    def boot_settings_url(self) -> str:
        """Where boot order changes are staged: the advertised settings object, or the system."""
        system = self.get_system()
        if system.redfish_settings is not None and system.redfish_settings.settings_object is not None:
            return system.redfish_settings.settings_object.url
        return f"Systems/{self.system_id}"

    # Security

    def get_secure_boot(self) -> SecureBoot:
        _, secure_boot = self.client.get(f"Systems/{self.system_id}/SecureBoot", SecureBoot)
        return secure_boot

    def enable_secure_boot(self) -> None:
        self.client.patch(f"Systems/{self.system_id}/SecureBoot", {"SecureBootEnable": True})

    def disable_secure_boot(self) -> None:
        self.client.patch(f"Systems/{self.system_id}/SecureBoot", {"SecureBootEnable": False})

    def add_secure_boot_certificate(self, pem_cert: str) -> Task:
        url = f"Systems/{self.system_id}/SecureBoot/SecureBootDatabases/db/Certificates"
        body = {"CertificateString": pem_cert, "CertificateType": "PEM"}
        _, response = self.client.post(url, body)
        response = response or {}
        if "TaskState" in response:
            return _validate_task(url, response)
        # The certificate was added synchronously
        return Task(
            odata_id=response.get("@odata.id"),
            id=response.get("Id", ""),
            name=response.get("Name"),
            task_state=TaskState.Completed,
        )

    def clear_tpm(self) -> None:
        body = {"Attributes": {"TpmOperation": "TPM Clear", "TpmSupport": "Enable"}}
        self.client.patch(self.bios_settings_url(), body)

    def change_uefi_password(self, current_uefi_password: str, new_uefi_password: str) -> Optional[str]:
        """
        Set the UEFI setup password.

        Use "" as ``current_uefi_password`` if none is set yet, and "" as
        ``new_uefi_password`` to remove it.

        Returns:
            Id of a job that applies the change, for BMCs that create one
        """
        return self.change_bios_password(UEFI_PASSWORD_NAME, current_uefi_password, new_uefi_password)

    def clear_uefi_password(self, current_uefi_password: str) -> Optional[str]:
        return self.change_uefi_password(current_uefi_password, "")

    def change_bios_password(self, password_name: str, current_password: str, new_password: str) -> Optional[str]:
        url = f"Systems/{self.system_id}/Bios/Actions/Bios.ChangePassword"
        body = {
            "PasswordName": password_name,
            "OldPassword": current_password,
            "NewPassword": new_password,
        }
        self.client.post(url, body)
        return None

    # BIOS

    def bios_settings_url(self) -> str:
        return f"Systems/{self.system_id}/Bios/Settings"

    def bios(self) -> Dict[str, Any]:
        """All BIOS attributes. Keys and values are vendor specific."""
        _, bios = self.client.get(f"Systems/{self.system_id}/Bios", Bios)
        return bios.attributes

    def set_bios_attributes(self, attributes: Dict[str, Any], url: Optional[str] = None) -> None:
        self.client.patch(url or self.bios_settings_url(), {"Attributes": attributes})

    def pending(self) -> Dict[str, Any]:
        return self.pending_with_url(self.bios_settings_url())

    def pending_with_url(self, url: str) -> Dict[str, Any]:
        """
        BIOS changes staged at ``url`` that differ from the current values.

        Args:
            url: The vendor's BIOS settings URI

        Returns:
            Attribute name to staged value
        """
        _, staged = self.client.get(url, Bios)
        current = self.bios()
        return {k: v for k, v in staged.attributes.items() if current.get(k) != v}

    def clear_pending(self) -> None:
        self.clear_pending_with_url(self.bios_settings_url())

    def clear_pending_with_url(self, url: str) -> None:
        """Re-stage the current values of every pending attribute."""
        pending = self.pending_with_url(url)
        if not pending:
            return
        current = self.bios()
        restore = {k: current[k] for k in pending if k in current}
        if restore:
            self.set_bios_attributes(restore, url)

    # Inventory

    def pcie_devices(self) -> List[PCIeDevice]:
        """Enabled PCIe devices linked from the system, or from every chassis."""
        system = self.get_system()
        if system.pcie_devices:
            devices = [self.get_pcie_device(link.url) for link in system.pcie_devices]
            return [d for d in devices if d.is_enabled()]
        return self.pcie_devices_from_chassis(lambda chassis_id: False)

    def pcie_devices_from_chassis(self, skip: Callable[[str], bool]) -> List[PCIeDevice]:
        out = []
        for chassis_id in self.get_chassis_all():
            if skip(chassis_id):
                continue
            chassis = self.get_chassis(chassis_id)
            if chassis.pcie_devices is None:
                continue
            try:
                urls = self.member_urls(chassis.pcie_devices.url)
            except (NotFoundError, JsonDeserializeError) as e:
                logger.debug("Skipping PCIe devices of chassis %s: %s", chassis_id, e)
                continue
            for url in urls:
                device = self.get_pcie_device(url)
                if device.is_enabled():
                    out.append(device)
        return out

    def get_pcie_device(self, url: str) -> PCIeDevice:
        _, device = self.client.get(url, PCIeDevice)
        return device

    def get_chassis_all(self) -> List[str]:
        return self.get_members("Chassis")

    def get_chassis(self, id: str) -> Chassis:
        _, chassis = self.client.get(f"Chassis/{id}", Chassis)
        return chassis

    def get_chassis_network_adapters(self, chassis_id: str) -> List[str]:
        return self.get_members(f"Chassis/{chassis_id}/NetworkAdapters")

    def get_chassis_network_adapter(self, chassis_id: str, id: str) -> NetworkAdapter:
        _, adapter = self.client.get(f"Chassis/{chassis_id}/NetworkAdapters/{id}", NetworkAdapter)
        return adapter

    def get_base_network_adapters(self, system_id: str) -> List[str]:
        return self.get_members(f"Systems/{system_id}/NetworkInterfaces")

    def get_base_network_adapter(self, system_id: str, id: str) -> NetworkAdapter:
        _, interface = self.client.get(f"Systems/{system_id}/NetworkInterfaces/{id}", NetworkInterface)
        if interface.links.network_adapter is None:
            raise NotFoundError(f"Network interface {id} has no NetworkAdapter link")
        _, adapter = self.client.get(interface.links.network_adapter.url, NetworkAdapter)
        return adapter

    def default_network_adapter(self, chassis_id: str) -> str:
        adapters = self.get_chassis_network_adapters(chassis_id)
        if not adapters:
            raise NotFoundError(f"Chassis {chassis_id} has no network adapter")
        return adapters[0]

    def get_ports(self, chassis_id: str, network_adapter: Optional[str] = None) -> List[str]:
        adapter = network_adapter or self.default_network_adapter(chassis_id)
        return self.get_members(f"Chassis/{chassis_id}/NetworkAdapters/{adapter}/NetworkPorts")

    def get_port(self, chassis_id: str, id: str, network_adapter: Optional[str] = None) -> NetworkPort:
        adapter = network_adapter or self.default_network_adapter(chassis_id)
        _, port = self.client.get(f"Chassis/{chassis_id}/NetworkAdapters/{adapter}/NetworkPorts/{id}", NetworkPort)
        return port

    def get_network_device_functions(self, chassis_id: str, network_adapter: Optional[str] = None) -> List[str]:
        adapter = network_adapter or self.default_network_adapter(chassis_id)
        return self.get_members(f"Chassis/{chassis_id}/NetworkAdapters/{adapter}/NetworkDeviceFunctions")

    def get_network_device_function(
        self,
        chassis_id: str,
        id: str,
        network_adapter: Optional[str] = None,
    ) -> NetworkDeviceFunction:
        adapter = network_adapter or self.default_network_adapter(chassis_id)
        url = f"Chassis/{chassis_id}/NetworkAdapters/{adapter}/NetworkDeviceFunctions/{id}"
        _, function = self.client.get(url, NetworkDeviceFunction)
        return function

    def get_manager_ethernet_interfaces(self) -> List[str]:
        return self.get_members(f"Managers/{self.manager_id}/EthernetInterfaces")

    def get_manager_ethernet_interface(self, id: str) -> EthernetInterface:
        _, interface = self.client.get(f"Managers/{self.manager_id}/EthernetInterfaces/{id}", EthernetInterface)
        return interface

    def get_system_ethernet_interfaces(self) -> List[str]:
        return self.get_members(f"Systems/{self.system_id}/EthernetInterfaces")

    def get_system_ethernet_interface(self, id: str) -> EthernetInterface:
        _, interface = self.client.get(f"Systems/{self.system_id}/EthernetInterfaces/{id}", EthernetInterface)
        return interface

    def get_base_mac_address(self) -> Optional[str]:
        interfaces = self.get_system_ethernet_interfaces()
        if not interfaces:
            return None
        return self.get_system_ethernet_interface(interfaces[0]).mac_address

    def member_urls(self, url: str) -> List[str]:
        _, collection = self.client.get(url, Collection)
        return collection.member_urls()


def task_from_response(url: str, location: Optional[str], body: str) -> Task:
    """
    The Task announced by a firmware update or action response.

    The body is tried first; when it is empty the Location header names the
    task.

    Raises:
        JsonDeserializeError: If neither yields a task
    """
    if body and body.strip():
        try:
            return Task.model_validate_json(body)
        except ValueError as e:
            if not location:
                raise JsonDeserializeError(url, body, e) from e
    if location:
        task_url = odata_id_to_url(location)
        return Task(odata_id=location, id=task_url.rsplit("/", 1)[-1])
    raise JsonDeserializeError(url, body, ValueError("response names no task"))


def _validate_task(url: str, body: Dict[str, Any]) -> Task:
    try:
        return Task.model_validate(body)
    except ValueError as e:
        raise JsonDeserializeError(url, json.dumps(body), e) from e
