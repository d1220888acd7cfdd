"""
NVIDIA OpenBMC backend (Viking and other generic NVIDIA hosts).

BIOS attributes follow the groups in ``model.oem.nvidia_viking``. Host NICs
are reported under a single network adapter named ``NvidiaNetworkAdapter``.
"""

from typing import Any, List, Optional

from .common import MachineSetupDiff, MachineSetupStatus, Status
from .model import EnableDisable, EnabledDisabled
from .model.network_device_function import NetworkDeviceFunction
from .model.oem.nvidia_viking import (
    KCS_ALLOW_ALL,
    KCS_DENY_ALL,
    Bios,
    BiosLockdownAttributes,
    SetBiosLockdownAttributes,
    SetBiosSerialConsoleAttributes,
    SetTpmAttributes,
    SetUefiHttpAttributes,
    SetVirtAttributes,
    TpmAttributes,
    UefiHttpAttributes,
    VirtAttributes,
)
from .model.port import NetworkPort
from .standard import RedfishStandard

NETWORK_ADAPTER = "NvidiaNetworkAdapter"

MACHINE_SETUP_ATTRIBUTES = [
    SetVirtAttributes(
        attributes=VirtAttributes(sriov_enable=EnableDisable.Enable, vtd_support=EnableDisable.Enable)
    ),
    SetUefiHttpAttributes(
        attributes=UefiHttpAttributes(
            ipv4_http=EnabledDisabled.Enabled,
            ipv4_pxe=EnabledDisabled.Disabled,
            ipv6_http=EnabledDisabled.Disabled,
            ipv6_pxe=EnabledDisabled.Disabled,
        )
    ),
    SetBiosSerialConsoleAttributes(),
]


class NvidiaBmc:
    """NVIDIA OpenBMC. Operations not defined here are served by the standard backend."""

    def __init__(self, s: RedfishStandard) -> None:
        self.s = s

    def __getattr__(self, name: str) -> Any:
        if name == "s":
            raise AttributeError(name)
        return getattr(self.s, name)

    def viking_bios(self) -> Bios:
        _, bios = self.s.client.get(f"Systems/{self.s.system_id}/Bios", Bios)
        return bios

    def _patch_bios(self, body: Any) -> None:
        self.s.client.patch(self.s.bios_settings_url(), body)

    # Setup

    def machine_setup(self, boot_interface_mac: Optional[str] = None) -> None:
        for attributes in MACHINE_SETUP_ATTRIBUTES:
            self._patch_bios(attributes)
        self.s.disable_secure_boot()
        self.s.set_boot_order_dpu_first(boot_interface_mac)

    def machine_setup_status(self, boot_interface_mac: Optional[str] = None) -> MachineSetupStatus:
        current = self.s.bios()
        diffs = []
        for group in MACHINE_SETUP_ATTRIBUTES:
            for key, expected in group.to_wire()["Attributes"].items():
                actual = current.get(key)
                if actual != expected:
                    diffs.append(MachineSetupDiff(key=key, expected=str(expected), actual=str(actual)))
        diffs.extend(self.s.secure_boot_diffs())
        diffs.extend(self.s.first_boot_option_diffs(boot_interface_mac))
        return MachineSetupStatus(diffs=diffs)

    # Lockdown

    def lockdown(self, target: EnabledDisabled) -> None:
        """
        Lock the host out of the BMC.

        KCS is denied first and the Redfish host interface is switched off
        last; disabling walks the same steps backwards.
        """
        if EnabledDisabled(target).is_enabled():
            steps = [
                BiosLockdownAttributes(kcs_interface_disable=KCS_DENY_ALL),
                BiosLockdownAttributes(redfish_enable=EnabledDisabled.Disabled),
            ]
        else:
            steps = [
                BiosLockdownAttributes(redfish_enable=EnabledDisabled.Enabled),
                BiosLockdownAttributes(kcs_interface_disable=KCS_ALLOW_ALL),
            ]
        for step in steps:
            self._patch_bios(SetBiosLockdownAttributes(attributes=step))

    def lockdown_status(self) -> Status:
        attributes = self.viking_bios().attributes
        return Status.from_parts(
            {
                "kcs_interface_disable": attributes.kcs_interface_disable == KCS_DENY_ALL,
                "redfish_enable": attributes.redfish_enable is EnabledDisabled.Disabled,
            }
        )

    # Serial console

    def setup_serial_console(self) -> None:
        self._patch_bios(SetBiosSerialConsoleAttributes())
        self.s.setup_serial_console()

    def serial_console_status(self) -> Status:
        attributes = self.viking_bios().attributes
        protocol = self.s.get_network_protocol()
        return Status.from_parts(
            {
                "acpi_spcr_console_redirection": bool(attributes.acpi_spcr_console_redirection_enable),
                "console_redirection0": bool(attributes.console_redirection_enable0),
                "ssh": bool(protocol.ssh and protocol.ssh.protocol_enabled),
            }
        )

    # Security

    def clear_tpm(self) -> None:
        attributes = TpmAttributes(tpm_operation="Clear", tpm_support=EnableDisable.Enable)
        self._patch_bios(SetTpmAttributes(attributes=attributes))

    def change_uefi_password(self, current_uefi_password: str, new_uefi_password: str) -> Optional[str]:
        body = {
            "Attributes": {
                "CurrentUefiPassword": current_uefi_password,
                "UefiPassword": new_uefi_password,
            }
        }
        self._patch_bios(body)
        return None

    def clear_uefi_password(self, current_uefi_password: str) -> Optional[str]:
        return self.change_uefi_password(current_uefi_password, "")

    def clear_nvram(self) -> None:
        self.s.client.post(f"Systems/{self.s.system_id}/Bios/Actions/Bios.ResetBios", {})

    # Network adapter

    def get_ports(self, chassis_id: str, network_adapter: Optional[str] = None) -> List[str]:
        return self.s.get_ports(chassis_id, network_adapter or NETWORK_ADAPTER)

    def get_port(self, chassis_id: str, id: str, network_adapter: Optional[str] = None) -> NetworkPort:
        return self.s.get_port(chassis_id, id, network_adapter or NETWORK_ADAPTER)

    def get_network_device_functions(self, chassis_id: str, network_adapter: Optional[str] = None) -> List[str]:
        return self.s.get_network_device_functions(chassis_id, network_adapter or NETWORK_ADAPTER)

    def get_network_device_function(
        self,
        chassis_id: str,
        id: str,
        network_adapter: Optional[str] = None,
    ) -> NetworkDeviceFunction:
        return self.s.get_network_device_function(chassis_id, id, network_adapter or NETWORK_ADAPTER)
