"""
Lenovo XCC backend.

XCC stages BIOS and boot order changes at ``Pending`` resources instead of
``Settings``, and exposes lockdown as an OEM manager action.
"""

from typing import Any, Dict, List, Optional

from .common import Boot, Status
from .model import EnabledDisabled
from .model.manager import Manager
from .model.oem.lenovo import LenovoManagerOem, LockdownModeAction, PasswordPolicy
from .standard import RedfishStandard

UEFI_PASSWORD_NAME = "UefiAdminPassword"


class LenovoBmc:
    """Lenovo XCC. Operations not defined here are served by the standard backend."""

    def __init__(self, s: RedfishStandard) -> None:
        self.s = s

    def __getattr__(self, name: str) -> Any:
        if name == "s":
            raise AttributeError(name)
        return getattr(self.s, name)

    def bios_settings_url(self) -> str:
        return f"Systems/{self.s.system_id}/Bios/Pending"

    def pending(self) -> Dict[str, Any]:
        return self.s.pending_with_url(self.bios_settings_url())

    def clear_pending(self) -> None:
        self.s.clear_pending_with_url(self.bios_settings_url())

    def clear_tpm(self) -> None:
        self.s.set_bios_attributes({"TrustedComputingGroup_DeviceOperation": "Clear"}, self.bios_settings_url())

    # Boot order

    def change_boot_order(self, boot_array: List[str]) -> None:
        body = {"Boot": {"BootOrder": list(boot_array)}}
        self.s.client.patch(f"Systems/{self.s.system_id}/Pending", body)

    def boot_first(self, target: Boot) -> None:
        self.change_boot_order(self.s.boot_first_order(target))

    def set_boot_order_dpu_first(self, boot_interface_mac: Optional[str] = None) -> None:
        self.change_boot_order(self.s.dpu_first_boot_order(boot_interface_mac))

    def machine_setup(self, boot_interface_mac: Optional[str] = None) -> None:
        self.s.disable_secure_boot()
        self.set_boot_order_dpu_first(boot_interface_mac)

    # Lockdown

    def manager_oem(self) -> LenovoManagerOem:
        _, manager = self.s.client.get(f"Managers/{self.s.manager_id}", Manager)
        return LenovoManagerOem.model_validate((manager.oem or {}).get("Lenovo", {}))

    def lockdown_bmc(self, target: EnabledDisabled) -> None:
        url = f"Managers/{self.s.manager_id}/Actions/Oem/LenovoManager.SetLockdownMode"
        self.s.client.post(url, LockdownModeAction(lockdown_mode=EnabledDisabled(target)))

    def lockdown(self, target: EnabledDisabled) -> None:
        if EnabledDisabled(target).is_enabled():
            self.lockdown_bmc(EnabledDisabled.Enabled)
            self.s.enable_secure_boot()
        else:
            self.s.disable_secure_boot()
            self.lockdown_bmc(EnabledDisabled.Disabled)

    def lockdown_status(self) -> Status:
        oem = self.manager_oem()
        secure_boot = self.s.get_secure_boot()
        return Status.from_parts(
            {
                "lockdown_mode": oem.lockdown_mode is EnabledDisabled.Enabled,
                "secure_boot": bool(secure_boot.secure_boot_enable),
            }
        )

    def enable_ipmi_over_lan(self, target: EnabledDisabled) -> None:
        oem = LenovoManagerOem(ipmi_over_lan_enabled=EnabledDisabled(target).is_enabled())
        self.s.client.patch(f"Managers/{self.s.manager_id}", {"Oem": {"Lenovo": oem.to_wire()}})

    def is_ipmi_over_lan_enabled(self) -> bool:
        return bool(self.manager_oem().ipmi_over_lan_enabled)

    # Accounts and passwords

    def set_machine_password_policy(self) -> None:
        policy = PasswordPolicy(
            password_change_on_first_access=False,
            password_expiration_period_days=0,
            password_change_interval=0,
            minimum_password_reuse_cycle=0,
        )
        body = {
            "AccountLockoutThreshold": 0,
            "Oem": {"Lenovo": policy.to_wire()},
        }
        self.s.client.patch("AccountService", body)

    def change_uefi_password(self, current_uefi_password: str, new_uefi_password: str) -> Optional[str]:
        return self.s.change_bios_password(UEFI_PASSWORD_NAME, current_uefi_password, new_uefi_password)

    def clear_uefi_password(self, current_uefi_password: str) -> Optional[str]:
        return self.change_uefi_password(current_uefi_password, "")
