"""
Dell iDRAC backend.

iDRAC stages BIOS changes at ``Bios/Settings`` but only applies them once a
BIOS configuration job is queued on the manager. iDRAC's own settings live in
the manager attribute map.
"""

import logging
from typing import Any, Dict, List, Optional

from .common import Boot, Status
from .model import EnabledDisabled, REDFISH_ENDPOINT
from .model.job import JobState
from .model.oem.dell import (
    DISABLED,
    ENABLED,
    IPMI_LAN_ENABLE,
    IPMI_SOL_BAUD_RATE,
    IPMI_SOL_ENABLE,
    SERIAL_REDIRECTION_ENABLE,
    SERVER_BOOT_FIRST_DEVICE,
    SERVER_BOOT_ONCE,
    SYSTEM_LOCKDOWN,
    BiosConfigJob,
    DellJob,
    ManagerAttributes,
    SetManagerAttributes,
)
from .model.sel import LogEntry
from .standard import RedfishStandard

logger = logging.getLogger(__name__)

UEFI_PASSWORD_NAME = "SetupPassword"
IN_BAND_MANAGEABILITY = "InBandManageabilityInterface"

# ServerBoot.1.FirstBootDevice values. iDRAC has none for UEFI HTTP.
FIRST_BOOT_DEVICES = {
    Boot.Pxe: "PXE",
    Boot.HardDisk: "HDD",
}


class DellBmc:
    """Dell iDRAC. Operations not defined here are served by the standard backend."""

    def __init__(self, s: RedfishStandard) -> None:
        self.s = s

    def __getattr__(self, name: str) -> Any:
        if name == "s":
            raise AttributeError(name)
        return getattr(self.s, name)

    # Manager attributes

    def manager_attributes(self) -> ManagerAttributes:
        _, attributes = self.s.client.get(f"Managers/{self.s.manager_id}/Attributes", ManagerAttributes)
        return attributes

    def set_manager_attributes(self, attributes: Dict[str, Any]) -> None:
        body = SetManagerAttributes(attributes=attributes)
        self.s.client.patch(f"Managers/{self.s.manager_id}/Attributes", body)

    # BIOS jobs

    def create_bios_config_job(self) -> Optional[str]:
        """
        Queue a job that applies the staged BIOS settings on the next reboot.

        Returns:
            The job id, e.g. 'JID_123456789012'
        """
        body = BiosConfigJob(target_settings_uri=f"/{REDFISH_ENDPOINT}/{self.s.bios_settings_url()}")
        _, location, _ = self.s.client.post_with_location(f"Managers/{self.s.manager_id}/Jobs", body)
        if not location:
            return None
        return location.rstrip("/").rsplit("/", 1)[-1]

    def set_bios_attributes(self, attributes: Dict[str, Any]) -> Optional[str]:
        self.s.set_bios_attributes(attributes)
        return self.create_bios_config_job()

    def get_jobs(self) -> List[DellJob]:
        jobs = []
        for job_id in self.s.get_members(f"Managers/{self.s.manager_id}/Jobs"):
            _, job = self.s.client.get(f"Managers/{self.s.manager_id}/Jobs/{job_id}", DellJob)
            jobs.append(job)
        return jobs

    def get_job_state(self, job_id: str) -> JobState:
        return self.s.get_job(f"Managers/{self.s.manager_id}/Jobs/{job_id}").state

    def clear_pending(self) -> None:
        """Delete the BIOS configuration jobs that have not run yet."""
        for job in self.get_jobs():
            if job.is_scheduled_bios_job():
                logger.debug("Deleting scheduled BIOS job %s", job.id)
                self.s.client.delete(f"Managers/{self.s.manager_id}/Jobs/{job.id}")

    # Boot

    def boot_once(self, target: Boot) -> None:
        device = FIRST_BOOT_DEVICES.get(Boot(target))
        if device is None:
            self.s.boot_once(target)
            return
        self.set_manager_attributes({SERVER_BOOT_ONCE: ENABLED, SERVER_BOOT_FIRST_DEVICE: device})

    def boot_first(self, target: Boot) -> None:
        self.change_boot_order(self.s.boot_first_order(target))

    def set_boot_order_dpu_first(self, boot_interface_mac: Optional[str] = None) -> None:
        self.change_boot_order(self.s.dpu_first_boot_order(boot_interface_mac))

    def change_boot_order(self, boot_array: List[str]) -> None:
        """Stage a new persistent boot order and queue the job that applies it."""
        self.s.change_boot_order(boot_array)
        job_id = self.create_bios_config_job()
        logger.debug("Boot order %s queued as job %s", boot_array, job_id)

    def machine_setup(self, boot_interface_mac: Optional[str] = None) -> None:
        self.s.disable_secure_boot()
        self.set_boot_order_dpu_first(boot_interface_mac)

    # Lockdown

    def lockdown(self, target: EnabledDisabled) -> None:
        """
        Enable or disable iDRAC system lockdown.

        System lockdown blocks configuration changes, so when enabling, the
        BIOS change is queued first and lockdown is turned on last. When
        disabling, lockdown is turned off before touching the BIOS. The BIOS
        step is skipped when the value is already current or pending, so a
        repeated call does not queue a second job.
        """
        if EnabledDisabled(target).is_enabled():
            self.stage_in_band_manageability(DISABLED)
            self.lockdown_bmc(EnabledDisabled.Enabled)
        else:
            self.lockdown_bmc(EnabledDisabled.Disabled)
            self.stage_in_band_manageability(ENABLED)

    def stage_in_band_manageability(self, value: str) -> Optional[str]:
        """
        Stage InBandManageabilityInterface and queue a BIOS job for it.

        Returns:
            The job id, or None when nothing had to be staged
        """
        pending = self.s.pending()
        if IN_BAND_MANAGEABILITY in pending:
            if pending[IN_BAND_MANAGEABILITY] == value:
                logger.debug("%s=%s is already pending", IN_BAND_MANAGEABILITY, value)
                return None
        elif self.s.bios().get(IN_BAND_MANAGEABILITY) == value:
            logger.debug("%s is already %s", IN_BAND_MANAGEABILITY, value)
            return None
        return self.set_bios_attributes({IN_BAND_MANAGEABILITY: value})

    def lockdown_bmc(self, target: EnabledDisabled) -> None:
        self.set_manager_attributes({SYSTEM_LOCKDOWN: EnabledDisabled(target).value})

    def lockdown_status(self) -> Status:
        attributes = self.manager_attributes()
        bios = self.s.bios()
        return Status.from_parts(
            {
                "system_lockdown": attributes.get(SYSTEM_LOCKDOWN) == ENABLED,
                "in_band_manageability_disabled": bios.get(IN_BAND_MANAGEABILITY) == DISABLED,
            }
        )

    def enable_ipmi_over_lan(self, target: EnabledDisabled) -> None:
        self.set_manager_attributes({IPMI_LAN_ENABLE: EnabledDisabled(target).value})

    def is_ipmi_over_lan_enabled(self) -> bool:
        return self.manager_attributes().get(IPMI_LAN_ENABLE) == ENABLED

    # Serial console

    def setup_serial_console(self) -> None:
        self.set_manager_attributes(
            {
                SERIAL_REDIRECTION_ENABLE: ENABLED,
                IPMI_SOL_ENABLE: ENABLED,
                IPMI_SOL_BAUD_RATE: "115200",
            }
        )

    def serial_console_status(self) -> Status:
        attributes = self.manager_attributes()
        return Status.from_parts(
            {
                "serial_redirection": attributes.get(SERIAL_REDIRECTION_ENABLE) == ENABLED,
                "ipmi_sol": attributes.get(IPMI_SOL_ENABLE) == ENABLED,
            }
        )

    # Security

    def clear_tpm(self) -> None:
        self.set_bios_attributes({"TpmSecurity": "On", "Tpm2Hierarchy": "Clear"})

    def change_uefi_password(self, current_uefi_password: str, new_uefi_password: str) -> Optional[str]:
        self.s.change_bios_password(UEFI_PASSWORD_NAME, current_uefi_password, new_uefi_password)
        return self.create_bios_config_job()

    def clear_uefi_password(self, current_uefi_password: str) -> Optional[str]:
        return self.change_uefi_password(current_uefi_password, "")

    # Misc

    def bmc_reset_to_defaults(self) -> None:
        url = f"Managers/{self.s.manager_id}/Actions/Oem/DellManager.ResetToDefaults"
        self.s.client.post(url, {"ResetType": "All"})

    def get_system_event_log(self) -> List[LogEntry]:
        return self.s.get_log_entries(f"Managers/{self.s.manager_id}/LogServices/Sel/Entries")
