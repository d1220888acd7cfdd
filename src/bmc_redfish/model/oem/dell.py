"""
Dell iDRAC OEM resources.

iDRAC keeps its own settings (lockdown, IPMI, serial redirection) as a flat
attribute map at ``Managers/iDRAC.Embedded.1/Attributes``.
"""

from typing import Any, Dict, Optional

from pydantic import Field

from .. import ODataLinks, RedfishModel

SYSTEM_LOCKDOWN = "Lockdown.1.SystemLockdown"
IPMI_LAN_ENABLE = "IPMILan.1.Enable"
SERIAL_REDIRECTION_ENABLE = "SerialRedirection.1.Enable"
IPMI_SOL_ENABLE = "IPMISOL.1.Enable"
IPMI_SOL_BAUD_RATE = "IPMISOL.1.BaudRate"
SERVER_BOOT_ONCE = "ServerBoot.1.BootOnce"
SERVER_BOOT_FIRST_DEVICE = "ServerBoot.1.FirstBootDevice"

ENABLED = "Enabled"
DISABLED = "Disabled"


class ManagerAttributes(ODataLinks):
    id: Optional[str] = None
    attributes: Dict[str, Any] = Field(default_factory=dict)

    def get(self, name: str) -> Optional[Any]:
        return self.attributes.get(name)


class SetManagerAttributes(RedfishModel):
    attributes: Dict[str, Any]


class BiosConfigJob(RedfishModel):
    """Body of a POST to the iDRAC job queue that commits staged BIOS settings."""

    target_settings_uri: str = Field(alias="TargetSettingsURI")


class DellJob(ODataLinks):
    """Members of ``Managers/iDRAC.Embedded.1/Jobs``."""

    id: str
    name: Optional[str] = None
    job_type: Optional[str] = None
    job_state: Optional[str] = None
    message: Optional[str] = None
    percent_complete: Optional[int] = None

    def is_scheduled_bios_job(self) -> bool:
        return self.job_type == "BIOSConfiguration" and self.job_state in (
            "Scheduled",
            "Scheduling",
            "New",
        )
