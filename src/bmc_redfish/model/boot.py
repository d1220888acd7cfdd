"""
Boot settings of a ComputerSystem.

https://redfish.dmtf.org/schemas/v1/ComputerSystem.v1_20_1.json
"""

from enum import Enum
from typing import List, Optional

from pydantic import Field

from . import ODataId, RedfishModel


class AutomaticRetryConfig(str, Enum):
    Disabled = "Disabled"
    RetryAttempts = "RetryAttempts"
    RetryAlways = "RetryAlways"


class BootSourceOverrideEnabled(str, Enum):
    Once = "Once"
    Continuous = "Continuous"
    Disabled = "Disabled"


class BootSourceOverrideTarget(str, Enum):
    """http://redfish.dmtf.org/schemas/v1/ComputerSystem.json#/definitions/BootSource"""

    None_ = "None"
    Pxe = "Pxe"
    Floppy = "Floppy"
    Cd = "Cd"
    Usb = "Usb"
    Hdd = "Hdd"
    BiosSetup = "BiosSetup"
    Utilities = "Utilities"
    Diags = "Diags"
    UefiShell = "UefiShell"
    UefiTarget = "UefiTarget"
    SDCard = "SDCard"
    UefiHttp = "UefiHttp"
    RemoteDrive = "RemoteDrive"
    UefiBootNext = "UefiBootNext"
    Recovery = "Recovery"


class TrustedModuleRequiredToBoot(str, Enum):
    Disabled = "Disabled"
    Required = "Required"


class SystemBoot(RedfishModel):
    automatic_retry_attempts: Optional[int] = None
    automatic_retry_config: Optional[AutomaticRetryConfig] = None
    boot_next: Optional[str] = None
    boot_order: List[str] = Field(default_factory=list)
    boot_options: Optional[ODataId] = None
    boot_source_override_enabled: Optional[BootSourceOverrideEnabled] = None
    boot_source_override_target: Optional[BootSourceOverrideTarget] = None
    boot_source_override_mode: Optional[str] = None
    http_boot_uri: Optional[str] = None
    trusted_module_required_to_boot: Optional[TrustedModuleRequiredToBoot] = None
    uefi_target_boot_source_override: Optional[str] = None
