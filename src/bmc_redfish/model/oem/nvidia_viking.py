"""
BIOS attribute groups of NVIDIA Viking (DGX H100 class) hosts.

Each ``*Attributes`` model is one group of related BIOS attributes; the
matching ``Set*`` model is the ``{"Attributes": {...}}`` body PATCHed to the
BIOS settings URI.
"""

from typing import Optional

from pydantic import Field

from .. import EnableDisable, EnabledDisabled, ODataLinks, RedfishModel

KCS_DENY_ALL = "Deny All"
KCS_ALLOW_ALL = "Allow All"


class BiosAttributes(RedfishModel):
    """The subset of Viking BIOS attributes this library reads."""

    acpi_spcr_baud_rate: Optional[str] = None
    acpi_spcr_console_redirection_enable: Optional[bool] = None
    acpi_spcr_flow_control: Optional[str] = None
    acpi_spcr_port: Optional[str] = None
    acpi_spcr_terminal_type: Optional[str] = None
    baud_rate0: Optional[str] = None
    boot_order: Optional[str] = None
    console_redirection_enable0: Optional[bool] = None
    enable_sgx: Optional[EnabledDisabled] = None
    kcs_interface_disable: Optional[str] = None
    ipv4_http: Optional[EnabledDisabled] = None
    ipv4_pxe: Optional[EnabledDisabled] = None
    ipv6_http: Optional[EnabledDisabled] = None
    ipv6_pxe: Optional[EnabledDisabled] = None
    processor_hyper_threading_disable: Optional[EnabledDisabled] = None
    processor_ltsx_enable: Optional[EnableDisable] = None
    processor_smx_enable: Optional[EnableDisable] = None
    processor_vmx_enable: Optional[EnableDisable] = None
    redfish_enable: Optional[EnabledDisabled] = None
    secure_boot_mode: Optional[str] = None
    secure_boot_support: Optional[EnabledDisabled] = None
    sriov_enable: Optional[EnableDisable] = Field(None, alias="SRIOVEnable")
    terminal_type0: Optional[str] = None
    tpm_operation: Optional[str] = None
    tpm_support: Optional[EnableDisable] = None
    vtd_support: Optional[EnableDisable] = Field(None, alias="VTdSupport")


class Bios(ODataLinks):
    attributes: BiosAttributes = Field(default_factory=BiosAttributes)


class BiosLockdownAttributes(RedfishModel):
    kcs_interface_disable: Optional[str] = None
    redfish_enable: Optional[EnabledDisabled] = None


class SetBiosLockdownAttributes(RedfishModel):
    attributes: BiosLockdownAttributes


class BiosSerialConsoleAttributes(RedfishModel):
    acpi_spcr_baud_rate: str = "115200"
    acpi_spcr_console_redirection_enable: bool = True
    acpi_spcr_flow_control: str = "None"
    acpi_spcr_port: str = "COM0"
    acpi_spcr_terminal_type: str = "VT-UTF8"
    baud_rate0: str = "115200"
    console_redirection_enable0: bool = True
    terminal_type0: str = "ANSI"


class SetBiosSerialConsoleAttributes(RedfishModel):
    attributes: BiosSerialConsoleAttributes = Field(default_factory=BiosSerialConsoleAttributes)


class TpmAttributes(RedfishModel):
    tpm_operation: str
    tpm_support: EnableDisable


class SetTpmAttributes(RedfishModel):
    attributes: TpmAttributes


class VirtAttributes(RedfishModel):
    sriov_enable: EnableDisable = Field(alias="SRIOVEnable")
    vtd_support: EnableDisable = Field(alias="VTdSupport")


class SetVirtAttributes(RedfishModel):
    attributes: VirtAttributes


class UefiHttpAttributes(RedfishModel):
    ipv4_http: EnabledDisabled
    ipv4_pxe: EnabledDisabled
    ipv6_http: EnabledDisabled
    ipv6_pxe: EnabledDisabled


class SetUefiHttpAttributes(RedfishModel):
    attributes: UefiHttpAttributes
