"""
Lenovo XCC OEM resources.

XCC reports its lockdown and IPMI-over-LAN settings in the manager's
``Oem.Lenovo`` block, and account password rules in
``AccountService.Oem.Lenovo``.
"""

from typing import Optional

from .. import EnabledDisabled, RedfishModel


class LenovoManagerOem(RedfishModel):
    lockdown_mode: Optional[EnabledDisabled] = None
    ipmi_over_lan_enabled: Optional[bool] = None
    serial_over_lan_enabled: Optional[bool] = None


class LockdownModeAction(RedfishModel):
    lockdown_mode: EnabledDisabled


class PasswordPolicy(RedfishModel):
    """Fields under ``AccountService.Oem.Lenovo``."""

    password_change_on_first_access: Optional[bool] = None
    password_expiration_period_days: Optional[int] = None
    password_change_interval: Optional[int] = None
    minimum_password_reuse_cycle: Optional[int] = None
    password_length: Optional[int] = None
    password_expiration_warning_period: Optional[int] = None
