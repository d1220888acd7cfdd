"""Tests for the Lenovo XCC backend."""

import pytest

from bmc_redfish.common import Boot
from bmc_redfish.lenovo import LenovoBmc
from bmc_redfish.model import EnabledDisabled

from conftest import ROOT, register_boot_options, writes


@pytest.fixture
def lenovo(standard):
    return LenovoBmc(standard)


def test_pending_reads_bios_pending(lenovo, requests_mock):
    requests_mock.get(f"{ROOT}/Systems/1/Bios/Pending", json={"Attributes": {"OperatingModes_ChooseOperatingMode": "MaximumPerformance", "Q": 1}})
    requests_mock.get(f"{ROOT}/Systems/1/Bios", json={"Attributes": {"OperatingModes_ChooseOperatingMode": "Efficiency", "Q": 1}})

    assert lenovo.pending() == {"OperatingModes_ChooseOperatingMode": "MaximumPerformance"}


def test_clear_pending_restores_current_values(lenovo, requests_mock):
    requests_mock.get(f"{ROOT}/Systems/1/Bios/Pending", json={"Attributes": {"A": "new"}})
    requests_mock.get(f"{ROOT}/Systems/1/Bios", json={"Attributes": {"A": "old"}})
    patch = requests_mock.patch(f"{ROOT}/Systems/1/Bios/Pending", status_code=200)

    lenovo.clear_pending()

    assert patch.last_request.json() == {"Attributes": {"A": "old"}}


def test_boot_first_patches_pending(lenovo, requests_mock):
    register_boot_options(
        requests_mock,
        "1",
        {
            "Boot0001": ("Hard Disk", "HD(1,GPT,0x800)"),
            "Boot0002": ("UEFI PXEv4 (MAC:0894EF000001)", None),
        },
    )
    patch = requests_mock.patch(f"{ROOT}/Systems/1/Pending", status_code=200)

    lenovo.boot_first(Boot.Pxe)

    assert patch.last_request.json() == {"Boot": {"BootOrder": ["Boot0002", "Boot0001"]}}


def test_lockdown_enable(lenovo, requests_mock):
    action = requests_mock.post(
        f"{ROOT}/Managers/bmc/Actions/Oem/LenovoManager.SetLockdownMode",
        status_code=200,
    )
    requests_mock.patch(f"{ROOT}/Systems/1/SecureBoot", status_code=200)

    lenovo.lockdown(EnabledDisabled.Enabled)

    assert action.last_request.json() == {"LockdownMode": "Enabled"}
    assert requests_mock.request_history[-1].json() == {"SecureBootEnable": True}


def test_lockdown_disable_order(lenovo, requests_mock):
    requests_mock.post(f"{ROOT}/Managers/bmc/Actions/Oem/LenovoManager.SetLockdownMode", status_code=200)
    requests_mock.patch(f"{ROOT}/Systems/1/SecureBoot", status_code=200)

    lenovo.lockdown(EnabledDisabled.Disabled)

    assert [r.method for r in requests_mock.request_history] == ["PATCH", "POST"]
    assert requests_mock.request_history[1].json() == {"LockdownMode": "Disabled"}


@pytest.mark.parametrize("target", [EnabledDisabled.Enabled, EnabledDisabled.Disabled])
def test_lockdown_twice_is_stable(lenovo, requests_mock, target):
    # Start from Partial: lockdown mode on, secure boot off
    state = {"LockdownMode": "Enabled", "SecureBootEnable": False}

    def update(request, context):
        state.update(request.json())
        return ""

    requests_mock.get(
        f"{ROOT}/Managers/bmc",
        json=lambda request, context: {"Id": "bmc", "Oem": {"Lenovo": {"LockdownMode": state["LockdownMode"]}}},
    )
    requests_mock.post(f"{ROOT}/Managers/bmc/Actions/Oem/LenovoManager.SetLockdownMode", text=update)
    requests_mock.get(
        f"{ROOT}/Systems/1/SecureBoot",
        json=lambda request, context: {"SecureBootEnable": state["SecureBootEnable"]},
    )
    requests_mock.patch(f"{ROOT}/Systems/1/SecureBoot", text=update)

    lenovo.lockdown(target)
    first = writes(requests_mock)
    after_first = dict(state)
    lenovo.lockdown(target)

    assert writes(requests_mock, len(first)) == first
    assert state == after_first
    assert lenovo.lockdown_status().state.value == target.value


def test_lockdown_status(lenovo, requests_mock):
    requests_mock.get(
        f"{ROOT}/Managers/bmc",
        json={"Id": "bmc", "Oem": {"Lenovo": {"LockdownMode": "Enabled", "IpmiOverLanEnabled": False}}},
    )
    requests_mock.get(f"{ROOT}/Systems/1/SecureBoot", json={"SecureBootEnable": True})

    assert lenovo.lockdown_status().is_fully_enabled()
    assert not lenovo.is_ipmi_over_lan_enabled()


def test_enable_ipmi_over_lan(lenovo, requests_mock):
    patch = requests_mock.patch(f"{ROOT}/Managers/bmc", status_code=200)
    lenovo.enable_ipmi_over_lan(EnabledDisabled.Enabled)
    assert patch.last_request.json() == {"Oem": {"Lenovo": {"IpmiOverLanEnabled": True}}}


def test_password_policy(lenovo, requests_mock):
    patch = requests_mock.patch(f"{ROOT}/AccountService", status_code=200)

    lenovo.set_machine_password_policy()

    assert patch.last_request.json() == {
        "AccountLockoutThreshold": 0,
        "Oem": {
            "Lenovo": {
                "PasswordChangeOnFirstAccess": False,
                "PasswordExpirationPeriodDays": 0,
                "PasswordChangeInterval": 0,
                "MinimumPasswordReuseCycle": 0,
            }
        },
    }


def test_uefi_password_name(lenovo, requests_mock):
    action = requests_mock.post(f"{ROOT}/Systems/1/Bios/Actions/Bios.ChangePassword", status_code=200)
    assert lenovo.clear_uefi_password("old") is None
    assert action.last_request.json()["PasswordName"] == "UefiAdminPassword"
    assert action.last_request.json()["NewPassword"] == ""
