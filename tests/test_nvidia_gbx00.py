"""Tests for the NVIDIA GB200 backend."""

import pytest

from bmc_redfish.common import Boot
from bmc_redfish.errors import NotSupportedError
from bmc_redfish.model import EnabledDisabled
from bmc_redfish.model.update_service import ComponentType
from bmc_redfish.nvidia_gbx00 import Gbx00Bmc

from conftest import ROOT, link, members, register_boot_options


@pytest.fixture
def gbx(standard):
    standard.set_system_id("System_0")
    standard.set_manager_id("BMC_0")
    return Gbx00Bmc(standard)


def sensor(requests_mock, chassis_id, sensor_id, reading, reading_range_max=None):
    body = {"@odata.id": f"{ROOT}/Chassis/{chassis_id}/Sensors/{sensor_id}", "Id": sensor_id, "Reading": reading}
    if reading_range_max is not None:
        body["ReadingRangeMax"] = reading_range_max
    requests_mock.get(f"{ROOT}/Chassis/{chassis_id}/Sensors/{sensor_id}", json=body)


def test_boot_first_hard_disk_patches_settings(gbx, requests_mock):
    register_boot_options(
        requests_mock,
        "System_0",
        {
            "Boot0001": ("UEFI HTTPv4 (MAC:B83FD2909582)", "PciRoot(0x0)/MAC(B83FD2909582,0x1)/IPv4(0.0.0.0)/Uri()"),
            "Boot0002": ("UEFI PXEv4 (MAC:B83FD2909582)", "PciRoot(0x0)/MAC(B83FD2909582,0x1)/IPv4(0.0.0.0)"),
            "Boot0003": ("ubuntu", "HD(1,GPT,A04D,0x800,0x100000)/\\EFI\\ubuntu\\shimaa64.efi"),
        },
    )
    patch = requests_mock.patch(f"{ROOT}/Systems/System_0/Settings", status_code=204)

    gbx.boot_first(Boot.HardDisk)

    assert patch.call_count == 1
    assert patch.last_request.json() == {"Boot": {"BootOrder": ["Boot0003", "Boot0001", "Boot0002"]}}


def test_boot_once_patches_settings(gbx, requests_mock):
    patch = requests_mock.patch(f"{ROOT}/Systems/System_0/Settings", status_code=204)
    gbx.boot_once(Boot.UefiHttp)
    assert patch.last_request.json() == {
        "Boot": {"BootSourceOverrideEnabled": "Once", "BootSourceOverrideTarget": "UefiHttp"}
    }


def test_power_metrics_assembly(gbx, requests_mock):
    requests_mock.get(f"{ROOT}/Chassis", json=members("Chassis/PDB_0", "Chassis/Chassis_0", "Chassis/HGX_GPU_0"))
    requests_mock.get(
        f"{ROOT}/Chassis/PDB_0",
        json={"Id": "PDB_0", "Name": "PDB_0", "Manufacturer": "NVIDIA", "Sensors": link("Chassis/PDB_0/Sensors")},
    )
    requests_mock.get(f"{ROOT}/Chassis/Chassis_0", json={"Id": "Chassis_0", "Sensors": link("Chassis/Chassis_0/Sensors")})
    requests_mock.get(f"{ROOT}/Chassis/HGX_GPU_0", json={"Id": "HGX_GPU_0"})
    requests_mock.get(
        f"{ROOT}/Chassis/PDB_0/Sensors",
        json=members(*(f"Chassis/PDB_0/Sensors/{s}" for s in ("HSC_0_Pwr", "HSC_0_Cur", "HSC_1_Pwr", "HSC_1_Cur"))),
    )
    sensor(requests_mock, "PDB_0", "HSC_0_Pwr", 250, 500)
    sensor(requests_mock, "PDB_0", "HSC_0_Cur", 20)
    sensor(requests_mock, "PDB_0", "HSC_1_Pwr", 240, 500)
    sensor(requests_mock, "PDB_0", "HSC_1_Cur", 19)
    requests_mock.get(
        f"{ROOT}/Chassis/Chassis_0/Sensors",
        json=members("Chassis/Chassis_0/Sensors/CPU_0_Volt_0", "Chassis/Chassis_0/Sensors/CPU_0_Volt_1"),
    )
    sensor(requests_mock, "Chassis_0", "CPU_0_Volt_0", 0.89)
    sensor(requests_mock, "Chassis_0", "CPU_0_Volt_1", 1.2)

    power = gbx.get_power_metrics()

    supplies = power.power_supplies
    assert len(supplies) == 2
    assert [s.member_id for s in supplies] == ["HSC_0", "HSC_1"]
    assert [s.power_output_watts for s in supplies] == [250, 240]
    assert [s.last_power_output_watts for s in supplies] == [250, 240]
    assert [s.power_capacity_watts for s in supplies] == [500, 500]
    assert [s.power_output_amps for s in supplies] == [20, 19]
    assert supplies[0].manufacturer == "NVIDIA"
    assert len(power.voltages) == 2
    assert [v.reading_volts for v in power.voltages] == [0.89, 1.2]


def test_thermal_metrics_assembly(gbx, requests_mock):
    requests_mock.get(f"{ROOT}/Chassis", json=members("Chassis/Chassis_0", "Chassis/HGX_GPU_0"))
    requests_mock.get(
        f"{ROOT}/Chassis/Chassis_0",
        json={"Id": "Chassis_0", "Sensors": link("Chassis/Chassis_0/Sensors")},
    )
    requests_mock.get(
        f"{ROOT}/Chassis/HGX_GPU_0",
        json={"Id": "HGX_GPU_0", "ThermalSubsystem": link("Chassis/HGX_GPU_0/ThermalSubsystem")},
    )
    requests_mock.get(
        f"{ROOT}/Chassis/Chassis_0/Sensors",
        json=members(
            "Chassis/Chassis_0/Sensors/CPU_0_Temp_0",
            "Chassis/Chassis_0/Sensors/FAN_0_Speed",
            "Chassis/Chassis_0/Sensors/CPU_0_Volt_0",
        ),
    )
    sensor(requests_mock, "Chassis_0", "CPU_0_Temp_0", 55)
    sensor(requests_mock, "Chassis_0", "FAN_0_Speed", 9000)
    requests_mock.get(
        f"{ROOT}/Chassis/HGX_GPU_0/ThermalSubsystem/ThermalMetrics",
        json={
            "TemperatureReadingsCelsius": [
                {"DataSourceUri": f"{ROOT}/Chassis/HGX_GPU_0/Sensors/HGX_GPU_0_TEMP_1", "Reading": 41.5}
            ]
        },
    )
    requests_mock.get(
        f"{ROOT}/Chassis/HGX_GPU_0/ThermalSubsystem/LeakDetection/LeakDetectors",
        json=members("Chassis/HGX_GPU_0/ThermalSubsystem/LeakDetection/LeakDetectors/Tray_0"),
    )
    requests_mock.get(
        f"{ROOT}/Chassis/HGX_GPU_0/ThermalSubsystem/LeakDetection/LeakDetectors/Tray_0",
        json={"Id": "Tray_0", "DetectorState": "OK"},
    )

    thermal = gbx.get_thermal_metrics()

    assert sorted(t.member_id for t in thermal.temperatures) == ["CPU_0_Temp_0", "HGX_GPU_0_TEMP_1"]
    assert [f.member_id for f in thermal.fans] == ["FAN_0_Speed"]
    assert thermal.fans[0].reading == 9000
    assert [d.detector_state for d in thermal.leak_detectors] == ["OK"]


def test_update_firmware_multipart(gbx, requests_mock, tmp_path):
    image = tmp_path / "fw.bin"
    image.write_bytes(b"firmware")
    requests_mock.get(f"{ROOT}/UpdateService", json={"MultipartHttpPushUri": f"{ROOT}/UpdateService/update-multipart"})
    push = requests_mock.post(f"{ROOT}/UpdateService/update-multipart", status_code=202, json={"Id": "JID_1234"})

    task_id = gbx.update_firmware_multipart(str(image), False, 600, ComponentType.BMC)

    assert task_id == "JID_1234"
    request = push.last_request
    assert request.headers["Content-Type"].startswith("multipart/form-data")
    assert b"{}" in request.body


def test_system_ethernet_interface_not_supported(gbx, requests_mock):
    with pytest.raises(NotSupportedError) as exc_info:
        gbx.get_system_ethernet_interface("any")

    assert str(exc_info.value) == "GB200 doesn't have Systems EthernetInterface"
    assert requests_mock.call_count == 0


@pytest.mark.parametrize(
    "operation",
    [
        lambda b: b.get_system_ethernet_interfaces(),
        lambda b: b.get_gpu_sensors(),
        lambda b: b.get_network_device_functions("Chassis_0"),
        lambda b: b.get_network_device_function("Chassis_0", "0"),
        lambda b: b.set_boot_order_dpu_first(None),
    ],
)
def test_not_supported_surface(gbx, requests_mock, operation):
    with pytest.raises(NotSupportedError):
        operation(gbx)
    assert requests_mock.call_count == 0


def test_pcie_devices_skip_bmc_and_sort(gbx, requests_mock):
    requests_mock.get(f"{ROOT}/Chassis", json=members("Chassis/BMC_0", "Chassis/HGX_GPU_0", "Chassis/Chassis_0"))
    bmc = requests_mock.get(f"{ROOT}/Chassis/BMC_0", json={"Id": "BMC_0", "PCIeDevices": link("Chassis/BMC_0/PCIeDevices")})
    requests_mock.get(
        f"{ROOT}/Chassis/HGX_GPU_0",
        json={"Id": "HGX_GPU_0", "PCIeDevices": link("Chassis/HGX_GPU_0/PCIeDevices")},
    )
    requests_mock.get(
        f"{ROOT}/Chassis/Chassis_0",
        json={"Id": "Chassis_0", "PCIeDevices": link("Chassis/Chassis_0/PCIeDevices")},
    )
    requests_mock.get(f"{ROOT}/Chassis/HGX_GPU_0/PCIeDevices", json=members("Chassis/HGX_GPU_0/PCIeDevices/GPU_0"))
    requests_mock.get(
        f"{ROOT}/Chassis/HGX_GPU_0/PCIeDevices/GPU_0",
        json={"Id": "GPU_0", "Manufacturer": "NVIDIA", "Status": {"State": "Enabled"}},
    )
    requests_mock.get(
        f"{ROOT}/Chassis/Chassis_0/PCIeDevices",
        json=members("Chassis/Chassis_0/PCIeDevices/NIC_0", "Chassis/Chassis_0/PCIeDevices/NIC_1"),
    )
    requests_mock.get(
        f"{ROOT}/Chassis/Chassis_0/PCIeDevices/NIC_0",
        json={"Id": "NIC_0", "Manufacturer": "Mellanox", "Status": {"State": "Enabled"}},
    )
    requests_mock.get(
        f"{ROOT}/Chassis/Chassis_0/PCIeDevices/NIC_1",
        json={"Id": "NIC_1", "Manufacturer": "Broadcom", "Status": {"State": "Disabled"}},
    )

    devices = gbx.pcie_devices()

    assert [d.id for d in devices] == ["NIC_0", "GPU_0"]
    assert bmc.call_count == 0


@pytest.mark.parametrize("target", [EnabledDisabled.Enabled, EnabledDisabled.Disabled])
def test_lockdown_is_a_no_op(gbx, requests_mock, target):
    gbx.lockdown(target)
    gbx.lockdown(target)
    assert requests_mock.call_count == 0


def test_password_policy(gbx, requests_mock):
    patch = requests_mock.patch(f"{ROOT}/AccountService", status_code=204)
    gbx.set_machine_password_policy()
    assert patch.last_request.json() == {"AccountLockoutThreshold": 0, "AccountLockoutDuration": 600}


def test_ports_use_ports_collection(gbx, requests_mock):
    requests_mock.get(
        f"{ROOT}/Chassis/Chassis_0/NetworkAdapters/NIC_0/Ports",
        json=members("Chassis/Chassis_0/NetworkAdapters/NIC_0/Ports/0"),
    )
    assert gbx.get_ports("Chassis_0", "NIC_0") == ["0"]


def test_standard_operations_are_forwarded(gbx, requests_mock):
    requests_mock.get(f"{ROOT}/Systems/System_0", json={"Id": "System_0", "PowerState": "Off"})
    assert gbx.get_power_state().value == "Off"
