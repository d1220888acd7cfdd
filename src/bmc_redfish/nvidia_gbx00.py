"""
NVIDIA GB200 (Bianca) backend.

GB200 spreads its inventory over a federation of chassis (``PDB_0``,
``Chassis_0``, ``HGX_*``, ...). Power and thermal telemetry are assembled by
walking every chassis and picking sensors by id.
"""

import logging
from typing import Any, List, Optional

from .common import Boot, MachineSetupStatus
from .errors import NotSupportedError
from .model import EnabledDisabled
from .model.boot import BootSourceOverrideEnabled
from .model.ethernet_interface import EthernetInterface
from .model.network_device_function import NetworkDeviceFunction
from .model.port import NetworkPort
from .model.power import Power, PowerSupply, Voltage
from .model.sel import LogEntry
from .model.sensor import GPUSensors
from .model.system import PCIeDevice
from .model.thermal import Fan, LeakDetector, Temperature, Thermal, ThermalMetrics
from .model.update_service import ComponentType
from .standard import BOOT_OVERRIDE_TARGETS, RedfishStandard

logger = logging.getLogger(__name__)

UEFI_PASSWORD_NAME = "AdminPassword"
POWER_DISTRIBUTION_BOARD = "PDB_0"
FAN_CHASSIS = "Chassis_0"
NO_SYSTEM_ETHERNET = "GB200 doesn't have Systems EthernetInterface"
NO_DEVICE_FUNCTIONS = "GB200 doesn't have Device Functions in NetworkAdapters yet"


class Gbx00Bmc:
    """NVIDIA GB200. Operations not defined here are served by the standard backend."""

    def __init__(self, s: RedfishStandard) -> None:
        self.s = s

    def __getattr__(self, name: str) -> Any:
        if name == "s":
            raise AttributeError(name)
        return getattr(self.s, name)

    def _sensor_urls(self, chassis_id: str) -> List[str]:
        return self.s.member_urls(f"Chassis/{chassis_id}/Sensors")

    # Telemetry

    def get_power_metrics(self) -> Power:
        """
        Assemble power supplies and voltages from the chassis federation.

        The two hot-swap controllers on PDB_0 stand in for power supplies:
        ``HSC_{n}_Pwr`` gives watts and capacity, ``HSC_{n}_Cur`` gives amps.
        Every ``*Volt*`` sensor of every chassis becomes a Voltage.
        """
        _, pdb = self.s.client.get(f"Chassis/{POWER_DISTRIBUTION_BOARD}", PowerSupply)
        supplies = {
            "HSC_0": pdb.model_copy(update={"member_id": "HSC_0"}),
            "HSC_1": pdb.model_copy(update={"member_id": "HSC_1"}),
        }
        voltages = []

        for chassis_id in self.s.get_chassis_all():
            chassis = self.s.get_chassis(chassis_id)
            if chassis.sensors is None:
                continue
            for url in self._sensor_urls(chassis_id):
                if chassis_id == POWER_DISTRIBUTION_BOARD:
                    for hsc, supply in supplies.items():
                        if f"{hsc}_Pwr" in url:
                            sensor = self.s.get_sensor(url)
                            supply.last_power_output_watts = sensor.reading
                            supply.power_output_watts = sensor.reading
                            supply.power_capacity_watts = sensor.reading_range_max
                        elif f"{hsc}_Cur" in url:
                            supply.power_output_amps = self.s.get_sensor(url).reading
                if "Volt" in url:
                    voltages.append(Voltage.from_sensor(self.s.get_sensor(url)))

        return Power(
            id="Power",
            name="Power",
            power_supplies=list(supplies.values()),
            voltages=voltages,
        )

    def get_thermal_metrics(self) -> Thermal:
        """
        Assemble temperatures, fans and leak detectors from the chassis federation.

        Fans are not under Thermal on GB200; they are the ``*FAN*`` sensors
        of Chassis_0.
        """
        temperatures = []
        fans = []
        leak_detectors = []

        for chassis_id in self.s.get_chassis_all():
            chassis = self.s.get_chassis(chassis_id)
            if chassis.thermal_subsystem is not None:
                base = f"Chassis/{chassis_id}/ThermalSubsystem"
                _, metrics = self.s.client.get(f"{base}/ThermalMetrics", ThermalMetrics)
                for reading in metrics.temperature_readings_celsius or []:
                    temperatures.append(Temperature.from_reading(reading))
                # The liquid cooled boards report leak detectors
                for url in self.s.member_urls(f"{base}/LeakDetection/LeakDetectors"):
                    _, detector = self.s.client.get(url, LeakDetector)
                    leak_detectors.append(detector)

            sensor_urls: List[str] = []
            if chassis.sensors is not None or chassis_id == FAN_CHASSIS:
                sensor_urls = self._sensor_urls(chassis_id)
            if chassis.sensors is not None:
                for url in sensor_urls:
                    if "Temp" in url:
                        temperatures.append(Temperature.from_sensor(self.s.get_sensor(url)))
            if chassis_id == FAN_CHASSIS:
                for url in sensor_urls:
                    if "FAN" in url:
                        fans.append(Fan.from_sensor(self.s.get_sensor(url)))

        return Thermal(
            id="Thermal",
            name="Thermal",
            temperatures=temperatures,
            fans=fans,
            leak_detectors=leak_detectors,
        )

    def get_gpu_sensors(self) -> List[GPUSensors]:
        raise NotSupportedError("GB200 has no sensors under Chassis/HGX_GPU_#/Sensors/")

    def get_system_event_log(self) -> List[LogEntry]:
        return self.s.get_log_entries(f"Systems/{self.s.system_id}/LogServices/SEL/Entries")

    def pcie_devices(self) -> List[PCIeDevice]:
        """Enabled PCIe devices of every non-BMC chassis, sorted by manufacturer."""
        devices = self.s.pcie_devices_from_chassis(lambda chassis_id: "BMC" in chassis_id)
        return sorted(devices, key=lambda d: d.manufacturer or "")

    # Setup

    def machine_setup(self, boot_interface_mac: Optional[str] = None) -> None:
        self.s.disable_secure_boot()
        self.set_boot_order_dpu_first(boot_interface_mac)

    def machine_setup_status(self, boot_interface_mac: Optional[str] = None) -> MachineSetupStatus:
        diffs = self.s.secure_boot_diffs()
        if boot_interface_mac:
            diffs.extend(self.s.first_boot_option_diffs(boot_interface_mac))
        return MachineSetupStatus(diffs=diffs)

    def set_boot_order_dpu_first(self, boot_interface_mac: Optional[str] = None) -> None:
        if not boot_interface_mac:
            raise NotSupportedError(
                "set_dpu_first_boot_order without mac address is not possible on GB200 "
                "since NetworkDeviceFunctions and PCIeDevices are missing"
            )
        self.change_boot_order(self.s.dpu_first_boot_order(boot_interface_mac))

    def set_machine_password_policy(self) -> None:
        body = {
            # Never lock
            "AccountLockoutThreshold": 0,
            # Smallest value GB200 accepts, in seconds
            "AccountLockoutDuration": 600,
        }
        self.s.client.patch("AccountService", body)

    def lockdown(self, target: EnabledDisabled) -> None:
        # OpenBMC has no lockdown
        logger.debug("lockdown(%s) is a no-op on GB200", EnabledDisabled(target).value)

    # Boot

    def _settings_url(self) -> str:
        return f"Systems/{self.s.system_id}/Settings"

    def boot_once(self, target: Boot) -> None:
        self.s.set_boot_override(
            BOOT_OVERRIDE_TARGETS[Boot(target)],
            BootSourceOverrideEnabled.Once,
            url=self._settings_url(),
        )

    def boot_first(self, target: Boot) -> None:
        self.change_boot_order(self.s.boot_first_order(target))

    def change_boot_order(self, boot_array: List[str]) -> None:
        self.s.client.patch(self._settings_url(), {"Boot": {"BootOrder": list(boot_array)}})

    # Firmware

    def update_firmware_multipart(
        self,
        filename: str,
        reboot: bool,
        timeout: float,
        component_type: ComponentType,
    ) -> str:
        return self.s.update_firmware_multipart(filename, reboot, timeout, component_type, parameters={})

    # Security

    def change_uefi_password(self, current_uefi_password: str, new_uefi_password: str) -> Optional[str]:
        return self.s.change_bios_password(UEFI_PASSWORD_NAME, current_uefi_password, new_uefi_password)

    def clear_uefi_password(self, current_uefi_password: str) -> Optional[str]:
        return self.change_uefi_password(current_uefi_password, "")

    # Network

    def get_system_ethernet_interfaces(self) -> List[str]:
        raise NotSupportedError(NO_SYSTEM_ETHERNET)

    def get_system_ethernet_interface(self, id: str) -> EthernetInterface:
        raise NotSupportedError(NO_SYSTEM_ETHERNET)

    def get_ports(self, chassis_id: str, network_adapter: Optional[str] = None) -> List[str]:
        adapter = network_adapter or self.s.default_network_adapter(chassis_id)
        return self.s.get_members(f"Chassis/{chassis_id}/NetworkAdapters/{adapter}/Ports")

    def get_port(self, chassis_id: str, id: str, network_adapter: Optional[str] = None) -> NetworkPort:
        adapter = network_adapter or self.s.default_network_adapter(chassis_id)
        _, port = self.s.client.get(f"Chassis/{chassis_id}/NetworkAdapters/{adapter}/Ports/{id}", NetworkPort)
        return port

    def get_network_device_functions(self, chassis_id: str, network_adapter: Optional[str] = None) -> List[str]:
        raise NotSupportedError(NO_DEVICE_FUNCTIONS)

    def get_network_device_function(
        self,
        chassis_id: str,
        id: str,
        network_adapter: Optional[str] = None,
    ) -> NetworkDeviceFunction:
        raise NotSupportedError(NO_DEVICE_FUNCTIONS)
