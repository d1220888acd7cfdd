from typing import Any, Dict, List, Optional

from . import ODataLinks, RedfishModel, ResourceStatus
from .sensor import Sensor


class PowerMetrics(RedfishModel):
    interval_in_min: Optional[int] = None
    min_consumed_watts: Optional[float] = None
    max_consumed_watts: Optional[float] = None
    average_consumed_watts: Optional[float] = None


class PowerLimit(RedfishModel):
    limit_in_watts: Optional[float] = None
    limit_exception: Optional[str] = None
    correction_in_ms: Optional[int] = None


class PowerControl(RedfishModel):
    member_id: Optional[str] = None
    name: Optional[str] = None
    power_consumed_watts: Optional[float] = None
    power_capacity_watts: Optional[float] = None
    power_requested_watts: Optional[float] = None
    power_allocated_watts: Optional[float] = None
    power_metrics: Optional[PowerMetrics] = None
    power_limit: Optional[PowerLimit] = None


class PowerSupply(RedfishModel):
    member_id: Optional[str] = None
    name: Optional[str] = None
    manufacturer: Optional[str] = None
    model: Optional[str] = None
    serial_number: Optional[str] = None
    part_number: Optional[str] = None
    firmware_version: Optional[str] = None
    power_supply_type: Optional[str] = None
    status: Optional[ResourceStatus] = None
    power_capacity_watts: Optional[float] = None
    last_power_output_watts: Optional[float] = None
    power_output_watts: Optional[float] = None
    power_input_watts: Optional[float] = None
    power_output_amps: Optional[float] = None
    line_input_voltage: Optional[float] = None
    efficiency_percent: Optional[float] = None


class Voltage(RedfishModel):
    member_id: Optional[str] = None
    name: Optional[str] = None
    sensor_number: Optional[int] = None
    reading_volts: Optional[float] = None
    upper_threshold_non_critical: Optional[float] = None
    upper_threshold_critical: Optional[float] = None
    upper_threshold_fatal: Optional[float] = None
    lower_threshold_non_critical: Optional[float] = None
    lower_threshold_critical: Optional[float] = None
    lower_threshold_fatal: Optional[float] = None
    physical_context: Optional[str] = None
    status: Optional[ResourceStatus] = None

    @classmethod
    def from_sensor(cls, sensor: Sensor) -> "Voltage":
        return cls(
            member_id=sensor.id,
            name=sensor.name or sensor.id,
            reading_volts=sensor.reading,
            upper_threshold_non_critical=sensor.threshold("upper_caution"),
            upper_threshold_critical=sensor.threshold("upper_critical"),
            upper_threshold_fatal=sensor.threshold("upper_fatal"),
            lower_threshold_non_critical=sensor.threshold("lower_caution"),
            lower_threshold_critical=sensor.threshold("lower_critical"),
            lower_threshold_fatal=sensor.threshold("lower_fatal"),
            physical_context=sensor.physical_context,
            status=sensor.status,
        )


class Power(ODataLinks):
    id: Optional[str] = None
    name: Optional[str] = None
    power_control: List[PowerControl] = []
    power_supplies: Optional[List[PowerSupply]] = None
    voltages: Optional[List[Voltage]] = None
    redundancy: Optional[List[Dict[str, Any]]] = None
