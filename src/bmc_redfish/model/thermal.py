from typing import Any, Dict, List, Optional

from pydantic import Field

from . import ODataLinks, RedfishModel, ResourceStatus, odata_id_to_url
from .sensor import Sensor


class TemperatureReading(RedfishModel):
    """One entry of ThermalMetrics.TemperatureReadingsCelsius."""

    data_source_uri: Optional[str] = None
    device_name: Optional[str] = None
    reading: Optional[float] = None


class ThermalMetrics(ODataLinks):
    id: Optional[str] = None
    name: Optional[str] = None
    temperature_readings_celsius: Optional[List[TemperatureReading]] = None


class Temperature(RedfishModel):
    member_id: Optional[str] = None
    name: Optional[str] = None
    sensor_number: Optional[int] = None
    reading_celsius: Optional[float] = None
    upper_threshold_non_critical: Optional[float] = None
    upper_threshold_critical: Optional[float] = None
    upper_threshold_fatal: Optional[float] = None
    lower_threshold_non_critical: Optional[float] = None
    lower_threshold_critical: Optional[float] = None
    physical_context: Optional[str] = None
    status: Optional[ResourceStatus] = None

    @classmethod
    def from_sensor(cls, sensor: Sensor) -> "Temperature":
        return cls(
            member_id=sensor.id,
            name=sensor.name or sensor.id,
            reading_celsius=sensor.reading,
            upper_threshold_non_critical=sensor.threshold("upper_caution"),
            upper_threshold_critical=sensor.threshold("upper_critical"),
            upper_threshold_fatal=sensor.threshold("upper_fatal"),
            lower_threshold_non_critical=sensor.threshold("lower_caution"),
            lower_threshold_critical=sensor.threshold("lower_critical"),
            physical_context=sensor.physical_context,
            status=sensor.status,
        )

    @classmethod
    def from_reading(cls, reading: TemperatureReading) -> "Temperature":
        source = odata_id_to_url(reading.data_source_uri) if reading.data_source_uri else None
        member_id = source.rsplit("/", 1)[-1] if source else None
        return cls(
            member_id=member_id,
            name=reading.device_name or member_id,
            reading_celsius=reading.reading,
        )


class Fan(RedfishModel):
    member_id: Optional[str] = None
    name: Optional[str] = None
    fan_name: Optional[str] = None
    reading: Optional[float] = None
    reading_units: Optional[str] = None
    lower_threshold_critical: Optional[float] = None
    physical_context: Optional[str] = None
    status: Optional[ResourceStatus] = None

    @classmethod
    def from_sensor(cls, sensor: Sensor) -> "Fan":
        return cls(
            member_id=sensor.id,
            name=sensor.name or sensor.id,
            reading=sensor.reading,
            reading_units=sensor.reading_units,
            lower_threshold_critical=sensor.threshold("lower_critical"),
            physical_context=sensor.physical_context,
            status=sensor.status,
        )


class LeakDetector(ODataLinks):
    id: Optional[str] = None
    name: Optional[str] = None
    detector_state: Optional[str] = None
    leak_detector_type: Optional[str] = None
    physical_context: Optional[str] = None
    status: Optional[ResourceStatus] = None


class Thermal(ODataLinks):
    id: Optional[str] = None
    name: Optional[str] = None
    temperatures: List[Temperature] = Field(default_factory=list)
    fans: List[Fan] = Field(default_factory=list)
    leak_detectors: Optional[List[LeakDetector]] = None
    redundancy: Optional[List[Dict[str, Any]]] = None
