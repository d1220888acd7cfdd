from typing import List, Optional

from pydantic import Field

from . import Collection, ODataLinks, RedfishModel, ResourceStatus


class Threshold(RedfishModel):
    reading: Optional[float] = None
    activation: Optional[str] = None


class Thresholds(RedfishModel):
    lower_caution: Optional[Threshold] = None
    lower_critical: Optional[Threshold] = None
    lower_fatal: Optional[Threshold] = None
    upper_caution: Optional[Threshold] = None
    upper_critical: Optional[Threshold] = None
    upper_fatal: Optional[Threshold] = None


class Sensor(ODataLinks):
    id: Optional[str] = None
    name: Optional[str] = None
    reading: Optional[float] = None
    reading_units: Optional[str] = None
    reading_type: Optional[str] = None
    reading_range_max: Optional[float] = None
    reading_range_min: Optional[float] = None
    physical_context: Optional[str] = None
    status: Optional[ResourceStatus] = None
    thresholds: Optional[Thresholds] = None

    def threshold(self, name: str) -> Optional[float]:
        if self.thresholds is None:
            return None
        value = getattr(self.thresholds, name)
        return value.reading if value is not None else None


class Sensors(Collection):
    pass


class GPUSensors(RedfishModel):
    gpu_id: str
    sensors: List[Sensor] = Field(default_factory=list)
