from typing import List, Optional

from pydantic import Field

from . import ODataId, ODataLinks, ResourceStatus


class Drive(ODataLinks):
    id: str
    name: Optional[str] = None
    manufacturer: Optional[str] = None
    model: Optional[str] = None
    serial_number: Optional[str] = None
    part_number: Optional[str] = None
    revision: Optional[str] = None
    capacity_bytes: Optional[int] = None
    media_type: Optional[str] = None
    protocol: Optional[str] = None
    capable_speed_gbs: Optional[float] = None
    negotiated_speed_gbs: Optional[float] = None
    predicted_media_life_left_percent: Optional[float] = None
    failure_predicted: Optional[bool] = None
    status: Optional[ResourceStatus] = None


class Storage(ODataLinks):
    id: str
    name: Optional[str] = None
    drives: List[ODataId] = Field(default_factory=list)
    status: Optional[ResourceStatus] = None
