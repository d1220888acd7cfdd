from typing import List, Optional

from pydantic import Field

from . import ODataId, ODataLinks, ResourceStatus


class SoftwareInventory(ODataLinks):
    id: str
    name: Optional[str] = None
    description: Optional[str] = None
    version: Optional[str] = None
    updateable: Optional[bool] = None
    release_date: Optional[str] = None
    software_id: Optional[str] = None
    manufacturer: Optional[str] = None
    status: Optional[ResourceStatus] = None
    related_item: List[ODataId] = Field(default_factory=list)
