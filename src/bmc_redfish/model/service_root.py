from typing import Any, Dict, Optional

from pydantic import Field

from . import ODataId, ODataLinks


class ServiceRoot(ODataLinks):
    id: Optional[str] = None
    name: Optional[str] = None
    redfish_version: Optional[str] = None
    uuid: Optional[str] = Field(None, alias="UUID")
    vendor: Optional[str] = None
    product: Optional[str] = None
    systems: Optional[ODataId] = None
    managers: Optional[ODataId] = None
    chassis: Optional[ODataId] = None
    account_service: Optional[ODataId] = None
    session_service: Optional[ODataId] = None
    task_service: Optional[ODataId] = None
    update_service: Optional[ODataId] = None
    oem: Optional[Dict[str, Any]] = None

    def has_oem(self, vendor: str) -> bool:
        return bool(self.oem) and any(k.lower() == vendor.lower() for k in self.oem)
