from typing import Any, Dict, Optional

from pydantic import Field

from . import ODataId, ODataLinks, RedfishModel, ResourceStatus


class SerialConsole(RedfishModel):
    service_enabled: Optional[bool] = None
    max_concurrent_sessions: Optional[int] = None


class Manager(ODataLinks):
    id: str
    name: Optional[str] = None
    manager_type: Optional[str] = None
    manufacturer: Optional[str] = None
    model: Optional[str] = None
    firmware_version: Optional[str] = None
    uuid: Optional[str] = Field(None, alias="UUID")
    status: Optional[ResourceStatus] = None
    serial_console: Optional[SerialConsole] = None
    ethernet_interfaces: Optional[ODataId] = None
    network_protocol: Optional[ODataId] = None
    log_services: Optional[ODataId] = None
    oem: Optional[Dict[str, Any]] = None
