from typing import List, Optional

from pydantic import Field

from . import ODataLinks, ResourceStatus


class NetworkPort(ODataLinks):
    """Covers both the NetworkPort and the newer Port schema."""

    id: str
    name: Optional[str] = None
    description: Optional[str] = None
    physical_port_number: Optional[str] = None
    port_id: Optional[str] = None
    link_status: Optional[str] = None
    link_state: Optional[str] = None
    current_link_speed_mbps: Optional[int] = None
    current_speed_gbps: Optional[float] = None
    max_speed_gbps: Optional[float] = None
    port_protocol: Optional[str] = None
    port_type: Optional[str] = None
    associated_network_addresses: List[str] = Field(default_factory=list)
    status: Optional[ResourceStatus] = None
