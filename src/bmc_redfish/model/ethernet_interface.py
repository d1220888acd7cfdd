from typing import List, Optional

from pydantic import Field

from . import ODataLinks, RedfishModel, ResourceStatus


class IPv4Address(RedfishModel):
    address: Optional[str] = None
    address_origin: Optional[str] = None
    gateway: Optional[str] = None
    subnet_mask: Optional[str] = None


class IPv6Address(RedfishModel):
    address: Optional[str] = None
    address_origin: Optional[str] = None
    address_state: Optional[str] = None
    prefix_length: Optional[int] = None


class EthernetInterface(ODataLinks):
    id: str
    name: Optional[str] = None
    description: Optional[str] = None
    host_name: Optional[str] = None
    fqdn: Optional[str] = Field(None, alias="FQDN")
    interface_enabled: Optional[bool] = None
    link_status: Optional[str] = None
    mac_address: Optional[str] = Field(None, alias="MACAddress")
    permanent_mac_address: Optional[str] = Field(None, alias="PermanentMACAddress")
    speed_mbps: Optional[int] = None
    mtu_size: Optional[int] = Field(None, alias="MTUSize")
    ipv4_addresses: List[IPv4Address] = Field(default_factory=list, alias="IPv4Addresses")
    ipv6_addresses: List[IPv6Address] = Field(default_factory=list, alias="IPv6Addresses")
    status: Optional[ResourceStatus] = None
