from typing import Optional

from pydantic import Field

from . import ODataLinks, RedfishModel


class Protocol(RedfishModel):
    port: Optional[int] = None
    protocol_enabled: Optional[bool] = None


class ManagerNetworkProtocol(ODataLinks):
    id: Optional[str] = None
    name: Optional[str] = None
    description: Optional[str] = None
    host_name: Optional[str] = None
    fqdn: Optional[str] = Field(None, alias="FQDN")
    dhcp: Optional[Protocol] = Field(None, alias="DHCP")
    dhcpv6: Optional[Protocol] = Field(None, alias="DHCPv6")
    http: Optional[Protocol] = Field(None, alias="HTTP")
    https: Optional[Protocol] = Field(None, alias="HTTPS")
    ipmi: Optional[Protocol] = Field(None, alias="IPMI")
    kvmip: Optional[Protocol] = Field(None, alias="KVMIP")
    rdp: Optional[Protocol] = Field(None, alias="RDP")
    rfb: Optional[Protocol] = Field(None, alias="RFB")
    ssh: Optional[Protocol] = Field(None, alias="SSH")
    snmp: Optional[Protocol] = Field(None, alias="SNMP")
    telnet: Optional[Protocol] = None
    virtual_media: Optional[Protocol] = None
