"""
Software update service.

https://redfish.dmtf.org/schemas/v1/UpdateService.v1_14_0.json
"""

from enum import Enum
from typing import Optional

from . import ODataId, ODataLinks


class TransferProtocolType(str, Enum):
    CIFS = "CIFS"
    FTP = "FTP"
    SFTP = "SFTP"
    HTTP = "HTTP"
    HTTPS = "HTTPS"
    NFS = "NFS"
    SCP = "SCP"
    TFTP = "TFTP"
    OEM = "OEM"


class ComponentType(str, Enum):
    """Firmware component a multipart image is aimed at."""

    BMC = "BMC"
    UEFI = "UEFI"
    EROTBMC = "EROTBMC"
    EROTBIOS = "EROTBIOS"
    CPLDMID = "CPLDMID"
    CPLDMB = "CPLDMB"
    CPLDPDB = "CPLDPDB"
    HGXBMC = "HGXBMC"
    Unknown = "Unknown"


class UpdateService(ODataLinks):
    id: Optional[str] = None
    name: Optional[str] = None
    service_enabled: Optional[bool] = None
    http_push_uri: Optional[str] = None
    max_image_size_bytes: Optional[int] = None
    multipart_http_push_uri: Optional[str] = None
    firmware_inventory: Optional[ODataId] = None
    software_inventory: Optional[ODataId] = None
