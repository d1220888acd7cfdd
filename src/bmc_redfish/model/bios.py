from typing import Any, Dict, Optional

from pydantic import Field

from . import ODataLinks
from .system import SettingsObject


class Bios(ODataLinks):
    """
    BIOS attributes are vendor and model specific, so they stay a plain dict.
    Values keep their JSON type (string, number, bool).
    """

    id: Optional[str] = None
    name: Optional[str] = None
    attribute_registry: Optional[str] = None
    attributes: Dict[str, Any] = Field(default_factory=dict)
    redfish_settings: Optional[SettingsObject] = Field(None, alias="@Redfish.Settings")
