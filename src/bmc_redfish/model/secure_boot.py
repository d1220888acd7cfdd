from typing import Optional

from . import EnabledDisabled, ODataId, ODataLinks


class SecureBoot(ODataLinks):
    id: Optional[str] = None
    name: Optional[str] = None
    secure_boot_current_boot: Optional[EnabledDisabled] = None
    secure_boot_enable: Optional[bool] = None
    secure_boot_mode: Optional[str] = None
    secure_boot_databases: Optional[ODataId] = None
