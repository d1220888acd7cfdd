"""Vendor-neutral result types shared by every backend."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List


class Boot(str, Enum):
    """Boot targets understood by boot_once and boot_first."""

    Pxe = "Pxe"
    HardDisk = "HardDisk"
    UefiHttp = "UefiHttp"


class _State(Enum):
    Enabled = "Enabled"
    Partial = "Partial"
    Disabled = "Disabled"


@dataclass(frozen=True)
class Status:
    """
    Whether a composite setting (lockdown, serial console) is enabled, disabled,
    or only partially applied.

    ``message`` lists the individual parts. Its format is vendor specific and
    not meant to be parsed.
    """

    state: _State
    message: str = ""

    @classmethod
    def enabled(cls, message: str = "") -> "Status":
        return cls(_State.Enabled, message)

    @classmethod
    def disabled(cls, message: str = "") -> "Status":
        return cls(_State.Disabled, message)

    @classmethod
    def partial(cls, message: str = "") -> "Status":
        return cls(_State.Partial, message)

    @classmethod
    def from_parts(cls, parts: Dict[str, bool]) -> "Status":
        """
        Enabled when every part is on, Disabled when none is, Partial otherwise.

        Args:
            parts: Part name to whether it is in its enabled position
        """
        message = ", ".join(f"{name}={value}" for name, value in parts.items())
        if parts and all(parts.values()):
            return cls.enabled(message)
        if not any(parts.values()):
            return cls.disabled(message)
        return cls.partial(message)

    def is_fully_enabled(self) -> bool:
        return self.state is _State.Enabled

    def is_fully_disabled(self) -> bool:
        return self.state is _State.Disabled

    def is_partially_enabled(self) -> bool:
        return self.state is _State.Partial

    def __str__(self) -> str:
        if self.message:
            return f"{self.state.value} ({self.message})"
        return self.state.value


@dataclass(frozen=True)
class MachineSetupDiff:
    key: str
    expected: str
    actual: str


@dataclass(frozen=True)
class MachineSetupStatus:
    """``is_done`` is True exactly when ``diffs`` is empty."""

    diffs: List[MachineSetupDiff] = field(default_factory=list)

    @property
    def is_done(self) -> bool:
        return not self.diffs
