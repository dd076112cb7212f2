"""Tracking device and its lifecycle status."""
from dataclasses import dataclass, replace
from enum import Enum


class DeviceStatus(str, Enum):
    """Device lifecycle: UNENROLLED -> ENROLLED -> BOUND (terminal)."""
    UNENROLLED = "unenrolled"  # never stored; means "no record"
    ENROLLED = "enrolled"
    BOUND = "bound"


@dataclass(frozen=True)
class Device:
    """Stored device record."""
    id: str
    model: str
    brand: str
    status: DeviceStatus

    def bind(self) -> "Device":
        """Return the BOUND copy of an ENROLLED device."""
        if self.status is not DeviceStatus.ENROLLED:
            raise ValueError(f"cannot bind device in status {self.status.value}")
        return replace(self, status=DeviceStatus.BOUND)
