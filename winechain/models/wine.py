"""Tracked good (wine) and its reconstructed history."""
from dataclasses import dataclass, field, replace
from typing import List

from winechain.models.device import Device


@dataclass(frozen=True)
class Wine:
    """Stored wine record, keyed by the id of the device it is bound to."""
    owner: str
    model: str
    produce_date: str
    produce_place: str
    out_date: str
    out_place: str
    device_id: str

    def with_owner(self, owner: str) -> "Wine":
        return replace(self, owner=owner)


@dataclass(frozen=True)
class WineHistory:
    """One stored version of a wine record with its store timestamp."""
    timestamp: str
    wine: Wine


@dataclass
class AuditRecord:
    """Read-time projection: current device plus every wine version."""
    device: Device
    history: List[WineHistory] = field(default_factory=list)
