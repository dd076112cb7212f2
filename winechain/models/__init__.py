"""Data models for devices, wines, and audit records."""
from winechain.models.device import Device, DeviceStatus
from winechain.models.wine import AuditRecord, Wine, WineHistory

__all__ = [
    "AuditRecord",
    "Device",
    "DeviceStatus",
    "Wine",
    "WineHistory",
]
