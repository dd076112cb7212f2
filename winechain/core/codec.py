"""Encode and decode device, wine, and audit records (JSON bytes)."""
import json
from typing import Any

from winechain.core.errors import MalformedRecord
from winechain.models.device import Device, DeviceStatus
from winechain.models.wine import AuditRecord, Wine

# Status strings written by older deployments
_LEGACY_STATUS = {"bind": DeviceStatus.BOUND}

_DEVICE_FIELDS = ("uid", "model", "brand", "status")
_WINE_FIELDS = (
    "owner",
    "model",
    "produce_date",
    "produce_place",
    "out_date",
    "out_place",
    "device_uid",
)


def _dumps(data: dict) -> bytes:
    return json.dumps(data, sort_keys=True, separators=(",", ":")).encode("utf-8")


def _loads(raw: bytes, kind: str) -> dict:
    try:
        data = json.loads(raw.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError, AttributeError) as e:
        raise MalformedRecord(f"{kind} record is not valid JSON: {e}") from e
    if not isinstance(data, dict):
        raise MalformedRecord(f"{kind} record must be a JSON object")
    return data


def _strings(data: dict, fields: tuple, kind: str) -> dict:
    """Pull the named fields out of data, all required and all strings."""
    missing = [f for f in fields if f not in data]
    if missing:
        raise MalformedRecord(f"{kind} record missing fields: {', '.join(missing)}")
    out = {}
    for f in fields:
        value = data[f]
        if not isinstance(value, str):
            raise MalformedRecord(f"{kind} field {f!r} must be a string")
        out[f] = value
    return out


def device_to_dict(device: Device) -> dict:
    return {
        "uid": device.id,
        "model": device.model,
        "brand": device.brand,
        "status": device.status.value,
    }


def wine_to_dict(wine: Wine) -> dict:
    return {
        "owner": wine.owner,
        "model": wine.model,
        "produce_date": wine.produce_date,
        "produce_place": wine.produce_place,
        "out_date": wine.out_date,
        "out_place": wine.out_place,
        "device_uid": wine.device_id,
    }


def audit_record_to_dict(record: AuditRecord) -> dict[str, Any]:
    return {
        "device": device_to_dict(record.device),
        "wine_histories": [
            {"timestamp": h.timestamp, "wine": wine_to_dict(h.wine)}
            for h in record.history
        ],
    }


def encode_device(device: Device) -> bytes:
    if device.status is DeviceStatus.UNENROLLED:
        raise ValueError("an unenrolled device has no stored record")
    return _dumps(device_to_dict(device))


def decode_device(raw: bytes) -> Device:
    """Decode a stored device; raises MalformedRecord on any shape mismatch."""
    item = _strings(_loads(raw, "Device"), _DEVICE_FIELDS, "Device")
    status_raw = item["status"]
    status = _LEGACY_STATUS.get(status_raw)
    if status is None:
        try:
            status = DeviceStatus(status_raw)
        except ValueError:
            raise MalformedRecord(f"Device status {status_raw!r} is not recognised") from None
    if status is DeviceStatus.UNENROLLED:
        raise MalformedRecord("Device status 'unenrolled' cannot be stored")
    return Device(id=item["uid"], model=item["model"], brand=item["brand"], status=status)


def encode_wine(wine: Wine) -> bytes:
    return _dumps(wine_to_dict(wine))


def decode_wine(raw: bytes) -> Wine:
    """Decode a stored wine; raises MalformedRecord on any shape mismatch."""
    data = _loads(raw, "Wine")
    if "produce_date" not in data and "produce_place" not in data:
        # Older deployments tagged both produce fields "produce_date", so neither was written
        data = {**data, "produce_date": "", "produce_place": ""}
    item = _strings(data, _WINE_FIELDS, "Wine")
    return Wine(
        owner=item["owner"],
        model=item["model"],
        produce_date=item["produce_date"],
        produce_place=item["produce_place"],
        out_date=item["out_date"],
        out_place=item["out_place"],
        device_id=item["device_uid"],
    )


def encode_audit_record(record: AuditRecord) -> bytes:
    return _dumps(audit_record_to_dict(record))

