"""Store keys for device and wine records.

Keys are a fixed tag followed by the device id, the same layout the deployed
ledger already uses. The two tags differ in their first character, so a
device key can never equal a wine key whatever the ids are, and within one
tag the key is the id itself, so distinct ids give distinct keys.
"""
from winechain.core.errors import InvalidArguments

DEVICE_TAG = "device"
WINE_TAG = "wine"


def _key(tag: str, device_id: str) -> str:
    if not device_id:
        raise InvalidArguments("Device id must be a non-empty string")
    return tag + device_id


def device_key(device_id: str) -> str:
    """Key holding the device record for device_id."""
    return _key(DEVICE_TAG, device_id)


def wine_key(device_id: str) -> str:
    """Key holding the wine bound to device_id (and its version history)."""
    return _key(WINE_TAG, device_id)
