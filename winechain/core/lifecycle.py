"""Device lifecycle: enroll a device, then bind exactly one wine to it."""
import logging
from typing import Optional

from winechain.core.codec import decode_device, encode_device, encode_wine
from winechain.core.errors import (
    AlreadyEnrolled,
    DeviceAlreadyBound,
    DeviceNotEnrolled,
    MalformedRecord,
    NotBound,
)
from winechain.core.keys import device_key, wine_key
from winechain.core.ledger import LedgerStore
from winechain.models.args import BindGoodArgs, EnrollDeviceArgs
from winechain.models.device import Device, DeviceStatus
from winechain.models.wine import Wine

logger = logging.getLogger(__name__)


def read_device(store: LedgerStore, device_id: str) -> Optional[Device]:
    """Current device record, or None if the device was never enrolled."""
    raw = store.get(device_key(device_id))
    if raw is None:
        return None
    device = decode_device(raw)
    if device.id != device_id:
        raise MalformedRecord(f"Device record under {device_id!r} belongs to {device.id!r}")
    return device


def require_bound(store: LedgerStore, device_id: str) -> Device:
    """Device record for device_id; raises unless it exists and is BOUND."""
    device = read_device(store, device_id)
    if device is None:
        raise DeviceNotEnrolled(device_id)
    if device.status is not DeviceStatus.BOUND:
        raise NotBound(device_id)
    return device


def enroll_device(store: LedgerStore, args: EnrollDeviceArgs) -> Device:
    """Create an ENROLLED device record. Fails if any record exists for the id."""
    if store.get(device_key(args.id)) is not None:
        logger.warning("Enroll rejected: device %s already enrolled", args.id)
        raise AlreadyEnrolled(args.id)

    device = Device(id=args.id, model=args.model, brand=args.brand, status=DeviceStatus.ENROLLED)
    store.put(device_key(args.id), encode_device(device))
    logger.info("Enrolled device %s (%s %s)", device.id, device.brand, device.model)
    return device


def bind_good(store: LedgerStore, args: BindGoodArgs) -> Wine:
    """Bind a wine to an ENROLLED device, moving the device to BOUND.

    Both records are encoded before anything is written; the device write
    lands before the wine write.
    """
    device = read_device(store, args.id)
    if device is None:
        logger.warning("Bind rejected: device %s not enrolled", args.id)
        raise DeviceNotEnrolled(args.id)
    if device.status is not DeviceStatus.ENROLLED:
        logger.warning("Bind rejected: device %s already bound", args.id)
        raise DeviceAlreadyBound(args.id)

    wine = Wine(
        owner=args.owner,
        model=args.model,
        produce_date=args.produce_date,
        produce_place=args.produce_place,
        out_date=args.out_date,
        out_place=args.out_place,
        device_id=args.id,
    )
    device_bytes = encode_device(device.bind())
    wine_bytes = encode_wine(wine)

    store.put(device_key(args.id), device_bytes)
    store.put(wine_key(args.id), wine_bytes)
    logger.info("Bound wine %s (owner %s) to device %s", wine.model, wine.owner, args.id)
    return wine
