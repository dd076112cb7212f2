"""Change the owner of a bound wine."""
import logging

from winechain.core.codec import decode_wine, encode_wine
from winechain.core.errors import MalformedRecord, WineRecordMissing
from winechain.core.keys import wine_key
from winechain.core.ledger import LedgerStore
from winechain.core.lifecycle import require_bound
from winechain.models.args import TransferArgs
from winechain.models.wine import Wine

logger = logging.getLogger(__name__)


def transfer_ownership(store: LedgerStore, args: TransferArgs) -> Wine:
    """Write a new wine version with only the owner changed. Device is untouched."""
    require_bound(store, args.id)

    raw = store.get(wine_key(args.id))
    if raw is None:
        logger.error("Device %s is bound but has no wine record", args.id)
        raise WineRecordMissing(args.id)
    current = decode_wine(raw)
    if current.device_id != args.id:
        raise MalformedRecord(f"Wine record under {args.id!r} is bound to {current.device_id!r}")

    updated = current.with_owner(args.new_owner)
    store.put(wine_key(args.id), encode_wine(updated))
    logger.info("Transferred wine on device %s: %s -> %s", args.id, current.owner, updated.owner)
    return updated
