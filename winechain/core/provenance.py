"""Rebuild a wine's audit trail from the store's version history."""
import logging

from winechain.core.codec import decode_wine
from winechain.core.keys import wine_key
from winechain.core.ledger import LedgerStore
from winechain.core.lifecycle import require_bound
from winechain.models.args import QueryArgs
from winechain.models.wine import AuditRecord, WineHistory

logger = logging.getLogger(__name__)


def query_history(store: LedgerStore, args: QueryArgs) -> AuditRecord:
    """Current device plus every stored wine version, in the store's order.

    Entries are neither re-sorted nor de-duplicated. One undecodable
    version fails the whole query with MalformedRecord; the history
    iterator is closed either way.
    """
    device = require_bound(store, args.id)

    record = AuditRecord(device=device)
    with store.history_of(wine_key(args.id)) as versions:
        for entry in versions:
            record.history.append(WineHistory(timestamp=entry.timestamp, wine=decode_wine(entry.value)))

    logger.debug("History for device %s: %d versions", args.id, len(record.history))
    return record
