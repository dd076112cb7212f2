"""Shared application state (injected into routes)."""
import logging

from winechain.config import LEDGER_BACKEND, LEDGER_PATH
from winechain.core.ledger import InMemoryLedger, JsonFileLedger, LedgerStore
from winechain.core.router import Router

logger = logging.getLogger(__name__)


def build_store() -> LedgerStore:
    """Store selected by WINECHAIN_LEDGER_BACKEND."""
    if LEDGER_BACKEND == "memory":
        logger.info("Using in-memory ledger (not persisted)")
        return InMemoryLedger()
    logger.info("Using ledger file %s", LEDGER_PATH)
    return JsonFileLedger(LEDGER_PATH)


class AppState:
    def __init__(self, store: LedgerStore | None = None) -> None:
        self._store = store
        self._router: Router | None = None

    @property
    def store(self) -> LedgerStore:
        if self._store is None:
            self._store = build_store()
        return self._store

    @property
    def router(self) -> Router:
        if self._router is None:
            self._router = Router(self.store)
        return self._router


_state = AppState()


def get_state() -> AppState:
    return _state
