"""Core: device lifecycle, ownership transfer, provenance, routing."""
from winechain.core.ledger import InMemoryLedger, JsonFileLedger, LedgerStore
from winechain.core.router import Response, Router

__all__ = ["InMemoryLedger", "JsonFileLedger", "LedgerStore", "Response", "Router"]
