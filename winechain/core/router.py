"""Dispatch named operations with positional string arguments.

Operation names are the ones ledger clients already call:

    enrollDevice  id, model, brand
    enrollWine    id, owner, model, produceDate, producePlace, outDate, outPlace
    transferWine  id, newOwner
    queryAllCars  id   (returns the full audit record)

Every outcome, including store faults, comes back as a Response; dispatch
never raises.
"""
import logging
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Tuple, Type

from pydantic import ValidationError

from winechain.core.codec import encode_audit_record
from winechain.core.errors import ChainError, CollaboratorError, InvalidArguments, UnknownOperation
from winechain.core.ledger import LedgerStore
from winechain.core.lifecycle import bind_good, enroll_device
from winechain.core.provenance import query_history
from winechain.core.transfer import transfer_ownership
from winechain.models.args import (
    BindGoodArgs,
    EnrollDeviceArgs,
    OperationArgs,
    QueryArgs,
    TransferArgs,
)

logger = logging.getLogger(__name__)

Handler = Callable[[LedgerStore, OperationArgs], Optional[bytes]]


@dataclass(frozen=True)
class Response:
    """Uniform result: payload on success, message on failure."""
    ok: bool
    payload: Optional[bytes] = None
    message: Optional[str] = None
    code: Optional[str] = None

    @classmethod
    def success(cls, payload: Optional[bytes] = None) -> "Response":
        return cls(ok=True, payload=payload)

    @classmethod
    def failure(cls, error: ChainError) -> "Response":
        return cls(ok=False, message=error.message, code=error.code)


def _enroll_device(store: LedgerStore, args: EnrollDeviceArgs) -> None:
    enroll_device(store, args)


def _bind_good(store: LedgerStore, args: BindGoodArgs) -> None:
    bind_good(store, args)


def _transfer(store: LedgerStore, args: TransferArgs) -> None:
    transfer_ownership(store, args)


def _query(store: LedgerStore, args: QueryArgs) -> bytes:
    return encode_audit_record(query_history(store, args))


OPERATIONS: Dict[str, Tuple[Type[OperationArgs], Handler]] = {
    "enrollDevice": (EnrollDeviceArgs, _enroll_device),
    "enrollWine": (BindGoodArgs, _bind_good),
    "transferWine": (TransferArgs, _transfer),
    "queryAllCars": (QueryArgs, _query),
}


def parse_args(operation: str, args: List[str]) -> OperationArgs:
    """Check arity and build the typed arguments for operation."""
    if operation not in OPERATIONS:
        raise UnknownOperation(operation)
    args_type, _ = OPERATIONS[operation]
    if not isinstance(args, (list, tuple)) or len(args) != args_type.arity():
        raise InvalidArguments.arity(args_type.arity())
    try:
        return args_type.from_positional(args)
    except ValidationError as e:
        bad = ", ".join(str(err["loc"][0]) for err in e.errors() if err.get("loc"))
        raise InvalidArguments(f"Invalid arguments for {operation}: {bad}") from e


class Router:
    """Routes operations to the core against one injected store."""

    def __init__(self, store: LedgerStore) -> None:
        self.store = store

    def dispatch(self, operation: str, args: List[str]) -> Response:
        try:
            parsed = parse_args(operation, args)
            _, handler = OPERATIONS[operation]
            payload = handler(self.store, parsed)
        except ChainError as e:
            logger.warning("%s %r failed: %s", operation, args, e.message)
            return Response.failure(e)
        except Exception as e:
            # Anything else escaped the store; report it, never raise past here
            logger.exception("%s: store fault", operation)
            return Response.failure(CollaboratorError(str(e) or e.__class__.__name__))
        logger.debug("%s ok", operation)
        return Response.success(payload)
