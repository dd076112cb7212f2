"""Typed arguments for each ledger operation, built from positional strings."""
from typing import List

from pydantic import BaseModel, ConfigDict, Field


class OperationArgs(BaseModel):
    """Field order is the positional order callers send arguments in."""

    model_config = ConfigDict(frozen=True, strict=True)

    @classmethod
    def arity(cls) -> int:
        return len(cls.model_fields)

    @classmethod
    def from_positional(cls, args: List[str]):
        return cls(**dict(zip(cls.model_fields, args)))


class EnrollDeviceArgs(OperationArgs):
    id: str = Field(min_length=1)
    model: str
    brand: str


class BindGoodArgs(OperationArgs):
    id: str = Field(min_length=1)
    owner: str
    model: str
    produce_date: str
    produce_place: str
    out_date: str
    out_place: str


class TransferArgs(OperationArgs):
    id: str = Field(min_length=1)
    new_owner: str


class QueryArgs(OperationArgs):
    id: str = Field(min_length=1)
