"""Device and wine resources: enroll, bind, transfer, history."""
import json

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from winechain.api.state import AppState, get_state
from winechain.core.router import Response

router = APIRouter()

_STATUS_BY_CODE = {
    "invalid_arguments": 400,
    "unknown_operation": 400,
    "device_not_enrolled": 404,
    "wine_record_missing": 404,
    "already_enrolled": 409,
    "device_already_bound": 409,
    "not_bound": 409,
    "malformed_record": 500,
    "collaborator_error": 500,
}


class EnrollDeviceBody(BaseModel):
    id: str
    model: str
    brand: str


class BindWineBody(BaseModel):
    owner: str
    model: str
    produce_date: str
    produce_place: str
    out_date: str
    out_place: str


class TransferBody(BaseModel):
    new_owner: str


def _raise_for(resp: Response) -> None:
    if not resp.ok:
        raise HTTPException(
            status_code=_STATUS_BY_CODE.get(resp.code, 500),
            detail={"code": resp.code, "message": resp.message},
        )


@router.post("", status_code=201)
def enroll_device(body: EnrollDeviceBody, state: AppState = Depends(get_state)):
    """Enroll a new tracking device."""
    resp = state.router.dispatch("enrollDevice", [body.id, body.model, body.brand])
    _raise_for(resp)
    return {"id": body.id, "model": body.model, "brand": body.brand, "status": "enrolled"}


@router.post("/{device_id}/wine", status_code=201)
def bind_wine(device_id: str, body: BindWineBody, state: AppState = Depends(get_state)):
    """Bind a wine to an enrolled device."""
    resp = state.router.dispatch(
        "enrollWine",
        [
            device_id,
            body.owner,
            body.model,
            body.produce_date,
            body.produce_place,
            body.out_date,
            body.out_place,
        ],
    )
    _raise_for(resp)
    return {**body.model_dump(), "device_uid": device_id}


@router.post("/{device_id}/transfer")
def transfer_wine(device_id: str, body: TransferBody, state: AppState = Depends(get_state)):
    """Transfer the wine on a bound device to a new owner."""
    resp = state.router.dispatch("transferWine", [device_id, body.new_owner])
    _raise_for(resp)
    return {"ok": True, "device_id": device_id, "owner": body.new_owner}


@router.get("/{device_id}/history")
def get_history(device_id: str, state: AppState = Depends(get_state)):
    """Current device plus every wine version, oldest first."""
    resp = state.router.dispatch("queryAllCars", [device_id])
    _raise_for(resp)
    return json.loads(resp.payload)
