"""Generic invoke endpoint: operation name plus positional string arguments."""
import json
from typing import Any, List

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from winechain.api.state import AppState, get_state
from winechain.core.router import Response

router = APIRouter()


class InvokeBody(BaseModel):
    function: str
    # Checked by the core router so bad values come back in the envelope
    args: List[Any] = []


def envelope_to_dict(resp: Response) -> dict:
    payload = json.loads(resp.payload) if resp.payload is not None else None
    return {
        "ok": resp.ok,
        "payload": payload,
        "message": resp.message,
        "code": resp.code,
    }


@router.post("")
def invoke(body: InvokeBody, state: AppState = Depends(get_state)):
    """Run one operation; 200 with the envelope on success, 400 on failure."""
    resp = state.router.dispatch(body.function, body.args)
    return JSONResponse(status_code=200 if resp.ok else 400, content=envelope_to_dict(resp))
