"""FastAPI app, CORS, and route registration."""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from winechain.config import LEDGER_BACKEND, LOG_FORMAT, LOG_LEVEL, ensure_data_dir

# Configure logging in the worker process (uvicorn --reload starts a fresh one)
logging.basicConfig(level=LOG_LEVEL, format=LOG_FORMAT)

from winechain.api.state import AppState, get_state

# Import routes after state to avoid circular imports
from winechain.api.routes import devices, invoke

__all__ = ["app", "AppState", "get_state"]


@asynccontextmanager
async def lifespan(app: FastAPI):
    if LEDGER_BACKEND != "memory":
        ensure_data_dir()
    logging.getLogger(__name__).info("winechain API ready (ledger backend: %s)", LEDGER_BACKEND)
    yield


app = FastAPI(
    title="winechain API",
    description="Provenance ledger for wine bound to tracking devices",
    lifespan=lifespan,
)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(invoke.router, prefix="/api/invoke", tags=["invoke"])
app.include_router(devices.router, prefix="/api/devices", tags=["devices"])


@app.get("/api/health")
def health():
    return {"ok": True}
