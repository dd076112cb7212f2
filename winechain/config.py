"""Configuration: env, data paths, ledger backend, API bind address."""
import os
from pathlib import Path

from dotenv import load_dotenv

# Base paths (project root = parent of winechain package)
BASE_DIR = Path(__file__).resolve().parent.parent

# Load .env from project root so WINECHAIN_* overrides are set
load_dotenv(BASE_DIR / ".env")

DATA_DIR = Path(os.getenv("WINECHAIN_DATA_DIR", str(BASE_DIR / "data")))
LEDGER_PATH = DATA_DIR / "ledger.json"

# API
API_HOST = os.getenv("WINECHAIN_API_HOST", "0.0.0.0")
API_PORT = int(os.getenv("WINECHAIN_API_PORT", "8000"))

# "file" persists every version to LEDGER_PATH; "memory" is lost on restart
LEDGER_BACKEND = os.getenv("WINECHAIN_LEDGER_BACKEND", "file").lower()

LOG_LEVEL = os.getenv("WINECHAIN_LOG_LEVEL", "INFO").upper()
LOG_FORMAT = "%(levelname)s: %(name)s: %(message)s"


def ensure_data_dir() -> None:
    DATA_DIR.mkdir(parents=True, exist_ok=True)
