"""Entry: start API server."""
import logging
import uvicorn

from winechain.config import API_HOST, API_PORT, LOG_FORMAT, LOG_LEVEL

if __name__ == "__main__":
    logging.basicConfig(level=LOG_LEVEL, format=LOG_FORMAT)
    uvicorn.run(
        "winechain.api.app:app",
        host=API_HOST,
        port=API_PORT,
        reload=True,
    )
