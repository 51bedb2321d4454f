"""FastAPI application entrypoint for the Intimation Generator."""

import logging
import sys

import uvicorn
from fastapi import FastAPI

from app import config
from app.api.routes import router

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
    stream=sys.stdout,
)

logger = logging.getLogger(__name__)

app = FastAPI(
    title="Intimation Generator",
    description="Turns pasted claim messages into formatted TPA intimation emails.",
    version="0.1.0",
)

app.include_router(router)


def main() -> None:
    """Launch the Uvicorn server with configuration from environment variables."""
    logger.info("Starting server on port %d", config.PORT)
    uvicorn.run(
        "app.main:app",
        host="0.0.0.0",
        port=config.PORT,
        log_level="info",
    )


if __name__ == "__main__":
    main()
