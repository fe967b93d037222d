"""
FastAPI server for the connection settings codec

Provides REST API for:
- Decoding and encoding settings blobs
- Reading and writing the blob held by the configured store
"""
import structlog
from fastapi import FastAPI

from connsettings import __version__
from connsettings.api.routes import ROUTERS
from connsettings.config import settings
from connsettings.logging import setup_logging

setup_logging("connsettings-api")
logger = structlog.get_logger()

app = FastAPI(
    title="Connection Settings Codec",
    description="Decode, inspect and rewrite proxy connection settings blobs",
    version=__version__,
)

for router in ROUTERS:
    app.include_router(router)


@app.get("/")
async def root():
    return {
        "service": "Connection Settings Codec",
        "version": __version__,
        "status": "operational",
    }


if __name__ == "__main__":
    import uvicorn

    logger.info(
        "starting_codec_api",
        host=settings.api_host,
        port=settings.api_port,
    )

    uvicorn.run(
        app,
        host=settings.api_host,
        port=settings.api_port,
        log_level="info",
    )
