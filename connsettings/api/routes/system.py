"""System endpoints."""
from fastapi import APIRouter

from connsettings.codec import DECODE_PRIORITY, SANITY_MAX_STRING_LEN
from connsettings.config import settings

router = APIRouter(prefix="/api/system", tags=["system"])


@router.get("/health")
async def health():
    return {"status": "ok"}


@router.get("/config")
async def get_config():
    """Get codec configuration (sanitized)"""
    return {
        "layouts": [layout.name for layout in DECODE_PRIORITY],
        "max_string_length": SANITY_MAX_STRING_LEN,
        "increment_counter_on_write": settings.increment_counter_on_write,
    }
