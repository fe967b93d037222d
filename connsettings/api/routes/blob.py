"""Blob decode/encode tools and stored settings API endpoints."""
from typing import Optional

import structlog
from fastapi import APIRouter, Depends, HTTPException

from connsettings.api.deps import get_settings_service
from connsettings.codec import decode, encode
from connsettings.exceptions import StoreError, UnknownLayoutError, ValueTooLargeError
from connsettings.models import (
    DecodeRequest,
    DecodeResponse,
    EncodeRequest,
    EncodeResponse,
    StoredSettingsResponse,
)
from connsettings.store import ConnectionSettingsService, default_record

logger = structlog.get_logger()
router = APIRouter(prefix="/api/blob", tags=["blob"])


@router.post("/decode", response_model=DecodeResponse)
async def decode_blob(request: DecodeRequest) -> DecodeResponse:
    """
    Decode a hex-encoded settings blob.

    Malformed blobs are reported in the response body, not as HTTP errors.
    """
    hex_clean = request.hex_data.replace(" ", "").replace("\n", "").replace("\t", "")
    try:
        blob = bytes.fromhex(hex_clean)
    except ValueError as e:
        return DecodeResponse(success=False, error=f"Invalid hex string: {str(e)}")

    result = decode(blob)
    if not result.ok:
        error = result.error
        reason = error.reason if isinstance(error, UnknownLayoutError) else None
        return DecodeResponse(
            success=False,
            raw_hex=blob.hex().upper(),
            total_bytes=len(blob),
            error=error.message,
            error_kind=error.kind.value,
            reason_kind=reason.kind.value if reason is not None else None,
        )

    return DecodeResponse(
        success=True,
        record=result.record,
        layout=result.layout.name,
        raw_hex=blob.hex().upper(),
        total_bytes=len(blob),
    )


@router.post("/encode", response_model=EncodeResponse)
async def encode_blob(request: EncodeRequest) -> EncodeResponse:
    """Encode record fields into the canonical blob layout."""
    try:
        blob = encode(request.to_record())
    except ValueTooLargeError as e:
        raise HTTPException(status_code=422, detail=e.message)

    return EncodeResponse(hex_data=blob.hex().upper(), total_bytes=len(blob))


@router.get("/stored", response_model=StoredSettingsResponse)
async def get_stored(
    service: ConnectionSettingsService = Depends(get_settings_service),
) -> StoredSettingsResponse:
    """Load the settings currently held by the store."""
    try:
        result = service.inspect()
    except StoreError as e:
        logger.error("stored_settings_read_failed", error=e.message)
        raise HTTPException(status_code=500, detail=e.message)

    if result is None:
        return StoredSettingsResponse(record=default_record(), present=False, from_default=True)
    if not result.ok:
        return StoredSettingsResponse(
            record=default_record(),
            present=True,
            from_default=True,
            error=result.error.message,
        )
    return StoredSettingsResponse(record=result.record, present=True)


@router.put("/stored", response_model=StoredSettingsResponse)
async def put_stored(
    request: EncodeRequest,
    bump_counter: Optional[bool] = None,
    service: ConnectionSettingsService = Depends(get_settings_service),
) -> StoredSettingsResponse:
    """Encode and write settings to the store."""
    try:
        record = service.save(request.to_record(), bump_counter=bump_counter)
    except ValueTooLargeError as e:
        raise HTTPException(status_code=422, detail=e.message)
    except StoreError as e:
        logger.error("stored_settings_write_failed", error=e.message)
        raise HTTPException(status_code=500, detail=e.message)

    return StoredSettingsResponse(record=record, present=True)
