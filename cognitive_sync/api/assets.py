"""Context asset upload endpoint.

Handles file upload, validation and text extraction. The extracted text is
returned to the client, which attaches it to later chat requests.
"""

import logging

from fastapi import APIRouter, UploadFile

from cognitive_sync.errors import BadRequest, PayloadTooLarge
from cognitive_sync.models.schemas import ContextAssetResponse
from cognitive_sync.parsing.asset_parser import (
    MAX_FILE_SIZE,
    AssetParseError,
    AssetTooLargeError,
    asset_extension,
    parse_asset,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/assets", tags=["assets"])

# 10MB limit matches asset_parser constant
MAX_UPLOAD_SIZE = MAX_FILE_SIZE


def _validate_filename(filename: str | None) -> str:
    """Validate that the file has a supported extension.

    Raises:
        BadRequest: If the filename is missing or the extension is unsupported.
    """
    if not filename:
        raise BadRequest("Filename is required")

    try:
        asset_extension(filename)
    except AssetParseError as e:
        raise BadRequest(str(e)) from e

    return filename


async def _read_and_validate_size(file: UploadFile) -> bytes:
    """Read file content and validate size.

    Raises:
        PayloadTooLarge: If file exceeds size limit.
    """
    content = await file.read()

    if len(content) > MAX_UPLOAD_SIZE:
        size_mb = len(content) / (1024 * 1024)
        raise PayloadTooLarge(f"File size ({size_mb:.1f}MB) exceeds maximum allowed (10MB)")

    return content


@router.post("", response_model=ContextAssetResponse)
async def upload_asset(file: UploadFile) -> ContextAssetResponse:
    """Upload a context asset and return its text.

    Args:
        file: The uploaded PDF, TXT or MD file (multipart/form-data).

    Raises:
        400: Invalid file (unsupported type, empty, corrupt, not UTF-8).
        413: File exceeds 10MB limit.
    """
    filename = _validate_filename(file.filename)
    content = await _read_and_validate_size(file)

    try:
        asset = parse_asset(filename, content)
    except AssetTooLargeError as e:
        raise PayloadTooLarge(str(e)) from e
    except AssetParseError as e:
        logger.warning(f"Asset parse error for {filename}: {e}")
        raise BadRequest(str(e)) from e

    logger.info(f"Parsed context asset: {filename} ({asset.pages} pages, {len(asset.text)} chars)")

    return ContextAssetResponse(
        filename=filename,
        text=asset.text,
        pages=asset.pages,
        characters=len(asset.text),
    )
