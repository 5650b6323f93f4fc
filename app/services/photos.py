"""Decode and check the photos attached to an analysis request."""
import base64
import binascii
import logging
import re
from dataclasses import dataclass

from app.config import settings
from app.utils.exceptions import InvalidRequest

logger = logging.getLogger(__name__)

_DATA_URL = re.compile(r"^data:(?P<mime>[\w.+-]+/[\w.+-]+);base64,(?P<data>.*)$", re.DOTALL)

DEFAULT_MIME_TYPE = "image/jpeg"


@dataclass(frozen=True)
class EncodedPhoto:
    mime_type: str
    data: str  # base64, no data-URL prefix

    @property
    def data_url(self) -> str:
        return f"data:{self.mime_type};base64,{self.data}"


def decode_photo(raw: str, index: int) -> EncodedPhoto:
    """Split a data URL (or bare base64 string) into MIME type and payload."""
    if not isinstance(raw, str) or not raw.strip():
        raise InvalidRequest(f"Photo {index + 1} is empty")

    match = _DATA_URL.match(raw.strip())
    if match:
        mime_type = match.group("mime").lower()
        data = match.group("data")
    else:
        mime_type = DEFAULT_MIME_TYPE
        data = raw.strip()

    if not mime_type.startswith("image/"):
        raise InvalidRequest(f"Photo {index + 1} is not an image ({mime_type})")

    data = "".join(data.split())
    try:
        decoded = base64.b64decode(data, validate=True)
    except (binascii.Error, ValueError):
        raise InvalidRequest(f"Photo {index + 1} is not valid base64")

    if not decoded:
        raise InvalidRequest(f"Photo {index + 1} is empty")
    if len(decoded) > settings.max_photo_size_bytes:
        raise InvalidRequest(
            f"Photo {index + 1} exceeds the {settings.max_photo_size_bytes} byte limit"
        )

    return EncodedPhoto(mime_type=mime_type, data=data)


def decode_photos(photos: list[str] | None) -> list[EncodedPhoto]:
    if not photos:
        raise InvalidRequest("No photos provided")
    if len(photos) > settings.max_photos:
        raise InvalidRequest(f"Too many photos (max {settings.max_photos})")

    decoded = [decode_photo(raw, i) for i, raw in enumerate(photos)]
    logger.info("Decoded %d photo(s): %s", len(decoded), ", ".join(p.mime_type for p in decoded))
    return decoded
