import base64
from unittest.mock import patch

import pytest

from app.config import settings
from app.services.photos import decode_photo, decode_photos
from app.utils.exceptions import InvalidRequest


def test_decode_data_url():
    photo = decode_photo("data:image/png;base64,AAAA", 0)

    assert photo.mime_type == "image/png"
    assert photo.data == "AAAA"
    assert photo.data_url == "data:image/png;base64,AAAA"


def test_decode_bare_base64_defaults_to_jpeg():
    photo = decode_photo("AAAA", 0)

    assert photo.mime_type == "image/jpeg"


def test_decode_strips_whitespace_in_payload():
    photo = decode_photo("data:image/jpeg;base64,AA\nAA", 0)

    assert photo.data == "AAAA"


@pytest.mark.parametrize(
    "raw,message",
    [
        ("", "Photo 1 is empty"),
        ("data:text/plain;base64,AAAA", "Photo 1 is not an image (text/plain)"),
        ("data:image/jpeg;base64,not-base64!", "Photo 1 is not valid base64"),
    ],
)
def test_decode_rejects_bad_photos(raw, message):
    with pytest.raises(InvalidRequest) as exc_info:
        decode_photo(raw, 0)
    assert exc_info.value.message == message


def test_decode_rejects_oversized_photo():
    payload = base64.b64encode(b"\xff" * 64).decode()
    with patch.object(settings, "max_photo_size_bytes", 32):
        with pytest.raises(InvalidRequest) as exc_info:
            decode_photo(payload, 2)
    assert exc_info.value.message.startswith("Photo 3 exceeds")


@pytest.mark.parametrize("photos", [None, []])
def test_decode_photos_requires_photos(photos):
    with pytest.raises(InvalidRequest) as exc_info:
        decode_photos(photos)
    assert exc_info.value.message == "No photos provided"


def test_decode_photos_limits_count():
    with patch.object(settings, "max_photos", 2):
        with pytest.raises(InvalidRequest):
            decode_photos(["AAAA", "AAAA", "AAAA"])


def test_decode_photos_keeps_order():
    photos = decode_photos(["data:image/png;base64,AAAA", "data:image/webp;base64,BBBB"])

    assert [p.mime_type for p in photos] == ["image/png", "image/webp"]
