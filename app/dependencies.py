from fastapi import Header

from app.config import settings
from app.utils.exceptions import AppException


async def verify_api_key(x_api_key: str = Header(default="")) -> None:
    if not settings.api_key:
        return
    if x_api_key != settings.api_key:
        raise AppException("Invalid or missing API key", status_code=403)
