import hmac
from typing import Annotated

from fastapi import Header, HTTPException, status

from wachat.config import settings


def require_api_key(x_api_key: Annotated[str | None, Header()] = None) -> None:
    """Validate the X-Api-Key header when WACHAT_HOST_API_KEY is configured."""
    if not settings.HOST_API_KEY:
        return
    if not x_api_key:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Missing X-Api-Key header")
    if not hmac.compare_digest(x_api_key.encode(), settings.HOST_API_KEY.encode()):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid API key")
