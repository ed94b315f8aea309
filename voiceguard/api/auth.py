from typing import Optional

from fastapi import Header, HTTPException, status

from voiceguard.config import get_api_key


async def verify_api_key(x_api_key: Optional[str] = Header(None, alias="x-api-key")):
    # No API_KEY configured means the service runs open.
    expected = get_api_key()
    if expected is None:
        return None
    if not x_api_key:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing X-API-Key",
        )
    if x_api_key != expected:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid X-API-Key",
        )
    return x_api_key
