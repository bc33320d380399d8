import hmac

from fastapi import Header, HTTPException, status

from puzzle_rsvp.settings import app_settings


async def require_admin(x_admin_key: str | None = Header(default=None)) -> None:
    """
    Guard for the admin listing/generation API.
    Compares the X-Admin-Key header against the configured key in constant time.
    """
    if not app_settings.admin_api_key:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin API is disabled",
        )

    if not x_admin_key or not hmac.compare_digest(
        x_admin_key.encode(), app_settings.admin_api_key.encode()
    ):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid admin key",
        )
