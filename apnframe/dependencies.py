from __future__ import annotations

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from apnframe.config import Settings, get_settings

security = HTTPBearer(auto_error=False)


async def get_app_settings() -> Settings:
    """Get settings via dependency injection."""
    return get_settings()


async def verify_token(
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
    settings: Settings = Depends(get_app_settings),
) -> None:
    """
    Verify the bearer token matches the configured auth token.

    Authentication is disabled when no auth token is configured.
    """
    if settings.auth_token is None:
        return

    if credentials is None or credentials.credentials != settings.auth_token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid authentication token",
        )
