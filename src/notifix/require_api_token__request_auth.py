"""API token enforcement for the notification routes."""

from __future__ import annotations

import secrets
from typing import Annotated

from fastapi import Depends, Header, HTTPException, status

from notifix.app.wiring import get_notification_service
from notifix.notification_service import NotificationService


def _supplied_token(authorization: str | None, api_key: str | None) -> str | None:
    if authorization:
        scheme, _, credentials = authorization.partition(" ")
        if scheme.lower() == "bearer" and credentials.strip():
            return credentials.strip()
    if api_key and api_key.strip():
        return api_key.strip()
    return None


def require_api_token(
    service: Annotated[NotificationService, Depends(get_notification_service)],
    authorization: Annotated[str | None, Header()] = None,
    x_api_key: Annotated[str | None, Header()] = None,
) -> None:
    """Raise HTTP 401 unless a bearer token or X-API-Key matches the configured token."""
    supplied = _supplied_token(authorization, x_api_key)
    if supplied is None or not secrets.compare_digest(
        supplied.encode(), service.config.api_token.encode()
    ):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Unauthorized")
