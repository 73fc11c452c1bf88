"""Resolve the requesting user from transport headers."""

from __future__ import annotations

from typing import Annotated

from fastapi import Header, HTTPException, status


def resolve_screen_name(
    x_screen_name: Annotated[str | None, Header()] = None,
) -> str:
    """Return the screen name forwarded by the portal, or reject the request."""
    screen_name = (x_screen_name or "").strip()
    if not screen_name:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="X-Screen-Name header is required",
        )
    return screen_name
