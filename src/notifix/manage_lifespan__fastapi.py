"""FastAPI lifespan hook for the refresh scheduler."""

from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import FastAPI

from notifix.app.wiring import close_notification_service


@asynccontextmanager
async def lifespan(_: FastAPI):
    """Stop background refresh workers when the application exits."""
    yield
    close_notification_service()
