"""HTTP endpoints for the notification summary."""

from __future__ import annotations

from typing import Annotated, cast

from fastapi import APIRouter, Depends, FastAPI, HTTPException, Query, Response, status
from starlette.middleware import Middleware
from starlette.middleware.cors import CORSMiddleware

from notifix.app.wiring import get_notification_service
from notifix.count_map import CountMap
from notifix.errors import InvalidInputError
from notifix.manage_lifespan__fastapi import lifespan
from notifix.notification_service import NotificationService
from notifix.require_api_token__request_auth import require_api_token
from notifix.resolve_screen_name__request import resolve_screen_name

ServiceDep = Annotated[NotificationService, Depends(get_notification_service)]
ScreenNameDep = Annotated[str, Depends(resolve_screen_name)]

router = APIRouter(prefix="/api", dependencies=[Depends(require_api_token)])

app = FastAPI(
    title="NOTIFIX",
    version="0.1.0",
    lifespan=lifespan,
    middleware=[
        Middleware(
            cast("type[object]", CORSMiddleware),
            allow_origins=["*"],
            allow_methods=["*"],
            allow_headers=["*"],
        )
    ],
)


@app.get("/api/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


@router.get("/notifications")
def render_notifications(service: ServiceDep, screen_name: ScreenNameDep) -> dict[str, object]:
    return service.on_render(screen_name).to_view()


@router.get("/notifications/poll")
def poll_notifications(
    response: Response,
    service: ServiceDep,
    screen_name: ScreenNameDep,
    only_cache: Annotated[bool | None, Query(alias="onlyCache")] = None,
) -> CountMap | None:
    if only_cache is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="onlyCache query parameter is required",
        )
    response.headers["Cache-Control"] = "no-cache"
    return service.on_poll(screen_name, allow_synchronous_fill=not only_cache)


@router.post("/notifications/{notification_type}/acknowledge")
def acknowledge_notification(
    notification_type: str,
    service: ServiceDep,
    screen_name: ScreenNameDep,
) -> dict[str, str]:
    try:
        counter_name = service.on_show_details(screen_name, notification_type)
    except InvalidInputError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    return {"counter": counter_name}


@router.post("/admin/cache/reset")
def reset_cache(service: ServiceDep) -> dict[str, object]:
    service.reset_all()
    stats = service.cache.describe()
    return {"status": "ok", "size": stats.size}


app.include_router(router)
