from __future__ import annotations

from fastapi import APIRouter, Depends, Request

from ..config import Settings, get_settings
from ..models import HealthResponse, RootResponse
from ..services.conversation.session import ChatSession, get_chat_session

router = APIRouter(tags=["meta"])


@router.get("/health", response_model=HealthResponse)
# Return service health status for monitoring
def health(settings: Settings = Depends(get_settings)) -> HealthResponse:
    return HealthResponse(ok=True, service="mcp-client", version=settings.app_version)


@router.get("/meta", response_model=RootResponse)
# Return service metadata including the model, tools and available endpoints
def meta(
    request: Request,
    settings: Settings = Depends(get_settings),
    session: ChatSession = Depends(get_chat_session),
) -> RootResponse:
    endpoints = sorted(
        {
            route.path
            for route in request.app.routes
            if getattr(route, "include_in_schema", False) and route.path.startswith("/api/")
        }
    )
    return RootResponse(
        status="ok",
        service="mcp-client",
        version=settings.app_version,
        model=session.builder.model,
        tools=session.registry.names(),
        endpoints=endpoints,
    )
