"""FastAPI application serving the weather search page and its JSON API."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from fastapi import FastAPI, Form, Request, Response
from fastapi.responses import HTMLResponse
from pydantic import BaseModel

from app.config import get_session_max_age
from app.main import build_provider, build_view
from weather.card import render_page_html
from weather.countries import CountryNameResolver
from weather.provider import WeatherProvider
from weather.sessions import SESSION_COOKIE_NAME, ViewSessionManager
from weather.view import WeatherView

logger = logging.getLogger(__name__)


class DraftPayload(BaseModel):
    text: str = ""


class SubmitPayload(BaseModel):
    text: Optional[str] = None


def create_app(
    provider: Optional[WeatherProvider] = None,
    *,
    resolver: Optional[CountryNameResolver] = None,
    default_location: Optional[str] = None,
    session_manager: Optional[ViewSessionManager] = None,
) -> FastAPI:
    """WHAT: instantiate FastAPI with one ``WeatherView`` per browser session.

    WHY: each visitor keeps their own draft, query and card, the way a
    browser tab owns its component state.
    HOW: accept dependency overrides (``provider``/``resolver``/
    ``default_location`` from tests, or a whole ``session_manager``), cache
    the session index on ``app.state`` and register the page and JSON routes.
    """

    max_age = get_session_max_age()
    if session_manager is None:
        shared_provider = provider or build_provider()

        def _factory() -> WeatherView:
            return build_view(shared_provider, resolver=resolver, initial_query=default_location)

        session_manager = ViewSessionManager(_factory, max_age_seconds=max_age)

    app = FastAPI(title="Weather App", version="0.1.0")
    app.state.session_manager = session_manager

    def _resolve_view(request: Request, response: Response) -> WeatherView:
        """Return the caller's view, creating (and mounting) it on first visit."""

        token = request.cookies.get(SESSION_COOKIE_NAME)
        view = app.state.session_manager.get_view(token)
        if view is None:
            token, view = app.state.session_manager.create_session()
            response.set_cookie(
                SESSION_COOKIE_NAME,
                token,
                httponly=True,
                secure=False,
                samesite="lax",
                max_age=max_age or None,
            )
            logger.debug("Created weather session.")
        view.ensure_mounted()
        return view

    @app.get("/", response_class=HTMLResponse)
    def root(request: Request, response: Response) -> str:
        view = _resolve_view(request, response)
        return render_page_html(view.draft, view.card())

    @app.post("/search", response_class=HTMLResponse)
    def search(request: Request, response: Response, location: str = Form("")) -> str:
        view = _resolve_view(request, response)
        view.search(location)
        return render_page_html(view.draft, view.card())

    @app.get("/api/health")
    def health_check() -> Dict[str, Any]:
        return {
            "status": "ok",
            "timestamp": datetime.now(tz=timezone.utc).isoformat(),
        }

    @app.get("/api/state")
    def get_state(request: Request, response: Response) -> Dict[str, Any]:
        return _resolve_view(request, response).to_dict()

    @app.post("/api/draft")
    def update_draft(request: Request, response: Response, payload: DraftPayload) -> Dict[str, Any]:
        view = _resolve_view(request, response)
        view.set_draft(payload.text)
        return view.to_dict()

    @app.post("/api/submit")
    def submit(request: Request, response: Response, payload: SubmitPayload) -> Dict[str, Any]:
        view = _resolve_view(request, response)
        view.search(payload.text)
        return view.to_dict()

    @app.delete("/api/session")
    def end_session(request: Request, response: Response) -> Dict[str, Any]:
        destroyed = app.state.session_manager.destroy_session(request.cookies.get(SESSION_COOKIE_NAME))
        response.delete_cookie(SESSION_COOKIE_NAME)
        return {"status": "ok", "destroyed": destroyed}

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    from app.config import configure_logging, get_web_ui_host, get_web_ui_port

    configure_logging()
    uvicorn.run(
        "app.web_api:app",
        host=get_web_ui_host(),
        port=get_web_ui_port(),
        reload=False,
    )
