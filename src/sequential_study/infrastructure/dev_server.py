"""Local development server for the study pages.

Serves the static site with the page rewrites the dashboard expects and
replaces the real auth client with the mock module, so the sequential study
page can be exercised without a backend login.

Routes::

    GET /backend/js/auth.js   -> generated mock auth module
    GET /dashboard            -> pages/dashboard/index.html
    GET /dashboard/{path}     -> file under pages/dashboard, else index.html
                                 for extension-less paths, else 404
    GET /login|/onboarding|/profile -> pages/<name>/index.html
    everything else           -> static file under the root
"""

from __future__ import annotations

import logging
from pathlib import Path

import uvicorn
from fastapi import FastAPI
from fastapi.responses import FileResponse, PlainTextResponse, Response
from fastapi.staticfiles import StaticFiles

from sequential_study.infrastructure.auth import MockTokenProvider, render_mock_auth_module
from sequential_study.infrastructure.config import DevServerConfig

logger = logging.getLogger(__name__)

PAGE_ROUTES = ("login", "onboarding", "profile")


def resolve_under(base: Path, relative: str) -> Path | None:
    """Join *relative* onto *base*; ``None`` if the result escapes *base*."""
    base = base.resolve()
    candidate = (base / relative.lstrip("/")).resolve()
    try:
        candidate.relative_to(base)
    except ValueError:
        return None
    return candidate


def _not_found() -> PlainTextResponse:
    return PlainTextResponse("Not Found", status_code=404)


def _file_or_404(path: Path) -> Response:
    if path.is_file():
        return FileResponse(path)
    logger.warning("Missing page file: %s", path)
    return _not_found()


def create_dev_app(
    config: DevServerConfig | None = None,
    provider: MockTokenProvider | None = None,
) -> FastAPI:
    """Build the FastAPI application for *config*."""
    config = config or DevServerConfig()
    config.validate()
    root = config.root_path
    pages = root / "pages"
    dashboard = pages / "dashboard"
    auth_module = render_mock_auth_module(provider, api_base=config.api_base)

    app = FastAPI(title="Sequential Study Dev Server")

    @app.get("/backend/js/auth.js")
    async def mock_auth() -> Response:
        return Response(content=auth_module, media_type="application/javascript")

    @app.get("/dashboard")
    async def dashboard_index() -> Response:
        return _file_or_404(dashboard / "index.html")

    @app.get("/dashboard/{file_path:path}")
    async def dashboard_file(file_path: str) -> Response:
        target = resolve_under(dashboard, file_path)
        if target is None:
            logger.warning("Rejected path outside dashboard: %s", file_path)
            return _not_found()
        if target.is_file():
            return FileResponse(target)
        if "." not in file_path:
            return _file_or_404(dashboard / "index.html")
        return _not_found()

    def _page_handler(name: str):
        async def page() -> Response:
            return _file_or_404(pages / name / "index.html")

        page.__name__ = f"{name}_page"
        return page

    for name in PAGE_ROUTES:
        app.add_api_route(f"/{name}", _page_handler(name), methods=["GET"])

    # Mounted last so the explicit routes above take precedence.
    app.mount("/", StaticFiles(directory=root, html=True), name="static")
    return app


def run(config: DevServerConfig | None = None) -> None:
    """Serve the site with uvicorn until interrupted."""
    config = config or DevServerConfig.from_env()
    app = create_dev_app(config)
    logger.info("Dev server running at http://%s:%d/", config.host, config.port)
    uvicorn.run(app, host=config.host, port=config.port)
