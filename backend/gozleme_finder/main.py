import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse, JSONResponse, RedirectResponse
from fastapi.staticfiles import StaticFiles

from gozleme_finder.core.config import Settings, get_settings
from gozleme_finder.core.errors import NotFoundError, ProxyError
from gozleme_finder.core.logger import logs
from gozleme_finder.repos.spot_repo import SpotRepository
from gozleme_finder.routes.claude_route import router as claude_router
from gozleme_finder.routes.geocode_route import router as geocode_router
from gozleme_finder.routes.health_route import router as health_router
from gozleme_finder.routes.places_route import router as places_router
from gozleme_finder.routes.spots_route import router as spots_router


def _key_status(value: str) -> str:
    return "SET" if value else "NOT SET"


def create_app(settings: Settings | None = None, transport=None) -> FastAPI:
    """
    Build the proxy application.
    ``transport`` replaces the outbound httpx transport (tests use a mock one).
    """
    settings = settings or get_settings()
    logs.configure(settings.LOGGER, settings.LOG_DIRECTORY or None)

    app = FastAPI(title="Gozleme Finder Proxy")
    app.state.settings = settings
    app.state.transport = transport
    app.state.spot_repo = SpotRepository(settings.cache_path, settings.curated_path)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # --- Force HTTPS in production ---
    @app.middleware("http")
    async def force_https(request: Request, call_next):
        if settings.is_production and request.headers.get("x-forwarded-proto") != "https":
            return RedirectResponse(str(request.url.replace(scheme="https")), status_code=301)
        return await call_next(request)

    # --- Error Handling ---
    @app.exception_handler(ProxyError)
    async def proxy_error_handler(request: Request, exc: ProxyError):
        return JSONResponse(status_code=exc.status_code, content={"error": str(exc)})

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        first = exc.errors()[0] if exc.errors() else {}
        field = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
        message = first.get("msg", "Invalid request")
        return JSONResponse(
            status_code=400,
            content={"error": f"{field}: {message}" if field else message},
        )

    app.include_router(health_router)
    app.include_router(places_router)
    app.include_router(geocode_router)
    app.include_router(claude_router)
    app.include_router(spots_router)

    # --- Frontend ---
    static_dir = settings.STATIC_DIR

    def _page(filename: str) -> FileResponse:
        path = static_dir / filename
        if not path.is_file():
            raise NotFoundError(f"{filename} not found")
        return FileResponse(path)

    @app.get("/", include_in_schema=False)
    async def root():
        return _page("index.html")

    @app.get("/admin", include_in_schema=False)
    async def admin_page():
        return _page("admin.html")

    if static_dir.is_dir():
        # Mounted last so every API route above wins
        app.mount("/", StaticFiles(directory=static_dir), name="static")

    logs.log(logging.INFO, "Gozleme Finder proxy ready")
    logs.log(logging.INFO, f"Google Places key : {_key_status(settings.GOOGLE_PLACES_KEY)}")
    logs.log(logging.INFO, f"Google Maps key   : {_key_status(settings.maps_key)}")
    logs.log(logging.INFO, f"Anthropic key     : {_key_status(settings.ANTHROPIC_KEY)}")

    return app


app = create_app()


def serve():
    """Console entry point: run the proxy with uvicorn."""
    import uvicorn
    uvicorn.run("gozleme_finder.main:app", host="0.0.0.0", port=get_settings().PORT)


if __name__ == "__main__":
    serve()
