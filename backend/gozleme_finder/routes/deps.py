from fastapi import Request

from gozleme_finder.core.config import Settings
from gozleme_finder.repos.spot_repo import SpotRepository


# --- Dependency Injection ---
def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_transport(request: Request):
    """Outbound httpx transport; None means the real network."""
    return request.app.state.transport


def get_spot_repo(request: Request) -> SpotRepository:
    return request.app.state.spot_repo
