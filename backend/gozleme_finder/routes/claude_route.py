from typing import Any, Dict

from fastapi import APIRouter, Body, Depends
from fastapi.responses import JSONResponse

from gozleme_finder.core.config import Settings
from gozleme_finder.core.errors import ConfigurationError
from gozleme_finder.core.llm_providers import AnthropicProvider
from gozleme_finder.routes.deps import get_app_settings, get_transport

router = APIRouter(prefix="/api")


def get_anthropic_provider(
    settings: Settings = Depends(get_app_settings),
    transport=Depends(get_transport),
) -> AnthropicProvider:
    if not settings.ANTHROPIC_KEY:
        raise ConfigurationError("ANTHROPIC_KEY not set in .env")
    return AnthropicProvider(
        api_key=settings.ANTHROPIC_KEY,
        model=settings.ANTHROPIC_MODEL,
        version=settings.ANTHROPIC_VERSION,
        max_tokens=settings.ANTHROPIC_MAX_TOKENS,
        timeout=settings.HTTP_TIMEOUT,
        transport=transport,
    )


@router.post("/claude")
async def claude_endpoint(
    payload: Dict[str, Any] = Body(...),
    provider: AnthropicProvider = Depends(get_anthropic_provider)
):
    """
    Standard Anthropic Messages API payload, minus the key.
    The upstream status and body are passed back unchanged.
    """
    status_code, data = await provider.forward(payload)
    return JSONResponse(status_code=status_code, content=data)
