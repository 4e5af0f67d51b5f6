"""
Anthropic Messages API client.
Used both by the /api/claude passthrough and by the cache builder.
"""
import httpx
import logging
from gozleme_finder.core.errors import UpstreamError, upstream_message
from gozleme_finder.core.logger import logs


class AnthropicProvider:
    """Anthropic Claude Provider"""

    def __init__(
        self,
        api_key: str,
        model: str,
        version: str = "2023-06-01",
        max_tokens: int = 2000,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.api_key = api_key
        self.model = model
        self.max_tokens = max_tokens
        self.timeout = timeout
        self.transport = transport
        self.base_url = "https://api.anthropic.com/v1/messages"
        self.headers = {
            "x-api-key": self.api_key,
            "anthropic-version": version,
            "Content-Type": "application/json"
        }

    async def _post(self, payload: dict) -> httpx.Response:
        async with httpx.AsyncClient(transport=self.transport) as client:
            return await client.post(
                self.base_url,
                json=payload,
                headers=self.headers,
                timeout=self.timeout
            )

    async def forward(self, payload: dict) -> tuple[int, dict]:
        """
        Send a caller-built Messages API payload as-is.
        Returns the upstream status code and JSON body untouched.
        """
        try:
            response = await self._post(payload)
            return response.status_code, response.json()
        except (httpx.HTTPError, ValueError) as e:
            logs.log(logging.ERROR, f"Claude proxy error: {str(e)}")
            raise UpstreamError(f"Claude proxy failed: {str(e)}")

    async def generate(self, prompt: str) -> str:
        """Send a single user-role prompt and return the concatenated text blocks."""
        payload = {
            "model": self.model,
            "max_tokens": self.max_tokens,
            "messages": [{"role": "user", "content": prompt}]
        }

        try:
            response = await self._post(payload)
            data = response.json()
        except (httpx.HTTPError, ValueError) as e:
            logs.log(logging.ERROR, f"Anthropic API error: {str(e)}")
            raise UpstreamError(f"Anthropic request failed: {str(e)}")

        if response.is_error:
            msg = upstream_message(data, response.reason_phrase)
            raise UpstreamError(f"Anthropic error: {msg}")

        return self.text_of(data)

    @staticmethod
    def text_of(data: dict) -> str:
        """Join the text of every ``text`` content block."""
        if not isinstance(data, dict):
            return ""
        blocks = data.get("content") or []
        return "".join(
            block.get("text", "")
            for block in blocks
            if isinstance(block, dict) and block.get("type") == "text"
        )

    def get_provider_name(self) -> str:
        return "Anthropic Claude"
