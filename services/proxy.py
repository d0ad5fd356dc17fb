"""
Completion proxy.
Forwards a request body to an arbitrary provider endpoint selected by path.
"""
import httpx

from models.chat_models import PipelineSettings
from utils.http_client import HTTPClientManager
from utils.logger import app_logger


class ProxyService:
    """Forwards requests to the upstream LLM provider."""

    @staticmethod
    def build_url(settings: PipelineSettings, path: str) -> str:
        """Join the provider root and a path suffix such as v1/chat/completions."""
        return f"{settings.provider_base_url}/{path.lstrip('/')}"

    @staticmethod
    def build_headers(settings: PipelineSettings) -> dict:
        return {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {settings.api_key}",
        }

    @staticmethod
    async def forward(
        settings: PipelineSettings,
        method: str,
        path: str,
        body: str | bytes | None = None
    ) -> httpx.Response:
        """
        Send the request upstream and return the response unread.

        Non-2xx responses are returned as-is; the caller reads and closes the
        response. Transport errors propagate.

        Args:
            settings: Resolved pipeline settings (credential, provider root)
            method: HTTP method of the inbound request
            path: Upstream path taken from the inbound 'path' header
            body: Raw request body

        Returns:
            Streamed httpx.Response
        """
        url = ProxyService.build_url(settings, path)
        app_logger.info(f"[Proxy] {method} {path}")

        client = HTTPClientManager.get_provider_client()
        request = client.build_request(
            method,
            url,
            headers=ProxyService.build_headers(settings),
            content=body
        )
        response = await client.send(request, stream=True)

        if response.is_error:
            app_logger.warning(f"[Proxy] {path} answered {response.status_code}")

        return response
