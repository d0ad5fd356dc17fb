"""
Embedding client.
Turns a query into a vector through the provider's embeddings endpoint.
"""
import json

from models.chat_models import PipelineSettings
from services.proxy import ProxyService
from utils.logger import app_logger


class EmbeddingError(RuntimeError):
    pass


class EmbeddingService:
    """Requests embeddings for single queries."""

    @staticmethod
    def prepare_input(text: str) -> str:
        """Embedding models do better on single-line input."""
        return text.replace("\n", " ")

    @staticmethod
    async def request_embedding(settings: PipelineSettings, text: str) -> list[float]:
        """
        Embed text with the configured embedding model.

        Raises:
            EmbeddingError: the provider returned an error payload or a body
                without data[0].embedding
        """
        body = json.dumps({
            "input": EmbeddingService.prepare_input(text),
            "model": settings.embedding_model,
        })

        response = await ProxyService.forward(settings, "POST", settings.embedding_path, body)
        try:
            await response.aread()
        finally:
            await response.aclose()

        try:
            payload = response.json()
        except ValueError as e:
            raise EmbeddingError(f"Embedding response is not JSON (status {response.status_code})") from e

        if isinstance(payload, dict) and payload.get("error"):
            app_logger.error(f"Embedding request failed: {payload['error']}")
            raise EmbeddingError(json.dumps(payload["error"]))

        try:
            embedding = payload["data"][0]["embedding"]
        except (KeyError, IndexError, TypeError) as e:
            raise EmbeddingError("Embedding response is missing data[0].embedding") from e

        app_logger.debug(f"Embedding received: {len(embedding)} dimensions")
        return embedding
