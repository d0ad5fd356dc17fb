"""
Similarity search client for the Supabase document store.
Calls the match_documents RPC and records analysis rows.
"""
import httpx

from models.chat_models import Document, PipelineSettings
from utils.http_client import HTTPClientManager
from utils.logger import app_logger


class SimilaritySearchError(RuntimeError):
    pass


class SimilaritySearchService:
    """Service for the PostgREST endpoints of the document store."""

    def __init__(self, settings: PipelineSettings):
        self.settings = settings

    def _headers(self) -> dict:
        return {
            "apikey": self.settings.supabase_key,
            "Authorization": f"Bearer {self.settings.supabase_key}",
            "Content-Type": "application/json",
        }

    async def _post(self, path: str, payload: dict, headers: dict | None = None) -> httpx.Response:
        if not self.settings.supabase_url:
            raise SimilaritySearchError("SUPABASE_URL is not configured")

        url = f"{self.settings.supabase_url}/rest/v1/{path}"
        client = HTTPClientManager.get_search_client()

        try:
            response = await client.post(url, json=payload, headers={**self._headers(), **(headers or {})})
        except httpx.HTTPError as e:
            app_logger.error(f"Document store request to {path} failed: {e}")
            raise SimilaritySearchError(f"Document store request to {path} failed: {e}") from e

        if response.status_code >= 400:
            app_logger.error(f"Document store {path} returned {response.status_code}: {response.text}")
            raise SimilaritySearchError(f"Document store {path} returned {response.status_code}: {response.text}")

        return response

    async def match_documents(self, embedding: list[float]) -> list[Document]:
        """
        Return the documents most similar to the embedding, best match first.

        Raises:
            SimilaritySearchError: transport failure, error response or unreadable body
        """
        response = await self._post(
            f"rpc/{self.settings.match_documents_rpc}",
            {
                "query_embedding": embedding,
                "similarity_threshold": self.settings.similarity_threshold,
                "match_count": self.settings.match_count,
            }
        )

        try:
            rows = response.json() or []
            if not isinstance(rows, list):
                raise TypeError(f"expected a list of rows, got {type(rows).__name__}")
            documents = [Document.from_row(row) for row in rows]
        except (ValueError, AttributeError, TypeError) as e:
            app_logger.error(f"match_documents returned an unreadable body: {e}")
            raise SimilaritySearchError(f"match_documents returned an unreadable body: {e}") from e

        app_logger.info(f"match_documents returned {len(documents)} documents")
        return documents

    async def insert_analysis(self, question: str, answer: str, analysis_type: int = 1) -> None:
        """Store a question/answer pair in the analysis table."""
        await self._post(
            self.settings.analysis_table,
            {"question": question, "answer": answer, "type": analysis_type},
            headers={"Prefer": "return=minimal"}
        )
        app_logger.debug(f"Analysis row stored in {self.settings.analysis_table}")
