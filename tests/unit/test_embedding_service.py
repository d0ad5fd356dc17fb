import json

import pytest

from services.embedding import EmbeddingService, EmbeddingError
from tests.fixtures.responses import EMBEDDING_RESPONSE, EMBEDDING_ERROR_RESPONSE, EMBEDDING_VECTOR


@pytest.mark.anyio
async def test_request_embedding_returns_first_vector(upstream, pipeline_settings):
    """Given a valid provider response, request_embedding should return data[0].embedding."""
    upstream.set_json("/v1/embeddings", EMBEDDING_RESPONSE)

    embedding = await EmbeddingService.request_embedding(pipeline_settings, "what is a widget?")

    assert embedding == EMBEDDING_VECTOR


@pytest.mark.anyio
async def test_request_embedding_sends_single_line_input_and_model(upstream, pipeline_settings):
    """Given multi-line text, the request should carry it on one line with the configured model and credential."""
    upstream.set_json("/v1/embeddings", EMBEDDING_RESPONSE)

    await EmbeddingService.request_embedding(pipeline_settings, "line one\nline two\n")

    request = upstream.requests_to("/v1/embeddings")[0]
    assert request.method == "POST"
    assert str(request.url) == "https://llm.test/v1/embeddings"
    assert request.headers["Authorization"] == "Bearer sk-test"
    assert json.loads(request.content) == {"input": "line one line two ", "model": "text-embedding-ada-002"}


@pytest.mark.anyio
async def test_request_embedding_raises_on_error_payload(upstream, pipeline_settings):
    upstream.set_json("/v1/embeddings", EMBEDDING_ERROR_RESPONSE, status_code=400)

    with pytest.raises(EmbeddingError) as exc_info:
        await EmbeddingService.request_embedding(pipeline_settings, "too long")

    assert json.loads(str(exc_info.value)) == EMBEDDING_ERROR_RESPONSE["error"]


@pytest.mark.parametrize("payload", [
    {"data": []},
    {"data": [{"index": 0}]},
    {"object": "list"},
])
@pytest.mark.anyio
async def test_request_embedding_raises_on_malformed_payload(upstream, pipeline_settings, payload):
    """Given a response without data[0].embedding, request_embedding should raise EmbeddingError."""
    upstream.set_json("/v1/embeddings", payload)

    with pytest.raises(EmbeddingError):
        await EmbeddingService.request_embedding(pipeline_settings, "query")


@pytest.mark.anyio
async def test_request_embedding_raises_on_non_json_body(upstream, pipeline_settings):
    upstream.set_text("/v1/embeddings", "<html>Bad Gateway</html>", status_code=502, content_type="text/html")

    with pytest.raises(EmbeddingError):
        await EmbeddingService.request_embedding(pipeline_settings, "query")
