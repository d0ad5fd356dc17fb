import httpx
import pytest

from services.proxy import ProxyService


@pytest.mark.parametrize("path", ["v1/chat/completions", "/v1/chat/completions"])
def test_build_url_joins_root_and_path(pipeline_settings, path):
    assert ProxyService.build_url(pipeline_settings, path) == "https://llm.test/v1/chat/completions"


@pytest.mark.anyio
async def test_forward_sends_method_body_and_credential(upstream, pipeline_settings):
    """Given a path and body, forward should hit that upstream path with the bearer token."""
    upstream.set_json("/v1/models", {"data": []})

    response = await ProxyService.forward(pipeline_settings, "GET", "v1/models")
    await response.aclose()

    request = upstream.requests_to("/v1/models")[0]
    assert request.method == "GET"
    assert request.headers["Authorization"] == "Bearer sk-test"
    assert request.headers["Content-Type"] == "application/json"


@pytest.mark.anyio
async def test_forward_returns_error_responses_untouched(upstream, pipeline_settings):
    """Given a 429 from the provider, forward should return it without raising."""
    upstream.set_json("/v1/chat/completions", {"error": {"message": "Rate limit reached"}}, status_code=429)

    response = await ProxyService.forward(pipeline_settings, "POST", "v1/chat/completions", '{"messages": []}')
    body = await response.aread()
    await response.aclose()

    assert response.status_code == 429
    assert b"Rate limit reached" in body
    assert upstream.json_sent_to("/v1/chat/completions") == {"messages": []}


@pytest.mark.anyio
async def test_forward_propagates_transport_errors(upstream, pipeline_settings):
    upstream.set_error("/v1/chat/completions", httpx.ConnectTimeout("timed out"))

    with pytest.raises(httpx.ConnectTimeout):
        await ProxyService.forward(pipeline_settings, "POST", "v1/chat/completions", "{}")
