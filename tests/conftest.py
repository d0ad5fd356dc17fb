import pytest


@pytest.fixture
def pipeline_settings():
    """Settings with fake hosts; no environment involved."""
    from models.chat_models import PipelineSettings
    return PipelineSettings(
        api_key="sk-test",
        provider_base_url="https://llm.test",
        supabase_url="https://db.test",
        supabase_key="service-key",
    )


@pytest.fixture
def word_token_counter(monkeypatch):
    """Count one token per whitespace-separated word so budgets are predictable."""
    from utils.token_manager import TokenManager
    monkeypatch.setattr(TokenManager, "count_tokens", lambda text: len(text.split()))


@pytest.fixture
def upstream(monkeypatch):
    """Fake provider and document store wired into HTTPClientManager."""
    from tests.fixtures.mock_clients import UpstreamBuilder
    from utils.http_client import HTTPClientManager

    builder = UpstreamBuilder()
    client = builder.build()
    monkeypatch.setattr(HTTPClientManager, "get_provider_client", lambda: client)
    monkeypatch.setattr(HTTPClientManager, "get_search_client", lambda: client)
    return builder


@pytest.fixture
def configured_app(monkeypatch, upstream, word_token_counter):
    """App with all routers, fixed configuration and the fake upstream."""
    from fastapi import FastAPI
    from fastapi.exceptions import RequestValidationError
    from fastapi.testclient import TestClient
    from config import Config
    from main import validation_exception_handler
    from routes import chat_message, chat_stream, openai_proxy, analysis

    monkeypatch.setattr(Config, "OPENAI_API_KEY", "sk-default")
    monkeypatch.setattr(Config, "PROTOCOL", "https")
    monkeypatch.setattr(Config, "BASE_URL", "llm.test")
    monkeypatch.setattr(Config, "SUPABASE_URL", "https://db.test")
    monkeypatch.setattr(Config, "SUPABASE_KEY", "service-key")
    monkeypatch.setattr(Config, "AUGMENT_PREFIX", "fr")
    monkeypatch.setattr(Config, "KNOWLEDGE_DOMAIN", "")
    monkeypatch.setattr(Config, "CONTEXT_TOKEN_BUDGET", 3000)

    app = FastAPI()
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.include_router(chat_message.router)
    app.include_router(chat_stream.router)
    app.include_router(openai_proxy.router)
    app.include_router(analysis.router)

    with TestClient(app) as client:
        yield client
