"""
Configuration module for the RAG Chat Relay.
Reads environment variables and resolves per-request pipeline settings.
"""
import os
from dotenv import load_dotenv

from models.chat_models import PipelineSettings
from utils.logger import app_logger

load_dotenv()


def _env_float(name: str, default: float) -> float:
    value = os.getenv(name)
    return float(value) if value else default


def _env_int(name: str, default: int) -> int:
    value = os.getenv(name)
    return int(value) if value else default


class Config:
    """Application configuration class."""

    # Provider
    OPENAI_API_KEY: str = os.getenv("OPENAI_API_KEY", "")
    PROTOCOL: str = os.getenv("PROTOCOL", "https")
    BASE_URL: str = os.getenv("BASE_URL", "api.openai.com")
    DEFAULT_COMPLETION_PATH: str = "v1/chat/completions"
    EMBEDDING_PATH: str = "v1/embeddings"
    EMBEDDING_MODEL: str = os.getenv("EMBEDDING_MODEL", "text-embedding-ada-002")

    # Document store (Supabase / PostgREST)
    SUPABASE_URL: str = os.getenv("SUPABASE_URL", "")
    SUPABASE_KEY: str = os.getenv("SUPABASE_KEY", "")
    MATCH_DOCUMENTS_RPC: str = "match_documents"
    ANALYSIS_TABLE: str = os.getenv("ANALYSIS_TABLE", "documents_v2_analysis")

    # Retrieval
    AUGMENT_PREFIX: str = os.getenv("AUGMENT_PREFIX", "fr")
    KNOWLEDGE_DOMAIN: str = os.getenv("KNOWLEDGE_DOMAIN", "")
    SIMILARITY_THRESHOLD: float = _env_float("SIMILARITY_THRESHOLD", 0.1)
    MATCH_COUNT: int = _env_int("MATCH_COUNT", 5)
    CONTEXT_TOKEN_BUDGET: int = _env_int("CONTEXT_TOKEN_BUDGET", 3000)

    # GPT-3 BPE, the tokenizer the context budget is measured in
    TOKENIZER_ENCODING: str = os.getenv("TOKENIZER_ENCODING", "r50k_base")

    # Application Settings
    APP_TITLE: str = "RAG Chat Relay"

    # Timeouts (in seconds)
    PROVIDER_TIMEOUT: float = _env_float("PROVIDER_TIMEOUT", 60.0)
    SEARCH_TIMEOUT: float = _env_float("SEARCH_TIMEOUT", 15.0)

    @classmethod
    def provider_base_url(cls) -> str:
        """Upstream provider root, e.g. https://api.openai.com."""
        return f"{cls.PROTOCOL}://{cls.BASE_URL.rstrip('/')}"

    @classmethod
    def resolve_api_key(cls, token: str | None) -> str:
        """A per-request token header wins over the configured default."""
        return token or cls.OPENAI_API_KEY

    @classmethod
    def pipeline_settings(cls, token: str | None = None) -> PipelineSettings:
        """Freeze the current configuration plus the resolved credential for one request."""
        return PipelineSettings(
            api_key=cls.resolve_api_key(token),
            provider_base_url=cls.provider_base_url(),
            embedding_path=cls.EMBEDDING_PATH,
            embedding_model=cls.EMBEDDING_MODEL,
            supabase_url=cls.SUPABASE_URL.rstrip('/'),
            supabase_key=cls.SUPABASE_KEY,
            match_documents_rpc=cls.MATCH_DOCUMENTS_RPC,
            analysis_table=cls.ANALYSIS_TABLE,
            augment_prefix=cls.AUGMENT_PREFIX,
            knowledge_domain=cls.KNOWLEDGE_DOMAIN,
            similarity_threshold=cls.SIMILARITY_THRESHOLD,
            match_count=cls.MATCH_COUNT,
            context_token_budget=cls.CONTEXT_TOKEN_BUDGET,
        )

    @classmethod
    def validate(cls) -> None:
        """Warn about missing keys; the server still starts."""
        if not cls.OPENAI_API_KEY:
            app_logger.warning("OPENAI_API_KEY not set; every request must carry a 'token' header")

        if not cls.SUPABASE_URL or not cls.SUPABASE_KEY:
            app_logger.warning("SUPABASE_URL/SUPABASE_KEY not set; augmented queries and /api/analysis will fail")


Config.validate()
