"""
Data models for chat processing.
Contains pipeline settings, retrieval results, and stream event variants.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Optional


@dataclass(frozen=True)
class PipelineSettings:
    """
    Everything one request needs to reach the provider and the document store.
    Built once at the HTTP boundary and passed explicitly through the pipeline.
    """
    api_key: str
    provider_base_url: str
    embedding_path: str = "v1/embeddings"
    embedding_model: str = "text-embedding-ada-002"
    supabase_url: str = ""
    supabase_key: str = ""
    match_documents_rpc: str = "match_documents"
    analysis_table: str = "documents_v2_analysis"
    augment_prefix: str = "fr"
    knowledge_domain: str = ""
    similarity_threshold: float = 0.1
    match_count: int = 5
    context_token_budget: int = 3000


@dataclass(frozen=True)
class Document:
    """A similarity-search match."""
    content: str
    url: str

    @classmethod
    def from_row(cls, row: dict) -> "Document":
        return cls(content=row.get("content") or "", url=row.get("url") or "")


class RequestKind(Enum):
    """How an inbound query is routed through the chain builder."""
    PLAIN = "plain"
    AUGMENTED = "augmented"


class StreamEventType(Enum):
    """Variants produced while reading a completion stream."""
    DATA = "data"
    DONE = "done"
    ERROR = "error"


@dataclass
class StreamEvent:
    """One decoded completion stream event."""
    type: StreamEventType
    text: str = ""
    error: Optional[Exception] = None
