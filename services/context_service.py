"""
Context assembly for retrieval-augmented prompts.
"""
from models.chat_models import Document
from utils.constants import CONTEXT_DOCUMENT_TEMPLATE
from utils.logger import app_logger
from utils.token_manager import TokenManager


class ContextService:
    """Builds the bounded CONTEXT block from ranked documents."""

    @staticmethod
    def format_document(document: Document) -> str:
        return CONTEXT_DOCUMENT_TEMPLATE.format(content=document.content.strip(), url=document.url)

    @staticmethod
    def build_context(documents: list[Document], token_budget: int) -> str:
        """
        Concatenate documents in ranked order until the token budget is exceeded.

        The document that pushes the running count over the budget is still
        included; nothing after it is.

        Args:
            documents: Matches in the order returned by the search service
            token_budget: Maximum tokens before truncation kicks in

        Returns:
            Context string, empty when there are no documents
        """
        token_count = 0
        parts = []

        for document in documents:
            token_count += TokenManager.count_tokens(document.content)
            parts.append(ContextService.format_document(document))

            if token_count > token_budget:
                app_logger.info(
                    f"Context budget reached: kept {len(parts)}/{len(documents)} documents "
                    f"({token_count}/{token_budget} tokens)"
                )
                break

        return "".join(parts)
