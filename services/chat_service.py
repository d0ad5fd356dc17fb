"""
Chat service containing the message chain logic.
Decides whether a query is retrieval-augmented and builds the message list sent upstream.
"""
import logging

from models.api_models import ChatCompletionRequest, Message, SessionMsg
from models.chat_models import PipelineSettings, RequestKind
from services.context_service import ContextService
from services.embedding import EmbeddingService
from services.similarity_search import SimilaritySearchService
from utils.constants import (
    SYSTEM_INSTRUCTION,
    EXAMPLE_USER_CONTENT,
    EXAMPLE_ASSISTANT_CONTENT,
    AUGMENTED_USER_TEMPLATE,
    DOMAIN_QUESTION_TEMPLATE
)
from utils.logger import app_logger
from utils.token_manager import TokenManager


class ChatService:
    """Service for building message chains."""

    @staticmethod
    def classify_request(content: str, prefix: str) -> RequestKind:
        """AUGMENTED when the first word of the query is the prefix, case-insensitive."""
        words = content.split(maxsplit=1)
        if prefix and words and words[0].lower() == prefix.lower():
            return RequestKind.AUGMENTED
        return RequestKind.PLAIN

    @staticmethod
    def strip_prefix(content: str, prefix: str) -> str:
        """Drop the leading prefix word and the whitespace after it."""
        return content.lstrip()[len(prefix):].lstrip()

    @staticmethod
    def exemplar_messages() -> list[Message]:
        """One-shot example showing the expected answer format."""
        return [
            Message(role="system", content=SYSTEM_INSTRUCTION),
            Message(role="user", content=EXAMPLE_USER_CONTENT),
            Message(role="assistant", content=EXAMPLE_ASSISTANT_CONTENT),
        ]

    @staticmethod
    def build_augmented_user_message(settings: PipelineSettings, context_text: str, query: str) -> Message:
        question = query
        if settings.knowledge_domain:
            question = DOMAIN_QUESTION_TEMPLATE.format(domain=settings.knowledge_domain, question=query)

        return Message(
            role="user",
            content=AUGMENTED_USER_TEMPLATE.format(context=context_text, question=question)
        )

    @staticmethod
    async def retrieve_context(settings: PipelineSettings, query: str) -> str:
        """Embed the query, search the document store and assemble the context block."""
        embedding = await EmbeddingService.request_embedding(settings, query)
        documents = await SimilaritySearchService(settings).match_documents(embedding)
        return ContextService.build_context(documents, settings.context_token_budget)

    @staticmethod
    async def _make_augmented_chain(
        settings: PipelineSettings,
        content: str,
        recent_messages: list[Message]
    ) -> SessionMsg:
        query = ChatService.strip_prefix(content, settings.augment_prefix)
        context_text = await ChatService.retrieve_context(settings, query)

        user_message = ChatService.build_augmented_user_message(settings, context_text, query)
        app_logger.info(f"Augmented query with {len(context_text)} characters of context")
        app_logger.debug(f"Augmented user message: {user_message.content}")

        return SessionMsg(
            userMessage=user_message,
            recentMessages=[*recent_messages, *ChatService.exemplar_messages()]
        )

    @staticmethod
    async def make_chat_messages(
        settings: PipelineSettings,
        user_message: Message,
        recent_messages: list[Message]
    ) -> SessionMsg:
        """
        Build the session for one query.

        PLAIN queries come back unchanged. AUGMENTED queries get a user message
        carrying the retrieved context, and the one-shot exemplar is appended to
        the history.
        """
        kind = ChatService.classify_request(user_message.content, settings.augment_prefix)

        if kind is RequestKind.AUGMENTED:
            return await ChatService._make_augmented_chain(settings, user_message.content, recent_messages)

        return SessionMsg(userMessage=user_message, recentMessages=recent_messages)

    @staticmethod
    def split_session(messages: list[Message]) -> SessionMsg:
        """The last message is the query; everything before it is history."""
        if not messages:
            raise ValueError("messages must contain at least one message")
        return SessionMsg(userMessage=messages[-1], recentMessages=list(messages[:-1]))

    @staticmethod
    def to_provider_message(message: Message) -> dict:
        """Serialize a message for the provider, which rejects the local date field."""
        return message.model_dump(exclude={"date"}, exclude_none=True)

    @staticmethod
    async def pre_handle_message(settings: PipelineSettings, completion_request: ChatCompletionRequest) -> dict:
        """
        Rewrite a completion request so its messages go through the chain builder.

        Returns:
            Completion payload with every other field preserved and
            messages = history + [user message]
        """
        session = ChatService.split_session(completion_request.messages)
        chain = await ChatService.make_chat_messages(settings, session.userMessage, session.recentMessages)

        messages = [
            ChatService.to_provider_message(message)
            for message in [*chain.recentMessages, chain.userMessage]
        ]
        if app_logger.isEnabledFor(logging.DEBUG):
            app_logger.debug(f"Prompt size: ~{TokenManager.calculate_messages_tokens(messages)} tokens in {len(messages)} messages")

        payload = completion_request.model_dump(exclude_none=True)
        payload["messages"] = messages
        return payload
