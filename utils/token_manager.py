"""
Token counting utilities for context window budgeting.
"""
import tiktoken
from utils.logger import app_logger
from config import Config


class TokenManager:
    """Counts tokens with the configured BPE encoding."""

    # Cache for loaded encodings
    _encoding_cache = {}

    @staticmethod
    def get_encoding(name: str | None = None) -> tiktoken.Encoding:
        """Load (once) and return a tiktoken encoding."""
        name = name or Config.TOKENIZER_ENCODING
        if name not in TokenManager._encoding_cache:
            TokenManager._encoding_cache[name] = tiktoken.get_encoding(name)
            app_logger.info(f"Loaded tokenizer encoding {name}")
        return TokenManager._encoding_cache[name]

    @staticmethod
    def estimate_tokens(text: str) -> int:
        """Estimate token count for text using character-based approximation."""
        if not text:
            return 0

        char_estimate = len(text) // 4
        word_estimate = len(text.split())

        return int((char_estimate * 0.6) + (word_estimate * 0.4))

    @staticmethod
    def count_tokens(text: str) -> int:
        """
        Count tokens in text.

        Falls back to estimate_tokens when the encoding cannot be loaded
        (tiktoken fetches BPE files on first use).
        """
        if not text:
            return 0

        try:
            encoding = TokenManager.get_encoding()
        except Exception as e:
            app_logger.error(f"Failed to load tokenizer {Config.TOKENIZER_ENCODING}: {e}")
            return TokenManager.estimate_tokens(text)

        return len(encoding.encode(text, disallowed_special=()))

    @staticmethod
    def calculate_messages_tokens(messages: list[dict]) -> int:
        """Calculate total tokens for a list of messages."""
        total_tokens = 0

        for msg in messages:
            total_tokens += TokenManager.count_tokens(msg.get('content', ''))
            total_tokens += 4

        return total_tokens

    @staticmethod
    def clear_cache():
        """Clear the encoding cache."""
        TokenManager._encoding_cache.clear()
