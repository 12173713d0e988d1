"""
AI service package for answering questions about uploaded documents.

This package provides:
- answering: Prompt construction and the chat completion call
- exceptions: Errors raised by AI operations

The AIService class holds the client configuration and delegates to
these modules.
"""

import logging

from .answering import MOCK_ANSWER, answer_question, build_question_prompt
from .exceptions import AIServiceError

logger = logging.getLogger(__name__)

__all__ = [
    "AIService",
    "AIServiceError",
    "MOCK_ANSWER",
    "answer_question",
    "build_question_prompt",
    "get_ai_service",
]


class AIService:
    """
    Service for LLM-backed question answering.

    Runs in mock mode when no API key is available so the rest of the
    application works in development.
    """

    def __init__(
        self,
        api_key: str | None = None,
        model: str | None = None,
        temperature: float | None = None,
        max_output_tokens: int | None = None,
        use_mock: bool = False,
    ):
        """
        Initialize the AI service.

        Args:
            api_key: OpenAI API key. If None, reads from config/environment.
            model: Chat model to use. If None, reads from config.
            temperature: Sampling temperature. If None, reads from config.
            max_output_tokens: Answer length cap. If None, reads from config.
            use_mock: If True, return mock answers instead of calling OpenAI.
        """
        try:
            from ...config import get_settings
        except ImportError:
            from config import get_settings

        settings = get_settings()
        if api_key is None:
            api_key = settings.openai_api_key

        self.api_key = api_key
        self.model = model or settings.llm_model
        self.temperature = (
            settings.llm_temperature if temperature is None else temperature
        )
        self.max_output_tokens = max_output_tokens or settings.llm_max_output_tokens
        self.use_mock = use_mock or not self.api_key
        self._client = None

        if self.use_mock:
            logger.warning(
                "AI Service running in MOCK MODE. Set OPENAI_API_KEY in .env for real answers."
            )

    @property
    def client(self):
        """Lazy-load the OpenAI client."""
        if self._client is None:
            if not self.api_key:
                raise AIServiceError(
                    "OpenAI API key not provided. Set OPENAI_API_KEY environment variable."
                )
            from openai import OpenAI

            self._client = OpenAI(api_key=self.api_key)
        return self._client

    async def ask(self, question: str, pdf_text: str) -> str:
        """
        Answer a question using the document text as context.

        Args:
            question: The user's question.
            pdf_text: Document text to answer from.

        Returns:
            The model's answer.
        """
        return await answer_question(
            question,
            pdf_text,
            client=None if self.use_mock else self.client,
            model=self.model,
            temperature=self.temperature,
            max_output_tokens=self.max_output_tokens,
            use_mock=self.use_mock,
        )


# =============================================================================
# Singleton Factory
# =============================================================================

_ai_service: AIService | None = None


def get_ai_service() -> AIService:
    """Get or create the AI service singleton."""
    global _ai_service
    if _ai_service is None:
        _ai_service = AIService()
    return _ai_service
