"""
Question answering over document text using an OpenAI chat model.
"""

import logging
from typing import Any

from .exceptions import AIServiceError

logger = logging.getLogger(__name__)

MOCK_ANSWER = (
    "DEVELOPMENT MODE: no language model is configured. "
    "Set OPENAI_API_KEY to get real answers."
)


def build_question_prompt(question: str, pdf_text: str) -> str:
    """Combine the document text and the question into a single user message."""
    return f"Context:\n{pdf_text}\n\nQuestion: {question}"


async def answer_question(
    question: str,
    pdf_text: str,
    client: Any,  # OpenAI client
    model: str = "gpt-4.1-mini",
    temperature: float = 1.0,
    max_output_tokens: int = 2048,
    use_mock: bool = False,
) -> str:
    """
    Ask the model a question about a document.

    Args:
        question: The user's question.
        pdf_text: Extracted text of one or more documents, used as context.
        client: OpenAI client instance.
        model: Model name to use.
        temperature: Sampling temperature.
        max_output_tokens: Upper bound on the answer length.
        use_mock: If True, return a canned answer without calling OpenAI.

    Returns:
        The answer text.

    Raises:
        AIServiceError: If the request fails or the model returns nothing.
    """
    if use_mock:
        logger.info("Answering question (MOCK MODE)")
        return MOCK_ANSWER

    logger.info(
        "Asking %s: question=%d chars, context=%d chars",
        model,
        len(question),
        len(pdf_text),
    )

    try:
        response = client.chat.completions.create(
            model=model,
            messages=[
                {"role": "user", "content": build_question_prompt(question, pdf_text)},
            ],
            temperature=temperature,
            max_tokens=max_output_tokens,
        )
    except Exception as e:
        logger.exception("Question answering request failed")
        raise AIServiceError(f"LLM request failed: {e}") from e

    if not response.choices:
        raise AIServiceError("Empty response from OpenAI")

    content = response.choices[0].message.content
    if not content:
        raise AIServiceError("Empty response from OpenAI")

    return content
