"""
Shared exceptions for AI service modules.
"""


class AIServiceError(Exception):
    """Raised when AI service operations fail."""

    kind = "ai_service_error"
