from flashdeck_app.core.error_handlers import FlashdeckError

# Reasons attached to AIGenerationError
REASON_QUOTA = 'quota'
REASON_RATE_LIMIT = 'rate_limit'
REASON_CONTENT_POLICY = 'content_policy'
REASON_CONFIGURATION = 'configuration'
REASON_SAVE_FAILED = 'save_failed'
REASON_UNKNOWN = 'unknown'


class AIServiceError(FlashdeckError):
    """Base exception for the AI services module."""

    def __init__(self, message: str, code: str = 'AI_SERVICE_ERROR', status_code: int = 502, details=None):
        super().__init__(message=message, code=code, status_code=status_code, details=details)


class AIConfigurationError(AIServiceError):
    """Raised when no API key is configured."""

    def __init__(self, message: str = 'Gemini API key is not configured'):
        super().__init__(message, code='AI_NOT_CONFIGURED', status_code=503)


class AIContentBlockedError(AIServiceError):
    """Raised when the provider refuses to answer a prompt."""

    def __init__(self, message: str = 'Response blocked by content policy'):
        super().__init__(message, code='AI_CONTENT_BLOCKED')


class AIGenerationError(AIServiceError):
    """Card generation failed. ``message`` is safe to show users."""

    def __init__(self, message: str, reason: str = REASON_UNKNOWN):
        self.reason = reason
        super().__init__(message, code='AI_GENERATION_FAILED', details={'reason': reason})
