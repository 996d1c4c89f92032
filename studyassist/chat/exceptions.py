class CompletionError(Exception):
    """Raised when the completion service fails."""

    status_code = 500


class CompletionRateLimitError(CompletionError):
    """Raised when the completion service rejects the call for rate limiting."""

    status_code = 429


class CompletionQuotaError(CompletionError):
    """Raised when the completion service requires payment or quota is exhausted."""

    status_code = 402


class CompletionNetworkError(CompletionError):
    """Raised when the completion service cannot be reached."""


class MalformedArtifactError(Exception):
    """Raised when a fenced structured payload fails to parse or validate."""
