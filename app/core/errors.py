"""
Application errors for clean API error handling.

MissingQueryError is the only error surfaced to callers (400). UpstreamError is
raised by the Gemini client and recovered inside the relay.
"""


class MissingQueryError(ValueError):
    """Raised when a query is absent or empty."""

    def __init__(self, message: str = "Faltou a pergunta") -> None:
        self.message = message
        super().__init__(message)


class UpstreamError(Exception):
    """Raised when the upstream API answers with a non-2xx status."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.message = message
        self.status_code = status_code
        super().__init__(message)
