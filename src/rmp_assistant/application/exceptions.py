"""Application-level exceptions.

These are business-logic errors, not HTTP errors. The presentation layer
(FastAPI routes) translates them into appropriate HTTP responses.
"""


class EmptyConversationError(ValueError):
    """Raised when the caller provides an empty messages list."""


class EmptyQueryError(ValueError):
    """Raised when the text to embed is empty or whitespace only."""


class MissingCredentialsError(RuntimeError):
    """Raised when a provider API key is not configured."""


class CompletionStreamError(RuntimeError):
    """Raised when the completion provider fails after streaming has started."""

    def __init__(self, message: str, fragments_emitted: int = 0) -> None:
        super().__init__(message)
        self.fragments_emitted = fragments_emitted
