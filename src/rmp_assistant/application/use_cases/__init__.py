"""Use-case layer — business logic decoupled from the HTTP transport."""

from rmp_assistant.application.use_cases.chat import ChatUseCase
from rmp_assistant.application.use_cases.seed import SeedReviewsUseCase, load_reviews

__all__ = ["ChatUseCase", "SeedReviewsUseCase", "load_reviews"]
