"""Services for Review Insights."""

from .llm import LLMServiceFactory, AnalysisError

__all__ = [
    "LLMServiceFactory",
    "AnalysisError",
]
