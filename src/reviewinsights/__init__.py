"""Review Insights - LLM-powered review analysis with category overlap diagrams."""

__version__ = "1.0.0"
__author__ = "Review Insights Team"

from .core.models import *
from .core.config import settings
from .core.venn import compute_diagram, find_segment, AmbiguousSegmentError
from .services.llm import LLMServiceFactory

__all__ = [
    "settings",
    "compute_diagram",
    "find_segment",
    "AmbiguousSegmentError",
    "LLMServiceFactory",
]
