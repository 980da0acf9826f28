"""Core modules for Review Insights."""

from .models import *
from .config import settings
from .categories import *
from .venn import *

__all__ = [
    "settings",
    "Segment",
    "SegmentStats",
    "AnalysisResult",
    "CategoryInsight",
    "SentimentDistribution",
    "Diagram",
    "DiagramState",
    "AnalysisCategory",
    "get_category",
    "compute_diagram",
    "find_segment",
    "AmbiguousSegmentError",
]
