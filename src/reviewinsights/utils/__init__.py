"""Utility modules for Review Insights."""

from .data_prep import export_to_json, prepare_export, load_analysis
from .file_reader import extract_reviews_text, read_review_file, ReviewFileError

__all__ = [
    "export_to_json",
    "prepare_export",
    "load_analysis",
    "extract_reviews_text",
    "read_review_file",
    "ReviewFileError",
]
