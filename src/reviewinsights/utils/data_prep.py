"""Data preparation for export."""

import json
from typing import Dict, Any, Optional

from .. import __version__
from ..core.categories import AnalysisCategory
from ..core.models import AnalysisResult, Diagram
from ..services.llm import parse_analysis


def prepare_export(
    result: AnalysisResult,
    diagram: Optional[Diagram],
    file_name: str,
    category: AnalysisCategory,
) -> Dict[str, Any]:
    """Prepare data for JSON export."""
    return {
        "file_name": file_name,
        "category": {"value": category.value, "label": category.label},
        "analysis": result.to_dict(),
        "diagram": diagram.to_dict() if diagram is not None else None,
        "metadata": {
            "export_timestamp": None,  # Will be set by caller
            "version": __version__,
        },
    }


def export_to_json(data: Dict[str, Any], filename: str) -> None:
    """Export data to JSON file."""
    import datetime

    # Add timestamp
    data["metadata"]["export_timestamp"] = datetime.datetime.now().isoformat()

    with open(filename, 'w', encoding='utf-8') as f:
        json.dump(data, f, indent=2, ensure_ascii=False)


def load_analysis(filename: str) -> AnalysisResult:
    """Load an analysis from a raw model response or from an export file.

    Raw responses go through the same validation as live model output.
    """
    with open(filename, 'r', encoding='utf-8') as f:
        data = json.load(f)
    if isinstance(data, dict) and "analysis" in data:
        data = data["analysis"]
    return parse_analysis(data)
