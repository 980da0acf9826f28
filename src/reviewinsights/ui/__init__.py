"""User interfaces for Review Insights."""

import subprocess
import sys
from pathlib import Path

from .venn_svg import render_svg

APP_PATH = Path(__file__).parent / "streamlit_app.py"


def run_streamlit_app() -> int:
    """Launch the Streamlit app in a subprocess and return its exit code."""
    return subprocess.run([sys.executable, "-m", "streamlit", "run", str(APP_PATH)]).returncode


__all__ = [
    "render_svg",
    "run_streamlit_app",
    "APP_PATH",
]
