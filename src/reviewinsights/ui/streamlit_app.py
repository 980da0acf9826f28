"""Streamlit UI for Review Insights."""

import streamlit as st
import json
import logging
import time
from pathlib import Path

# Add parent directory to path for imports
import sys
sys.path.append(str(Path(__file__).parent.parent.parent))

from reviewinsights.core.categories import CATEGORIES, get_category, grouped_categories
from reviewinsights.core.config import settings
from reviewinsights.core.constants import FileConstants, UIConstants
from reviewinsights.core.venn import AmbiguousSegmentError, compute_diagram
from reviewinsights.services.llm import AnalysisError, LLMServiceFactory
from reviewinsights.ui.venn_svg import render_svg
from reviewinsights.utils.data_prep import prepare_export
from reviewinsights.utils.file_reader import ReviewFileError, extract_reviews_text

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

# Page configuration
st.set_page_config(
    page_title=UIConstants.PAGE_TITLE,
    page_icon=UIConstants.PAGE_ICON,
    layout="wide"
)

llm_service = LLMServiceFactory.create()


def _reset():
    for key in ("analysis", "file_name", "category", "error"):
        st.session_state.pop(key, None)


def _render_sentiment(result):
    dist = result.sentiment_distribution
    st.subheader("Sentiment Distribution")
    for label, value in (("Positive", dist.positive_percentage),
                         ("Neutral", dist.neutral_percentage),
                         ("Negative", dist.negative_percentage)):
        st.progress(min(max(value / 100.0, 0.0), 1.0))
        st.caption(f"{label}: {value:.1f}%")


def _render_venn(result):
    st.subheader("Review Category Overlap")
    try:
        diagram = compute_diagram(result.category_intersections)
    except AmbiguousSegmentError as e:
        logger.error(f"Overlap data rejected: {e}")
        st.warning(f"The overlap data is inconsistent and cannot be drawn: {e}")
        return None

    st.markdown(render_svg(diagram), unsafe_allow_html=True)
    if diagram.dropped_categories:
        st.caption(f"Only the first three categories are drawn; not shown: {', '.join(diagram.dropped_categories)}")
    return diagram


# Main UI
st.title(f"{UIConstants.PAGE_ICON} {UIConstants.PAGE_TITLE}")
st.write("Upload your product reviews to unlock powerful summaries and sentiment analysis.")

if not settings.effective_openai_key:
    st.info("No OpenAI API key configured - using the offline keyword analysis.")

with st.sidebar:
    st.header("1. Choose an analysis category")
    options = [c.value for group in grouped_categories().values() for c in group]
    labels = {c.value: f"{c.group} · {c.label}" for c in CATEGORIES}
    category_value = st.selectbox(
        "Analysis category",
        options,
        index=options.index(get_category().value),
        format_func=lambda v: labels[v],
    )
    category = get_category(category_value)

    with st.expander("Category aspects"):
        for aspect in category.aspects:
            st.write(f"**{aspect.name}**: {aspect.description}")

    st.header("2. Upload your reviews file")
    uploaded = st.file_uploader(
        f"CSV or XLSX (max. {settings.max_file_mb:g}MB)",
        type=list(FileConstants.ALLOWED_EXTENSIONS),
    )
    run_analysis = st.button("📊 Analyze Reviews", disabled=uploaded is None, width='stretch')
    st.button("Analyze New File", on_click=_reset, width='stretch')

if run_analysis and uploaded is not None:
    _reset()
    try:
        with st.spinner(f"Performing deep analysis of {uploaded.name}..."):
            start_time = time.time()
            reviews_text = extract_reviews_text(uploaded.name, uploaded.getvalue())
            result = llm_service.analyze_reviews(reviews_text, category.value)
            elapsed = time.time() - start_time
        st.session_state["analysis"] = result
        st.session_state["file_name"] = uploaded.name
        st.session_state["category"] = category.value
        logger.info(f"Analysis of {uploaded.name} finished in {elapsed:.1f}s")
    except (ReviewFileError, AnalysisError) as e:
        logger.error(f"Analysis failed: {e}")
        st.session_state["error"] = str(e)

if st.session_state.get("error"):
    st.error(f"Analysis Failed: {st.session_state['error']}")

result = st.session_state.get("analysis")
if result is not None:
    file_name = st.session_state.get("file_name", "")
    analyzed_category = get_category(st.session_state.get("category"))
    st.header("Analysis Complete")
    st.caption(f"Results for {analyzed_category.label} from {file_name}")

    col1, col2 = st.columns([1, 2])
    with col1:
        _render_sentiment(result)
    with col2:
        st.subheader("Executive Summary")
        st.write(result.overall_summary)

    diagram = _render_venn(result) if result.has_venn_data else None

    st.subheader("Detailed Category Insights")
    for insight in result.category_insights:
        with st.expander(f"{insight.category_name} · {insight.review_count} reviews", expanded=True):
            st.write(insight.summary)
            st.write(f"✅ {insight.positive_count} Positive   ❌ {insight.negative_count} Negative")

    export = prepare_export(result, diagram, file_name, analyzed_category)
    export["metadata"]["export_timestamp"] = time.strftime("%Y-%m-%dT%H:%M:%S")
    st.download_button(
        "Download JSON",
        data=json.dumps(export, indent=2, ensure_ascii=False),
        file_name=f"{Path(file_name).stem}_insights.json",
        mime="application/json",
    )
