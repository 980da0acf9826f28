"""Command-line interface for Review Insights."""

import argparse
import logging
import sys

from .core.categories import CATEGORIES, get_category, grouped_categories
from .core.config import settings
from .core.constants import FileConstants, UIConstants
from .core.venn import AmbiguousSegmentError, compute_diagram
from .services.llm import AnalysisError, LLMServiceFactory
from .ui import render_svg, run_streamlit_app
from .utils.data_prep import export_to_json, load_analysis, prepare_export
from .utils.file_reader import ReviewFileError, read_review_file

logger = logging.getLogger(__name__)


def setup_logging():
    """Setup logging configuration."""
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format=FileConstants.LOG_FORMAT
    )


def _write_svg(diagram, path):
    with open(path, 'w', encoding='utf-8') as f:
        f.write(render_svg(diagram))
    print(f"Diagram written to {path}")


def _print_diagram(diagram):
    if diagram.is_empty:
        print(UIConstants.EMPTY_DIAGRAM_MESSAGE)
        return
    print(f"\nCategory overlap ({', '.join(diagram.categories)}):")
    for label in diagram.data_labels:
        region = " & ".join(label.categories)
        if label.stats is None:
            print(f"  {region}: -")
        else:
            print(f"  {region}: {label.stats.review_count} reviews "
                  f"(▲{label.stats.positive_count} ▼{label.stats.negative_count})")
    if diagram.dropped_categories:
        print(f"  not drawn: {', '.join(diagram.dropped_categories)}")


def cmd_analyze(args):
    """Analyze a CSV/XLSX review file."""
    category = get_category(args.category)
    reviews_text = read_review_file(args.file)
    print(f"Analyzing {len(reviews_text.splitlines())} rows from {args.file} as '{category.label}'...")

    llm_service = LLMServiceFactory.create()
    result = llm_service.analyze_reviews(reviews_text, category.value)

    dist = result.sentiment_distribution
    print(f"\nSummary: {result.overall_summary[:UIConstants.MAX_SUMMARY_PREVIEW]}")
    print(f"Sentiment: {dist.positive_percentage:.1f}% positive, "
          f"{dist.neutral_percentage:.1f}% neutral, {dist.negative_percentage:.1f}% negative")
    print("\nCategories:")
    for insight in result.category_insights:
        print(f"  {insight.category_name}: {insight.review_count} reviews "
              f"({insight.positive_count}+ / {insight.negative_count}-)")

    diagram = compute_diagram(result.category_intersections)
    _print_diagram(diagram)

    if args.svg:
        _write_svg(diagram, args.svg)
    if args.out:
        export_to_json(prepare_export(result, diagram, args.file, category), args.out)
        print(f"Results exported to {args.out}")


def cmd_venn(args):
    """Draw the overlap diagram of a saved analysis."""
    result = load_analysis(args.input_file)
    diagram = compute_diagram(result.category_intersections, scale=args.scale)
    _print_diagram(diagram)
    if args.svg:
        _write_svg(diagram, args.svg)


def cmd_categories(args):
    """List category presets."""
    for group, categories in grouped_categories().items():
        print(group)
        for category in categories:
            marker = "*" if category.value == get_category().value else " "
            print(f" {marker} {category.value:<24} {category.label}")


def cmd_ui(args):
    """UI command."""
    print("Launching Review Insights UI...")
    try:
        run_streamlit_app()
    except KeyboardInterrupt:
        print("\nUI stopped by user")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Review Insights - LLM review analysis with category overlap diagrams")
    subparsers = parser.add_subparsers(dest='command', help='Available commands')

    # Analyze command
    analyze_parser = subparsers.add_parser('analyze', help='Analyze a CSV/XLSX review file')
    analyze_parser.add_argument('file', help='Review file (.csv or .xlsx)')
    analyze_parser.add_argument('--category', choices=[c.value for c in CATEGORIES],
                                help='Analysis category preset')
    analyze_parser.add_argument('--out', help='Output JSON file')
    analyze_parser.add_argument('--svg', help='Write the overlap diagram as SVG')

    # Venn command
    venn_parser = subparsers.add_parser('venn', help='Draw the overlap diagram of a saved analysis')
    venn_parser.add_argument('input_file', help='Exported or raw analysis JSON')
    venn_parser.add_argument('--svg', help='Output SVG file')
    venn_parser.add_argument('--scale', type=float, default=1.0, help='Diagram scale factor')

    subparsers.add_parser('categories', help='List analysis category presets')
    subparsers.add_parser('ui', help='Launch web UI')
    return parser


def main(argv=None):
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return

    setup_logging()

    commands = {
        'analyze': cmd_analyze,
        'venn': cmd_venn,
        'categories': cmd_categories,
        'ui': cmd_ui,
    }
    try:
        commands[args.command](args)
    except KeyboardInterrupt:
        print("\nOperation cancelled by user")
    except (ReviewFileError, AnalysisError, AmbiguousSegmentError, OSError, KeyError, ValueError) as e:
        logger.error(f"Command failed: {e}")
        sys.exit(1)
