"""Basic usage examples for Review Insights."""

from reviewinsights import LLMServiceFactory, Segment, compute_diagram
from reviewinsights.ui import render_svg


def example_diagram_only():
    """Example: lay out a diagram from known segment counts."""
    print("📐 Laying out a two-category overlap diagram")

    segments = [
        Segment(("Battery",), 10, 7, 3),
        Segment(("Shipping",), 5, 1, 4),
        Segment(("Battery", "Shipping"), 2, 2, 0),
    ]
    diagram = compute_diagram(segments)
    print(f"🎯 State: {diagram.state.value}")
    for label in diagram.data_labels:
        stats = label.stats
        shown = f"{stats.review_count} reviews (▲{stats.positive_count} ▼{stats.negative_count})" if stats else "-"
        print(f"  {' & '.join(label.categories)} @ ({label.anchor.x:g}, {label.anchor.y:g}): {shown}")


def example_analysis():
    """Example: analyze a handful of reviews and save the diagram."""
    print("\n🔍 Analyzing sample electronics reviews")

    reviews_text = "\n".join([
        "Battery lasts forever and the price is worth it",
        "Setup was confusing and support was rude",
        "Fast and reliable, love the design",
        "Too expensive for what you get",
    ])

    llm_service = LLMServiceFactory.create()
    result = llm_service.analyze_reviews(reviews_text, "electronics")
    print(f"📋 Summary: {result.overall_summary}")

    diagram = compute_diagram(result.category_intersections)
    with open("venn.svg", "w", encoding="utf-8") as f:
        f.write(render_svg(diagram))
    print("💾 Diagram saved to venn.svg")


if __name__ == "__main__":
    example_diagram_only()
    example_analysis()
