"""Analysis category presets offered to the user and passed to the LLM as hints."""

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from .config import settings


@dataclass(frozen=True)
class Aspect:
    """A feedback theme the model should look for."""
    name: str
    description: str
    keywords: tuple = field(default_factory=tuple)


@dataclass(frozen=True)
class AnalysisCategory:
    value: str
    label: str
    group: str
    aspects: tuple


DEFAULT_CATEGORY_VALUE = "content_quality"

CATEGORIES: List[AnalysisCategory] = [
    AnalysisCategory(
        value="electronics",
        label="Electronics",
        group="Product Type Analysis",
        aspects=(
            Aspect("Performance", "Speed, functionality, reliability, and battery life.",
                   ("performance", "speed", "fast", "slow", "lag", "battery", "reliable", "crash")),
            Aspect("Design", "Appearance, build quality, materials, and portability.",
                   ("design", "looks", "build", "materials", "sleek", "heavy", "light", "portable")),
            Aspect("Usability", "Ease of use, user interface, setup process, and software.",
                   ("easy", "setup", "interface", "software", "app", "intuitive", "confusing")),
            Aspect("Value", "Price-to-quality ratio, affordability, and included accessories.",
                   ("price", "value", "worth", "expensive", "cheap", "affordable", "cost")),
            Aspect("Customer Service", "Support experience, warranty claims, and responsiveness.",
                   ("support", "service", "warranty", "refund", "replacement", "helpful", "rude")),
        ),
    ),
    AnalysisCategory(
        value="general_products",
        label="General Products",
        group="Product Type Analysis",
        aspects=(
            Aspect("Quality", "Build quality, durability, materials used, and craftsmanship.",
                   ("quality", "durable", "sturdy", "broke", "flimsy", "materials", "well made")),
            Aspect("Features", "Specific product capabilities, effectiveness, and innovation.",
                   ("feature", "works", "effective", "function", "capable", "useful")),
            Aspect("Price/Value", "Cost-effectiveness, perceived worth, and competitor comparison.",
                   ("price", "value", "worth", "expensive", "cheap", "affordable", "cost")),
            Aspect("Shipping/Delivery", "Speed, reliability, and condition upon arrival.",
                   ("shipping", "delivery", "arrived", "late", "damaged", "package arrived", "courier")),
            Aspect("Packaging", "Presentation, protection of the product, and ease of opening.",
                   ("packaging", "box", "wrapped", "packed", "unboxing")),
        ),
    ),
    AnalysisCategory(
        value="review_source",
        label="Reviewer Profile Analysis",
        group="Reviewer Type Analysis",
        aspects=(
            Aspect("Customer Reviews", "Feedback from verified purchasers, often focused on real-world use.",
                   ("bought", "purchased", "verified", "ordered", "my order")),
            Aspect("Expert Reviews", "Feedback from industry professionals, often technical and comparative.",
                   ("benchmark", "tested", "specs", "professional", "technical")),
            Aspect("User Reviews", "Feedback from general users (not necessarily customers), broader perspective.",
                   ("used", "using", "tried", "daily", "my experience")),
            Aspect("Influencer Reviews", "Feedback from bloggers or social media, often focused on aesthetics and brand.",
                   ("followers", "channel", "blog", "instagram", "sponsored", "aesthetic")),
        ),
    ),
    AnalysisCategory(
        value="review_format",
        label="Review Format Analysis",
        group="Reviewer Type Analysis",
        aspects=(
            Aspect("Detailed Reviews", "Comprehensive, in-depth feedback with pros and cons.",
                   ("pros", "cons", "however", "overall", "detailed")),
            Aspect("Brief Ratings", "Short comments with star ratings, indicating overall satisfaction.",
                   ("stars", "star", "rating", "5/5", "10/10")),
            Aspect("Visual Reviews", "Feedback that includes photos or videos, showing real-world product state.",
                   ("photo", "picture", "video", "image", "see attached")),
            Aspect("Comparison Reviews", "Feedback that compares the product with other specific products.",
                   ("compared", "than", "versus", "vs", "better than", "worse than")),
        ),
    ),
    AnalysisCategory(
        value="business_intelligence",
        label="Strategic Business Insights",
        group="Business Intelligence",
        aspects=(
            Aspect("Marketing and Reputation", "Reviews affecting brand perception, image, and public sentiment.",
                   ("brand", "reputation", "trust", "recommend", "advertised")),
            Aspect("Customer Experience", "Reviews about service quality, support interactions, and the buying process.",
                   ("service", "support", "checkout", "staff", "experience", "order")),
            Aspect("Product Development", "Reviews suggesting specific improvements, new features, or bug fixes.",
                   ("wish", "should", "improve", "bug", "missing", "add", "update")),
            Aspect("User Profiling", "Reviews that reveal information about customer segments, use cases, or demographics.",
                   ("my kids", "my wife", "my husband", "student", "for work", "gift", "beginner")),
        ),
    ),
    AnalysisCategory(
        value=DEFAULT_CATEGORY_VALUE,
        label="Content Quality Analysis",
        group="General Analysis",
        aspects=(
            Aspect("High-Quality Reviews", "Detailed, informative reviews that help other customers make decisions.",
                   ("because", "after", "months", "weeks", "detailed", "recommend")),
            Aspect("Low-Quality Reviews", "Brief, uninformative, or vague reviews with limited value.",
                   ("ok", "fine", "meh", "whatever", "good", "bad")),
            Aspect("Helpful vs. Unhelpful", "An assessment of which feedback is most likely to be considered helpful or unhelpful by the community.",
                   ("helpful", "tip", "advice", "note", "warning")),
        ),
    ),
]


def get_category(value: Optional[str] = None) -> AnalysisCategory:
    """Look up a preset, falling back to the configured default."""
    by_value = {c.value: c for c in CATEGORIES}
    if value and value in by_value:
        return by_value[value]
    return by_value.get(settings.default_category, by_value[DEFAULT_CATEGORY_VALUE])


def grouped_categories() -> Dict[str, List[AnalysisCategory]]:
    """Presets grouped for select boxes, keeping declaration order."""
    groups: Dict[str, List[AnalysisCategory]] = {}
    for category in CATEGORIES:
        groups.setdefault(category.group, []).append(category)
    return groups


def category_hint(category: AnalysisCategory) -> str:
    """Generate a hint string for the LLM based on the chosen preset."""
    aspects = "; ".join(f"{a.name} ({a.description})" for a in category.aspects)
    return (
        f"DOMAIN={category.label}. Prefer these categories when relevant: {aspects} "
        "Adapt or replace them when the reviews clearly discuss something else."
    )
