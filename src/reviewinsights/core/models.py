"""Data models for Review Insights."""

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, List, Dict, Any, Tuple


def _count(data: Dict[str, Any], camel: str, snake: str) -> int:
    """Read an integer count stored under either the LLM (camelCase) or export (snake_case) key."""
    value = data[camel] if camel in data else data[snake]
    return int(value)


@dataclass(frozen=True)
class SegmentStats:
    """Counts shown for one region of the overlap diagram."""
    review_count: int
    positive_count: int
    negative_count: int

    @property
    def neutral_count(self) -> int:
        return self.review_count - self.positive_count - self.negative_count


@dataclass(frozen=True)
class Segment:
    """Reviews belonging to exactly one combination of categories.

    Membership is exact: a review counted under ("Price", "Quality") is not
    also counted under ("Price",). The given name order is kept so the
    diagram can order categories by first appearance, but matching between
    segments ignores it.
    """
    categories: Tuple[str, ...]
    review_count: int = 0
    positive_count: int = 0
    negative_count: int = 0

    def __post_init__(self):
        categories = (self.categories,) if isinstance(self.categories, str) else tuple(self.categories)
        object.__setattr__(self, "categories", categories)

        if not categories:
            raise ValueError("Segment needs at least one category")
        if len(set(categories)) != len(categories):
            raise ValueError(f"Duplicate category names in segment: {list(categories)}")
        for name, value in (("review_count", self.review_count),
                            ("positive_count", self.positive_count),
                            ("negative_count", self.negative_count)):
            if value < 0:
                raise ValueError(f"{name} must be non-negative, got {value}")
        if self.positive_count > self.review_count or self.negative_count > self.review_count:
            raise ValueError(
                f"Sentiment counts exceed review count for {list(categories)}: "
                f"{self.positive_count}+/{self.negative_count}- of {self.review_count}"
            )

    @property
    def key(self) -> Tuple[str, ...]:
        """Canonical, order-independent lookup key."""
        return tuple(sorted(self.categories))

    @property
    def stats(self) -> SegmentStats:
        return SegmentStats(self.review_count, self.positive_count, self.negative_count)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Segment":
        return cls(
            categories=data["categories"],
            review_count=_count(data, "reviewCount", "review_count"),
            positive_count=_count(data, "positiveCount", "positive_count"),
            negative_count=_count(data, "negativeCount", "negative_count"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "categories": list(self.categories),
            "reviewCount": self.review_count,
            "positiveCount": self.positive_count,
            "negativeCount": self.negative_count,
        }


@dataclass
class SentimentDistribution:
    """Percentage breakdown of review sentiment."""
    positive_percentage: float
    neutral_percentage: float
    negative_percentage: float

    @property
    def total(self) -> float:
        return self.positive_percentage + self.neutral_percentage + self.negative_percentage


@dataclass
class CategoryInsight:
    """Summary and counts for one discovered category."""
    category_name: str
    summary: str
    review_count: int
    positive_count: int
    negative_count: int

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CategoryInsight":
        return cls(
            category_name=str(data.get("categoryName", data.get("category_name", ""))),
            summary=str(data.get("summary", "")),
            review_count=_count(data, "reviewCount", "review_count"),
            positive_count=_count(data, "positiveCount", "positive_count"),
            negative_count=_count(data, "negativeCount", "negative_count"),
        )


@dataclass
class AnalysisResult:
    """Structured analysis returned by the LLM for one uploaded file."""
    overall_summary: str
    sentiment_distribution: SentimentDistribution
    category_insights: List[CategoryInsight] = field(default_factory=list)
    category_intersections: List[Segment] = field(default_factory=list)

    @property
    def has_venn_data(self) -> bool:
        return len(self.category_intersections) > 1

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AnalysisResult":
        """Build a result from the camelCase JSON shape used by the model and by exports."""
        dist = data["sentimentDistribution"]
        return cls(
            overall_summary=str(data.get("overallSummary", "")),
            sentiment_distribution=SentimentDistribution(
                positive_percentage=float(dist["positivePercentage"]),
                neutral_percentage=float(dist["neutralPercentage"]),
                negative_percentage=float(dist["negativePercentage"]),
            ),
            category_insights=[CategoryInsight.from_dict(i) for i in data["categoryInsights"]],
            category_intersections=[Segment.from_dict(s) for s in data["categoryIntersections"]],
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "overallSummary": self.overall_summary,
            "sentimentDistribution": {
                "positivePercentage": self.sentiment_distribution.positive_percentage,
                "neutralPercentage": self.sentiment_distribution.neutral_percentage,
                "negativePercentage": self.sentiment_distribution.negative_percentage,
            },
            "categoryInsights": [
                {
                    "categoryName": i.category_name,
                    "summary": i.summary,
                    "reviewCount": i.review_count,
                    "positiveCount": i.positive_count,
                    "negativeCount": i.negative_count,
                }
                for i in self.category_insights
            ],
            "categoryIntersections": [s.to_dict() for s in self.category_intersections],
        }


# --- Diagram primitives ---

@dataclass(frozen=True)
class Point:
    x: float
    y: float

    def scaled(self, factor: float) -> "Point":
        return Point(self.x * factor, self.y * factor)

    def distance_to(self, other: "Point") -> float:
        return math.hypot(self.x - other.x, self.y - other.y)


@dataclass(frozen=True)
class Circle:
    """One category's circle."""
    center: Point
    radius: float
    style_tag: str

    def contains(self, point: Point) -> bool:
        return self.center.distance_to(point) < self.radius


@dataclass(frozen=True)
class CategoryLabel:
    anchor: Point
    text: str


@dataclass(frozen=True)
class DataLabel:
    """Statistics slot for one region; stats is None when nothing is shown there."""
    anchor: Point
    categories: Tuple[str, ...]
    stats: Optional[SegmentStats] = None


class DiagramState(Enum):
    EMPTY = "empty"
    TWO_SET = "two_set"
    THREE_SET = "three_set"


@dataclass(frozen=True)
class Diagram:
    """Declarative description of a category-overlap diagram."""
    state: DiagramState
    width: float = 0
    height: float = 0
    circles: Tuple[Circle, ...] = ()
    category_labels: Tuple[CategoryLabel, ...] = ()
    data_labels: Tuple[DataLabel, ...] = ()
    dropped_categories: Tuple[str, ...] = ()

    @property
    def is_empty(self) -> bool:
        return self.state is DiagramState.EMPTY

    @property
    def categories(self) -> Tuple[str, ...]:
        return tuple(label.text for label in self.category_labels)

    def to_dict(self) -> Dict[str, Any]:
        """Plain JSON-friendly form for exports."""
        def point(p: Point) -> Dict[str, float]:
            return {"x": p.x, "y": p.y}

        return {
            "state": self.state.value,
            "width": self.width,
            "height": self.height,
            "circles": [
                {"center": point(c.center), "radius": c.radius, "styleTag": c.style_tag}
                for c in self.circles
            ],
            "categoryLabels": [{"anchor": point(l.anchor), "text": l.text} for l in self.category_labels],
            "dataLabels": [
                {
                    "anchor": point(d.anchor),
                    "categories": list(d.categories),
                    "stats": None if d.stats is None else {
                        "reviewCount": d.stats.review_count,
                        "positiveCount": d.stats.positive_count,
                        "negativeCount": d.stats.negative_count,
                    },
                }
                for d in self.data_labels
            ],
            "droppedCategories": list(self.dropped_categories),
        }
