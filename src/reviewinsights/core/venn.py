"""Category-overlap resolution and Venn layout.

Given the segments returned by the analysis (each one an exact combination of
categories with review counts), work out which categories take part in the
diagram, match every region of a 2-set or 3-set Venn diagram to its segment,
and describe circles and label anchors as plain data. Rendering is left to the
caller (see ``reviewinsights.ui.venn_svg``).
"""

import logging
from itertools import combinations
from collections.abc import Mapping
from typing import Dict, Iterable, List, Optional, Sequence, Tuple, Union

from .constants import LayoutConstants
from .models import (
    CategoryLabel,
    Circle,
    DataLabel,
    Diagram,
    DiagramState,
    Point,
    Segment,
)

logger = logging.getLogger(__name__)

SegmentIndex = Dict[Tuple[str, ...], Segment]


class AmbiguousSegmentError(ValueError):
    """Two segments describe the same combination of categories."""

    def __init__(self, key: Tuple[str, ...]):
        self.key = key
        super().__init__(f"More than one segment for categories {list(key)}")


def segment_key(categories: Iterable[str]) -> Tuple[str, ...]:
    """Canonical key for a combination of category names."""
    return tuple(sorted(categories))


def build_segment_index(segments: Iterable[Segment]) -> SegmentIndex:
    """Map each segment's canonical key to the segment.

    Raises AmbiguousSegmentError when two segments share a key.
    """
    index: SegmentIndex = {}
    for segment in segments:
        key = segment.key
        if key in index:
            raise AmbiguousSegmentError(key)
        index[key] = segment
    return index


def find_segment(
    categories: Iterable[str],
    segments: Union[SegmentIndex, Iterable[Segment]],
) -> Optional[Segment]:
    """Return the segment covering exactly ``categories``, or None."""
    index = segments if isinstance(segments, Mapping) else build_segment_index(segments)
    return index.get(segment_key(categories))


def unique_categories(segments: Iterable[Segment]) -> List[str]:
    """Every category name in first-seen order."""
    seen: Dict[str, None] = {}
    for segment in segments:
        for name in segment.categories:
            seen.setdefault(name, None)
    return list(seen)


def select_state(num_categories: int) -> DiagramState:
    if num_categories < LayoutConstants.MIN_DIAGRAM_SETS:
        return DiagramState.EMPTY
    if num_categories == 2:
        return DiagramState.TWO_SET
    return DiagramState.THREE_SET


def region_subsets(categories: Sequence[str]) -> List[Tuple[str, ...]]:
    """All non-empty subsets, singles first, in category order."""
    return [
        combo
        for size in range(1, len(categories) + 1)
        for combo in combinations(categories, size)
    ]


def _region_id(categories: Sequence[str], region: Tuple[str, ...]) -> str:
    # "a", "bc", "abc"... matches the anchor tables in LayoutConstants
    return "".join("abc"[categories.index(name)] for name in region)


def _data_label(anchor: Point, region: Tuple[str, ...], index: SegmentIndex) -> DataLabel:
    segment = index.get(segment_key(region))
    # Empty and zero-count regions keep their anchor but carry no stats
    stats = segment.stats if segment is not None and segment.review_count > 0 else None
    return DataLabel(anchor=anchor, categories=region, stats=stats)


def compute_diagram(segments: Iterable[Segment], scale: float = 1.0) -> Diagram:
    """Lay out the category-overlap diagram for ``segments``.

    Fewer than two categories gives an EMPTY diagram. With more than three,
    only the first three by first appearance are drawn and the rest are
    listed in ``Diagram.dropped_categories``.
    """
    segments = list(segments)
    index = build_segment_index(segments)
    universe = unique_categories(segments)
    state = select_state(len(universe))

    if state is DiagramState.EMPTY:
        logger.debug(f"No diagram for {len(universe)} categories")
        return Diagram(state=state)

    if state is DiagramState.TWO_SET:
        width, height = LayoutConstants.TWO_SET_WIDTH, LayoutConstants.TWO_SET_HEIGHT
        radius = LayoutConstants.TWO_SET_RADIUS
        centers = LayoutConstants.TWO_SET_CENTERS
        label_points = LayoutConstants.TWO_SET_CATEGORY_LABELS
        anchors = LayoutConstants.TWO_SET_ANCHORS
    else:
        width, height = LayoutConstants.THREE_SET_WIDTH, LayoutConstants.THREE_SET_HEIGHT
        radius = LayoutConstants.THREE_SET_RADIUS
        centers = LayoutConstants.THREE_SET_CENTERS
        label_points = LayoutConstants.THREE_SET_CATEGORY_LABELS
        anchors = LayoutConstants.THREE_SET_ANCHORS

    drawn = universe[:LayoutConstants.MAX_DIAGRAM_SETS]
    dropped = tuple(universe[LayoutConstants.MAX_DIAGRAM_SETS:])
    if dropped:
        logger.warning(f"Diagram limited to {drawn}; ignoring categories {list(dropped)}")

    circles = tuple(
        Circle(center=Point(*center).scaled(scale), radius=radius * scale, style_tag=tag)
        for center, tag in zip(centers, LayoutConstants.STYLE_TAGS)
    )
    category_labels = tuple(
        CategoryLabel(anchor=Point(*p).scaled(scale), text=name)
        for p, name in zip(label_points, drawn)
    )
    data_labels = tuple(
        _data_label(Point(*anchors[_region_id(drawn, region)]).scaled(scale), region, index)
        for region in region_subsets(drawn)
    )

    return Diagram(
        state=state,
        width=width * scale,
        height=height * scale,
        circles=circles,
        category_labels=category_labels,
        data_labels=data_labels,
        dropped_categories=dropped,
    )
