"""SVG rendering for category-overlap diagrams."""

import html
from dataclasses import dataclass
from typing import Dict

from ..core.constants import UIConstants
from ..core.models import Diagram, DataLabel


@dataclass(frozen=True)
class CircleStyle:
    gradient_inner: str
    gradient_outer: str
    stroke: str


STYLES: Dict[str, CircleStyle] = {
    "set-a": CircleStyle("rgba(167, 139, 250, 0.6)", "rgba(99, 102, 241, 0.4)", "#c4b5fd"),
    "set-b": CircleStyle("rgba(52, 211, 153, 0.6)", "rgba(16, 185, 129, 0.4)", "#a7f3d0"),
    "set-c": CircleStyle("rgba(252, 211, 77, 0.6)", "rgba(251, 191, 36, 0.4)", "#fde047"),
}

FONT_FAMILY = "system-ui, -apple-system, Segoe UI, sans-serif"
TEXT_COLOR = "#e2e8f0"
MUTED_COLOR = "#cbd5e1"
POSITIVE_COLOR = "#86efac"
NEGATIVE_COLOR = "#fca5a5"


def _fmt(value: float) -> str:
    return f"{value:g}"


def _defs() -> str:
    gradients = "".join(
        f'''    <radialGradient id="grad-{tag}" cx="50%" cy="50%" r="50%">
      <stop offset="0%" stop-color="{style.gradient_inner}" />
      <stop offset="100%" stop-color="{style.gradient_outer}" />
    </radialGradient>
'''
        for tag, style in STYLES.items()
    )
    return f'''  <defs>
{gradients}    <filter id="glow" x="-50%" y="-50%" width="200%" height="200%">
      <feGaussianBlur stdDeviation="3.5" result="coloredBlur" />
      <feMerge><feMergeNode in="coloredBlur" /><feMergeNode in="SourceGraphic" /></feMerge>
    </filter>
  </defs>
'''


def _data_label(label: DataLabel) -> str:
    """Count, caption and sentiment split stacked under the anchor."""
    if label.stats is None:
        return ""
    x, y = _fmt(label.anchor.x), _fmt(label.anchor.y)
    stats = label.stats
    return (
        f'  <text x="{x}" y="{y}" text-anchor="middle" font-family="{FONT_FAMILY}" font-size="12">'
        f'<tspan x="{x}" dy="1.2em" font-size="26" font-weight="700" fill="#ffffff">{stats.review_count}</tspan>'
        f'<tspan x="{x}" dy="1.4em" font-size="12" fill="{MUTED_COLOR}">reviews</tspan>'
        f'<tspan x="{x}" dy="1.6em" font-size="12" font-weight="600">'
        f'<tspan fill="{POSITIVE_COLOR}">▲{stats.positive_count}</tspan> '
        f'<tspan fill="{NEGATIVE_COLOR}">▼{stats.negative_count}</tspan></tspan>'
        f'</text>\n'
    )


def render_svg(diagram: Diagram) -> str:
    """Render a Diagram as a standalone SVG document."""
    if diagram.is_empty:
        return (
            '<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 400 60" width="100%">\n'
            f'  <text x="200" y="35" text-anchor="middle" font-family="{FONT_FAMILY}" font-size="14" '
            f'fill="{MUTED_COLOR}">{html.escape(UIConstants.EMPTY_DIAGRAM_MESSAGE)}</text>\n'
            '</svg>'
        )

    svg = (
        f'<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 {_fmt(diagram.width)} {_fmt(diagram.height)}" '
        f'width="100%">\n'
    )
    svg += _defs()

    svg += '  <g filter="url(#glow)">\n'
    for circle in diagram.circles:
        style = STYLES[circle.style_tag]
        svg += (
            f'    <circle cx="{_fmt(circle.center.x)}" cy="{_fmt(circle.center.y)}" r="{_fmt(circle.radius)}" '
            f'fill="url(#grad-{circle.style_tag})" stroke="{style.stroke}" stroke-width="1" />\n'
        )
    svg += '  </g>\n'

    for label in diagram.category_labels:
        svg += (
            f'  <text x="{_fmt(label.anchor.x)}" y="{_fmt(label.anchor.y)}" text-anchor="middle" '
            f'font-family="{FONT_FAMILY}" font-size="14" font-weight="700" fill="{TEXT_COLOR}">'
            f'{html.escape(label.text)}</text>\n'
        )

    for label in diagram.data_labels:
        svg += _data_label(label)

    svg += "</svg>"
    return svg
