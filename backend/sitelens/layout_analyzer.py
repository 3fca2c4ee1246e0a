"""
Layout analyzer: structural summary from flat style samples.

Samples carry no parent/child relationships, so section depth and child
counts are always 0, and the grid column count is an assumed 12 rather
than a measured value.
"""

import re

from sitelens.models import Breakpoint, LayoutSummary, Section, StyleSample


SEMANTIC_TAGS = ["header", "footer", "main", "nav", "section", "article"]

DEFAULT_CONTAINER_WIDTH = 1200
MIN_CONTAINER_WIDTH = 800
DEFAULT_GRID_COLUMNS = 12

BREAKPOINTS = [
    ("sm", 640),
    ("md", 768),
    ("lg", 1024),
    ("xl", 1280),
]

_LEADING_INT_RE = re.compile(r"^\s*(-?\d+)")


def _parse_px(value: str) -> int | None:
    """Leading integer of a CSS length ("1280px" -> 1280), like parseInt."""
    match = _LEADING_INT_RE.match(value or "")
    return int(match.group(1)) if match else None


def infer_container_width(samples: list[StyleSample]) -> int:
    for sample in samples:
        max_width = sample.style("maxWidth")
        if not max_width or max_width == "none":
            continue
        width = _parse_px(max_width)
        if width is not None and width > MIN_CONTAINER_WIDTH:
            return width
    return DEFAULT_CONTAINER_WIDTH


def analyze_layout(samples: list[StyleSample]) -> LayoutSummary:
    sections = [
        Section(tag=s.tag, class_name=s.class_name, depth=0, children=0)
        for s in samples
        if s.tag in SEMANTIC_TAGS
    ]

    displays = {s.style("display") for s in samples}

    return LayoutSummary(
        container_width=infer_container_width(samples),
        grid_columns=DEFAULT_GRID_COLUMNS,
        breakpoints=[Breakpoint(name=name, min_width=width) for name, width in BREAKPOINTS],
        sections=sections,
        has_flexbox="flex" in displays,
        has_grid="grid" in displays,
    )
