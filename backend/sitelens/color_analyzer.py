"""
Color analyzer: frequency-ranked palette from computed-style samples.

Computed styles report colors as rgb()/rgba(); named and hex values are
not expected there and are ignored.
"""

import re

from sitelens.models import HSL, RGB, ColorPalette, ColorRecord, StyleSample


RGB_RE = re.compile(r"rgba?\((\d+),\s*(\d+),\s*(\d+)(?:,\s*([\d.]+))?\)")

TRANSPARENT = ("", "transparent", "rgba(0, 0, 0, 0)")

# Sample style property → usage context
COLOR_PROPERTIES = [
    ("color", "text"),
    ("backgroundColor", "background"),
    ("borderColor", "border"),
]

USAGE_PRECEDENCE = ["background", "text", "border"]

MAX_EXAMPLES = 5
PRIMARY_COUNT = 3


def parse_color(value: str):
    """Parse rgb()/rgba() into (r, g, b, a), or None."""
    if not value:
        return None
    match = RGB_RE.search(value)
    if not match:
        return None
    r, g, b = (min(int(match.group(i)), 255) for i in (1, 2, 3))
    a = float(match.group(4)) if match.group(4) else 1.0
    return r, g, b, a


def rgb_to_hex(r: int, g: int, b: int) -> str:
    return "#" + "".join(f"{x:02x}" for x in (r, g, b))


def hex_to_rgb(hex_str: str) -> tuple[int, int, int]:
    value = hex_str.lstrip("#")
    if len(value) == 3:
        value = "".join(ch * 2 for ch in value)
    if len(value) != 6:
        raise ValueError(f"Invalid hex color: {hex_str}")
    return int(value[0:2], 16), int(value[2:4], 16), int(value[4:6], 16)


def rgb_to_hsl(r: int, g: int, b: int) -> tuple[int, int, int]:
    """HSL with hue in degrees and saturation/lightness in percent, rounded."""
    r, g, b = r / 255, g / 255, b / 255
    hi, lo = max(r, g, b), min(r, g, b)
    light = (hi + lo) / 2

    if hi == lo:
        hue = sat = 0.0
    else:
        d = hi - lo
        sat = d / (2 - hi - lo) if light > 0.5 else d / (hi + lo)
        if hi == r:
            hue = (g - b) / d + (6 if g < b else 0)
        elif hi == g:
            hue = (b - r) / d + 2
        else:
            hue = (r - g) / d + 4
        hue /= 6

    return round(hue * 360), round(sat * 100), round(light * 100)


def is_neutral(hsl: HSL) -> bool:
    return hsl.s < 15 or hsl.l > 95 or hsl.l < 5


def analyze_colors(samples: list[StyleSample]) -> ColorPalette:
    # hex → accumulator; dict keeps first-encounter order for tie-breaks
    found: dict[str, dict] = {}

    for sample in samples:
        descriptor = sample.descriptor
        for prop, usage in COLOR_PROPERTIES:
            value = sample.style(prop).strip()
            if value in TRANSPARENT:
                continue
            parsed = parse_color(value)
            if parsed is None or parsed[3] == 0:
                continue

            r, g, b, _ = parsed
            key = rgb_to_hex(r, g, b)
            entry = found.setdefault(key, {"rgb": (r, g, b), "count": 0, "usages": set(), "elements": []})
            entry["count"] += 1
            entry["usages"].add(usage)
            if len(entry["elements"]) < MAX_EXAMPLES and descriptor not in entry["elements"]:
                entry["elements"].append(descriptor)

    records = []
    for key, entry in found.items():
        r, g, b = entry["rgb"]
        h, s, l = rgb_to_hsl(r, g, b)  # noqa: E741
        usage = next((u for u in USAGE_PRECEDENCE if u in entry["usages"]), "other")
        records.append(ColorRecord(
            hex=key,
            rgb=RGB(r=r, g=g, b=b),
            hsl=HSL(h=h, s=s, l=l),
            usage=usage,
            frequency=entry["count"],
            elements=entry["elements"],
        ))

    # sorted() is stable: equal frequencies keep encounter order
    records = sorted(records, key=lambda c: c.frequency, reverse=True)

    neutral = [c for c in records if is_neutral(c.hsl)]
    colored = [c for c in records if not is_neutral(c.hsl)]

    return ColorPalette(
        primary=colored[:PRIMARY_COUNT],
        secondary=colored[PRIMARY_COUNT:],
        neutral=neutral,
        all=records,
    )
