"""
Typography analyzer: one representative font style per tag role.

Each role takes the first matching sample only. Roles with no sample stay
None. Build-tool hashed family names (next/font style, e.g.
"__Inter_Tight_a3c0d3") are rebuilt into readable names.
"""

import re

from sitelens.models import FontSources, FontStyleRecord, HeadingStyles, StyleSample, TypographyProfile


HASHED_FONT_RE = re.compile(r"^__([A-Z][a-zA-Z]+)_([A-Z][a-zA-Z]+)?")

HEADING_TAGS = ["h1", "h2", "h3", "h4", "h5", "h6"]
UI_SELECTORS = ["button", "input", "a", ".btn"]


def normalize_font_family(raw: str) -> str:
    """
    Strip quotes and de-hash build-tool font names.

    "__Inter_Tight_a3c0d3"                 -> "Inter Tight, sans-serif"
    "__Inter_a3c0d3, __Inter_Fallback_x"   -> "Inter, __Inter_Fallback_x"
    """
    family = raw.replace('"', "").replace("'", "")

    match = HASHED_FONT_RE.match(family)
    if match:
        name = f"{match.group(1)} {match.group(2)}" if match.group(2) else match.group(1)
        if "," in family:
            fallback = ",".join(family.split(",")[1:]).strip()
        else:
            fallback = "sans-serif"
        family = f"{name}, {fallback}"

    return family.strip()


def _matches(sample: StyleSample, selector: str) -> bool:
    if selector.startswith("."):
        cls = selector[1:]
        return sample.selector == selector or cls in sample.class_name.split()
    return sample.tag == selector


def find_sample(samples: list[StyleSample], selector: str) -> StyleSample | None:
    return next((s for s in samples if _matches(s, selector)), None)


def _parse_weight(value: str) -> int:
    try:
        return int(value) or 400
    except (TypeError, ValueError):
        return 400


def build_font_style(sample: StyleSample, usage: str) -> FontStyleRecord:
    return FontStyleRecord(
        family=normalize_font_family(sample.style("fontFamily")),
        size=sample.style("fontSize"),
        weight=_parse_weight(sample.style("fontWeight")),
        line_height=sample.style("lineHeight"),
        usage=usage,
    )


def analyze_typography(samples: list[StyleSample], fonts: FontSources | None = None) -> TypographyProfile:
    families: list[str] = []

    def font_style(selector: str, usage: str | None = None) -> FontStyleRecord | None:
        sample = find_sample(samples, selector)
        if sample is None:
            return None
        if usage is None:
            usage = "heading" if selector in HEADING_TAGS else "body"
        record = build_font_style(sample, usage)
        if record.family and record.family not in families:
            families.append(record.family)
        return record

    body = font_style("p") or font_style("div")
    headings = HeadingStyles(**{tag: font_style(tag) for tag in HEADING_TAGS})
    code = font_style("code")
    footer = font_style("footer") or font_style(".footer")

    ui = []
    for selector in UI_SELECTORS:
        record = font_style(selector, usage="ui")
        if record:
            ui.append(record)

    fonts = fonts or FontSources()
    return TypographyProfile(
        headings=headings,
        body=body,
        code=code,
        footer=footer,
        ui=ui,
        font_families=families,
        font_sources=list(fonts.external),
        font_faces=list(fonts.font_faces),
    )
