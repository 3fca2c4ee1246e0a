"""
SEO and AI-readability analyzer.

Seven traditional sub-scores (title, description, headings, social,
semantic, technical, image) plus two AI-only ones (structured data,
content organization), each on 0-100. The overall SEO score and the AI/LLM
readiness score are fixed weighted sums of those sub-scores.
"""

import math

from sitelens.models import (
    HeadingCounts,
    PageMetadata,
    SEOBreakdown,
    SEOIssue,
    SEOReport,
    StyleSample,
)


SEO_WEIGHTS = {
    "title": 0.15,
    "description": 0.15,
    "headings": 0.20,
    "social": 0.10,
    "technical": 0.15,
    "image": 0.10,
    "semantic": 0.15,
}

AI_WEIGHTS = {
    "semantic": 0.30,
    "structured_data": 0.40,
    "content_organization": 0.20,
    "image": 0.10,
}

OG_PROPERTIES = ["og:title", "og:description", "og:image", "og:type", "og:url"]

SEMANTIC_WEIGHTS = [
    (("main",), 30),
    (("header",), 20),
    (("nav",), 15),
    (("footer",), 15),
    (("article", "section"), 20),
]

TITLE_MIN, TITLE_MAX = 10, 60
DESCRIPTION_MIN, DESCRIPTION_MAX = 50, 160
HEADINGS_FOR_FULL_ORGANIZATION = 3


def _round(value: float) -> int:
    """Round half up, floor-clamped at 0."""
    return max(0, int(math.floor(value + 0.5)))


class _Findings:
    """Ordered issues with a parallel list of recommendations."""

    def __init__(self):
        self.issues: list[SEOIssue] = []
        self.recommendations: list[str] = []

    def add(self, severity: str, message: str, recommendation: str):
        self.issues.append(SEOIssue(type=severity, message=message))
        self.recommendations.append(recommendation)


def count_headings(samples: list[StyleSample]) -> HeadingCounts:
    counts = {f"h{i}": 0 for i in range(1, 7)}
    for sample in samples:
        if sample.tag in counts:
            counts[sample.tag] += 1
    return HeadingCounts(**counts)


def score_title(title: str | None, findings: _Findings) -> int:
    if not title:
        findings.add("error", "Missing <title> tag",
                     "Add a descriptive <title> tag of 10-60 characters.")
        return 0
    if len(title) < TITLE_MIN:
        findings.add("warning", f"Title tag is too short (< {TITLE_MIN} chars)",
                     "Expand the title to describe the page in 10-60 characters.")
        return 40
    if len(title) > TITLE_MAX:
        findings.add("warning", f"Title tag is likely truncated (> {TITLE_MAX} chars)",
                     "Shorten the title to 60 characters or fewer so it is not truncated in results.")
        return 70
    return 100


def score_description(description: str | None, findings: _Findings) -> int:
    if not description:
        findings.add("error", "Missing meta description",
                     "Add a meta description of 50-160 characters summarizing the page.")
        return 0
    if len(description) < DESCRIPTION_MIN:
        findings.add("warning", "Meta description is too short",
                     "Expand the meta description to at least 50 characters.")
        return 40
    if len(description) > DESCRIPTION_MAX:
        findings.add("warning", f"Meta description is likely truncated (> {DESCRIPTION_MAX} chars)",
                     "Trim the meta description to 160 characters or fewer.")
        return 70
    return 100


def score_headings(headings: HeadingCounts, findings: _Findings) -> int:
    if headings.h1 == 0:
        findings.add("error", "No H1 tag found",
                     "Add a single H1 heading that states the page's main topic.")
        return 0
    if headings.h1 > 1:
        findings.add("warning", "Multiple H1 tags found (should be unique)",
                     "Keep one H1 per page and demote the others to H2.")
        return 50
    if headings.h2 == 0:
        findings.add("info", "No H2 tags found",
                     "Break content into sections with H2 subheadings.")
        return 80
    return 100


def score_social(metadata: PageMetadata, findings: _Findings) -> int:
    missing = [p for p in OG_PROPERTIES if not metadata.og_tags.get(p)]
    score = 100 - 20 * len(missing)
    if missing:
        findings.add("info", f"Missing Open Graph tags: {', '.join(missing)}",
                     f"Add Open Graph meta tags ({', '.join(missing)}) for rich link previews.")

    has_twitter_card = bool(metadata.twitter_tags.get("twitter:card") or metadata.og_tags.get("twitter:card"))
    if not has_twitter_card:
        score -= 10
        findings.add("info", "Missing Twitter card tag",
                     'Add <meta name="twitter:card" content="summary_large_image">.')
    return max(0, score)


def score_semantic(samples: list[StyleSample], findings: _Findings) -> int:
    tags = {s.tag for s in samples}
    score = sum(weight for group, weight in SEMANTIC_WEIGHTS if tags.intersection(group))
    if score == 0:
        findings.add("warning", "No semantic landmarks found (main, header, nav, footer, article/section)",
                     "Wrap page regions in semantic elements such as <header>, <nav>, <main> and <footer>.")
    elif "main" not in tags:
        findings.add("info", "No <main> landmark found",
                     "Wrap the primary content in a <main> element.")
    return min(100, score)


def score_technical(metadata: PageMetadata, findings: _Findings) -> int:
    score = 100
    if not metadata.canonical:
        score -= 20
        findings.add("info", "No canonical tag found",
                     'Add <link rel="canonical"> pointing at the preferred URL.')
    if not metadata.robots:
        findings.add("info", "No robots meta tag found",
                     "Add a robots meta tag to state indexing intent explicitly.")
    return score


def score_images(metadata: PageMetadata, findings: _Findings) -> int:
    total = metadata.alt_tags.total
    if total <= 0:
        return 100
    missing = min(max(metadata.alt_tags.missing, 0), total)
    if missing > 0:
        findings.add("warning", f"{missing} images are missing alt attributes",
                     "Describe every meaningful image with an alt attribute.")
    return _round((total - missing) / total * 100)


def score_structured_data(metadata: PageMetadata, findings: _Findings) -> int:
    if metadata.structured_data:
        return 100
    findings.add("warning", "No structured data (JSON-LD) found",
                 "Add schema.org JSON-LD (Organization, WebSite, Product...) so machines can read key facts.")
    return 0


def score_content_organization(headings: HeadingCounts) -> float:
    return min(100.0, headings.total / HEADINGS_FOR_FULL_ORGANIZATION * 100)


def analyze_seo(metadata: PageMetadata, samples: list[StyleSample]) -> SEOReport:
    findings = _Findings()
    headings = count_headings(samples)

    sub = {
        "title": score_title(metadata.title, findings),
        "description": score_description(metadata.description, findings),
        "headings": score_headings(headings, findings),
        "social": score_social(metadata, findings),
        "semantic": score_semantic(samples, findings),
        "technical": score_technical(metadata, findings),
        "image": score_images(metadata, findings),
        "structured_data": score_structured_data(metadata, findings),
        "content_organization": score_content_organization(headings),
    }

    score = sum(sub[k] * w for k, w in SEO_WEIGHTS.items())
    ai_score = sum(sub[k] * w for k, w in AI_WEIGHTS.items())

    return SEOReport(
        score=_round(score),
        ai_score=_round(ai_score),
        breakdown=SEOBreakdown(**{k: _round(v) for k, v in sub.items()}),
        issues=findings.issues,
        recommendations=findings.recommendations,
        title=metadata.title,
        description=metadata.description,
        og_image=metadata.og_tags.get("og:image"),
        og_tags=dict(metadata.og_tags),
        structured_data=list(metadata.structured_data),
        headings=headings,
        canonical=metadata.canonical,
        robots=metadata.robots,
        alt_tags=metadata.alt_tags,
    )
