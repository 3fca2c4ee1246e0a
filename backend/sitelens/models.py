"""
Data model for a site analysis.

Raw scrape output (style samples, page metadata, crawl outcomes) flows in,
analyzer records (colors, fonts, layout, SEO) and the final AnalysisResult
flow out. Samples and every record reachable from AnalysisResult are frozen
once built; freezing blocks attribute assignment, not mutation of list or
dict fields.
"""

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


# ---------------------------------------------------------------------------
# Scrape output
# ---------------------------------------------------------------------------

class Rect(BaseModel):
    model_config = ConfigDict(frozen=True)

    x: float = 0
    y: float = 0
    width: float = 0
    height: float = 0


class StyleSample(BaseModel):
    """Computed-style snapshot of one DOM element."""

    model_config = ConfigDict(frozen=True)

    selector: str = ""
    tag: str
    class_name: str = ""
    styles: dict[str, str] = Field(default_factory=dict)
    rect: Rect = Field(default_factory=Rect)

    def style(self, name: str) -> str:
        return self.styles.get(name) or ""

    @property
    def descriptor(self) -> str:
        return f"{self.tag}.{self.class_name}"


class AltTags(BaseModel):
    model_config = ConfigDict(frozen=True)

    total: int = 0
    missing: int = 0


class PageMetadata(BaseModel):
    title: str | None = None
    description: str | None = None
    canonical: str | None = None
    robots: str | None = None
    og_tags: dict[str, str] = Field(default_factory=dict)
    twitter_tags: dict[str, str] = Field(default_factory=dict)
    structured_data: list[Any] = Field(default_factory=list)
    alt_tags: AltTags = Field(default_factory=AltTags)


class FontSources(BaseModel):
    external: list[str] = Field(default_factory=list)
    font_faces: list[str] = Field(default_factory=list)


class Viewport(BaseModel):
    width: int = 1440
    height: int = 900


class SubpageContent(BaseModel):
    url: str
    title: str = ""
    text: str = ""


class FailedCrawl(BaseModel):
    model_config = ConfigDict(frozen=True)

    url: str
    error: str


class CrawlStats(BaseModel):
    model_config = ConfigDict(frozen=True)

    total_links_found: int = 0
    links_attempted: int = 0
    links_succeeded: int = 0
    links_failed: int = 0
    failed_urls: list[FailedCrawl] = Field(default_factory=list)


class ScrapedData(BaseModel):
    url: str
    styles: list[StyleSample] = Field(default_factory=list)
    metadata: PageMetadata = Field(default_factory=PageMetadata)
    fonts: FontSources = Field(default_factory=FontSources)
    viewport: Viewport = Field(default_factory=Viewport)
    links: list[str] = Field(default_factory=list)
    tech_stack: list[str] = Field(default_factory=list)
    subpages_content: list[SubpageContent] = Field(default_factory=list)
    crawl_stats: CrawlStats = Field(default_factory=CrawlStats)
    screenshot: str | None = None


# ---------------------------------------------------------------------------
# Design system
# ---------------------------------------------------------------------------

class RGB(BaseModel):
    model_config = ConfigDict(frozen=True)

    r: int
    g: int
    b: int


class HSL(BaseModel):
    model_config = ConfigDict(frozen=True)

    h: int
    s: int
    l: int  # noqa: E741


class ColorRecord(BaseModel):
    model_config = ConfigDict(frozen=True)

    hex: str
    rgb: RGB
    hsl: HSL
    usage: Literal["background", "text", "border", "other"] = "other"
    frequency: int = 0
    elements: list[str] = Field(default_factory=list)


class ColorPalette(BaseModel):
    model_config = ConfigDict(frozen=True)

    primary: list[ColorRecord] = Field(default_factory=list)
    secondary: list[ColorRecord] = Field(default_factory=list)
    neutral: list[ColorRecord] = Field(default_factory=list)
    all: list[ColorRecord] = Field(default_factory=list)


class FontStyleRecord(BaseModel):
    model_config = ConfigDict(frozen=True)

    family: str
    size: str = ""
    weight: int = 400
    line_height: str = ""
    usage: Literal["heading", "body", "ui", "accent"] = "body"


class HeadingStyles(BaseModel):
    model_config = ConfigDict(frozen=True)

    h1: FontStyleRecord | None = None
    h2: FontStyleRecord | None = None
    h3: FontStyleRecord | None = None
    h4: FontStyleRecord | None = None
    h5: FontStyleRecord | None = None
    h6: FontStyleRecord | None = None


class TypographyProfile(BaseModel):
    model_config = ConfigDict(frozen=True)

    headings: HeadingStyles = Field(default_factory=HeadingStyles)
    body: FontStyleRecord | None = None
    code: FontStyleRecord | None = None
    footer: FontStyleRecord | None = None
    ui: list[FontStyleRecord] = Field(default_factory=list)
    font_families: list[str] = Field(default_factory=list)
    font_sources: list[str] = Field(default_factory=list)
    font_faces: list[str] = Field(default_factory=list)


class DesignSystem(BaseModel):
    model_config = ConfigDict(frozen=True)

    colors: ColorPalette
    typography: TypographyProfile


class Breakpoint(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    min_width: int


class Section(BaseModel):
    model_config = ConfigDict(frozen=True)

    tag: str
    class_name: str = ""
    depth: int = 0
    children: int = 0


class LayoutSummary(BaseModel):
    model_config = ConfigDict(frozen=True)

    container_width: int = 1200
    grid_columns: int = 12
    breakpoints: list[Breakpoint] = Field(default_factory=list)
    sections: list[Section] = Field(default_factory=list)
    has_flexbox: bool = False
    has_grid: bool = False


# ---------------------------------------------------------------------------
# SEO
# ---------------------------------------------------------------------------

class SEOIssue(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: Literal["error", "warning", "info"]
    message: str


class HeadingCounts(BaseModel):
    model_config = ConfigDict(frozen=True)

    h1: int = 0
    h2: int = 0
    h3: int = 0
    h4: int = 0
    h5: int = 0
    h6: int = 0

    @property
    def total(self) -> int:
        return self.h1 + self.h2 + self.h3 + self.h4 + self.h5 + self.h6


class SEOBreakdown(BaseModel):
    model_config = ConfigDict(frozen=True)

    title: int = 0
    description: int = 0
    headings: int = 0
    social: int = 0
    semantic: int = 0
    technical: int = 0
    image: int = 0
    structured_data: int = 0
    content_organization: int = 0


class SEOReport(BaseModel):
    model_config = ConfigDict(frozen=True)

    score: int
    ai_score: int
    breakdown: SEOBreakdown
    issues: list[SEOIssue] = Field(default_factory=list)
    recommendations: list[str] = Field(default_factory=list)
    title: str | None = None
    description: str | None = None
    og_image: str | None = None
    og_tags: dict[str, str] = Field(default_factory=dict)
    structured_data: list[Any] = Field(default_factory=list)
    headings: HeadingCounts = Field(default_factory=HeadingCounts)
    canonical: str | None = None
    robots: str | None = None
    alt_tags: AltTags = Field(default_factory=AltTags)


# ---------------------------------------------------------------------------
# Insights (LLM output schema; accepts camelCase keys from the model)
# ---------------------------------------------------------------------------

class _InsightModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore", frozen=True)


class UserStory(_InsightModel):
    role: str
    goal: str
    benefit: str
    acceptance_criteria: list[str] = Field(default_factory=list)


class FunctionalRequirement(_InsightModel):
    id: str
    category: str
    description: str
    priority: Literal["Critical", "High", "Medium", "Low"]


class DataField(_InsightModel):
    name: str
    type: str
    description: str | None = None


class DataEntity(_InsightModel):
    name: str
    description: str = ""
    fields: list[DataField] = Field(default_factory=list)


class ApiEndpoint(_InsightModel):
    method: Literal["GET", "POST", "PUT", "PATCH", "DELETE"]
    path: str
    summary: str = ""
    request: Any = None
    response: Any = None


class DetailedPrd(_InsightModel):
    technical_prd_overview: str
    user_stories: list[UserStory] = Field(default_factory=list)
    functional_requirements: list[FunctionalRequirement] = Field(default_factory=list)
    data_model: list[DataEntity] = Field(default_factory=list)
    api_endpoints: list[ApiEndpoint] = Field(default_factory=list)


class PrdStructure(_InsightModel):
    user_stories: list[str] = Field(default_factory=list)
    functional_requirements: list[str] = Field(default_factory=list)
    proposed_stack: list[str] = Field(default_factory=list)


class Insights(_InsightModel):
    summary: str
    design_patterns: list[str]
    strengths: list[str]
    suggestions: list[str]
    style_description: str
    detailed_prd: DetailedPrd | None = None
    prd_structure: PrdStructure | None = None
    is_mock: bool = False


# ---------------------------------------------------------------------------
# Final report
# ---------------------------------------------------------------------------

class PageSummary(BaseModel):
    model_config = ConfigDict(frozen=True)

    url: str
    title: str = ""


class AnalysisResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    url: str
    analyzed_at: str
    status: Literal["completed"] = "completed"
    screenshot: str | None = None
    design_system: DesignSystem
    layout: LayoutSummary
    seo: SEOReport
    insights: Insights
    internal_links: list[str] = Field(default_factory=list)
    pages_analyzed: list[PageSummary] = Field(default_factory=list)
    tech_stack: list[str] = Field(default_factory=list)
    crawl_stats: CrawlStats = Field(default_factory=CrawlStats)
