"""
Analysis orchestrator: one URL in, one AnalysisResult out.

Pipeline:
  [A] validate URL (before any browser work)
  [B] scrape (root page + subpage crawl)
  [C] colors / typography / layout / SEO analyzers (pure)
  [D] insights (LLM, mock on failure)
  [E] assemble, then save to the injected store
"""

import time
import uuid
from datetime import datetime, timezone

from sitelens.color_analyzer import analyze_colors
from sitelens.errors import validate_url
from sitelens.insights import generate_insights, generate_mock_insights
from sitelens.layout_analyzer import analyze_layout
from sitelens.models import AnalysisResult, DesignSystem, PageSummary
from sitelens.scraper import scrape
from sitelens.seo_analyzer import analyze_seo
from sitelens.typography_analyzer import analyze_typography


async def run_analysis(url: str, store=None, scraper=scrape, insight_generator=generate_insights) -> AnalysisResult:
    """
    Scrape and analyze a URL.

    Raises InvalidURLError before any browser work for malformed URLs and
    NavigationError when the site cannot be reached. Everything else
    degrades inside the pipeline.
    """
    url = validate_url(url)
    analysis_id = str(uuid.uuid4())
    start = time.time()

    def _elapsed():
        return f"{time.time() - start:.1f}s"

    print(f"[analysis] Starting analysis for {url} (id: {analysis_id})")

    scraped = await scraper(url)
    print(f"  [{_elapsed()}] Scraped {len(scraped.styles)} samples, "
          f"{scraped.crawl_stats.links_succeeded}/{scraped.crawl_stats.links_attempted} subpages")

    colors = analyze_colors(scraped.styles)
    typography = analyze_typography(scraped.styles, scraped.fonts)
    layout = analyze_layout(scraped.styles)
    seo = analyze_seo(scraped.metadata, scraped.styles)
    design_system = DesignSystem(colors=colors, typography=typography)
    print(f"  [{_elapsed()}] Analyzed: {len(colors.all)} colors, SEO {seo.score}, AI {seo.ai_score}")

    try:
        insights = await insight_generator(scraped, design_system, layout)
    except Exception as e:
        print(f"  [analysis] Insight generation failed: {e}, using mock")
        insights = generate_mock_insights(scraped, design_system, layout)
    print(f"  [{_elapsed()}] Insights ready{' (mock)' if insights.is_mock else ''}")

    result = AnalysisResult(
        id=analysis_id,
        url=url,
        analyzed_at=datetime.now(timezone.utc).isoformat(),
        status="completed",
        screenshot=scraped.screenshot,
        design_system=design_system,
        layout=layout,
        seo=seo,
        insights=insights,
        internal_links=list(scraped.links),
        pages_analyzed=[PageSummary(url=p.url, title=p.title) for p in scraped.subpages_content],
        tech_stack=list(scraped.tech_stack),
        crawl_stats=scraped.crawl_stats,
    )

    if store is not None:
        store.save(result)

    print(f"[analysis] Done in {_elapsed()}")
    return result
