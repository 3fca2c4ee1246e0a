"""
Scrape orchestrator: renders one URL in headless Chromium and returns a
consolidated raw data bundle.

Root page steps run strictly in order: navigate, hide overlays, wait for
readiness, scroll for lazy content, extract (light pass, then heavy pass),
screenshot. Internal links are then handed to the subpage crawler, which
reuses the same browser. Every step after navigation is best-effort:
partial data beats no data.
"""

from playwright.async_api import async_playwright
from playwright.async_api import Error as PlaywrightError
from playwright.async_api import TimeoutError as PlaywrightTimeoutError
from playwright_stealth import Stealth

from sitelens.config import get_settings
from sitelens.crawler import crawl_subpages
from sitelens.errors import NavigationError
from sitelens.image_utils import encode_screenshot
from sitelens.links import filter_internal_links
from sitelens.models import FontSources, PageMetadata, ScrapedData, Viewport
from sitelens.style_sampler import (
    STYLE_EXTRACTION_SCRIPT,
    extraction_config,
    parse_fonts,
    parse_metadata,
    parse_style_samples,
)


_stealth = Stealth()

# goto failures meaning the host was never reached. Anything else (aborted or
# superseded navigations) leaves a usable page behind.
UNREACHABLE_ERRORS = (
    "ERR_NAME_NOT_RESOLVED",
    "ERR_CONNECTION_REFUSED",
    "ERR_CONNECTION_TIMED_OUT",
    "ERR_CONNECTION_RESET",
    "ERR_ADDRESS_UNREACHABLE",
    "ERR_INTERNET_DISCONNECTED",
    "ERR_NAME_RESOLUTION_FAILED",
)

OVERLAY_SELECTORS = [
    "#onetrust-banner-sdk", ".onetrust-banner", "#qc-cmp2-container",
    ".cookie-banner", '[id*="cookie"]', '[class*="cookie"]',
    ".consent-banner", '[class*="consent"]',
]

READINESS_CHECK = "() => !!document.querySelector('footer') || document.querySelectorAll('a').length > 10"


async def scrape(url: str, settings=None) -> ScrapedData:
    """
    Load a URL in Playwright and extract styles, metadata, links,
    a screenshot and subpage content.

    Raises NavigationError only when the target cannot be reached at all.
    """
    settings = settings or get_settings()

    async with async_playwright() as p:
        browser = await p.chromium.launch(headless=settings.headless)
        try:
            return await scrape_with_browser(browser, url, settings)
        finally:
            await browser.close()


async def scrape_with_browser(browser, url: str, settings=None) -> ScrapedData:
    """Run the whole scrape against an already-launched browser."""
    settings = settings or get_settings()

    context = await browser.new_context(
        viewport={"width": settings.viewport_width, "height": settings.viewport_height},
        user_agent=settings.user_agent,
        extra_http_headers={"Accept-Language": settings.accept_language},
        ignore_https_errors=True,
    )
    page = await context.new_page()
    # Apply stealth to avoid bot detection
    await _stealth.apply_stealth_async(page)

    await navigate(page, url, settings)
    await hide_overlays(page)
    await wait_for_readiness(page, settings)
    await auto_scroll(page, settings)

    # === LIGHT PASS: links + tech stack ===
    base = await extract_links_and_stack(page)
    links = filter_internal_links(base["links"], base["location"] or url, limit=settings.internal_link_limit)
    print(f"  [scraper] Found {len(links)} internal links")

    # === HEAVY PASS: styles, metadata, fonts ===
    heavy = await extract_page_data(page, settings)

    tech_stack = []
    for name in base["tech_stack"] + heavy["tech_stack"]:
        if name not in tech_stack:
            tech_stack.append(name)

    screenshot = await capture_screenshot(page, settings)

    subpages, crawl_stats = await crawl_subpages(links, browser, settings)

    return ScrapedData(
        url=url,
        styles=heavy["styles"],
        metadata=heavy["metadata"],
        fonts=heavy["fonts"],
        viewport=Viewport(width=settings.viewport_width, height=settings.viewport_height),
        links=links,
        tech_stack=tech_stack,
        subpages_content=subpages,
        crawl_stats=crawl_stats,
        screenshot=screenshot,
    )


async def navigate(page, url: str, settings):
    """
    Navigate with a network-idle wait.

    Only connection-level failures are fatal. Timeouts, aborted loads and
    navigations superseded by a redirect keep whatever DOM is there.
    """
    try:
        await page.goto(url, wait_until="networkidle", timeout=settings.navigation_timeout)
    except PlaywrightTimeoutError:
        print("  [scraper] Page load timeout, proceeding with partial load...")
    except PlaywrightError as e:
        if is_unreachable(str(e)):
            raise NavigationError(url, str(e)) from e
        print(f"  [scraper] Navigation error, proceeding with partial load: {e}")


def is_unreachable(message: str) -> bool:
    return any(code in (message or "") for code in UNREACHABLE_ERRORS)


async def hide_overlays(page):
    """Hide cookie banners and consent interstitials. No match is fine."""
    try:
        await page.evaluate('''(selectors) => {
            selectors.forEach(sel => {
                document.querySelectorAll(sel).forEach(el => { el.style.display = 'none'; });
            });
        }''', OVERLAY_SELECTORS)
    except Exception as e:
        print(f"  [scraper] Overlay suppression failed: {e}")


async def wait_for_readiness(page, settings):
    """Wait for a footer or a reasonable number of links (hydration signal)."""
    try:
        await page.wait_for_function(READINESS_CHECK, timeout=settings.readiness_timeout)
    except PlaywrightTimeoutError:
        print("  [scraper] Timeout waiting for footer/links, continuing...")
    except Exception as e:
        print(f"  [scraper] Readiness wait failed: {e}")


async def auto_scroll(page, settings):
    """Scroll in fixed steps to trigger lazy loading, capped for infinite-scroll pages."""
    try:
        await page.evaluate('''async ({ step, interval, maxScroll }) => {
            await new Promise(resolve => {
                let total = 0;
                const timer = setInterval(() => {
                    const scrollHeight = document.body ? document.body.scrollHeight : 0;
                    window.scrollBy(0, step);
                    total += step;
                    if (total >= scrollHeight || total > maxScroll) {
                        clearInterval(timer);
                        resolve();
                    }
                }, interval);
            });
        }''', {
            "step": settings.scroll_step,
            "interval": settings.scroll_interval,
            "maxScroll": settings.max_scroll,
        })
    except Exception as e:
        print(f"  [scraper] Auto-scroll failed: {e}")


async def extract_links_and_stack(page) -> dict:
    """Light pass: raw anchor hrefs, resolved location and framework signatures."""
    try:
        raw = await page.evaluate('''() => {
            const techStack = [];

            document.querySelectorAll('script').forEach(s => {
                if (s.src.includes('/_next/')) techStack.push('Next.js');
                if (s.src.includes('static/js/main')) techStack.push('React');
                if (s.src.includes('wp-content')) techStack.push('WordPress');
            });

            const generator = document.querySelector('meta[name="generator"]')?.getAttribute('content');
            if (generator?.includes('WordPress')) techStack.push('WordPress');
            if (generator?.includes('Gatsby')) techStack.push('Gatsby');

            if (window.__NEXT_DATA__) techStack.push('Next.js');
            if (window.__NUXT__) techStack.push('Nuxt.js');

            return {
                location: window.location.href,
                links: Array.from(document.querySelectorAll('a')).map(a => a.href).filter(Boolean),
                techStack: Array.from(new Set(techStack)),
            };
        }''')
    except Exception as e:
        print(f"  [scraper] Link extraction failed: {e}")
        raw = {}

    return {
        "location": raw.get("location") or "",
        "links": raw.get("links") or [],
        "tech_stack": raw.get("techStack") or [],
    }


async def extract_page_data(page, settings) -> dict:
    """Heavy pass: style samples, metadata and fonts."""
    try:
        raw = await page.evaluate(STYLE_EXTRACTION_SCRIPT, extraction_config(settings.max_style_samples))
    except Exception as e:
        print(f"  [scraper] Style extraction failed: {e}")
        return {
            "styles": [],
            "metadata": PageMetadata(),
            "fonts": FontSources(),
            "tech_stack": [],
        }

    styles = parse_style_samples(raw.get("styles"))
    print(f"  [scraper] Sampled {len(styles)} elements")
    return {
        "styles": styles,
        "metadata": parse_metadata(raw.get("metadata")),
        "fonts": parse_fonts(raw.get("fonts")),
        "tech_stack": raw.get("techStack") or [],
    }


async def capture_screenshot(page, settings) -> str | None:
    """Viewport screenshot from the top of the page, after animations settle."""
    try:
        await page.evaluate("window.scrollTo(0, 0)")
        await page.wait_for_timeout(500)
        png = await page.screenshot(full_page=False)
        return encode_screenshot(png, max_width=settings.viewport_width, quality=settings.screenshot_quality)
    except Exception as e:
        print(f"  [scraper] Screenshot failed: {e}")
        return None
