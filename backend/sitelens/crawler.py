"""
Subpage crawler: fetches a site's internal pages in parallel.

Each selected link gets its own page (and browser context) in the shared
browser. All fetches run concurrently and are joined before their outcomes
are reduced, in selection order, into successes and failures. One page's
failure never affects another.
"""

import asyncio
import time

from playwright.async_api import Route
from playwright_stealth import Stealth

from sitelens.config import get_settings
from sitelens.models import CrawlStats, FailedCrawl, SubpageContent


BLOCKED_RESOURCE_TYPES = ("image", "font", "media")

_stealth = Stealth()


def classify_crawl_error(message: str, timeout_ms: int = 20000) -> str:
    """Map a navigation error message to a short failure reason."""
    message = message or ""
    if "timeout" in message.lower():
        return f"Timeout ({timeout_ms // 1000}s)"
    if "net::" in message:
        return "Network error"
    if "ERR_" in message:
        return "Connection failed"
    return message or "Unknown error"


async def _block_heavy_resources(route: Route):
    """Abort images/fonts/media; subpages are crawled for text only."""
    if route.request.resource_type in BLOCKED_RESOURCE_TYPES:
        await route.abort()
    else:
        await route.continue_()


async def crawl_subpage(browser, link: str, index: int, total: int, settings=None):
    """Fetch one subpage. Returns SubpageContent on success, FailedCrawl otherwise."""
    settings = settings or get_settings()
    page = None
    start = time.monotonic()
    try:
        print(f"  [crawler] [{index + 1}/{total}] Crawling: {link}")

        page = await browser.new_page(
            user_agent=settings.user_agent,
            extra_http_headers={"Accept-Language": settings.accept_language},
            ignore_https_errors=True,
        )
        await _stealth.apply_stealth_async(page)
        await page.route("**/*", _block_heavy_resources)
        await page.goto(link, wait_until="domcontentloaded", timeout=settings.subpage_timeout)

        result = await page.evaluate('''(limit) => ({
            url: window.location.href,
            title: document.title,
            text: document.body ? document.body.innerText.slice(0, limit) : ''
        })''', settings.subpage_text_limit)

        elapsed = int((time.monotonic() - start) * 1000)
        print(f"  [crawler] OK [{index + 1}/{total}] {link} ({elapsed}ms)")
        return SubpageContent(
            url=result.get("url") or link,
            title=result.get("title") or "",
            text=(result.get("text") or "")[:settings.subpage_text_limit],
        )

    except Exception as e:
        elapsed = int((time.monotonic() - start) * 1000)
        print(f"  [crawler] FAILED [{index + 1}/{total}] {link} ({elapsed}ms): {e}")
        return FailedCrawl(url=link, error=classify_crawl_error(str(e), settings.subpage_timeout))

    finally:
        if page is not None:
            try:
                await page.close()
            except Exception as e:
                print(f"  [crawler] Warning: failed to close page for {link}: {e}")


async def crawl_subpages(links: list[str], browser, settings=None) -> tuple[list[SubpageContent], CrawlStats]:
    """
    Crawl the first `subpage_limit` links concurrently.

    Returns the successful pages (in selection order) and crawl statistics
    including every failed URL with its classified reason.
    """
    settings = settings or get_settings()
    total_found = len(links)
    selected = links[:settings.subpage_limit]

    if not selected:
        return [], CrawlStats(total_links_found=total_found)

    print(f"  [crawler] Starting subpage crawl: {len(selected)} of {total_found} links")

    # 0 = one concurrent task per selected link
    limit = settings.max_concurrent_subpages or len(selected)
    semaphore = asyncio.Semaphore(limit)

    async def bounded(link: str, index: int):
        async with semaphore:
            return await crawl_subpage(browser, link, index, len(selected), settings)

    outcomes = await asyncio.gather(
        *(bounded(link, i) for i, link in enumerate(selected)),
        return_exceptions=True,
    )

    pages: list[SubpageContent] = []
    failures: list[FailedCrawl] = []
    for link, outcome in zip(selected, outcomes):
        if isinstance(outcome, SubpageContent):
            pages.append(outcome)
        elif isinstance(outcome, FailedCrawl):
            failures.append(outcome)
        else:
            failures.append(FailedCrawl(url=link, error=classify_crawl_error(str(outcome), settings.subpage_timeout)))

    stats = CrawlStats(
        total_links_found=total_found,
        links_attempted=len(selected),
        links_succeeded=len(pages),
        links_failed=len(failures),
        failed_urls=failures,
    )

    print(f"  [crawler] Crawl summary: {stats.links_succeeded}/{stats.links_attempted} succeeded, "
          f"{stats.links_failed} failed")
    if failures:
        print(f"  [crawler] Failed URLs: {[f'{f.url} ({f.error})' for f in failures]}")

    return pages, stats
