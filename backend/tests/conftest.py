"""
Shared fixtures: style-sample builders and in-memory stand-ins for the
Playwright browser objects. No test launches a browser or hits the network.
"""

import asyncio
import io

import pytest
from PIL import Image

from sitelens.config import Settings
from sitelens.style_sampler import STYLE_EXTRACTION_SCRIPT
from sitelens.models import (
    AltTags,
    CrawlStats,
    PageMetadata,
    ScrapedData,
    StyleSample,
    SubpageContent,
)


def make_sample(tag, class_name="", selector=None, **styles):
    return StyleSample(
        selector=selector or tag,
        tag=tag,
        class_name=class_name,
        styles=styles,
    )


def png_bytes(width=32, height=20, color=(255, 0, 0, 255)):
    buf = io.BytesIO()
    Image.new("RGBA", (width, height), color).save(buf, format="PNG")
    return buf.getvalue()


@pytest.fixture
def settings():
    return Settings(anthropic_api_key="", subpage_timeout=20000, subpage_limit=12, max_concurrent_subpages=0)


@pytest.fixture
def complete_metadata():
    return PageMetadata(
        title="Acme Widgets - Industrial Tools",
        description="Acme builds durable industrial widgets for factories, workshops and hobbyists worldwide.",
        canonical="https://acme.test/",
        robots="index,follow",
        og_tags={
            "og:title": "Acme Widgets",
            "og:description": "Durable widgets",
            "og:image": "https://acme.test/og.png",
            "og:type": "website",
            "og:url": "https://acme.test/",
        },
        twitter_tags={"twitter:card": "summary_large_image"},
        structured_data=[{"@type": "Organization", "name": "Acme"}],
        alt_tags=AltTags(total=4, missing=0),
    )


@pytest.fixture
def semantic_samples():
    return [
        make_sample("header"),
        make_sample("nav", display="flex"),
        make_sample("main"),
        make_sample("h1", fontFamily="Inter, sans-serif", fontSize="48px", fontWeight="700"),
        make_sample("h2", fontFamily="Inter, sans-serif", fontSize="32px", fontWeight="600"),
        make_sample("h3", fontFamily="Inter, sans-serif", fontSize="24px", fontWeight="600"),
        make_sample("section", "hero", display="grid"),
        make_sample("footer"),
    ]


@pytest.fixture
def scraped_data(semantic_samples, complete_metadata):
    samples = semantic_samples + [
        make_sample("div", "card", backgroundColor="rgb(255, 0, 0)"),
        make_sample("a", "cta", color="rgb(0, 0, 255)"),
    ]
    return ScrapedData(
        url="https://acme.test",
        styles=samples,
        metadata=complete_metadata,
        links=["https://acme.test/about", "https://acme.test/blog"],
        tech_stack=["Next.js", "React"],
        subpages_content=[SubpageContent(url="https://acme.test/about", title="About", text="About Acme")],
        crawl_stats=CrawlStats(total_links_found=2, links_attempted=2, links_succeeded=1, links_failed=1),
        screenshot="data:image/webp;base64,AAAA",
    )


# ---------------------------------------------------------------------------
# Playwright stand-ins
# ---------------------------------------------------------------------------

class FakeRequest:
    def __init__(self, resource_type):
        self.resource_type = resource_type


class FakeRoute:
    def __init__(self, resource_type):
        self.request = FakeRequest(resource_type)
        self.action = None

    async def abort(self):
        self.action = "abort"

    async def continue_(self):
        self.action = "continue"


class FakeSubpage:
    """Page returned by FakeBrowser.new_page for subpage crawls."""

    def __init__(self, browser):
        self.browser = browser
        self.route_handler = None
        self.goto_kwargs = None
        self.link = None
        self.closed = False
        self.init_scripts = []

    async def add_init_script(self, script=None, path=None):
        self.init_scripts.append(script)

    async def route(self, pattern, handler):
        self.route_handler = handler

    async def goto(self, link, **kwargs):
        self.link = link
        self.goto_kwargs = kwargs
        self.browser.in_flight += 1
        self.browser.max_in_flight = max(self.browser.max_in_flight, self.browser.in_flight)
        try:
            await asyncio.sleep(0)
            outcome = self.browser.outcomes.get(link)
            if isinstance(outcome, BaseException):
                raise outcome
        finally:
            self.browser.in_flight -= 1

    async def evaluate(self, script, arg=None):
        outcome = self.browser.outcomes.get(self.link) or {}
        return {
            "url": outcome.get("url", self.link),
            "title": outcome.get("title", f"Title of {self.link}"),
            "text": outcome.get("text", f"Text of {self.link}"),
        }

    async def close(self):
        self.closed = True
        if self.browser.fail_close:
            raise RuntimeError("close failed")


class FakeRootPage:
    """Root page for the scrape orchestrator; records every step it sees."""

    def __init__(self, goto_error=None, light=None, heavy=None, readiness_error=None, screenshot=None):
        self.goto_error = goto_error
        self.readiness_error = readiness_error
        self.light = light if light is not None else {"location": "https://acme.test/", "links": [], "techStack": []}
        self.heavy = heavy if heavy is not None else {"styles": [], "metadata": {}, "fonts": {}, "techStack": []}
        self.screenshot_bytes = screenshot if screenshot is not None else png_bytes()
        self.steps = []
        self.init_scripts = []

    async def add_init_script(self, script=None, path=None):
        self.init_scripts.append(script)

    async def goto(self, url, **kwargs):
        self.steps.append(("goto", kwargs.get("wait_until"), kwargs.get("timeout")))
        if self.goto_error:
            raise self.goto_error

    async def wait_for_function(self, script, timeout=None):
        self.steps.append(("wait_for_function", timeout))
        if self.readiness_error:
            raise self.readiness_error

    async def wait_for_timeout(self, ms):
        self.steps.append(("wait_for_timeout", ms))

    async def evaluate(self, script, arg=None):
        if script is STYLE_EXTRACTION_SCRIPT:
            self.steps.append(("heavy",))
            if isinstance(self.heavy, BaseException):
                raise self.heavy
            return self.heavy
        if "techStack" in script and "location" in script:
            self.steps.append(("light",))
            return self.light
        if "style.display = 'none'" in script:
            self.steps.append(("hide_overlays",))
            return None
        if "scrollBy" in script:
            self.steps.append(("auto_scroll", arg))
            return None
        if "scrollTo(0, 0)" in script:
            self.steps.append(("scroll_top",))
            return None
        raise AssertionError(f"unexpected script: {script[:60]}")

    async def screenshot(self, full_page=False):
        self.steps.append(("screenshot", full_page))
        return self.screenshot_bytes


class FakeContext:
    def __init__(self, page):
        self.page = page

    async def new_page(self):
        return self.page


class FakeBrowser:
    def __init__(self, outcomes=None, root_page=None, fail_close=False):
        self.outcomes = outcomes or {}
        self.root_page = root_page
        self.fail_close = fail_close
        self.pages = []
        self.contexts = []
        self.context_kwargs = None
        self.page_kwargs = []
        self.in_flight = 0
        self.max_in_flight = 0
        self.close_calls = 0

    async def new_page(self, **kwargs):
        self.page_kwargs.append(kwargs)
        page = FakeSubpage(self)
        self.pages.append(page)
        return page

    async def new_context(self, **kwargs):
        self.context_kwargs = kwargs
        context = FakeContext(self.root_page)
        self.contexts.append(context)
        return context

    async def close(self):
        self.close_calls += 1
