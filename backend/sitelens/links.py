"""
Internal link discovery: picks crawlable subpages out of a page's anchors.
"""

import re
from urllib.parse import urlsplit


EXCLUDED_PATH_PATTERNS = [
    "/login", "/signin", "/signup", "/register", "/logout",
    "/search", "/cart", "/checkout", "/payment",
    "/admin", "/dashboard", "/account", "/profile",
    "/wp-admin", "/wp-login",
]

PRIORITY_PATH_PATTERNS = ["/about", "/features", "/pricing", "/contact", "/services", "/products"]

FILE_EXTENSION_RE = re.compile(r"\.(pdf|zip|jpg|jpeg|png|gif|svg|doc|docx|xls|xlsx)$", re.IGNORECASE)


def get_hostname(url: str) -> str:
    """Lowercased hostname without a leading www., or '' if unparseable."""
    try:
        host = urlsplit(url).hostname or ""
    except ValueError:
        return ""
    return host[4:] if host.startswith("www.") else host


def normalize_url(url: str) -> str:
    """origin + path (no trailing slash) + ?query. Fragments are dropped."""
    try:
        parts = urlsplit(url)
    except ValueError:
        return url
    if not parts.scheme or not parts.netloc:
        return url
    path = parts.path[:-1] if parts.path.endswith("/") else parts.path
    query = f"?{parts.query}" if parts.query else ""
    return f"{parts.scheme.lower()}://{parts.netloc.lower()}{path}{query}"


def is_same_site(link_host: str, page_host: str) -> bool:
    if not link_host or not page_host:
        return False
    return link_host == page_host or link_host.endswith("." + page_host)


def _path(url: str) -> str:
    return urlsplit(url).path.lower()


def is_priority(url: str) -> bool:
    path = _path(url)
    return any(p in path for p in PRIORITY_PATH_PATTERNS)


def filter_internal_links(hrefs: list, page_url: str, limit: int = 50) -> list[str]:
    """
    Filter raw anchor hrefs down to crawlable internal pages.

    Same site only (subdomains allowed), no auth/commerce paths, no file
    downloads, deduplicated by normalized URL, marketing pages first,
    capped at `limit`.
    """
    page_host = get_hostname(page_url)
    current = normalize_url(page_url)

    seen = set()
    unique = []
    for href in hrefs or []:
        if not isinstance(href, str) or not href.startswith(("http://", "https://")):
            continue
        if not is_same_site(get_hostname(href), page_host):
            continue

        normalized = normalize_url(href)
        if normalized == current:
            continue

        try:
            path = _path(href)
        except ValueError:
            continue
        if any(p in path for p in EXCLUDED_PATH_PATTERNS):
            continue
        if FILE_EXTENSION_RE.search(path):
            continue

        if normalized in seen:
            continue
        seen.add(normalized)
        unique.append(normalized)

    priority = [u for u in unique if is_priority(u)]
    others = [u for u in unique if not is_priority(u)]
    return (priority + others)[:limit]
