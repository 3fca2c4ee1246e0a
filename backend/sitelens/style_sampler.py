"""
Style sampler: the heavy in-page extraction pass.

STYLE_EXTRACTION_SCRIPT runs inside the rendered page and returns raw JSON:
computed-style samples for a bounded set of elements, page metadata, font
sources and framework signatures. The parse_* helpers turn that JSON into
models, dropping malformed entries instead of failing the scrape.
"""

from pydantic import ValidationError

from sitelens.models import AltTags, FontSources, PageMetadata, Rect, StyleSample


# Properties captured per element. Analyzers read these names.
STYLE_PROPERTIES = [
    "color",
    "backgroundColor",
    "borderColor",
    "fontFamily",
    "fontSize",
    "fontWeight",
    "lineHeight",
    "padding",
    "margin",
    "borderRadius",
    "border",
    "display",
    "position",
    "maxWidth",
]

# First occurrence of each of these is always sampled.
GRANULAR_SELECTORS = [
    "h1", "h2", "h3", "h4", "h5", "h6",
    "p", "code", "pre", "nav", "footer", "main", "header", "article", "section",
]

# Bulk sampling for color and layout analysis.
BULK_SELECTORS = ["a", "button", ".btn", "input", "section", "div"]


STYLE_EXTRACTION_SCRIPT = '''(config) => {
    const props = config.properties;
    const maxSamples = config.maxSamples;
    const granular = config.granular;
    const bulk = config.bulk;

    const getStyles = (el) => {
        const computed = window.getComputedStyle(el);
        const out = {};
        for (const p of props) out[p] = computed[p] || '';
        return out;
    };

    const classOf = (el) => (typeof el.className === 'string' ? el.className : '');

    const sample = (el, selector) => {
        const r = el.getBoundingClientRect();
        return {
            selector: selector,
            tag: el.tagName.toLowerCase(),
            className: classOf(el),
            styles: getStyles(el),
            rect: { x: r.x, y: r.y, width: r.width, height: r.height }
        };
    };

    const styles = [];
    const taken = new Set();

    // One representative per granular tag, in document order
    granular.forEach(tag => {
        const el = document.querySelector(tag);
        if (el) {
            styles.push(sample(el, tag));
            taken.add(el);
        }
    });

    // Every further heading, so duplicate H1s stay visible
    document.querySelectorAll('h1, h2, h3, h4, h5, h6').forEach(el => {
        if (styles.length >= maxSamples || taken.has(el)) return;
        styles.push(sample(el, el.tagName.toLowerCase()));
        taken.add(el);
    });

    bulk.forEach(selector => {
        document.querySelectorAll(selector).forEach(el => {
            if (styles.length >= maxSamples || taken.has(el)) return;
            if (granular.includes(el.tagName.toLowerCase())) return;
            const r = el.getBoundingClientRect();
            if (r.width === 0 || r.height === 0) return;
            styles.push(sample(el, selector));
            taken.add(el);
        });
    });

    // Metadata
    const attr = (sel, name) => document.querySelector(sel)?.getAttribute(name) || null;
    const metadata = {
        title: document.title || null,
        description: attr('meta[name="description"]', 'content'),
        canonical: attr('link[rel="canonical"]', 'href'),
        robots: attr('meta[name="robots"]', 'content'),
        ogTags: {},
        twitterTags: {},
        structuredData: [],
        altTags: {
            total: document.querySelectorAll('img').length,
            missing: document.querySelectorAll('img:not([alt])').length
        }
    };

    document.querySelectorAll('meta[property^="og:"]').forEach(tag => {
        const property = tag.getAttribute('property');
        const content = tag.getAttribute('content');
        if (property && content) metadata.ogTags[property] = content;
    });

    document.querySelectorAll('meta[name^="twitter:"]').forEach(tag => {
        const name = tag.getAttribute('name');
        const content = tag.getAttribute('content');
        if (name && content) metadata.twitterTags[name] = content;
    });

    document.querySelectorAll('script[type="application/ld+json"]').forEach(script => {
        try {
            if (script.textContent) metadata.structuredData.push(JSON.parse(script.textContent));
        } catch (e) {}
    });

    // Fonts
    const external = [];
    document.querySelectorAll('link[rel="stylesheet"]').forEach(link => {
        const href = link.getAttribute('href');
        if (href && (href.includes('fonts.googleapis.com') || href.includes('use.typekit.net'))) {
            external.push(href);
        }
    });

    const fontFaces = [];
    for (const sheet of Array.from(document.styleSheets)) {
        let rules;
        try { rules = sheet.cssRules; } catch (e) { continue; }  // cross-origin
        if (!rules) continue;
        for (const rule of Array.from(rules)) {
            if (rule.type !== CSSRule.FONT_FACE_RULE) continue;
            const base = window.location.href;
            const cssText = rule.cssText.replace(/url\\(['"]?([^)'"]+)['"]?\\)/g, (match, url) => {
                if (url.startsWith('http') || url.startsWith('data:')) return match;
                try { return `url("${new URL(url, base).href}")`; } catch (e) { return match; }
            });
            fontFaces.push(cssText);
        }
    }

    // Framework / tooling signatures
    const techStack = [];
    const win = window;
    if (win.__NEXT_DATA__ || document.getElementById('__NEXT_DATA__')) techStack.push('Next.js');
    if (win.React || document.querySelector('[data-reactroot]') || document.getElementById('__NEXT_DATA__')) techStack.push('React');
    if (win.Vue || document.querySelector('[data-v-app]')) techStack.push('Vue.js');
    if (win.angular || document.querySelector('app-root, [ng-version]')) techStack.push('Angular');
    if (win.Svelte || document.querySelector('[class*="svelte-"]')) techStack.push('Svelte');
    if (document.body?.classList.contains('tailwind') || document.querySelector('[class*="text-"][class*="bg-"]')) techStack.push('Tailwind CSS');
    if (document.querySelector('link[href*="bootstrap"]')) techStack.push('Bootstrap');
    if (document.querySelector('script[src*="google-analytics"]')) techStack.push('Google Analytics');
    if (document.querySelector('script[src*="gtm.js"]')) techStack.push('Google Tag Manager');
    const generator = attr('meta[name="generator"]', 'content');
    if (generator && generator.includes('WordPress')) techStack.push('WordPress');

    return { styles, metadata, fonts: { external, fontFaces }, techStack };
}'''


def extraction_config(max_samples: int) -> dict:
    """Argument object passed to STYLE_EXTRACTION_SCRIPT."""
    return {
        "properties": STYLE_PROPERTIES,
        "maxSamples": max_samples,
        "granular": GRANULAR_SELECTORS,
        "bulk": BULK_SELECTORS,
    }


def _str_or_none(value):
    if value is None:
        return None
    value = str(value)
    return value if value else None


def parse_style_samples(raw: list) -> list[StyleSample]:
    samples = []
    for item in raw or []:
        if not isinstance(item, dict) or not item.get("tag"):
            continue
        styles = item.get("styles") or {}
        rect = item.get("rect") or {}
        try:
            samples.append(StyleSample(
                selector=str(item.get("selector") or item["tag"]),
                tag=str(item["tag"]).lower(),
                class_name=item.get("className") if isinstance(item.get("className"), str) else "",
                styles={k: str(v) for k, v in styles.items() if v is not None},
                rect=Rect(**{k: rect.get(k) or 0 for k in ("x", "y", "width", "height")}),
            ))
        except (ValidationError, AttributeError, TypeError) as e:
            print(f"  [sampler] Dropped malformed sample: {e}")
    return samples


def parse_metadata(raw: dict) -> PageMetadata:
    raw = raw or {}
    alt = raw.get("altTags") or {}
    structured = raw.get("structuredData") or []
    return PageMetadata(
        title=_str_or_none(raw.get("title")),
        description=_str_or_none(raw.get("description")),
        canonical=_str_or_none(raw.get("canonical")),
        robots=_str_or_none(raw.get("robots")),
        og_tags={str(k): str(v) for k, v in (raw.get("ogTags") or {}).items()},
        twitter_tags={str(k): str(v) for k, v in (raw.get("twitterTags") or {}).items()},
        structured_data=list(structured) if isinstance(structured, list) else [],
        alt_tags=AltTags(total=int(alt.get("total") or 0), missing=int(alt.get("missing") or 0)),
    )


def parse_fonts(raw: dict) -> FontSources:
    raw = raw or {}
    return FontSources(
        external=[str(u) for u in raw.get("external") or []],
        font_faces=[str(f) for f in raw.get("fontFaces") or []],
    )
