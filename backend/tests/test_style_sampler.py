from sitelens.style_sampler import (
    BULK_SELECTORS,
    GRANULAR_SELECTORS,
    STYLE_PROPERTIES,
    extraction_config,
    parse_fonts,
    parse_metadata,
    parse_style_samples,
)


def test_extraction_config():
    config = extraction_config(250)
    assert config == {
        "properties": STYLE_PROPERTIES,
        "maxSamples": 250,
        "granular": GRANULAR_SELECTORS,
        "bulk": BULK_SELECTORS,
    }


def test_analyzer_properties_are_sampled():
    for prop in ("color", "backgroundColor", "borderColor", "fontFamily", "display", "maxWidth"):
        assert prop in STYLE_PROPERTIES


def test_parse_style_samples():
    raw = [
        {"selector": "h1", "tag": "H1", "className": "hero-title",
         "styles": {"fontSize": "48px", "color": None},
         "rect": {"x": 10, "y": 20, "width": 300, "height": None}},
        {"tag": "div", "styles": {"display": "flex"}},
    ]
    samples = parse_style_samples(raw)

    assert len(samples) == 2
    h1, div = samples
    assert h1.tag == "h1"
    assert h1.class_name == "hero-title"
    assert h1.styles == {"fontSize": "48px"}
    assert (h1.rect.x, h1.rect.y, h1.rect.width, h1.rect.height) == (10, 20, 300, 0)
    assert h1.descriptor == "h1.hero-title"
    assert div.selector == "div"
    assert div.style("display") == "flex"
    assert div.style("color") == ""


def test_parse_style_samples_drops_malformed_entries():
    raw = [
        None,
        "h1",
        {"selector": "x"},
        {"tag": "p", "styles": "not-a-dict"},
        {"tag": "p", "rect": {"x": "left"}},
        {"tag": "span"},
    ]
    samples = parse_style_samples(raw)
    assert [s.tag for s in samples] == ["span"]


def test_parse_style_samples_handles_missing_payload():
    assert parse_style_samples(None) == []


def test_parse_metadata():
    metadata = parse_metadata({
        "title": "Acme",
        "description": "",
        "canonical": "https://acme.test/",
        "robots": None,
        "ogTags": {"og:title": "Acme"},
        "twitterTags": {"twitter:card": "summary"},
        "structuredData": [{"@type": "Organization"}],
        "altTags": {"total": 3, "missing": 1},
    })

    assert metadata.title == "Acme"
    assert metadata.description is None
    assert metadata.robots is None
    assert metadata.canonical == "https://acme.test/"
    assert metadata.og_tags == {"og:title": "Acme"}
    assert metadata.twitter_tags == {"twitter:card": "summary"}
    assert metadata.structured_data == [{"@type": "Organization"}]
    assert (metadata.alt_tags.total, metadata.alt_tags.missing) == (3, 1)


def test_parse_metadata_defaults():
    metadata = parse_metadata(None)
    assert metadata.title is None
    assert metadata.og_tags == {}
    assert metadata.structured_data == []
    assert metadata.alt_tags.total == 0


def test_parse_fonts():
    fonts = parse_fonts({"external": ["https://fonts.googleapis.com/css2?family=Inter"],
                         "fontFaces": ["@font-face { font-family: Inter; }"]})
    assert fonts.external == ["https://fonts.googleapis.com/css2?family=Inter"]
    assert fonts.font_faces == ["@font-face { font-family: Inter; }"]
    assert parse_fonts(None).external == []
