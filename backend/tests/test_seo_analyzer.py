from sitelens.models import AltTags, PageMetadata
from sitelens.seo_analyzer import analyze_seo

from conftest import make_sample


def messages(report):
    return [issue.message for issue in report.issues]


class TestEmptyPage:
    def test_bare_metadata_scores_low(self):
        metadata = PageMetadata(title=None, description=None, structured_data=[])
        report = analyze_seo(metadata, [])

        msgs = messages(report)
        assert "Missing <title> tag" in msgs
        assert "Missing meta description" in msgs
        assert any(m.startswith("No H1 tag") for m in msgs)
        assert report.score <= 30
        assert report.ai_score <= 20

    def test_bare_metadata_breakdown(self):
        report = analyze_seo(PageMetadata(), [])
        b = report.breakdown
        assert (b.title, b.description, b.headings, b.semantic) == (0, 0, 0, 0)
        assert b.social == 0
        assert b.technical == 80
        assert b.image == 100
        assert b.structured_data == 0
        assert b.content_organization == 0
        assert report.score == 22
        assert report.ai_score == 10

    def test_recommendations_follow_issues(self):
        report = analyze_seo(PageMetadata(), [])
        assert len(report.recommendations) == len(report.issues)
        assert all(isinstance(r, str) and r for r in report.recommendations)


class TestSubScores:
    def test_title_rules(self):
        assert analyze_seo(PageMetadata(title="Short"), []).breakdown.title == 40
        assert analyze_seo(PageMetadata(title="x" * 61), []).breakdown.title == 70
        assert analyze_seo(PageMetadata(title="A good page title"), []).breakdown.title == 100

    def test_description_rules(self):
        assert analyze_seo(PageMetadata(description="too short"), []).breakdown.description == 40
        assert analyze_seo(PageMetadata(description="d" * 161), []).breakdown.description == 70
        assert analyze_seo(PageMetadata(description="d" * 100), []).breakdown.description == 100

    def test_heading_rules(self):
        assert analyze_seo(PageMetadata(), [make_sample("h1"), make_sample("h1")]).breakdown.headings == 50
        assert analyze_seo(PageMetadata(), [make_sample("h1")]).breakdown.headings == 80
        assert analyze_seo(PageMetadata(), [make_sample("h1"), make_sample("h2")]).breakdown.headings == 100

    def test_multiple_h1_issue(self):
        report = analyze_seo(PageMetadata(), [make_sample("h1"), make_sample("h1")])
        assert "Multiple H1 tags found (should be unique)" in messages(report)

    def test_social_rules(self):
        partial = PageMetadata(og_tags={"og:title": "T", "og:image": "i.png"})
        assert analyze_seo(partial, []).breakdown.social == 30
        with_card = PageMetadata(og_tags={"og:title": "T", "og:image": "i.png"},
                                 twitter_tags={"twitter:card": "summary"})
        assert analyze_seo(with_card, []).breakdown.social == 40

    def test_semantic_weights(self):
        samples = [make_sample("main"), make_sample("nav"), make_sample("section")]
        assert analyze_seo(PageMetadata(), samples).breakdown.semantic == 65

    def test_semantic_article_and_section_count_once(self):
        samples = [make_sample("article"), make_sample("section")]
        assert analyze_seo(PageMetadata(), samples).breakdown.semantic == 20

    def test_image_alt_coverage(self):
        metadata = PageMetadata(alt_tags=AltTags(total=4, missing=1))
        report = analyze_seo(metadata, [])
        assert report.breakdown.image == 75
        assert "1 images are missing alt attributes" in messages(report)

    def test_structured_data_is_binary(self):
        assert analyze_seo(PageMetadata(structured_data=[{"@type": "Thing"}]), []).breakdown.structured_data == 100
        assert analyze_seo(PageMetadata(structured_data=[]), []).breakdown.structured_data == 0

    def test_content_organization_scales_with_heading_count(self):
        assert analyze_seo(PageMetadata(), [make_sample("h2")]).breakdown.content_organization == 33
        assert analyze_seo(PageMetadata(), [make_sample("h2"), make_sample("h3")]).breakdown.content_organization == 67
        many = [make_sample(f"h{i}") for i in range(1, 7)]
        assert analyze_seo(PageMetadata(), many).breakdown.content_organization == 100

    def test_missing_robots_is_info_only(self):
        report = analyze_seo(PageMetadata(canonical="https://acme.test/"), [])
        assert report.breakdown.technical == 100
        robots = [i for i in report.issues if i.message == "No robots meta tag found"]
        assert robots and robots[0].type == "info"


class TestWellFormedPage:
    def test_complete_page_scores_full(self, complete_metadata, semantic_samples):
        report = analyze_seo(complete_metadata, semantic_samples)
        assert report.score == 100
        assert report.ai_score == 100
        assert report.issues == []
        assert report.recommendations == []
        assert report.headings.h1 == 1
        assert report.og_image == "https://acme.test/og.png"


def test_adding_title_never_lowers_score():
    samples = [make_sample("h1"), make_sample("main")]
    without = analyze_seo(PageMetadata(description="d" * 80), samples)
    for title in ["Tiny", "A perfectly reasonable title", "t" * 90]:
        with_title = analyze_seo(PageMetadata(title=title, description="d" * 80), samples)
        assert with_title.breakdown.title > without.breakdown.title
        assert with_title.score >= without.score


def test_scores_are_integers_within_bounds():
    report = analyze_seo(PageMetadata(title="x" * 61, alt_tags=AltTags(total=3, missing=2)), [make_sample("h1")])
    for value in (report.score, report.ai_score):
        assert isinstance(value, int)
        assert 0 <= value <= 100
