"""Tests for HTML content extraction."""

import pytest

from truth_engine.domain.services.content_extractor import ContentExtractor

PAGE = """
<html>
  <head>
    <title> Eiffel Tower &amp; Paris </title>
    <meta property="og:site_name" content="Encyclopedia Online">
    <style>body { color: red; }</style>
  </head>
  <body>
    <nav>Home | About</nav>
    <article>
      <h1>The Eiffel Tower</h1>
      <p>The Eiffel Tower is 330 metres tall. It was completed in 1889 for the World's Fair.</p>
      <script>trackVisit();</script>
      <!-- advertisement -->
      <p>Paris attracts millions of visitors every year. The tower is a landmark!</p>
    </article>
    <footer>Copyright</footer>
  </body>
</html>
"""


@pytest.fixture
def extractor() -> ContentExtractor:
    return ContentExtractor()


def test_extracts_article_region(extractor: ContentExtractor):
    result = extractor.extract(PAGE, "https://example.com/eiffel")
    assert result.title == "Eiffel Tower & Paris"
    assert result.site_name == "Encyclopedia Online"
    assert result.content.startswith("The Eiffel Tower The Eiffel Tower is 330 metres tall.")
    assert "trackVisit" not in result.content
    assert "advertisement" not in result.content
    assert "Home | About" not in result.content
    assert "  " not in result.content
    assert result.relevant_sentences is None


def test_relevant_sentences_follow_claim_keywords(extractor: ContentExtractor):
    result = extractor.extract(PAGE, "https://example.com/eiffel", claim="The Eiffel Tower is 300 metres tall")
    assert result.relevant_sentences
    assert all(
        any(word in sentence.lower() for word in ("eiffel", "tower", "metres", "tall"))
        for sentence in result.relevant_sentences
    )
    assert result.relevant_sentences == extractor.extract(
        PAGE, "https://example.com/eiffel", claim="The Eiffel Tower is 300 metres tall"
    ).relevant_sentences


def test_relevant_sentences_capped(extractor: ContentExtractor):
    body = " ".join(f"Sentence number {i} mentions the keyword apple." for i in range(30))
    page = f"<html><body>{body}</body></html>"
    result = extractor.extract(page, "https://example.com", claim="apple sales")
    assert len(result.relevant_sentences) == 10


def test_falls_back_to_body_then_document(extractor: ContentExtractor):
    body_only = extractor.extract("<html><body><p>Body text here.</p></body></html>", "https://a.org/x")
    assert body_only.content == "Body text here."
    assert body_only.site_name == "a.org"

    fragment = extractor.extract("<p>Just a fragment.</p>", "https://a.org/x")
    assert fragment.content == "Just a fragment."
    assert fragment.title == ""


def test_content_is_capped(extractor: ContentExtractor):
    page = "<html><body>" + "word " * 1000 + "</body></html>"
    assert len(extractor.extract(page, "https://a.org", max_length=100).content) == 100
    assert len(ContentExtractor(max_length=20).extract(page, "https://a.org").content) == 20


def test_never_raises(extractor: ContentExtractor):
    result = extractor.extract(None, "https://broken.example.com/page")
    assert result.title == ""
    assert result.content == ""
    assert result.site_name == "broken.example.com"


def test_nested_content_region_is_kept_whole(extractor: ContentExtractor):
    page = (
        '<div id="content"><div class="lead">Lead paragraph.</div>'
        "<p>The population of Paris was 2.1 million in 2023.</p></div>"
    )
    result = extractor.extract(page, "https://a.org/paris")
    assert result.content == "Lead paragraph. The population of Paris was 2.1 million in 2023."


def test_main_region_cascade(extractor: ContentExtractor):
    page = (
        "<html><body><nav>Menu</nav>"
        '<div class="main"><p>Main column text.</p><iframe>ad frame</iframe>'
        "<noscript>Enable scripts</noscript></div>"
        "<footer>Footer</footer></body></html>"
    )
    result = extractor.extract(page, "https://a.org/page")
    assert result.content == "Main column text."
