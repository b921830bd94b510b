"""Tests for readable-article extraction."""
from brandkit.agents.content import ReadabilityExtractor

ARTICLE_HTML = """
<html><head><title>Our story | Acme</title></head>
<body>
  <nav><a href="/">Home</a> <a href="/shop">Shop</a></nav>
  <article>
    <div class="story">
      <p>Acme started in 1998 in a small garage, building hand tools for makers, carpenters, and hobbyists who wanted something that would last a lifetime.</p>
      <p>Every plane, chisel, and saw is still sharpened by hand in our workshop, and we test each one on real timber before it leaves the building.</p>
      <p>Today, Acme ships to makers in forty countries, but the promise is the same: honest tools, fair prices, and a lifetime warranty on everything we make.</p>
    </div>
  </article>
  <footer>© 2024 Acme Inc.</footer>
</body></html>
"""


def test_article_text_extracted():
    article = ReadabilityExtractor().extract(ARTICLE_HTML, "https://acme.test/story")

    assert article is not None
    assert "small garage" in article.text_content
    assert "lifetime warranty" in article.text_content
    assert "Acme" in article.title


def test_empty_document_has_no_article():
    assert ReadabilityExtractor().extract("", "https://acme.test") is None
    assert ReadabilityExtractor().extract("   ", "https://acme.test") is None


def test_minimum_length_rejects_short_pages():
    extractor = ReadabilityExtractor(min_text_length=10000)
    assert extractor.extract(ARTICLE_HTML, "https://acme.test/story") is None
