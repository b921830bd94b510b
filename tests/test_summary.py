"""Tests for summary input selection and the summary strategy."""
import pytest

from brandkit.agents.summary import SummaryStrategy, select_summary_input
from brandkit.app.errors import EnrichmentFailure
from brandkit.app.models import Article, RawMetadata

from conftest import StubEnrichment


def test_article_text_preferred(article):
    raw = RawMetadata(description="Acme — tools for makers")
    assert select_summary_input(article, raw) == article.text_content


def test_falls_back_to_description_without_article():
    raw = RawMetadata(description="Acme — tools for makers")
    assert select_summary_input(None, raw) == "Acme — tools for makers"
    assert select_summary_input(Article(title="x", text_content="   "), raw) == "Acme — tools for makers"


def test_empty_when_nothing_available():
    assert select_summary_input(None, RawMetadata()) == ""


def test_summarize_returns_trimmed_reply():
    enrichment = StubEnrichment(text_reply="  Acme makes hand tools for makers.  \n")
    summary = SummaryStrategy(enrichment).summarize("Acme builds hand tools.")

    assert summary == "Acme makes hand tools for makers."
    assert "Acme builds hand tools." in enrichment.text_calls[0]
    assert "2-3 sentences" in enrichment.text_calls[0]


def test_summarize_truncates_long_input():
    enrichment = StubEnrichment(text_reply="Acme.")
    SummaryStrategy(enrichment, max_chars=10).summarize("0123456789ABCDEF")

    prompt = enrichment.text_calls[0]
    assert prompt.endswith("0123456789")
    assert "ABCDEF" not in prompt


def test_summarize_propagates_failure():
    enrichment = StubEnrichment(text_reply=EnrichmentFailure("timeout"))
    with pytest.raises(EnrichmentFailure):
        SummaryStrategy(enrichment).summarize("text")


def test_blank_reply_is_a_failure():
    with pytest.raises(EnrichmentFailure):
        SummaryStrategy(StubEnrichment(text_reply="   ")).summarize("text")
