"""Tests for prompt templates."""
from __future__ import annotations

from ielts_vocab.prompts import RETRY_INVALID, format_enrichment_prompt


class TestEnrichmentPrompt:
    def test_content_included(self):
        prompt = format_enrichment_prompt("mitigate: giảm nhẹ", max_chars=15000)
        assert "mitigate: giảm nhẹ" in prompt
        assert '"translation"' in prompt
        assert "collocations" in prompt

    def test_truncates(self):
        prompt = format_enrichment_prompt("x" * 20 + "TAIL", max_chars=20)
        assert "TAIL" not in prompt

    def test_braces_in_content_survive(self):
        prompt = format_enrichment_prompt("{term} and {0}", max_chars=100)
        assert "{term} and {0}" in prompt

    def test_retry_template(self):
        text = RETRY_INVALID.format(errors="  card[0]: missing translation")
        assert "missing translation" in text
