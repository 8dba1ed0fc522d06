"""Tests for LLM enrichment (JSON extraction, validation, retry loop)."""
from __future__ import annotations

import json

import httpx
import pytest

from ielts_vocab.enrich import (
    MAX_RETRIES,
    EnrichmentError,
    _extract_json_array,
    _validate_cards,
    enrich,
)


class FakeLLM:
    """Returns canned responses in order and records the prompts it saw."""

    def __init__(self, responses=None):
        self._responses = responses or []
        self.prompts: list[str] = []

    async def generate(self, prompt: str, temperature: float = 0.7) -> str:
        idx = min(len(self.prompts), len(self._responses) - 1)
        self.prompts.append(prompt)
        return self._responses[idx]

    def name(self) -> str:
        return "fake-llm"

    @property
    def call_count(self):
        return len(self.prompts)


def _card(term="mitigate", translation="giảm nhẹ", **extra):
    card = {
        "term": term,
        "translation": translation,
        "definition": "To make less severe.",
        "example": "Trees mitigate flooding.",
        "level": "7.5",
        "collocations": ["mitigate the risk"],
    }
    card.update(extra)
    return card


class TestExtractJsonArray:
    def test_bare_array(self):
        assert _extract_json_array(json.dumps([_card()]))[0]["term"] == "mitigate"

    def test_code_fence(self, enrichment_response):
        cards = _extract_json_array(enrichment_response)
        assert [c["term"] for c in cards] == ["mitigate", "ambiguous"]

    def test_surrounding_prose(self):
        text = "Sure! " + json.dumps([_card()]) + "\nGood luck with IELTS."
        assert len(_extract_json_array(text)) == 1

    def test_wrapped_in_object(self):
        text = json.dumps({"cards": [_card(), _card("ambiguous", "mơ hồ")]})
        assert len(_extract_json_array(text)) == 2

    def test_single_object(self):
        assert _extract_json_array(json.dumps(_card()))[0]["translation"] == "giảm nhẹ"

    def test_single_object_with_collocations(self):
        cards = _extract_json_array(json.dumps(_card(collocations=["mitigate the risk", "mitigate damage"])))
        assert len(cards) == 1
        assert cards[0]["term"] == "mitigate"
        assert cards[0]["collocations"] == ["mitigate the risk", "mitigate damage"]

    def test_think_block_ignored(self):
        text = '<think>maybe [{"term": "draft"}]</think>' + json.dumps([_card()])
        assert _extract_json_array(text)[0]["term"] == "mitigate"

    def test_brackets_inside_strings(self):
        text = json.dumps([_card(example="Use [brackets] and {braces} freely.")])
        assert _extract_json_array(text)[0]["example"] == "Use [brackets] and {braces} freely."

    def test_no_json(self):
        assert _extract_json_array("I could not find any words.") is None

    def test_malformed(self):
        assert _extract_json_array('[{"term": "mitigate"') is None


class TestValidateCards:
    def test_valid(self):
        entries, problems = _validate_cards([_card()])
        assert problems == []
        assert entries[0].term == "mitigate"
        assert entries[0].collocations == ("mitigate the risk",)
        assert entries[0].id

    def test_keeps_given_id(self):
        entries, _ = _validate_cards([_card(id="abc")])
        assert entries[0].id == "abc"

    def test_missing_translation(self):
        entries, problems = _validate_cards([_card(translation="  ")])
        assert entries == []
        assert "translation" in problems[0]

    def test_not_an_object(self):
        _, problems = _validate_cards(["mitigate"])
        assert "expected object" in problems[0]

    def test_bad_collocations(self):
        _, problems = _validate_cards([_card(collocations="a, b")])
        assert "collocations" in problems[0]

    def test_optional_fields(self):
        entries, problems = _validate_cards([{"term": "resilient", "translation": "kiên cường"}])
        assert problems == []
        assert entries[0].definition == ""
        assert entries[0].level == ""


class TestEnrich:
    @pytest.mark.asyncio
    async def test_success(self, enrichment_response):
        llm = FakeLLM([enrichment_response])
        entries = await enrich(llm, "mitigate: giảm nhẹ\nambiguous: mơ hồ")
        assert [e.translation for e in entries] == ["giảm nhẹ", "mơ hồ"]
        assert llm.call_count == 1
        assert "mitigate: giảm nhẹ" in llm.prompts[0]

    @pytest.mark.asyncio
    async def test_retries_with_feedback(self, enrichment_response):
        llm = FakeLLM(["no idea", json.dumps([_card(translation="")]), enrichment_response])
        entries = await enrich(llm, "some text")
        assert len(entries) == 2
        assert llm.call_count == 3
        assert "did not contain a valid JSON array" in llm.prompts[1]
        assert "missing translation" in llm.prompts[2]

    @pytest.mark.asyncio
    async def test_all_retries_fail(self):
        llm = FakeLLM(["garbage"])
        with pytest.raises(EnrichmentError):
            await enrich(llm, "some text")
        assert llm.call_count == MAX_RETRIES

    @pytest.mark.asyncio
    async def test_empty_result_is_error(self):
        llm = FakeLLM(["[]"])
        with pytest.raises(EnrichmentError, match="no terms detected"):
            await enrich(llm, "some text")

    @pytest.mark.asyncio
    async def test_empty_input(self):
        llm = FakeLLM(["[]"])
        with pytest.raises(EnrichmentError):
            await enrich(llm, "   ")
        assert llm.call_count == 0

    @pytest.mark.asyncio
    async def test_input_truncated(self, enrichment_response):
        llm = FakeLLM([enrichment_response])
        await enrich(llm, "a" * 50 + "ZZZ", max_chars=50)
        assert "a" * 50 in llm.prompts[0]
        assert "ZZZ" not in llm.prompts[0]

    @pytest.mark.asyncio
    async def test_provider_failure_is_enrichment_error(self):
        cause = httpx.ConnectError("connection refused")

        class DownLLM(FakeLLM):
            async def generate(self, prompt: str, temperature: float = 0.7) -> str:
                self.prompts.append(prompt)
                raise cause

        llm = DownLLM()
        with pytest.raises(EnrichmentError, match="request failed") as exc_info:
            await enrich(llm, "mitigate: giảm nhẹ")
        assert exc_info.value.__cause__ is cause
        assert llm.call_count == 1
