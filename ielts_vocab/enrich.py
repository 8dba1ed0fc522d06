"""Turn raw text into vocabulary cards with an LLM.

Used by the import flow only; the quiz engine never calls it.
"""
from __future__ import annotations

import json
import logging
import re
from typing import TYPE_CHECKING

from ielts_vocab.models import VocabularyEntry
from ielts_vocab.parsers.manual_parser import new_entry_id
from ielts_vocab.prompts import RETRY_INVALID, RETRY_NO_JSON, format_enrichment_prompt

if TYPE_CHECKING:
    from ielts_vocab.providers.base import LLMProvider

_log = logging.getLogger("ielts_vocab.enrich")

MAX_RETRIES = 3
DEFAULT_MAX_CHARS = 15000

REQUIRED_FIELDS = ("term", "translation")


class EnrichmentError(Exception):
    """The LLM could not produce usable vocabulary cards."""


def _find_json_blocks(text: str) -> list[str]:
    """Find balanced top-level ``[…]`` or ``{…}`` substrings in *text*."""
    pairs = {"[": "]", "{": "}"}
    results: list[str] = []
    i = 0
    while i < len(text):
        opener = text[i]
        if opener not in pairs:
            i += 1
            continue
        closer = pairs[opener]
        depth = 0
        in_str = False
        escape = False
        for j in range(i, len(text)):
            ch = text[j]
            if escape:
                escape = False
                continue
            if ch == "\\":
                escape = True
                continue
            if ch == '"':
                in_str = not in_str
                continue
            if in_str:
                continue
            if ch == opener:
                depth += 1
            elif ch == closer:
                depth -= 1
                if depth == 0:
                    results.append(text[i : j + 1])
                    i = j + 1
                    break
        else:
            # Unbalanced — skip this opening bracket
            i += 1
    return results


def _as_card_list(value) -> list | None:
    """Accept a bare array, or an object wrapping one (JSON-mode APIs)."""
    if isinstance(value, list):
        return value
    if isinstance(value, dict):
        if "term" in value:
            return [value]
        for v in value.values():
            if isinstance(v, list):
                return v
    return None


def _extract_json_array(text: str) -> list | None:
    """Extract the card array from an LLM response.

    Strips ``<think>`` blocks, tries code-fenced JSON first, then falls back
    to balanced bracket blocks, last match first.
    """
    text = re.sub(r"<think>.*?</think>", "", text, flags=re.DOTALL).strip()

    m = re.search(r"```(?:json)?\s*\n?([\[{].*?[\]}])\s*\n?```", text, re.DOTALL)
    if m:
        try:
            cards = _as_card_list(json.loads(m.group(1)))
            if cards is not None:
                return cards
        except json.JSONDecodeError:
            pass

    for candidate in reversed(_find_json_blocks(text)):
        try:
            cards = _as_card_list(json.loads(candidate))
        except json.JSONDecodeError:
            continue
        if cards is not None:
            return cards
    return None


def _validate_cards(items: list) -> tuple[list[VocabularyEntry], list[str]]:
    """Convert card dicts to entries; return ``(entries, problems)``."""
    entries: list[VocabularyEntry] = []
    problems: list[str] = []
    for i, item in enumerate(items):
        if not isinstance(item, dict):
            problems.append(f"  card[{i}]: expected object, got {type(item).__name__}")
            continue
        missing = [
            f for f in REQUIRED_FIELDS
            if not isinstance(item.get(f), str) or not item[f].strip()
        ]
        if missing:
            problems.append(f"  card[{i}] ({item.get('term', '?')}): missing {', '.join(missing)}")
            continue
        collocations = item.get("collocations") or []
        if not isinstance(collocations, list):
            problems.append(f"  card[{i}] ({item['term']}): collocations must be a list")
            continue
        entries.append(VocabularyEntry(
            id=str(item.get("id") or new_entry_id()),
            term=item["term"].strip(),
            translation=item["translation"].strip(),
            definition=str(item.get("definition") or "").strip(),
            example=str(item.get("example") or "").strip(),
            level=str(item.get("level") or "").strip(),
            collocations=tuple(str(c) for c in collocations),
        ))
    return entries, problems


async def enrich(
    llm: LLMProvider,
    raw_text: str,
    max_chars: int = DEFAULT_MAX_CHARS,
) -> list[VocabularyEntry]:
    """Ask *llm* for study cards covering *raw_text*.

    Validation errors are fed back to the model for up to ``MAX_RETRIES``
    attempts.  Raises :class:`EnrichmentError` if no usable cards come back
    or the provider call itself fails.
    """
    if not raw_text.strip():
        raise EnrichmentError("no vocabulary text provided")

    base_prompt = format_enrichment_prompt(raw_text, max_chars)
    prompt = base_prompt
    last_problem = "no response"
    for attempt in range(MAX_RETRIES):
        _log.info("Enrich (attempt %d/%d) via %s", attempt + 1, MAX_RETRIES, llm.name())
        try:
            response = await llm.generate(prompt, temperature=0.3)
        except Exception as e:
            _log.warning("Enrich: %s call failed: %s", llm.name(), e)
            raise EnrichmentError(f"{llm.name()} request failed: {e}") from e
        items = _extract_json_array(response)
        if items is None:
            last_problem = "no valid JSON array in response"
            prompt = base_prompt + "\n\n" + RETRY_NO_JSON
            _log.info("  No valid JSON — feeding back")
            _log.debug("  Raw response: %.300s", response)
            continue

        entries, problems = _validate_cards(items)
        if problems:
            last_problem = "card errors:\n" + "\n".join(problems)
            prompt = base_prompt + "\n\n" + RETRY_INVALID.format(errors="\n".join(problems))
            _log.info("  Validation failed — feeding back: %s", problems[0].strip())
            continue
        if not entries:
            last_problem = "no terms detected"
            prompt = base_prompt + "\n\n" + RETRY_NO_JSON
            _log.info("  Empty card list — feeding back")
            continue

        _log.info("  Enrich OK: %d cards", len(entries))
        return entries

    _log.warning("Enrichment failed after %d attempts: %s", MAX_RETRIES, last_problem)
    raise EnrichmentError(f"enrichment failed after {MAX_RETRIES} attempts: {last_problem}")
