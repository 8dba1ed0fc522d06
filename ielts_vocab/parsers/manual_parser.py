"""Parse hand-typed word lists into VocabularyEntry objects.

Accepted line shapes:
  mitigate: giảm nhẹ
  mitigate - giảm nhẹ
  mitigate | giảm nhẹ
  WORD: mitigate | TRANS: giảm nhẹ

Lines without a term/translation pair are skipped.
"""
from __future__ import annotations

import re
import uuid
from pathlib import Path

from ielts_vocab.models import VocabularyEntry

_LABELLED = re.compile(r"^\s*WORD\s*:\s*(.+?)\s*\|\s*TRANS\s*:\s*(.*?)\s*$", re.IGNORECASE)
# Only " - " splits (with spaces) so hyphenated terms like "well-being" survive
_PAIR = re.compile(r"^\s*(.+?)\s*(?::|\||\t|\s-\s|\s–\s)\s*(.+?)\s*$")
_BULLET = re.compile(r"^\s*(?:[-*•]|\d+[.)])\s+")


def new_entry_id() -> str:
    return uuid.uuid4().hex[:9]


def parse_manual_line(line: str) -> tuple[str, str] | None:
    m = _LABELLED.match(line)
    if m:
        term, translation = m.group(1).strip(), m.group(2).strip()
        return (term, translation) if term and translation else None
    line = _BULLET.sub("", line)
    m = _PAIR.match(line)
    if not m:
        return None
    term = m.group(1).strip().strip("*")
    translation = m.group(2).strip()
    if not term or not translation:
        return None
    return term, translation


def parse_manual_text(text: str) -> list[VocabularyEntry]:
    if not text.strip():
        raise ValueError("no vocabulary text provided")
    entries: list[VocabularyEntry] = []
    for line in text.splitlines():
        pair = parse_manual_line(line)
        if pair is None:
            continue
        term, translation = pair
        entries.append(VocabularyEntry(id=new_entry_id(), term=term, translation=translation))
    return entries


def parse_manual_file(path: Path) -> list[VocabularyEntry]:
    return parse_manual_text(path.read_text(encoding="utf-8"))
