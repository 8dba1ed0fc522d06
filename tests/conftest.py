"""Shared test fixtures."""
from __future__ import annotations

import pytest

from ielts_vocab.config import Settings
from ielts_vocab.db import Database
from ielts_vocab.models import VocabularyEntry
from ielts_vocab.vault import StudyVault


@pytest.fixture
def tmp_db(tmp_path):
    """Create a fresh temporary database."""
    db = Database(tmp_path / "test.db")
    yield db
    db.close()


@pytest.fixture
def vault(tmp_db):
    return StudyVault(tmp_db, Settings())


def make_entry(id: str, term: str, translation: str) -> VocabularyEntry:
    return VocabularyEntry(
        id=id,
        term=term,
        translation=translation,
        definition=f"definition of {term}",
        example=f"An example using {term}.",
        level="7.0",
        collocations=(f"{term} one", f"{term} two"),
    )


@pytest.fixture
def single_entry():
    return [make_entry("1", "Mitigate", "Giảm nhẹ")]


@pytest.fixture
def sample_entries():
    """Five entries with distinct translations."""
    return [
        make_entry("1", "Mitigate", "Giảm nhẹ"),
        make_entry("2", "Ubiquitous", "Có mặt khắp nơi"),
        make_entry("3", "Ambiguous", "Mơ hồ"),
        make_entry("4", "Pragmatic", "Thực tế"),
        make_entry("5", "Detrimental", "Có hại"),
    ]


@pytest.fixture
def enrichment_response():
    """A well-formed LLM reply for the enrichment prompt."""
    return """\
Here are your cards:

```json
[
  {
    "term": "mitigate",
    "translation": "giảm nhẹ",
    "definition": "To make something less severe.",
    "example": "Trees mitigate the effects of flooding.",
    "level": "7.5",
    "collocations": ["mitigate the risk", "mitigate the impact", "help mitigate"]
  },
  {
    "term": "ambiguous",
    "translation": "mơ hồ",
    "definition": "Open to more than one interpretation.",
    "example": "The instructions were ambiguous.",
    "level": "6.5",
    "collocations": ["highly ambiguous", "ambiguous wording", "remain ambiguous"]
  }
]
```
"""
