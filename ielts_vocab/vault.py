"""Saved word sets, the active deck and user stats."""
from __future__ import annotations

import json
import logging
import time
import uuid
from collections.abc import Sequence
from datetime import datetime

from ielts_vocab.config import Settings
from ielts_vocab.db import KeyValueStore
from ielts_vocab.models import QuizResult, UserStats, VocabularyEntry, WordSet
from ielts_vocab.study_set import STUDY_SET

_log = logging.getLogger("ielts_vocab.vault")

VAULT_KEY = "ielts_vault"
ACTIVE_WORDS_KEY = "ielts_active_words"
STATS_KEY = "ielts_stats"


class StudyVault:
    """Caller-side state around the quiz engine, kept in a key/value store."""

    def __init__(self, store: KeyValueStore, settings: Settings | None = None):
        self.store = store
        self.settings = settings or Settings()

    # ── Saved sets ────────────────────────────────────────────────────────

    def saved_sets(self) -> list[WordSet]:
        raw = self.store.load(VAULT_KEY)
        if raw is None:
            return []
        return [WordSet.from_dict(d) for d in json.loads(raw)]

    def _write_sets(self, sets: list[WordSet]) -> None:
        self.store.save(VAULT_KEY, json.dumps([s.to_dict() for s in sets], ensure_ascii=False))

    def get_set(self, set_id: str) -> WordSet:
        for s in self.saved_sets():
            if s.id == set_id:
                return s
        raise KeyError(set_id)

    def import_set(self, entries: Sequence[VocabularyEntry], name: str | None = None) -> WordSet:
        """Save *entries* as a new set (newest first) and make it the active deck."""
        if not entries:
            raise ValueError("cannot import an empty word set")
        name = (name or "").strip() or f"Imported Set {datetime.now().strftime('%Y-%m-%d')}"
        word_set = WordSet(
            id=uuid.uuid4().hex[:12],
            name=name,
            entries=list(entries),
            created_at=time.time(),
        )
        self._write_sets([word_set] + self.saved_sets())
        self.apply_set(word_set.entries)
        _log.info("Imported set '%s' (%d entries)", name, len(entries))
        return word_set

    def delete_set(self, set_id: str) -> None:
        sets = self.saved_sets()
        remaining = [s for s in sets if s.id != set_id]
        if len(remaining) == len(sets):
            raise KeyError(set_id)
        self._write_sets(remaining)

    # ── Active deck ───────────────────────────────────────────────────────

    def active_entries(self) -> list[VocabularyEntry] | None:
        raw = self.store.load(ACTIVE_WORDS_KEY)
        if raw is None:
            return None
        return [VocabularyEntry.from_dict(d) for d in json.loads(raw)]

    def apply_set(self, entries: Sequence[VocabularyEntry]) -> None:
        self.store.save(
            ACTIVE_WORDS_KEY,
            json.dumps([e.to_dict() for e in entries], ensure_ascii=False),
        )
        stats = self.stats()
        stats.learning_count = len(entries)
        stats.mastered_count = 0
        self._write_stats(stats)

    def apply_saved_set(self, set_id: str) -> WordSet:
        word_set = self.get_set(set_id)
        self.apply_set(word_set.entries)
        return word_set

    def use_sample_set(self) -> list[VocabularyEntry]:
        self.apply_set(STUDY_SET)
        return list(STUDY_SET)

    # ── Stats ─────────────────────────────────────────────────────────────

    def stats(self) -> UserStats:
        raw = self.store.load(STATS_KEY)
        if raw is None:
            return UserStats(gold=self.settings.starting_gold)
        return UserStats.from_dict(json.loads(raw))

    def _write_stats(self, stats: UserStats) -> None:
        self.store.save(STATS_KEY, json.dumps(stats.to_dict()))

    def mark_known(self) -> UserStats:
        """A flashcard was marked as known: move one word from learning to mastered."""
        stats = self.stats()
        stats.mastered_count += 1
        stats.learning_count = max(0, stats.learning_count - 1)
        self._write_stats(stats)
        return stats

    def record_quiz(self, result: QuizResult) -> UserStats:
        """Store a finished quiz: remember the score and pay out gold for it."""
        stats = self.stats()
        stats.last_score = result.score
        stats.gold += result.score * self.settings.gold_per_point
        self._write_stats(stats)
        _log.info("Quiz recorded: %d/%d, gold now %d", result.score, result.total, stats.gold)
        return stats
