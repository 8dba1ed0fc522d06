"""Quiz session engine: question generation, answer checking and scoring."""
from __future__ import annotations

import logging
import random
from collections.abc import Sequence

from ielts_vocab.models import (
    CHOICE,
    RECALL,
    AnswerFeedback,
    Question,
    QuizResult,
    VocabularyEntry,
)
from ielts_vocab.normalize import normalize_answer

_log = logging.getLogger("ielts_vocab.quiz")

MAX_DISTRACTORS = 3

ACTIVE = "active"
FINISHED = "finished"


class QuizStateError(RuntimeError):
    """An operation was called in a session state that does not allow it."""


def _distractor_pool(entries: Sequence[VocabularyEntry], index: int) -> list[str]:
    """Distinct translations of every entry except ``entries[index]``.

    Values that normalize to the correct answer (or to each other) are
    dropped, so no two options can both be accepted as correct.
    """
    correct_key = normalize_answer(entries[index].translation)
    seen = {correct_key}
    pool: list[str] = []
    for i, other in enumerate(entries):
        if i == index:
            continue
        key = normalize_answer(other.translation)
        if key in seen:
            continue
        seen.add(key)
        pool.append(other.translation)
    return pool


def _choice_question(
    entries: Sequence[VocabularyEntry], index: int, rng: random.Random,
) -> Question:
    entry = entries[index]
    pool = _distractor_pool(entries, index)
    distractors = rng.sample(pool, min(MAX_DISTRACTORS, len(pool)))
    options = distractors + [entry.translation]
    rng.shuffle(options)
    return Question(
        id=f"{entry.id}-choice",
        entry=entry,
        kind=CHOICE,
        options=tuple(options),
    )


def build_questions(
    entries: Sequence[VocabularyEntry],
    rng: random.Random | None = None,
) -> list[Question]:
    """Build one choice and one recall question per entry, shuffled together.

    *rng* is any ``random.Random``-compatible source; pass a seeded one for
    reproducible ordering.
    """
    if not entries:
        raise ValueError("no entries to build a quiz from")
    if rng is None:
        rng = random.Random()

    questions: list[Question] = []
    for i, entry in enumerate(entries):
        questions.append(_choice_question(entries, i, rng))
        questions.append(Question(id=f"{entry.id}-recall", entry=entry, kind=RECALL))

    rng.shuffle(questions)
    return questions


class QuizSession:
    """One pass through a fixed, shuffled question sequence.

    The session is ``active`` until every question has received exactly one
    answer, then ``finished``.  Answers are final: there is no skip or undo.
    Calling an operation in the wrong state raises :class:`QuizStateError`
    without touching the session.
    """

    def __init__(self, questions: Sequence[Question]):
        if not questions:
            raise ValueError("a quiz session needs at least one question")
        self._questions: tuple[Question, ...] = tuple(questions)
        self._position = 0
        self._score = 0
        self._status = ACTIVE

    @classmethod
    def start(
        cls,
        entries: Sequence[VocabularyEntry],
        rng: random.Random | None = None,
    ) -> QuizSession:
        session = cls(build_questions(entries, rng))
        _log.info("Quiz started: %d entries, %d questions", len(entries), session.total)
        return session

    @property
    def questions(self) -> tuple[Question, ...]:
        return self._questions

    @property
    def position(self) -> int:
        return self._position

    @property
    def score(self) -> int:
        return self._score

    @property
    def status(self) -> str:
        return self._status

    @property
    def total(self) -> int:
        return len(self._questions)

    @property
    def is_finished(self) -> bool:
        return self._status == FINISHED

    def current_question(self) -> Question:
        if self.is_finished:
            raise QuizStateError("session is finished; there is no current question")
        return self._questions[self._position]

    def submit_answer(self, raw: str) -> AnswerFeedback:
        if self.is_finished:
            raise QuizStateError("session is finished; no further answers are accepted")

        expected = self._questions[self._position].entry.translation
        correct = normalize_answer(raw) == normalize_answer(expected)
        if correct:
            self._score += 1

        self._position += 1
        if self._position >= len(self._questions):
            self._status = FINISHED
            _log.info("Quiz finished: %d/%d", self._score, self.total)
        return AnswerFeedback(correct=correct, correct_answer=expected)

    def result(self) -> QuizResult:
        if not self.is_finished:
            raise QuizStateError(
                f"session still active at question {self._position + 1} of {self.total}"
            )
        return QuizResult(score=self._score, total=self.total)

    # ── Serialization (persistence is the caller's job) ────────────────

    def to_dict(self) -> dict:
        return {
            "questions": [q.to_dict() for q in self._questions],
            "position": self._position,
            "score": self._score,
            "status": self._status,
        }

    @classmethod
    def from_dict(cls, data: dict) -> QuizSession:
        session = cls([Question.from_dict(q) for q in data["questions"]])
        position = int(data.get("position", 0))
        score = int(data.get("score", 0))
        status = data.get("status", ACTIVE)
        if status not in (ACTIVE, FINISHED):
            raise ValueError(f"unknown session status: {status!r}")
        if not 0 <= score <= position <= session.total:
            raise ValueError(
                f"inconsistent session state: score={score}, position={position}, "
                f"total={session.total}"
            )
        if (status == FINISHED) != (position == session.total):
            raise ValueError(f"status {status!r} does not match position {position}")
        session._position = position
        session._score = score
        session._status = status
        return session
