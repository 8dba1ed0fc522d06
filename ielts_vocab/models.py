from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class VocabularyEntry:
    id: str
    term: str
    translation: str
    definition: str = ""
    example: str = ""
    level: str = ""
    collocations: tuple[str, ...] = ()

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "term": self.term,
            "translation": self.translation,
            "definition": self.definition,
            "example": self.example,
            "level": self.level,
            "collocations": list(self.collocations),
        }

    @classmethod
    def from_dict(cls, data: dict) -> VocabularyEntry:
        return cls(
            id=str(data["id"]),
            term=data["term"],
            translation=data["translation"],
            definition=data.get("definition", ""),
            example=data.get("example", ""),
            level=data.get("level", ""),
            collocations=tuple(data.get("collocations") or ()),
        )


CHOICE = "choice"
RECALL = "recall"


@dataclass(frozen=True)
class Question:
    id: str
    entry: VocabularyEntry
    kind: str  # choice | recall
    options: tuple[str, ...] = ()  # empty for recall

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "entry": self.entry.to_dict(),
            "kind": self.kind,
            "options": list(self.options),
        }

    @classmethod
    def from_dict(cls, data: dict) -> Question:
        return cls(
            id=data["id"],
            entry=VocabularyEntry.from_dict(data["entry"]),
            kind=data["kind"],
            options=tuple(data.get("options") or ()),
        )


@dataclass(frozen=True)
class AnswerFeedback:
    correct: bool
    correct_answer: str


@dataclass(frozen=True)
class QuizResult:
    score: int
    total: int


@dataclass
class WordSet:
    id: str
    name: str
    entries: list[VocabularyEntry]
    created_at: float

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "entries": [e.to_dict() for e in self.entries],
            "created_at": self.created_at,
        }

    @classmethod
    def from_dict(cls, data: dict) -> WordSet:
        return cls(
            id=data["id"],
            name=data["name"],
            entries=[VocabularyEntry.from_dict(e) for e in data["entries"]],
            created_at=data["created_at"],
        )


@dataclass
class UserStats:
    gold: int = 500
    mastered_count: int = 0
    learning_count: int = 0
    last_score: int | None = None

    def to_dict(self) -> dict:
        return {
            "gold": self.gold,
            "mastered_count": self.mastered_count,
            "learning_count": self.learning_count,
            "last_score": self.last_score,
        }

    @classmethod
    def from_dict(cls, data: dict) -> UserStats:
        known = {f.name for f in cls.__dataclass_fields__.values()}
        return cls(**{k: v for k, v in data.items() if k in known})
