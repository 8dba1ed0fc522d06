from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path

CONFIG_PATH = Path(__file__).resolve().parent.parent / "config.json"

DEFAULTS = {
    "llm_provider": "ollama",
    "llm_model": "qwen3:8b",
    "ollama_url": "http://localhost:11434",
    "db_path": "ielts_vocab.db",
    "starting_gold": 500,
    "gold_per_point": 10,
    "max_import_chars": 15000,
    "correct_delay_ms": 1000,
    "wrong_delay_ms": 2500,
}


@dataclass
class Settings:
    llm_provider: str = DEFAULTS["llm_provider"]
    llm_model: str = DEFAULTS["llm_model"]
    ollama_url: str = DEFAULTS["ollama_url"]
    db_path: str = DEFAULTS["db_path"]
    starting_gold: int = DEFAULTS["starting_gold"]
    gold_per_point: int = DEFAULTS["gold_per_point"]
    max_import_chars: int = DEFAULTS["max_import_chars"]
    # Feedback pause before the next question; clients use these, the quiz
    # engine does not.
    correct_delay_ms: int = DEFAULTS["correct_delay_ms"]
    wrong_delay_ms: int = DEFAULTS["wrong_delay_ms"]

    @property
    def project_root(self) -> Path:
        return Path(__file__).resolve().parent.parent

    @property
    def db_full_path(self) -> Path:
        return self.project_root / self.db_path

    def to_dict(self) -> dict:
        return {
            "llm_provider": self.llm_provider,
            "llm_model": self.llm_model,
            "ollama_url": self.ollama_url,
            "db_path": self.db_path,
            "starting_gold": self.starting_gold,
            "gold_per_point": self.gold_per_point,
            "max_import_chars": self.max_import_chars,
            "correct_delay_ms": self.correct_delay_ms,
            "wrong_delay_ms": self.wrong_delay_ms,
        }


def load_settings() -> Settings:
    if CONFIG_PATH.exists():
        raw = json.loads(CONFIG_PATH.read_text())
        known = {f.name for f in Settings.__dataclass_fields__.values()}
        filtered = {k: v for k, v in raw.items() if k in known}
        return Settings(**filtered)
    return Settings()


def save_settings(settings: Settings) -> None:
    CONFIG_PATH.write_text(json.dumps(settings.to_dict(), indent=4) + "\n")
