"""CLI entry point for ielts-vocab.

Usage:
  python -m ielts_vocab serve [--port PORT] [--host HOST]
  python -m ielts_vocab quiz
  python -m ielts_vocab import FILE [--name NAME] [--ai]
  python -m ielts_vocab sample
  python -m ielts_vocab known
  python -m ielts_vocab sets
  python -m ielts_vocab stats
"""
from __future__ import annotations

import asyncio
import sys
from pathlib import Path

COMMANDS = "serve, quiz, import, sample, known, sets, stats"


def main():
    args = sys.argv[1:]
    command = args[0] if args else "serve"

    if command == "serve":
        _serve(args[1:])
    elif command == "quiz":
        _quiz()
    elif command == "import":
        _import(args[1:])
    elif command == "sample":
        _sample()
    elif command == "known":
        _known()
    elif command == "sets":
        _sets()
    elif command == "stats":
        _stats()
    else:
        print(f"Unknown command: {command}")
        print(f"Commands: {COMMANDS}")
        sys.exit(1)


def _parse_flag(args: list[str], name: str, default: str) -> str:
    for i, a in enumerate(args):
        if a == name and i + 1 < len(args):
            return args[i + 1]
    return default


def _open_vault():
    from ielts_vocab.config import load_settings
    from ielts_vocab.db import Database
    from ielts_vocab.vault import StudyVault

    settings = load_settings()
    db = Database(settings.db_full_path)
    return db, StudyVault(db, settings)


def _serve(args: list[str]):
    import uvicorn

    port = int(_parse_flag(args, "--port", "8765"))
    host = _parse_flag(args, "--host", "127.0.0.1")
    print(f"Starting IELTS Vocab on http://{host}:{port}")
    print("Press Ctrl+C to stop\n")
    uvicorn.run(
        "ielts_vocab.app:app",
        host=host,
        port=port,
        reload=False,
        timeout_graceful_shutdown=5,
    )


def _choice_answer(raw: str, options: tuple[str, ...]) -> str:
    """Let the user type an option number instead of the full text."""
    raw = raw.strip()
    if raw.isdigit() and 1 <= int(raw) <= len(options):
        return options[int(raw) - 1]
    return raw


def _quiz():
    from ielts_vocab.models import CHOICE
    from ielts_vocab.quiz import QuizSession

    db, vault = _open_vault()
    try:
        entries = vault.active_entries()
        if not entries:
            print("No vocabulary loaded. Run 'import' or 'sample' first.")
            sys.exit(1)

        session = QuizSession.start(entries)
        try:
            while not session.is_finished:
                q = session.current_question()
                print(f"\n[{session.position + 1}/{session.total}] {q.entry.term}"
                      + (f"  (Band {q.entry.level})" if q.entry.level else ""))
                if q.kind == CHOICE:
                    for i, opt in enumerate(q.options, 1):
                        print(f"  {i}. {opt}")
                    raw = _choice_answer(input("Your choice: "), q.options)
                else:
                    raw = input("Translation: ")
                feedback = session.submit_answer(raw)
                if feedback.correct:
                    print("  ✓ Correct")
                else:
                    print(f"  ✕ Accurate translation: {feedback.correct_answer}")
        except (KeyboardInterrupt, EOFError):
            print("\nQuiz abandoned.")
            return

        result = session.result()
        stats = vault.record_quiz(result)
        print(f"\nTraining complete: {result.score} / {result.total}")
        print(f"Gold: {stats.gold}")
    finally:
        db.close()


def _import(args: list[str]):
    positional = [a for i, a in enumerate(args)
                  if not a.startswith("--") and (i == 0 or args[i - 1] != "--name")]
    if not positional:
        print("Usage: import FILE [--name NAME] [--ai]")
        sys.exit(1)
    path = Path(positional[0])
    if not path.exists():
        print(f"File not found: {path}")
        sys.exit(1)
    name = _parse_flag(args, "--name", path.stem)

    db, vault = _open_vault()
    try:
        if "--ai" in args:
            from ielts_vocab.enrich import EnrichmentError, enrich
            from ielts_vocab.providers.factory import create_llm

            llm = create_llm(vault.settings)
            print(f"Enriching {path.name} using {llm.name()}...")
            try:
                entries = asyncio.run(enrich(
                    llm, path.read_text(encoding="utf-8"), max_chars=vault.settings.max_import_chars,
                ))
            except EnrichmentError as e:
                print(f"Import failed: {e}")
                sys.exit(1)
        else:
            from ielts_vocab.parsers.manual_parser import parse_manual_file
            entries = parse_manual_file(path)

        if not entries:
            print("No term/translation pairs found.")
            sys.exit(1)
        word_set = vault.import_set(entries, name)
        print(f"Imported '{word_set.name}': {len(entries)} words (now active)")
    finally:
        db.close()


def _sample():
    db, vault = _open_vault()
    try:
        entries = vault.use_sample_set()
        print(f"Sample set active: {len(entries)} words")
    finally:
        db.close()


def _known():
    db, vault = _open_vault()
    try:
        stats = vault.mark_known()
        print(f"Marked as known. Learning: {stats.learning_count}, mastered: {stats.mastered_count}")
    finally:
        db.close()


def _sets():
    db, vault = _open_vault()
    try:
        sets = vault.saved_sets()
        if not sets:
            print("No saved sets.")
        for s in sets:
            print(f"  {s.id}  {s.name}  ({len(s.entries)} words)")
    finally:
        db.close()


def _stats():
    db, vault = _open_vault()
    try:
        stats = vault.stats()
        active = vault.active_entries()

        print("IELTS Vocab Stats")
        print("=" * 40)
        print(f"Gold:               {stats.gold}")
        print(f"Learning:           {stats.learning_count}")
        print(f"Mastered:           {stats.mastered_count}")
        print(f"Last score:         {stats.last_score if stats.last_score is not None else '-'}")
        print(f"Active deck:        {len(active) if active else 0} words")
        print(f"Saved sets:         {len(vault.saved_sets())}")
    finally:
        db.close()


if __name__ == "__main__":
    main()
