"""FastAPI application with all routes."""
from __future__ import annotations

import json
import logging
import uuid
from contextlib import asynccontextmanager

logging.basicConfig(level=logging.INFO, format="%(name)s | %(message)s")

from fastapi import FastAPI, HTTPException, Request

from ielts_vocab.config import Settings, load_settings, save_settings
from ielts_vocab.db import Database
from ielts_vocab.enrich import EnrichmentError, enrich
from ielts_vocab.models import Question
from ielts_vocab.parsers.manual_parser import parse_manual_text
from ielts_vocab.providers.factory import create_llm
from ielts_vocab.quiz import QuizSession, QuizStateError
from ielts_vocab.vault import StudyVault

_log = logging.getLogger("ielts_vocab.app")

# Global state (initialized in lifespan)
_db: Database | None = None
_settings: Settings | None = None
_active_sessions: dict[str, QuizSession] = {}

SESSION_KEY_PREFIX = "session:"


def get_db() -> Database:
    assert _db is not None
    return _db


def get_settings() -> Settings:
    assert _settings is not None
    return _settings


def get_vault() -> StudyVault:
    return StudyVault(get_db(), get_settings())


def _get_llm():
    return create_llm(get_settings())


@asynccontextmanager
async def lifespan(app: FastAPI):
    global _db, _settings
    owned = _db is None  # tests install their own globals
    if owned:
        _settings = load_settings()
        _db = Database(_settings.db_full_path)
    yield
    if owned and _db:
        _db.close()
        _db = None


app = FastAPI(title="IELTS Vocab", lifespan=lifespan)


async def _json_body(request: Request) -> dict:
    if not await request.body():
        return {}
    try:
        body = await request.json()
    except json.JSONDecodeError:
        raise HTTPException(400, "Request body is not valid JSON")
    if not isinstance(body, dict):
        raise HTTPException(400, "Request body must be a JSON object")
    return body


# ── API: Stats ────────────────────────────────────────────────────────────

@app.get("/api/stats")
async def api_stats():
    vault = get_vault()
    stats = vault.stats().to_dict()
    stats["saved_sets"] = len(vault.saved_sets())
    return stats


# ── API: Word sets ────────────────────────────────────────────────────────

def _set_summary(word_set) -> dict:
    return {
        "id": word_set.id,
        "name": word_set.name,
        "word_count": len(word_set.entries),
        "created_at": word_set.created_at,
    }


@app.get("/api/sets")
async def api_sets():
    return [_set_summary(s) for s in get_vault().saved_sets()]


@app.post("/api/sets/manual")
async def api_sets_manual(request: Request):
    body = await _json_body(request)
    text = body.get("text", "")
    if not isinstance(text, str):
        raise HTTPException(400, "'text' must be a string")
    try:
        entries = parse_manual_text(text)
    except ValueError as e:
        raise HTTPException(400, str(e))
    if not entries:
        raise HTTPException(400, "No term/translation pairs found")
    word_set = get_vault().import_set(entries, body.get("name"))
    return _set_summary(word_set)


@app.post("/api/sets/enrich")
async def api_sets_enrich(request: Request):
    body = await _json_body(request)
    name = (body.get("name") or "").strip()
    if not name:
        raise HTTPException(400, "Please provide a name for this set")
    text = body.get("text", "")
    if not isinstance(text, str) or not text.strip():
        raise HTTPException(400, "Please provide vocabulary text")

    llm = _get_llm()
    try:
        entries = await enrich(llm, text, max_chars=get_settings().max_import_chars)
    except EnrichmentError as e:
        _log.warning("Enrichment import '%s' failed: %s", name, e)
        raise HTTPException(502, str(e))
    word_set = get_vault().import_set(entries, name)
    return _set_summary(word_set)


@app.post("/api/sets/sample")
async def api_sets_sample():
    entries = get_vault().use_sample_set()
    return {"word_count": len(entries)}


@app.delete("/api/sets/{set_id}")
async def api_sets_delete(set_id: str):
    try:
        get_vault().delete_set(set_id)
    except KeyError:
        raise HTTPException(404, "Set not found")
    return {"deleted": set_id}


@app.post("/api/sets/{set_id}/apply")
async def api_sets_apply(set_id: str):
    try:
        word_set = get_vault().apply_saved_set(set_id)
    except KeyError:
        raise HTTPException(404, "Set not found")
    return _set_summary(word_set)


# ── API: Flashcards ───────────────────────────────────────────────────────

@app.get("/api/flashcards")
async def api_flashcards():
    entries = get_vault().active_entries() or []
    return {"cards": [e.to_dict() for e in entries]}


@app.post("/api/flashcards/known")
async def api_flashcards_known():
    return get_vault().mark_known().to_dict()


# ── API: Quiz sessions ────────────────────────────────────────────────────

def _save_session(session_id: str, session: QuizSession) -> None:
    get_db().save(SESSION_KEY_PREFIX + session_id, json.dumps(session.to_dict(), ensure_ascii=False))


def _get_session(session_id: str) -> QuizSession:
    session = _active_sessions.get(session_id)
    if session is not None:
        return session
    raw = get_db().load(SESSION_KEY_PREFIX + session_id)
    if raw is None:
        raise HTTPException(404, "Session not found")
    session = QuizSession.from_dict(json.loads(raw))
    if not session.is_finished:
        _active_sessions[session_id] = session
    return session


def _question_payload(q: Question) -> dict:
    """Client view of a question; the translation stays server-side."""
    return {
        "id": q.id,
        "kind": q.kind,
        "term": q.entry.term,
        "level": q.entry.level,
        "options": list(q.options),
    }


def _session_payload(session_id: str, session: QuizSession) -> dict:
    data = {
        "session_id": session_id,
        "status": session.status,
        "position": session.position,
        "total": session.total,
        "score": session.score,
    }
    if session.is_finished:
        data["question"] = None
    else:
        data["question"] = _question_payload(session.current_question())
    return data


@app.post("/api/session/start")
async def api_session_start():
    entries = get_vault().active_entries()
    if not entries:
        raise HTTPException(400, "No vocabulary loaded. Import a set or use the sample set first.")

    session_id = uuid.uuid4().hex
    session = QuizSession.start(entries)
    _active_sessions[session_id] = session
    _save_session(session_id, session)
    return _session_payload(session_id, session)


@app.get("/api/session/{session_id}")
async def api_session_get(session_id: str):
    return _session_payload(session_id, _get_session(session_id))


@app.post("/api/session/{session_id}/answer")
async def api_session_answer(session_id: str, request: Request):
    body = await _json_body(request)
    answer = body.get("answer")
    if not isinstance(answer, str):
        raise HTTPException(400, "'answer' must be a string")

    session = _get_session(session_id)
    try:
        feedback = session.submit_answer(answer)
    except QuizStateError as e:
        raise HTTPException(409, str(e))
    _save_session(session_id, session)

    s = get_settings()
    data = _session_payload(session_id, session)
    data["correct"] = feedback.correct
    data["correct_answer"] = feedback.correct_answer
    data["delay_ms"] = s.correct_delay_ms if feedback.correct else s.wrong_delay_ms
    if session.is_finished:
        result = session.result()
        data["result"] = {"score": result.score, "total": result.total}
        data["stats"] = get_vault().record_quiz(result).to_dict()
        _active_sessions.pop(session_id, None)
    return data


@app.get("/api/session/{session_id}/result")
async def api_session_result(session_id: str):
    session = _get_session(session_id)
    try:
        result = session.result()
    except QuizStateError as e:
        raise HTTPException(409, str(e))
    return {"score": result.score, "total": result.total}


# ── API: Settings ─────────────────────────────────────────────────────────

@app.get("/api/settings")
async def api_get_settings():
    return get_settings().to_dict()


@app.put("/api/settings")
async def api_update_settings(request: Request):
    body = await _json_body(request)
    s = get_settings()
    known = {f.name for f in Settings.__dataclass_fields__.values()}
    for k, v in body.items():
        if k in known:
            setattr(s, k, v)
    save_settings(s)
    return s.to_dict()
