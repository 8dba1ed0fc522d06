from __future__ import annotations

import logging
import time

import httpx

from ielts_vocab.providers.base import LLMProvider

log = logging.getLogger("ielts_vocab.llm")


class OllamaProvider(LLMProvider):
    def __init__(self, base_url: str = "http://localhost:11434", model: str = "qwen3:8b"):
        self.base_url = base_url.rstrip("/")
        self.model = model

    async def generate(self, prompt: str, temperature: float = 0.7) -> str:
        log.debug("── PROMPT (%s) ──\n%s", self.model, prompt)
        t0 = time.monotonic()
        async with httpx.AsyncClient(timeout=300.0) as client:
            resp = await client.post(
                f"{self.base_url}/api/generate",
                json={
                    "model": self.model,
                    "prompt": prompt,
                    "stream": False,
                    "think": False,
                    "options": {"temperature": temperature},
                },
            )
            resp.raise_for_status()
            data = resp.json()
        elapsed = time.monotonic() - t0
        response = data["response"]
        tokens = data.get("eval_count", "?")
        log.info("Ollama response (%.1fs, %s tokens)", elapsed, tokens)
        log.debug("── RESPONSE ──\n%s", response)
        return response

    def name(self) -> str:
        return f"ollama/{self.model}"
