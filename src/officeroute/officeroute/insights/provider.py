from __future__ import annotations

import logging
from typing import Optional, Protocol

import requests

logger = logging.getLogger(__name__)

GEMINI_URL = "https://generativelanguage.googleapis.com/v1beta/models/{model}:generateContent"


class InsightProvider(Protocol):
    def generate(self, prompt: str) -> str:
        raise NotImplementedError


class GeminiProvider:
    """Text generation through the Gemini REST API."""

    def __init__(
        self,
        api_key: str,
        *,
        model: str = "gemini-2.5-flash",
        timeout: float = 30,
        session: Optional[requests.Session] = None,
    ):
        self._api_key = api_key
        self._model = model
        self._timeout = timeout
        self._session = session or requests.Session()

    def generate(self, prompt: str) -> str:
        response = self._session.post(
            GEMINI_URL.format(model=self._model),
            headers={"x-goog-api-key": self._api_key, "Content-Type": "application/json"},
            json={"contents": [{"parts": [{"text": prompt}]}]},
            timeout=self._timeout,
        )
        response.raise_for_status()
        body = response.json()
        parts = body["candidates"][0]["content"]["parts"]
        return "".join(p.get("text", "") for p in parts)
