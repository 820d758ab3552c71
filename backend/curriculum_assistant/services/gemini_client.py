"""Client wrapper around the Generative Language (Gemini) REST API."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

import requests

logger = logging.getLogger(__name__)

# Never retried.
_FATAL_STATUS_CODES = {401, 403, 404}


class GeminiError(RuntimeError):
    """Raised when the Gemini API fails or returns an unexpected response."""

    def __init__(self, message: str, *, status_code: Optional[int] = None, retryable: bool = True) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.retryable = retryable


class GeminiConfigurationError(GeminiError):
    """Raised when the client cannot be used, e.g. no API key is configured."""

    def __init__(self, message: str) -> None:
        super().__init__(message, retryable=False)


@dataclass
class GeminiResponse:
    """Structured response from the Gemini API."""

    model: str
    text: str
    raw: Dict[str, Any]


class GeminiClient:
    """Synchronous HTTP client for ``generateContent`` calls."""

    def __init__(
        self,
        *,
        api_key: Optional[str],
        model: str,
        base_url: str = "https://generativelanguage.googleapis.com/v1beta",
        timeout: float = 120.0,
    ) -> None:
        self.api_key = api_key
        self.model = model
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def generate(
        self,
        prompt: str,
        *,
        response_mime_type: str = "text/plain",
        response_schema: Optional[Dict[str, Any]] = None,
    ) -> GeminiResponse:
        """Generate text for a single-turn prompt."""

        generation_config: Dict[str, Any] = {"responseMimeType": response_mime_type}
        if response_schema is not None:
            generation_config["responseSchema"] = response_schema

        payload: Dict[str, Any] = {
            "contents": [{"role": "user", "parts": [{"text": prompt}]}],
            "generationConfig": generation_config,
        }
        data = self._post(f"/models/{self.model}:generateContent", payload)
        text = self._extract_response_text(data)
        return GeminiResponse(model=self.model, text=text, raw={"request": payload, "response": data})

    # ------------------------------------------------------------------
    # Helper HTTP methods
    # ------------------------------------------------------------------
    def _post(self, path: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        if not self.api_key:
            raise GeminiConfigurationError("Gemini API key is not configured")

        url = f"{self.base_url}{path}"
        headers = {"x-goog-api-key": self.api_key, "Content-Type": "application/json"}
        try:
            response = requests.post(url, json=payload, headers=headers, timeout=self.timeout)
        except requests.RequestException as exc:
            raise GeminiError(f"Failed to connect to Gemini at {url}: {exc}") from exc

        if response.status_code != 200:
            raise GeminiError(
                f"Gemini POST {url} failed with status {response.status_code}: {response.text}",
                status_code=response.status_code,
                retryable=response.status_code not in _FATAL_STATUS_CODES,
            )
        try:
            return response.json()
        except ValueError as exc:
            raise GeminiError(f"Gemini returned a non-JSON body: {response.text[:200]}") from exc

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------
    @staticmethod
    def _extract_response_text(data: Dict[str, Any]) -> str:
        """Join the text parts of the first candidate."""

        candidates = data.get("candidates") if isinstance(data, dict) else None
        if not candidates:
            feedback = data.get("promptFeedback") if isinstance(data, dict) else None
            raise GeminiError(f"Gemini returned no candidates: {feedback or data}")

        candidate = candidates[0] if isinstance(candidates, list) else None
        content = (candidate.get("content") or {}) if isinstance(candidate, dict) else None
        parts = (content.get("parts") or []) if isinstance(content, dict) else None
        if not isinstance(parts, list):
            raise GeminiError(f"Gemini returned a malformed candidate: {str(candidates)[:200]}")

        text = "".join(str(part.get("text", "")) for part in parts if isinstance(part, dict))
        if not text:
            reason = candidate.get("finishReason")
            logger.debug("Gemini candidate without text, finish reason %s", reason)
            raise GeminiError(f"Gemini returned an empty candidate (finish reason: {reason})")
        return text
