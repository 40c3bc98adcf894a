"""LLM client wrapper for an OpenAI-compatible REST API with model fallback."""

from __future__ import annotations

import logging
from typing import Any, MutableMapping, Sequence

import httpx

logger = logging.getLogger(__name__)

RETRIABLE_ERROR_CODES = {"model_not_found", "invalid_model_error", "service_unavailable"}
RETRIABLE_ERROR_TYPES = {"rate_limit_error", "server_error"}


class LLMError(Exception):
    """Raised when an LLM request fails."""

    def __init__(self, message: str, retriable: bool = False) -> None:
        super().__init__(message)
        self.retriable = retriable


Message = MutableMapping[str, str]


class LLMClient:
    """Chat client that retries once on a fallback model for retriable failures."""

    def __init__(
        self, base_url: str, api_key: str, default_model: str, fallback_model: str
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.default_model = default_model
        self.fallback_model = fallback_model

    def chat(
        self,
        messages: Sequence[Message],
        model: str | None = None,
        timeout_s: float = 30.0,
        temperature: float | None = None,
        max_tokens: int | None = None,
        response_format: dict[str, str] | None = None,
    ) -> str:
        """Send chat messages, falling back to ``fallback_model`` on retriable errors."""
        model_name = model or self.default_model
        options: dict[str, Any] = {}
        if temperature is not None:
            options["temperature"] = temperature
        if max_tokens is not None:
            options["max_tokens"] = max_tokens
        if response_format is not None:
            options["response_format"] = response_format

        try:
            return self._complete(messages, model_name, timeout_s, options)
        except LLMError as exc:
            if model_name == self.fallback_model or not exc.retriable:
                raise
            logger.warning("Primary model %s failed: %s", model_name, exc)

        logger.info("Falling back to %s", self.fallback_model)
        try:
            return self._complete(messages, self.fallback_model, timeout_s, options)
        except LLMError as exc:
            raise LLMError(f"Fallback model {self.fallback_model} also failed: {exc}") from exc

    def _complete(
        self,
        messages: Sequence[Message],
        model_name: str,
        timeout_s: float,
        options: dict[str, Any],
    ) -> str:
        try:
            response = httpx.post(
                f"{self.base_url}/chat/completions",
                json={"model": model_name, "messages": list(messages), **options},
                headers={
                    "Content-Type": "application/json",
                    "Authorization": f"Bearer {self.api_key}",
                },
                timeout=timeout_s,
            )
            response.raise_for_status()
            text = self._extract_text(response.json())
        except httpx.RequestError as exc:
            raise LLMError(f"REST connection error: {exc}", retriable=True) from exc
        except httpx.HTTPStatusError as exc:
            status = exc.response.status_code
            retriable = status == 429 or status >= 500 or self._is_retriable_body(exc.response)
            raise LLMError(
                f"REST API returned {status}: {exc.response.text}", retriable=retriable
            ) from exc
        except (ValueError, KeyError, IndexError, TypeError) as exc:
            raise LLMError(f"REST API response parsing error: {exc}") from exc

        if not text:
            raise LLMError("REST API returned an empty response.")
        return text

    @staticmethod
    def _is_retriable_body(response: httpx.Response) -> bool:
        try:
            payload = response.json()
        except ValueError:
            return False
        error = payload.get("error") if isinstance(payload, dict) else None
        if not isinstance(error, dict):
            return False
        return (
            error.get("code") in RETRIABLE_ERROR_CODES
            or error.get("type") in RETRIABLE_ERROR_TYPES
        )

    @staticmethod
    def _extract_text(completion: Any) -> str:
        """Extract assistant text from an OpenAI-like completion object or dict."""
        if isinstance(completion, dict):
            choices = completion.get("choices", []) or []
        else:
            choices = getattr(completion, "choices", []) or []

        if not choices:
            return ""

        first_choice = choices[0]
        message: Any
        if isinstance(first_choice, dict):
            message = first_choice.get("message", {})
        else:
            message = getattr(first_choice, "message", None)

        if isinstance(message, dict):
            content = message.get("content")
        else:
            content = getattr(message, "content", None)

        return "" if content is None else str(content)
