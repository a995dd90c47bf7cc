"""
Ollama client for inventory insights.

Talks to a local `ollama serve` over its HTTP API: /api/generate for
completions and /api/tags for the health probe. httpx transport errors are
re-raised as the builtin TimeoutError/ConnectionError so the base class can
retry them.
"""

import time
from typing import Any

import httpx

from stokmakmur.config import get_logger, get_settings
from stokmakmur.core.exceptions import (
    LLMResponseError,
    LLMUnavailableError,
    ModelNotFoundError,
)
from stokmakmur.core.interfaces.llm import HealthStatus, LLMResponse
from stokmakmur.infrastructure.llm.base import BaseLLMProvider

logger = get_logger(__name__)

HEALTH_TIMEOUT = 10.0


class OllamaProvider(BaseLLMProvider):
    """ILLMProvider backed by the Ollama HTTP API."""

    provider_name = "ollama"

    def __init__(self, transport: httpx.AsyncBaseTransport | None = None):
        super().__init__()
        llm = get_settings().llm
        self.host = llm.host.rstrip("/")
        self.model = llm.model_name
        self.timeout = llm.timeout
        self.max_tokens = llm.max_tokens
        self.temperature = llm.temperature
        self.top_p = llm.top_p
        self._transport = transport

    def _client(self, timeout: float) -> httpx.AsyncClient:
        return httpx.AsyncClient(base_url=self.host, timeout=timeout, transport=self._transport)

    async def _post(self, path: str, payload: dict[str, Any]) -> dict[str, Any]:
        try:
            async with self._client(self.timeout) as client:
                response = await client.post(path, json=payload)
        except httpx.TimeoutException as e:
            raise TimeoutError(str(e)) from e
        except httpx.TransportError as e:
            raise ConnectionError(str(e)) from e

        if response.status_code == 404:
            raise ModelNotFoundError(payload.get("model", "unknown"), self.provider_name)
        if response.status_code != 200:
            raise LLMUnavailableError(
                self.provider_name,
                f"HTTP {response.status_code}: {response.text[:200]}",
            )
        try:
            body = response.json()
        except ValueError as e:
            raise LLMResponseError("Invalid JSON", response.text) from e
        if not isinstance(body, dict):
            raise LLMResponseError("Expected a JSON object", response.text)
        return body

    async def generate(
        self,
        prompt: str,
        system_prompt: str | None = None,
        temperature: float | None = None,
        max_tokens: int | None = None,
        top_p: float | None = None,
    ) -> LLMResponse:
        payload: dict[str, Any] = {
            "model": self.model,
            "prompt": prompt,
            "stream": False,
            "options": {
                "temperature": self.temperature if temperature is None else temperature,
                "top_p": self.top_p if top_p is None else top_p,
                "num_predict": max_tokens or self.max_tokens,
            },
        }
        if system_prompt:
            payload["system"] = system_prompt

        async def call() -> LLMResponse:
            started = time.monotonic()
            body = await self._post("/api/generate", payload)
            text = body.get("response", "")
            if not text.strip():
                raise LLMResponseError(
                    f"Empty completion (done_reason={body.get('done_reason')})", text
                )

            logger.info(
                "ollama_generated",
                model=self.model,
                prompt_chars=len(prompt),
                response_chars=len(text),
                elapsed_ms=round((time.monotonic() - started) * 1000),
            )
            return LLMResponse(
                text=text,
                model=self.model,
                done=body.get("done", True),
                done_reason=body.get("done_reason"),
                prompt_tokens=body.get("prompt_eval_count", 0),
                completion_tokens=body.get("eval_count", 0),
            )

        return await self._with_resilience(call)

    async def check_health(self) -> HealthStatus:
        """Reachable server with the configured model pulled."""
        started = time.monotonic()
        try:
            async with self._client(HEALTH_TIMEOUT) as client:
                response = await client.get("/api/tags")
        except httpx.ConnectError:
            return self._health_unavailable(
                f"No Ollama server at {self.host}; start it with 'ollama serve'."
            )
        except httpx.HTTPError as e:
            return self._health_unavailable(str(e))

        if response.status_code != 200:
            return self._health_unavailable(f"HTTP {response.status_code}")

        try:
            models = response.json().get("models", [])
        except (ValueError, AttributeError):
            return self._health_unavailable(f"{self.host} did not answer with Ollama JSON")

        installed = [m.get("name", "") for m in models]
        if not any(self.model in name for name in installed):
            return HealthStatus(
                available=False,
                provider=self.provider_name,
                model=self.model,
                error=f"Model {self.model!r} is missing; run 'ollama pull {self.model}'.",
            )

        return HealthStatus(
            available=True,
            provider=self.provider_name,
            model=self.model,
            response_time_ms=(time.monotonic() - started) * 1000,
        )


_provider: OllamaProvider | None = None


def get_ollama_provider() -> OllamaProvider:
    global _provider
    if _provider is None:
        _provider = OllamaProvider()
    return _provider


def reset_ollama_provider() -> None:
    global _provider
    _provider = None
