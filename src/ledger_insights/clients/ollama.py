"""Ollama text-generation client with per-attempt deadlines and retry backoff."""

import asyncio
import base64
import json
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

import httpx
import structlog

from ledger_insights.config import Settings, get_settings

logger = structlog.get_logger(__name__)


class GenerationError(Exception):
    """Base exception for text generation failures."""

    def __init__(self, message: str, attempts: int = 0):
        super().__init__(message)
        self.attempts = attempts


class GenerationUnavailableError(GenerationError):
    """Backend unreachable or failing with a server error after all retries."""

    pass


class GenerationTimeoutError(GenerationError):
    """Every attempt exceeded its deadline."""

    pass


class GenerationEmptyError(GenerationError):
    """Backend answered with no text."""

    pass


class GenerationRequestError(GenerationError):
    """Backend rejected the request; never retried."""

    def __init__(self, message: str, status_code: int, attempts: int = 0):
        super().__init__(message, attempts=attempts)
        self.status_code = status_code


HEALTHY = "healthy"
DEGRADED = "degraded"
UNHEALTHY = "unhealthy"

IMAGE_EXTRACTION_QUESTION = """Extract all financial data from this image including:
- Account names and numbers
- Amounts and currencies
- Dates and periods
- Categories and descriptions

Format the extracted data in a structured, tabular format."""


@dataclass(frozen=True)
class HealthReport:
    """Result of probing the Ollama service."""

    status: str
    message: str
    models: tuple[str, ...] = ()
    checked_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def is_healthy(self) -> bool:
        return self.status == HEALTHY


class OllamaClient:
    """Client for Ollama's /api/generate endpoint.

    Each attempt runs under its own deadline. Connection failures, timeouts
    and 5xx/429 responses are retried up to ``max_retries`` times, sleeping
    ``retry_delay_seconds * 2**n`` before the n-th retry. Client errors (4xx)
    and empty responses fail immediately. Task cancellation is never retried.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        *,
        base_url: str | None = None,
        model: str | None = None,
        max_tokens: int | None = None,
        temperature: float | None = None,
        sleep: Callable[[float], Awaitable[None]] | None = None,
    ):
        settings = settings or get_settings()
        self._base_url = (base_url or settings.ollama_base_url).rstrip("/")
        self._model = model or settings.default_text_model
        self._vision_model = settings.vision_model
        self._max_tokens = max_tokens if max_tokens is not None else settings.max_tokens
        self._temperature = temperature if temperature is not None else settings.temperature
        self._top_p = settings.top_p
        self._timeout_seconds = settings.timeout_seconds
        self._max_retries = settings.max_retries
        self._retry_delay_seconds = settings.retry_delay_seconds
        self._sleep = sleep or asyncio.sleep

        self._client = httpx.AsyncClient(timeout=float(self._timeout_seconds))
        self._logger = logger.bind(client="ollama", model=self._model)

    @property
    def default_model(self) -> str:
        return self._model

    @property
    def vision_model(self) -> str:
        return self._vision_model

    def _build_payload(
        self, prompt: str, model: str, images: list[str] | None
    ) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "model": model,
            "prompt": prompt,
            "stream": False,
            "options": {
                "num_predict": self._max_tokens,
                "temperature": self._temperature,
                "top_p": self._top_p,
            },
        }
        if images:
            payload["images"] = images
        return payload

    @staticmethod
    def _response_text(data: Any) -> str:
        text = data.get("response") if isinstance(data, dict) else None
        return text if isinstance(text, str) else ""

    @staticmethod
    def _collect_text(response: httpx.Response) -> str:
        """Return generated text, concatenating NDJSON chunks when the body is streamed.

        Bodies that are not JSON objects carry no text and yield ``""``.
        """
        try:
            data = response.json()
        except json.JSONDecodeError:
            chunks = []
            for line in response.text.splitlines():
                if not line.strip():
                    continue
                try:
                    chunk = json.loads(line)
                except json.JSONDecodeError:
                    continue
                chunks.append(OllamaClient._response_text(chunk))
            return "".join(chunks)
        return OllamaClient._response_text(data)

    async def _attempt(self, payload: dict[str, Any], deadline: float) -> str:
        async with asyncio.timeout(deadline):
            response = await self._client.post(
                f"{self._base_url}/api/generate",
                json=payload,
                timeout=deadline,
            )
            response.raise_for_status()
            return self._collect_text(response)

    async def generate(
        self,
        prompt: str,
        model: str | None = None,
        timeout: float | None = None,
        images: list[str] | None = None,
    ) -> str:
        """Generate a completion for ``prompt``.

        Args:
            prompt: Prompt text; must not be blank.
            model: Model name, defaults to the configured text model.
            timeout: Per-attempt deadline in seconds, defaults to settings.
            images: Optional base64-encoded images for vision models.

        Returns:
            The full generated text.

        Raises:
            ValueError: If the prompt is blank.
            GenerationTimeoutError: If every attempt timed out.
            GenerationUnavailableError: If the service stayed unreachable.
            GenerationEmptyError: If the model returned no text.
            GenerationRequestError: If the service rejected the request.
        """
        if not prompt or not prompt.strip():
            raise ValueError("Prompt cannot be empty")

        model = model or self._model
        deadline = float(timeout or self._timeout_seconds)
        payload = self._build_payload(prompt, model, images)
        log = self._logger.bind(model=model)
        log.debug("generating_response", prompt_length=len(prompt))

        loop = asyncio.get_running_loop()
        started = loop.time()
        attempt = 0
        while True:
            attempt += 1
            failure: GenerationError
            try:
                text = await self._attempt(payload, deadline)
            except (TimeoutError, httpx.TimeoutException) as e:
                failure = GenerationTimeoutError(
                    f"Generation timed out after {deadline:g} seconds", attempts=attempt
                )
                cause: Exception = e
            except httpx.TransportError as e:
                failure = GenerationUnavailableError(
                    f"Ollama is unreachable at {self._base_url}: {e}", attempts=attempt
                )
                cause = e
            except httpx.HTTPStatusError as e:
                status = e.response.status_code
                if status < 500 and status != 429:
                    log.error("api_error", status=status, error=str(e))
                    raise GenerationRequestError(
                        f"Ollama rejected the request with status {status}",
                        status_code=status,
                        attempts=attempt,
                    ) from e
                failure = GenerationUnavailableError(
                    f"Ollama returned status {status}", attempts=attempt
                )
                cause = e
            else:
                if not text.strip():
                    raise GenerationEmptyError("Empty response from model", attempts=attempt)
                log.info(
                    "response_generated",
                    attempts=attempt,
                    duration_ms=int((loop.time() - started) * 1000),
                    response_length=len(text),
                )
                return text

            retry = attempt
            if retry > self._max_retries:
                log.error("generation_failed", attempts=attempt, error=str(failure))
                raise failure from cause

            delay = self._retry_delay_seconds * 2**retry
            log.warning("generation_retry", attempt=retry, delay=delay, error=str(cause) or type(cause).__name__)
            await self._sleep(delay)

    async def _fetch_models(self) -> list[str]:
        response = await self._client.get(f"{self._base_url}/api/tags")
        response.raise_for_status()
        return [m.get("name", "") for m in response.json().get("models", [])]

    async def list_models(self) -> list[str]:
        """Names of locally installed models; empty when the service is down."""
        try:
            models = await self._fetch_models()
        except (httpx.HTTPError, ValueError) as e:
            self._logger.error("list_models_failed", error=str(e))
            return []
        self._logger.info("models_listed", count=len(models))
        return models

    async def is_available(self) -> bool:
        """True if the service answers the model listing endpoint."""
        try:
            await self._fetch_models()
        except (httpx.HTTPError, ValueError) as e:
            self._logger.warning("service_unavailable", error=str(e))
            return False
        return True

    async def is_model_available(self, model_name: str) -> bool:
        """True if an installed model name contains ``model_name`` (case-insensitive)."""
        needle = model_name.lower()
        return any(needle in name.lower() for name in await self.list_models())

    async def check_health(self) -> HealthReport:
        if not await self.is_available():
            return HealthReport(
                status=UNHEALTHY,
                message="Ollama service is not available. Please ensure Ollama is installed and running.",
            )

        models = await self.list_models()
        if not models:
            return HealthReport(
                status=DEGRADED,
                message=(
                    "Ollama is running but no models are available. "
                    f"Please download required models using 'ollama pull {self._model}'"
                ),
            )

        return HealthReport(
            status=HEALTHY,
            message=f"AI service is healthy with {len(models)} model(s) available",
            models=tuple(models),
        )

    async def analyze_document_image(self, image: bytes, question: str) -> str:
        """Ask the vision model a question about a document image."""
        if not image:
            raise ValueError("Image data cannot be empty")
        if not question or not question.strip():
            raise ValueError("Question cannot be empty")

        self._logger.info("analyzing_document_image", image_bytes=len(image))
        prompt = (
            f"{question}\n\n"
            "Please analyze the provided image and extract relevant financial information."
        )
        encoded = base64.b64encode(image).decode("ascii")
        return await self.generate(prompt, model=self._vision_model, images=[encoded])

    async def extract_data_from_image(self, image: bytes) -> str:
        return await self.analyze_document_image(image, IMAGE_EXTRACTION_QUESTION)

    async def close(self) -> None:
        """Close the HTTP client."""
        await self._client.aclose()
