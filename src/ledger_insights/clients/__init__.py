"""Text generation backend clients."""

from ledger_insights.clients.ollama import (
    DEGRADED,
    HEALTHY,
    UNHEALTHY,
    GenerationEmptyError,
    GenerationError,
    GenerationRequestError,
    GenerationTimeoutError,
    GenerationUnavailableError,
    HealthReport,
    OllamaClient,
)

__all__ = [
    "DEGRADED",
    "HEALTHY",
    "UNHEALTHY",
    "GenerationEmptyError",
    "GenerationError",
    "GenerationRequestError",
    "GenerationTimeoutError",
    "GenerationUnavailableError",
    "HealthReport",
    "OllamaClient",
]
