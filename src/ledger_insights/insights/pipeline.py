"""Stage tracking for a single insight request."""

import time
from enum import Enum

import structlog

logger = structlog.get_logger(__name__)


class PipelineStage(str, Enum):
    """Stages an insight request moves through."""

    FETCHING = "fetching"
    AGGREGATING = "aggregating"
    PROMPTING = "prompting"
    GENERATING = "generating"
    PARSING = "parsing"
    ASSEMBLED = "assembled"
    FAILED = "failed"


_ORDER = list(PipelineStage)
_TERMINAL = frozenset({PipelineStage.ASSEMBLED, PipelineStage.FAILED})


class PipelineRun:
    """Current stage, stage history and elapsed time of one request.

    Stages only move forward; ``FAILED`` is reachable from any non-terminal
    stage.
    """

    def __init__(self, analysis: str, document_id: int | None = None):
        self.analysis = analysis
        self.document_id = document_id
        self.stage = PipelineStage.FETCHING
        self.history: list[PipelineStage] = [PipelineStage.FETCHING]
        self.error: BaseException | None = None
        self.used_fallback = False
        self._started = time.perf_counter()
        self.logger = logger.bind(analysis=analysis, document_id=document_id)
        self.logger.debug("pipeline_stage", stage=self.stage.value)

    @property
    def elapsed_ms(self) -> int:
        return int((time.perf_counter() - self._started) * 1000)

    @property
    def is_finished(self) -> bool:
        return self.stage in _TERMINAL

    def advance(self, stage: PipelineStage) -> None:
        if self.is_finished:
            raise RuntimeError(f"Pipeline already {self.stage.value}")
        if _ORDER.index(stage) <= _ORDER.index(self.stage):
            raise RuntimeError(f"Cannot move from {self.stage.value} to {stage.value}")
        self.stage = stage
        self.history.append(stage)
        self.logger.debug("pipeline_stage", stage=stage.value, elapsed_ms=self.elapsed_ms)

    def fail(self, error: BaseException) -> None:
        self.error = error
        self.stage = PipelineStage.FAILED
        self.history.append(PipelineStage.FAILED)
        self.logger.error(
            "pipeline_failed",
            error=str(error),
            error_type=type(error).__name__,
            elapsed_ms=self.elapsed_ms,
        )

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(analysis={self.analysis}, stage={self.stage.value})"
