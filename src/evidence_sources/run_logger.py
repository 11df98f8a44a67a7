"""Run logger for recording pipeline stages and diagnostics to JSON files."""

import dataclasses
import logging
import uuid
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

from pydantic import BaseModel

from evidence_sources.data import Usage

logger = logging.getLogger(__name__)


class StageRecord(BaseModel):
    """Record of a single pipeline stage execution."""

    stage: str
    component: str
    input: Any = None
    output: Any = None
    usage: dict[str, Any] | None = None
    timestamp: str = ""
    duration_seconds: float = 0.0


class EventRecord(BaseModel):
    """A diagnostic event such as a fallback taken or a hit discarded."""

    kind: str
    component: str
    detail: dict[str, Any] = {}
    timestamp: str = ""


class RunRecord(BaseModel):
    """Record of a complete pipeline run."""

    run_id: str
    pipeline_type: str
    argument: dict[str, Any]
    started_at: str
    completed_at: str | None = None
    stages: list[StageRecord] = []
    events: list[EventRecord] = []
    final_result_count: int = 0
    recommended_index: int | None = None
    total_usage: dict[str, Any] | None = None


def _serialize(obj: Any) -> Any:
    """Serialize an object to JSON-compatible format.

    Handles dataclasses, Pydantic models, lists, dicts, and primitives.
    For Usage objects, includes computed property summaries.
    """
    if obj is None:
        return None
    if isinstance(obj, Usage):
        return {
            "api_calls": [_serialize(c) for c in obj.api_calls],
            "newsapi_requests": obj.newsapi_requests,
            "google_requests": obj.google_requests,
            "exa_requests": obj.exa_requests,
            "input_tokens": obj.input_tokens,
            "output_tokens": obj.output_tokens,
        }
    if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
        return dataclasses.asdict(obj)
    if isinstance(obj, BaseModel):
        return obj.model_dump()
    if isinstance(obj, (list, tuple)):
        return [_serialize(item) for item in obj]
    if isinstance(obj, dict):
        return {k: _serialize(v) for k, v in obj.items()}
    if isinstance(obj, Path):
        return str(obj)
    return obj


def _now() -> str:
    return datetime.now(tz=UTC).isoformat()


class RunLogger:
    """Accumulates stage records and diagnostic events for one pipeline run.

    ``start_run`` returns a child logger bound to a fresh record; that child
    is passed explicitly into the pipeline and on to the components that
    emit diagnostics, so concurrent runs never share a record. When
    ``enabled=False``, all methods are no-ops.

    Args:
        log_dir: Directory to write JSON log files.
        enabled: If False, all methods become no-ops.
    """

    def __init__(self, log_dir: Path, *, enabled: bool = True) -> None:
        self._log_dir = log_dir
        self._enabled = enabled
        self._record: RunRecord | None = None
        self._last_log_path: Path | None = None
        self._parent: RunLogger | None = None

    @property
    def enabled(self) -> bool:
        """Whether logging is active."""
        return self._enabled

    @property
    def last_log_path(self) -> Path | None:
        """Path to the last written log file, or None."""
        return self._last_log_path

    @property
    def record(self) -> RunRecord | None:
        """The in-progress run record, or None outside a run."""
        return self._record

    def start_run(self, pipeline_type: str, argument: Any) -> "RunLogger":
        """Begin a run and return the logger that records it."""
        run = RunLogger(self._log_dir, enabled=self._enabled)
        run._parent = self
        if not self._enabled:
            return run

        run._record = RunRecord(
            run_id=str(uuid.uuid4()),
            pipeline_type=pipeline_type,
            argument=_serialize(argument),
            started_at=_now(),
        )
        return run

    def log_stage(
        self,
        stage: str,
        component: str,
        input_data: Any,
        output_data: Any,
        usage: Usage | None,
        duration_seconds: float,
    ) -> None:
        """Append a stage record to the current run.

        Args:
            stage: Stage name (e.g. "query_generation", "search").
            component: Component class name.
            input_data: Stage input (will be serialized).
            output_data: Stage output (will be serialized).
            usage: Usage object for this stage (None for non-API stages).
            duration_seconds: Wall-clock time for this stage.
        """
        if not self._enabled or self._record is None:
            return

        self._record.stages.append(
            StageRecord(
                stage=stage,
                component=component,
                input=_serialize(input_data),
                output=_serialize(output_data),
                usage=_serialize(usage) if usage is not None else None,
                timestamp=_now(),
                duration_seconds=round(duration_seconds, 4),
            )
        )

    def log_event(self, kind: str, component: str, **detail: Any) -> None:
        """Append a diagnostic event (e.g. "content_fallback", "hit_discarded")."""
        if not self._enabled or self._record is None:
            return

        self._record.events.append(
            EventRecord(
                kind=kind,
                component=component,
                detail=_serialize(detail),
                timestamp=_now(),
            )
        )

    def finish_run(
        self,
        results: list[Any],
        usage: Usage | None,
        recommended_index: int | None = None,
    ) -> Path | None:
        """Write the run record to a JSON file.

        Returns:
            Path to the written JSON file, or None if logging is disabled or
            the file could not be written.
        """
        if not self._enabled or self._record is None:
            return None

        self._record.completed_at = _now()
        self._record.final_result_count = len(results)
        self._record.recommended_index = recommended_index
        self._record.total_usage = _serialize(usage) if usage is not None else None

        record = self._record
        self._record = None

        # run_2026-02-12T14-30-00_<id8>.json
        ts = record.started_at.replace(":", "-")
        ts = ts.split(".")[0].split("+")[0]
        filename = f"run_{ts}_{record.run_id[:8]}.json"
        filepath = self._log_dir / filename

        try:
            self._log_dir.mkdir(parents=True, exist_ok=True)
            filepath.write_text(record.model_dump_json(indent=2))
        except OSError as e:
            logger.warning("Could not write run log to %s: %s", filepath, e)
            return None

        self._last_log_path = filepath
        if self._parent is not None:
            self._parent._last_log_path = filepath
        return filepath
