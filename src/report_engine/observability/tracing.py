"""Stage timing for report generation runs."""

from __future__ import annotations

import time
from contextlib import contextmanager
from dataclasses import dataclass, field
from uuid import uuid4


@dataclass
class StageSpan:
    stage: str
    start_ms: float
    end_ms: float = 0.0
    failed: bool = False
    fields: dict = field(default_factory=dict)

    @property
    def duration_ms(self) -> float:
        return self.end_ms - self.start_ms


class ReportTrace:
    """Times each stage of one ``generate_report`` call.

    A stage that raises is still recorded, marked ``failed``, and the
    exception propagates unchanged.
    """

    def __init__(self, topic: str, trace_id: str | None = None) -> None:
        self.topic = topic
        self.trace_id = trace_id or str(uuid4())
        self.stages: list[StageSpan] = []
        self._t0 = time.monotonic()

    def _offset_ms(self) -> float:
        return (time.monotonic() - self._t0) * 1000

    @contextmanager
    def stage(self, name: str, **fields):
        span = StageSpan(stage=name, start_ms=self._offset_ms(), fields=fields)
        try:
            yield span
        except BaseException:
            span.failed = True
            raise
        finally:
            span.end_ms = self._offset_ms()
            self.stages.append(span)

    @property
    def elapsed_ms(self) -> float:
        return self._offset_ms()

    def durations(self) -> dict[str, float]:
        return {s.stage: round(s.duration_ms, 2) for s in self.stages}

    def failed_stages(self) -> list[str]:
        return [s.stage for s in self.stages if s.failed]
