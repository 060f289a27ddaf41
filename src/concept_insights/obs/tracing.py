"""Request tracing and latency accounting."""

from __future__ import annotations

import time
import uuid
from collections import Counter
from dataclasses import dataclass
from datetime import datetime, timezone

from concept_insights.types import CallState, RequestTrace


@dataclass(slots=True)
class TraceRecord:
    trace_id: str
    timestamp_utc: str
    trace: RequestTrace


class TraceStore:
    """In-memory store of executed requests, usable as an executor observer."""

    def __init__(self, *, max_records: int = 1000) -> None:
        self._records: dict[str, TraceRecord] = {}
        self._max_records = max_records

    def add(self, trace: RequestTrace) -> TraceRecord:
        record = TraceRecord(
            trace_id=str(uuid.uuid4()),
            timestamp_utc=datetime.now(timezone.utc).isoformat(),
            trace=trace,
        )
        self._records[record.trace_id] = record
        while len(self._records) > self._max_records:
            del self._records[next(iter(self._records))]
        return record

    def get(self, trace_id: str) -> TraceRecord:
        record = self._records.get(trace_id)
        if record is None:
            raise KeyError(f"Trace not found: {trace_id}")
        return record

    def list_recent(self, limit: int = 20) -> list[TraceRecord]:
        return list(self._records.values())[-limit:]

    def summary(self) -> dict[str, float | int | dict[str, int]]:
        """Aggregate request counts and latency for the recorded calls."""
        traces = [record.trace for record in self._records.values()]
        total = len(traces)
        if total == 0:
            return {
                "total_requests": 0,
                "failed_requests": 0,
                "avg_latency_ms": 0.0,
                "p95_latency_ms": 0.0,
                "status_codes": {},
            }

        latencies = sorted(trace.latency_ms for trace in traces)
        p95_index = max(0, int((len(latencies) * 0.95) - 1))
        status_codes = Counter(
            str(trace.status_code) for trace in traces if trace.status_code is not None
        )

        return {
            "total_requests": total,
            "failed_requests": sum(1 for trace in traces if trace.state is CallState.FAILED),
            "avg_latency_ms": sum(latencies) / total,
            "p95_latency_ms": latencies[p95_index],
            "status_codes": dict(status_codes),
        }


class Timer:
    """Simple context timer used by the executor."""

    def __init__(self) -> None:
        self._start = 0.0
        self.elapsed_ms = 0.0

    def __enter__(self) -> "Timer":
        self._start = time.perf_counter()
        return self

    def __exit__(self, exc_type: object, exc: object, tb: object) -> None:
        self.elapsed_ms = (time.perf_counter() - self._start) * 1000.0
