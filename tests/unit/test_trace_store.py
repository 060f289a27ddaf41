import pytest

from concept_insights.obs.tracing import Timer, TraceStore
from concept_insights.types import CallState, RequestTrace


def _trace(state: CallState, latency_ms: float, status_code: int | None) -> RequestTrace:
    return RequestTrace(
        endpoint="get_corpus",
        method="GET",
        path="/v2/corpora/acct/news/",
        state=state,
        latency_ms=latency_ms,
        status_code=status_code,
    )


def test_trace_store_summary_counts_failures_and_status_codes() -> None:
    store = TraceStore()
    store.add(_trace(CallState.SUCCEEDED, 10.0, 200))
    store.add(_trace(CallState.SUCCEEDED, 30.0, 200))
    store.add(_trace(CallState.FAILED, 20.0, 500))
    store.add(_trace(CallState.FAILED, 5.0, None))

    summary = store.summary()

    assert summary["total_requests"] == 4
    assert summary["failed_requests"] == 2
    assert summary["avg_latency_ms"] == pytest.approx(16.25)
    assert summary["status_codes"] == {"200": 2, "500": 1}


def test_empty_trace_store_summary() -> None:
    assert TraceStore().summary()["total_requests"] == 0


def test_trace_lookup_and_eviction() -> None:
    store = TraceStore(max_records=2)
    first = store.add(_trace(CallState.SUCCEEDED, 1.0, 200))
    second = store.add(_trace(CallState.SUCCEEDED, 2.0, 200))
    third = store.add(_trace(CallState.SUCCEEDED, 3.0, 200))

    assert store.get(third.trace_id).trace.latency_ms == 3.0
    assert [record.trace_id for record in store.list_recent()] == [second.trace_id, third.trace_id]
    with pytest.raises(KeyError):
        store.get(first.trace_id)


def test_timer_measures_elapsed_time() -> None:
    with Timer() as timer:
        sum(range(1000))
    assert timer.elapsed_ms >= 0.0
