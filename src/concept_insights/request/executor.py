"""Single-call HTTP execution with typed results and typed failures."""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from typing import Any, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from concept_insights.errors import (
    ConceptInsightsError,
    DecodeError,
    RequestCancelledError,
    TransportError,
    UpstreamStatusError,
)
from concept_insights.obs.tracing import Timer
from concept_insights.types import CallState, RequestSpec, RequestTrace

logger = logging.getLogger(__name__)

ResultT = TypeVar("ResultT", bound=BaseModel)


class RequestExecutor:
    """Sends one `RequestSpec` per call and decodes the response.

    Each call moves through ``BUILT -> SENT -> SUCCEEDED | FAILED``. Failures
    surface as `TransportError`, `UpstreamStatusError` or `DecodeError`; no call
    is retried. When no result type is given the body is never parsed.
    """

    def __init__(
        self,
        client: httpx.Client,
        *,
        auth: httpx.Auth | tuple[str, str] | None = None,
    ) -> None:
        self._client = client
        self._auth = auth
        self._cancelled = threading.Event()
        self._observer: Callable[[RequestTrace], None] | None = None

    def set_observer(self, observer: Callable[[RequestTrace], None] | None) -> None:
        """Set an optional callback invoked after each request."""
        self._observer = observer

    @property
    def cancelled(self) -> bool:
        return self._cancelled.is_set()

    def cancel(self) -> None:
        """Abort the in-flight call, if any, and refuse further calls.

        Closing the pool is best-effort: a request the server already received
        may still take effect.
        """
        self._cancelled.set()
        self._client.close()

    def execute(
        self,
        request: RequestSpec,
        result_type: type[ResultT] | None = None,
        *,
        endpoint: str = "",
    ) -> ResultT | None:
        state = CallState.BUILT
        status_code: int | None = None
        error: str | None = None
        timer = Timer()
        try:
            with timer:
                state = CallState.SENT
                response = self._send(request)
                status_code = response.status_code
                result = self._handle(response, result_type)
            state = CallState.SUCCEEDED
            return result
        except ConceptInsightsError as exc:
            state = CallState.FAILED
            error = str(exc)
            logger.warning("%s %s failed: %s", request.method, request.path, exc)
            raise
        finally:
            if self._observer is not None:
                self._observer(
                    RequestTrace(
                        endpoint=endpoint,
                        method=request.method,
                        path=request.path,
                        state=state,
                        latency_ms=timer.elapsed_ms,
                        status_code=status_code,
                        error=error,
                    )
                )

    def _send(self, request: RequestSpec) -> httpx.Response:
        if self._cancelled.is_set():
            raise RequestCancelledError("Client was cancelled; no request sent")

        headers = {"Accept": "application/json"}
        kwargs: dict[str, Any] = {"params": dict(request.query), "headers": headers}
        if request.content is not None:
            headers["Content-Type"] = request.content_type or "text/plain"
            kwargs["content"] = request.content.encode("utf-8")
        if self._auth is not None:
            kwargs["auth"] = self._auth

        logger.debug("%s %s params=%s", request.method, request.path, kwargs["params"])
        try:
            response = self._client.request(request.method, request.path, **kwargs)
        except httpx.RequestError as exc:
            if self._cancelled.is_set():
                raise RequestCancelledError("Request cancelled in flight") from exc
            raise TransportError(f"{request.method} {request.path}: {exc}") from exc
        except RuntimeError as exc:
            # httpx refuses to send on a closed client.
            if not self._client.is_closed:
                raise
            if self._cancelled.is_set():
                raise RequestCancelledError("Request cancelled in flight") from exc
            raise TransportError(str(exc)) from exc

        if self._cancelled.is_set():
            raise RequestCancelledError("Request cancelled before the response was consumed")
        return response

    @staticmethod
    def _handle(
        response: httpx.Response, result_type: type[ResultT] | None
    ) -> ResultT | None:
        if not response.is_success:
            raise UpstreamStatusError(response.status_code, _error_detail(response))
        if result_type is None:
            return None

        try:
            payload = response.json()
        except ValueError as exc:
            raise DecodeError(f"Response body is not valid JSON: {exc}") from exc
        try:
            return result_type.model_validate(payload)
        except ValidationError as exc:
            raise DecodeError(
                f"Response does not match {result_type.__name__}: {exc}"
            ) from exc


def _error_detail(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return response.text
