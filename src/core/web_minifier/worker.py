"""Background execution of minification requests.

A :class:`MinifyWorker` runs the service on a single worker thread and talks
to callers through request/response messages. Every request carries a
``request_id`` that the response echoes, and every caller holds its own
future, so concurrent submissions can never receive each other's results.
"""

from __future__ import annotations

import asyncio
import itertools
import logging
import threading
import time
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Any, Literal, Mapping

from .config import AppConfig
from .core import MinificationService
from .delegates import load_advanced_minifier
from .logging import RunLogEntry, RunLogger
from .models import MinificationOptions, MinificationResult
from .utils import utf8_size

logger = logging.getLogger(__name__)


class WorkerClosedError(RuntimeError):
    """Raised when a request is submitted to a worker that was torn down."""


@dataclass(frozen=True, slots=True)
class MinifyRequest:
    request_id: int
    code: str
    options: MinificationOptions = field(default_factory=MinificationOptions)
    type: Literal["minify"] = "minify"

    @classmethod
    def from_message(cls, request_id: int, message: Mapping[str, Any]) -> MinifyRequest:
        kind = message.get("type", "minify")
        if kind != "minify":
            raise ValueError(f"Unsupported message type: {kind}")
        options = message.get("options")
        return cls(
            request_id=request_id,
            code=str(message.get("code") or ""),
            options=MinificationOptions.from_dict(options if isinstance(options, Mapping) else None),
        )


@dataclass(slots=True)
class MinifyResponse:
    request_id: int
    result: MinificationResult

    def to_message(self) -> dict[str, object]:
        payload = self.result.to_message()
        payload["requestId"] = self.request_id
        return payload


class MinifyWorker:
    def __init__(self, service: MinificationService, *, run_logger: RunLogger | None = None) -> None:
        self._service = service
        self._run_logger = run_logger
        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="minify-worker")
        self._ids = itertools.count(1)
        self._pending: dict[int, Future[MinifyResponse]] = {}
        self._lock = threading.Lock()
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def service(self) -> MinificationService:
        return self._service

    def next_request_id(self) -> int:
        with self._lock:
            return next(self._ids)

    def submit(self, code: str, options: MinificationOptions | None = None) -> Future[MinifyResponse]:
        request = MinifyRequest(
            request_id=self.next_request_id(),
            code=code,
            options=options or MinificationOptions(),
        )
        return self.post(request)

    def dispatch(self, message: Mapping[str, Any]) -> Future[MinifyResponse]:
        """Post a raw message; a malformed one resolves to an error response."""

        if self._closed:
            raise WorkerClosedError("Minify worker has been closed")
        request_id = self.next_request_id()
        try:
            request = MinifyRequest.from_message(request_id, message)
        except ValueError as exc:
            logger.warning("Rejected minify message %d: %s", request_id, exc)
            return self._rejected(request_id, message, str(exc))
        return self.post(request)

    def post(self, request: MinifyRequest) -> Future[MinifyResponse]:
        outer: Future[MinifyResponse] = Future()
        with self._lock:
            if self._closed:
                raise WorkerClosedError("Minify worker has been closed")
            self._pending[request.request_id] = outer
            inner = self._executor.submit(self._handle, request)
        inner.add_done_callback(lambda done: self._deliver(request, outer, done))
        return outer

    def _rejected(
        self, request_id: int, message: Mapping[str, Any], error: str
    ) -> Future[MinifyResponse]:
        code = message.get("code")
        size = utf8_size(code if isinstance(code, str) else "")
        result = MinificationResult(code="", original_size=size, minified_size=size, error=error)
        future: Future[MinifyResponse] = Future()
        future.set_result(MinifyResponse(request_id=request_id, result=result))
        return future

    async def minify(self, code: str, options: MinificationOptions | None = None) -> MinificationResult:
        response = await asyncio.wrap_future(self.submit(code, options))
        return response.result

    def _handle(self, request: MinifyRequest) -> MinifyResponse:
        start = time.perf_counter()
        try:
            result = self._service.run(request.code, request.options)
        except Exception as exc:  # pragma: no cover - service already reports failures as data
            logger.exception("Unhandled failure in minify worker")
            size = utf8_size(request.code)
            result = MinificationResult(code="", original_size=size, minified_size=size, error=str(exc))
        self._log_run(request, result, (time.perf_counter() - start) * 1000)
        return MinifyResponse(request_id=request.request_id, result=result)

    def _deliver(
        self,
        request: MinifyRequest,
        outer: Future[MinifyResponse],
        inner: Future[MinifyResponse],
    ) -> None:
        with self._lock:
            self._pending.pop(request.request_id, None)
            if self._closed or outer.done():
                return
            if inner.cancelled():
                outer.cancel()
                return
            error = inner.exception()
            if error is not None:
                outer.set_exception(error)
            else:
                outer.set_result(inner.result())

    def _log_run(self, request: MinifyRequest, result: MinificationResult, duration_ms: float) -> None:
        if self._run_logger is None:
            return
        entry = RunLogEntry(
            request_id=request.request_id,
            requested_language=request.options.language.value,
            detected_language=result.detected_language.value if result.detected_language else None,
            status="failure" if result.error else "success",
            error=result.error,
            original_size=result.original_size,
            minified_size=result.minified_size,
            duration_ms=round(duration_ms, 3),
            warnings=list(result.warnings),
        )
        try:
            self._run_logger.append(entry)
        except OSError as exc:
            logger.warning("Could not write run log %s: %s", self._run_logger.path, exc)

    def close(self) -> None:
        with self._lock:
            if self._closed:
                return
            self._closed = True
            pending = list(self._pending.values())
            self._pending.clear()
        for future in pending:
            future.cancel()
        self._executor.shutdown(wait=False, cancel_futures=True)

    def __enter__(self) -> MinifyWorker:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


def build_worker(config: AppConfig) -> MinifyWorker:
    advanced = load_advanced_minifier(config.minify.advanced_html)
    service = MinificationService(advanced_html=advanced)
    run_logger = RunLogger(config.runtime.log_file) if config.runtime.log_file else None
    return MinifyWorker(service, run_logger=run_logger)


__all__ = [
    "MinifyRequest",
    "MinifyResponse",
    "MinifyWorker",
    "WorkerClosedError",
    "build_worker",
]
