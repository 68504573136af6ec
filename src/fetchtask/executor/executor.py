"""
RequestExecutor - owns one in-flight transport task.

The transport runs in its own task inside a cancel scope and reports to the
executor through the [`TransportDelegate`](src/fetchtask/http/transport.py:1)
hooks. Terminal outcomes are posted to a memory object stream and delivered by
a single dispatch loop, so `on_success`, `on_failure` and observer
notifications always fire from the same place, one at a time.

Lifecycle:
  IDLE → RUNNING → COMPLETED | FAILED | CANCELLED
"""

from __future__ import annotations

import logging
from enum import Enum, auto
from typing import Any, Callable, Mapping

import anyio
from anyio.abc import TaskGroup
from anyio.streams.memory import MemoryObjectReceiveStream, MemoryObjectSendStream

from ..http.request import Request
from ..http.response import RawResponse
from ..http.transport import Disposition, HttpxTransport, Transport, TransportFactory
from ..primitives.timeline import ClockTimeline
from ..result.errors import RequestError, classify_status, classify_transport
from ..type_utils import MaybeAwaitable, maybe_await
from .observer import ExecutorObserver

logger = logging.getLogger(__name__)


SuccessCallback = Callable[[RawResponse], MaybeAwaitable]
FailureCallback = Callable[[RequestError], MaybeAwaitable]



class ExecutorState(Enum):
    IDLE = auto()
    RUNNING = auto()
    COMPLETED = auto()
    FAILED = auto()
    CANCELLED = auto()

    @property
    def is_terminal(self) -> bool:
        return self in (ExecutorState.COMPLETED, ExecutorState.FAILED, ExecutorState.CANCELLED)


class RequestExecutor:
    """
    Runs one request and reports exactly one outcome.

    Usage:
        async with anyio.create_task_group() as tg:
            executor = RequestExecutor(task_group=tg)
            await executor.execute(request, on_success=..., on_failure=...)
            await executor.wait()

    Either `on_success(RawResponse)` or `on_failure(RequestError)` fires once,
    or neither if the task is cancelled first. An executor is single-use.
    """

    # Dispatch loop messages
    FINISHED: str = "$finished"
    FAILED: str = "$failed"
    CANCELLED: str = "$cancelled"

    def __init__(
        self,
        *,
        task_group: TaskGroup,
        transport_factory: TransportFactory | None = None,
    ):
        self._task_group = task_group
        self._transport_factory: TransportFactory = transport_factory or HttpxTransport.from_config
        self._observers: list[ExecutorObserver] = []
        self._state = ExecutorState.IDLE

        self._request: Request | None = None
        self._on_success: SuccessCallback | None = None
        self._on_failure: FailureCallback | None = None
        self._rejected_status_codes: frozenset[int] = frozenset()

        self._response: RawResponse | None = None
        self._buffer: bytearray | None = None
        self._outcome_posted = False

        self._started_at: float | None = None
        self._first_byte_at: float | None = None
        self._completed_at: float | None = None

        self._scope: anyio.CancelScope | None = None
        self._resumed = anyio.Event()
        self._resumed.set()
        self._done = anyio.Event()
        self._outbox: MemoryObjectSendStream[tuple[Any, ...]] | None = None

    # --- Introspection ---

    @property
    def state(self) -> ExecutorState:
        return self._state

    @property
    def request(self) -> Request | None:
        return self._request

    @property
    def response(self) -> RawResponse | None:
        return self._response

    @property
    def is_cancelled(self) -> bool:
        return self._state is ExecutorState.CANCELLED

    @property
    def is_error(self) -> bool:
        return self._state is ExecutorState.FAILED

    @property
    def is_suspended(self) -> bool:
        return self._state is ExecutorState.RUNNING and not self._resumed.is_set()

    def add_observer(self, observer: ExecutorObserver) -> None:
        self._observers.append(observer)

    def remove_observer(self, observer: ExecutorObserver) -> None:
        self._observers.remove(observer)

    # --- Task control ---

    async def execute(
        self,
        request: Request,
        on_success: SuccessCallback | None = None,
        on_failure: FailureCallback | None = None,
    ) -> None:
        """
        Start `request` in the background and return immediately.

        Raises RuntimeError if this executor has already been used.
        """
        if self._state is not ExecutorState.IDLE:
            raise RuntimeError(f"Executor is {self._state.name}; executors are single-use")

        self._on_success = on_success
        self._on_failure = on_failure
        self._request = request
        self._rejected_status_codes = request.rejected_status_codes

        transport = self._transport_factory(request.config)
        send_stream, receive_stream = anyio.create_memory_object_stream[tuple[Any, ...]](2)
        self._outbox = send_stream
        self._scope = anyio.CancelScope()
        self._state = ExecutorState.RUNNING

        logger.debug(f"Dispatching {request.method.value} {request.url}")
        self._task_group.start_soon(self._dispatch_loop, receive_stream)
        self._task_group.start_soon(self._run_transport, transport, request, self._scope)
        self.resume()

    def resume(self) -> None:
        """Start or continue delivering chunks. No-op without an active task."""
        if self._state is not ExecutorState.RUNNING:
            return
        if self._started_at is None:
            self._started_at = anyio.current_time()
        if not self._resumed.is_set():
            logger.debug("Resuming task")
            self._resumed.set()

    def suspend(self) -> None:
        """Hold chunk delivery; accumulated bytes are kept. No-op without an active task."""
        if self._state is not ExecutorState.RUNNING:
            return
        if self._resumed.is_set():
            logger.debug("Suspending task")
            self._resumed = anyio.Event()

    def cancel(self) -> None:
        """
        Abort the active task.

        No success or failure callback fires for it afterwards, even if the
        transport already produced an outcome. No-op unless RUNNING.
        """
        if self._state is not ExecutorState.RUNNING:
            return

        self._state = ExecutorState.CANCELLED
        assert self._scope is not None
        self._scope.cancel()
        self._buffer = None
        self._resumed.set()
        logger.info(f"Cancelled {self._describe_request()}")
        self._post((self.CANCELLED,))

    async def wait(self) -> ExecutorState:
        """Wait until the terminal outcome has been delivered."""
        if self._state is ExecutorState.IDLE:
            raise RuntimeError("Executor has not been started")
        await self._done.wait()
        return self._state

    # --- Transport delegate ---

    async def on_response(
        self,
        status_code: int,
        headers: Mapping[str, str],
        url: str | None = None,
    ) -> Disposition:
        if self._state is not ExecutorState.RUNNING or self._outcome_posted:
            return Disposition.CANCEL

        self._first_byte_at = anyio.current_time()
        self._response = RawResponse(
            status_code,
            headers,
            url=url,
            rejected_status_codes=self._rejected_status_codes,
        )
        logger.debug(f"Received HTTP {status_code} for {self._describe_request()}")

        if status_code in self._rejected_status_codes:
            self._completed_at = anyio.current_time()
            self._response.freeze(None, self._timeline())
            self._post_outcome((self.FAILED, classify_status(self._response, self._request)))
            return Disposition.CANCEL

        self._buffer = bytearray()
        return Disposition.ALLOW

    async def on_data(self, chunk: bytes) -> None:
        while not self._resumed.is_set():
            await self._resumed.wait()
        if self._state is not ExecutorState.RUNNING or self._outcome_posted:
            return
        if self._buffer is None:
            raise RuntimeError("Transport delivered body bytes before response headers")
        self._buffer.extend(chunk)

    async def on_complete(self, error: BaseException | None = None) -> None:
        if self._state is not ExecutorState.RUNNING or self._outcome_posted:
            return

        self._completed_at = anyio.current_time()
        response = self._response
        data = bytes(self._buffer) if self._buffer else None
        self._buffer = None

        if response is not None:
            response.freeze(data if error is None else None, self._timeline())

        if error is None and response is None:
            error = RuntimeError("Transport completed without a response")

        if error is not None:
            logger.warning(f"Request failed: {self._describe_request()}: {error!r}")
            self._post_outcome((self.FAILED, classify_transport(error, response, self._request)))
            return

        self._post_outcome((self.FINISHED, response))

    # --- Internals ---

    async def _run_transport(self, transport: Transport, request: Request, scope: anyio.CancelScope) -> None:
        with scope:
            try:
                await transport.send(request, self)
            except Exception as e:
                # A transport that raises instead of reporting still gets exactly one outcome.
                await self.on_complete(e)
                return
            if not self._outcome_posted:
                await self.on_complete(RuntimeError("Transport returned without signalling completion"))

    async def _dispatch_loop(self, receive_stream: MemoryObjectReceiveStream[tuple[Any, ...]]) -> None:
        """Deliver the terminal outcome. The only place callbacks fire."""
        try:
            async with receive_stream:
                async for message in receive_stream:
                    match message:
                        case (self.CANCELLED,):
                            await self._emit(self.CANCELLED)
                            return
                        case _ if self._state is ExecutorState.CANCELLED:
                            # Outcome raced with cancel(); the cancellation wins.
                            continue
                        case (self.FAILED, RequestError() as error):
                            self._state = ExecutorState.FAILED
                            if self._on_failure is not None:
                                await maybe_await(self._on_failure(error))
                            await self._emit(self.FAILED, error)
                            return
                        case (self.FINISHED, RawResponse() as response):
                            self._state = ExecutorState.COMPLETED
                            if self._on_success is not None:
                                await maybe_await(self._on_success(response))
                            await self._emit(self.FINISHED)
                            return
        finally:
            self._close_outbox()
            self._on_success = None
            self._on_failure = None
            self._done.set()

    async def _emit(self, event: str, error: RequestError | None = None) -> None:
        """Notify every observer of one terminal event."""
        for observer in list(self._observers):
            match event:
                case self.FINISHED:
                    await maybe_await(observer.on_finished(self))
                case self.FAILED:
                    assert error is not None
                    await maybe_await(observer.on_failed(self, error))
                case self.CANCELLED:
                    await maybe_await(observer.on_cancelled(self))

    def _post_outcome(self, message: tuple[Any, ...]) -> None:
        self._outcome_posted = True
        self._post(message)

    def _post(self, message: tuple[Any, ...]) -> None:
        assert self._outbox is not None
        try:
            self._outbox.send_nowait(message)
        except (anyio.ClosedResourceError, anyio.BrokenResourceError):
            # Dispatch loop already torn down by an outer cancellation.
            logger.debug(f"Dropped {message[0]} for {self._describe_request()}: dispatch loop gone")

    def _close_outbox(self) -> None:
        if self._outbox is not None:
            self._outbox.close()

    def _timeline(self) -> ClockTimeline:
        return ClockTimeline(
            request_time=self._started_at,
            first_byte_time=self._first_byte_at,
            completion_time=self._completed_at,
        )

    def _describe_request(self) -> str:
        if self._request is None:
            return "<no request>"
        return f"{self._request.method.value} {self._request.url}"
