"""Testing utilities: a scripted transport, a recording observer, and timing helpers."""

from __future__ import annotations

from typing import Any, Awaitable, Callable, Iterable, Mapping

import anyio

from ..config import TransportConfig
from ..executor.executor import RequestExecutor
from ..executor.observer import ExecutorObserver
from ..http.request import Request
from ..http.transport import Disposition, TransportDelegate
from ..result.errors import RequestError


async def with_timeout(awaitable: Awaitable[Any], timeout: float = 5.0) -> Any:
    """Await `awaitable`, raising TimeoutError after `timeout` seconds."""
    with anyio.fail_after(timeout):
        return await awaitable


async def wait_for(
    condition: Callable[[], bool],
    timeout: float = 5.0,
    interval: float = 0.01,
) -> None:
    """Poll `condition` until it is true, raising TimeoutError after `timeout` seconds."""
    with anyio.fail_after(timeout):
        while not condition():
            await anyio.sleep(interval)


class ScriptedTransport:
    """
    Transport that replays a fixed response.

    Use `transport.factory` as the executor's `transport_factory`; the configs
    it was built from and the requests it was sent are recorded.

    Args:
        status_code, headers, url: what `on_response` reports
        chunks: body chunks passed to `on_data`, in order
        error: reported through `on_complete` after the chunks
        fail_before_response: report `error` without sending headers
        gate: if given, wait on it between headers and the first chunk
        ignore_disposition: keep going after `Disposition.CANCEL`, like a
            transport racing a late completion signal
    """

    def __init__(
        self,
        *,
        status_code: int = 200,
        headers: Mapping[str, str] | None = None,
        url: str = "http://fetchtask.test/",
        chunks: Iterable[bytes] = (),
        error: BaseException | None = None,
        fail_before_response: bool = False,
        gate: anyio.Event | None = None,
        ignore_disposition: bool = False,
    ):
        self.status_code = status_code
        self.headers = dict(headers or {})
        self.url = url
        self.chunks = list(chunks)
        self.error = error
        self.fail_before_response = fail_before_response
        self.gate = gate
        self.ignore_disposition = ignore_disposition

        self.configs: list[TransportConfig] = []
        self.requests: list[Request] = []
        self.dispositions: list[Disposition] = []
        self.delivered: list[bytes] = []
        self.completed = False

    def factory(self, config: TransportConfig) -> "ScriptedTransport":
        self.configs.append(config)
        return self

    async def send(self, request: Request, delegate: TransportDelegate) -> None:
        self.requests.append(request)

        if self.fail_before_response:
            await delegate.on_complete(self.error or ConnectionError("scripted failure"))
            self.completed = True
            return

        disposition = await delegate.on_response(self.status_code, self.headers, self.url)
        self.dispositions.append(disposition)
        if disposition is Disposition.CANCEL and not self.ignore_disposition:
            return

        if self.gate is not None:
            await self.gate.wait()

        for chunk in self.chunks:
            await delegate.on_data(chunk)
            self.delivered.append(chunk)
            await anyio.sleep(0)

        await delegate.on_complete(self.error)
        self.completed = True


class RecordingObserver(ExecutorObserver):
    """Observer that records every notification as a tuple."""

    def __init__(self):
        self.events: list[tuple[Any, ...]] = []

    def on_finished(self, executor: RequestExecutor) -> None:
        self.events.append(("finished", executor))

    def on_failed(self, executor: RequestExecutor, error: RequestError) -> None:
        self.events.append(("failed", executor, error))

    def on_cancelled(self, executor: RequestExecutor) -> None:
        self.events.append(("cancelled", executor))

    @property
    def names(self) -> list[str]:
        return [event[0] for event in self.events]
