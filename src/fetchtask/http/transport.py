"""
Transport seam and the httpx implementation.

A transport performs one HTTP call and reports progress to a delegate, in
order: `on_response` once, `on_data` zero or more times, then `on_complete`
once. If `on_response` answers `Disposition.CANCEL` the transport stops
streaming and does not call `on_complete`.
"""

from __future__ import annotations

import logging
from enum import Enum, auto
from typing import Callable, Mapping, Protocol

import httpx

from ..config import TransportConfig
from .request import Request

logger = logging.getLogger(__name__)


class Disposition(Enum):
    """What the transport should do after delivering the response headers."""
    ALLOW = auto()   # keep streaming the body
    CANCEL = auto()  # drop the body and stop


class TransportDelegate(Protocol):
    async def on_response(
        self,
        status_code: int,
        headers: Mapping[str, str],
        url: str | None = None,
    ) -> Disposition: ...

    async def on_data(self, chunk: bytes) -> None: ...

    async def on_complete(self, error: BaseException | None = None) -> None: ...


class Transport(Protocol):
    async def send(self, request: Request, delegate: TransportDelegate) -> None: ...


TransportFactory = Callable[[TransportConfig], Transport]


class HttpxTransport:
    """
    Streams one request through a private `httpx.AsyncClient`.

    The client is opened inside `send()` and closed before it returns, so
    nothing is shared between calls.

    `transport` is passed straight to the client; tests use it to plug in
    `httpx.MockTransport`.
    """

    def __init__(
        self,
        config: TransportConfig,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._config = config
        self._transport = transport

    @classmethod
    def from_config(cls, config: TransportConfig) -> "HttpxTransport":
        return cls(config)

    def _client(self) -> httpx.AsyncClient:
        config = self._config
        connect = config.connect_timeout if config.connect_timeout is not None else config.timeout
        return httpx.AsyncClient(
            timeout=httpx.Timeout(config.timeout, connect=connect),
            limits=httpx.Limits(
                max_connections=config.max_connections,
                max_keepalive_connections=config.max_keepalive_connections,
            ),
            follow_redirects=config.follow_redirects,
            max_redirects=config.max_redirects,
            headers=dict(config.headers),
            transport=self._transport,
        )

    async def send(self, request: Request, delegate: TransportDelegate) -> None:
        try:
            async with self._client() as client:
                async with client.stream(**request.httpx_arguments()) as response:
                    disposition = await delegate.on_response(
                        response.status_code,
                        dict(response.headers.items()),
                        str(response.url),
                    )
                    if disposition is Disposition.CANCEL:
                        logger.debug(f"Streaming cancelled by delegate for {request.url}")
                        return

                    async for chunk in response.aiter_bytes(chunk_size=self._config.chunk_size):
                        if chunk:
                            await delegate.on_data(chunk)

        except httpx.HTTPError as e:
            logger.debug(f"Transport error for {request.method.value} {request.url}: {e!r}")
            await delegate.on_complete(e)
            return

        await delegate.on_complete(None)
