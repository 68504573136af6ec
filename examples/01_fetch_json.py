"""
Fetch JSON Example

Runs a few requests concurrently, each in its own RequestExecutor, and prints
the parsed payload and latency breakdown for each.

Run:
  uv run python examples/01_fetch_json.py
"""

from __future__ import annotations

import logging

import anyio

from fetchtask import (
    ExecutorObserver,
    RawResponse,
    Request,
    RequestError,
    RequestExecutor,
    ResponseShape,
    TransportConfig,
)


class PrintingObserver(ExecutorObserver):
    def on_cancelled(self, executor: RequestExecutor) -> None:
        print(f"cancelled: {executor.request.url}")


def show(shape: ResponseShape):
    def on_success(response: RawResponse) -> None:
        result = response.json(shape)
        latency = response.timeline.latency_breakdown()
        print(f"{response.status_code} {response.url}")
        print(f"  ttfb={latency.time_to_first_byte * 1000:.1f}ms total={latency.total * 1000:.1f}ms")
        print(f"  {result.value if result.is_success else result.error!r}")

    return on_success


def on_failure(error: RequestError) -> None:
    print(f"failed: {error!r}")


async def main() -> None:
    config = TransportConfig(timeout=10.0, headers={"User-Agent": "fetchtask-example/0.1"})
    requests = [
        (Request("https://httpbin.org/json", config=config), ResponseShape.OBJECT),
        (Request("https://httpbin.org/status/204", config=config), ResponseShape.ARRAY),
        (Request("https://httpbin.org/status/401", rejected_status_codes={401}, config=config), ResponseShape.OBJECT),
    ]

    async with anyio.create_task_group() as tg:
        for request, shape in requests:
            executor = RequestExecutor(task_group=tg)
            executor.add_observer(PrintingObserver())
            await executor.execute(request, on_success=show(shape), on_failure=on_failure)

        # A request we give up on straight away.
        slow = RequestExecutor(task_group=tg)
        slow.add_observer(PrintingObserver())
        await slow.execute(Request("https://httpbin.org/delay/5", config=config))
        slow.cancel()


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    anyio.run(main)
