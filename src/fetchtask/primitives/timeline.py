"""Request timeline: start, first byte and completion stamps."""

from __future__ import annotations

from dataclasses import dataclass


class IncompleteTimeline(Exception):
    """Raised when a latency breakdown is requested before every stamp is set."""
    pass


@dataclass(frozen=True, slots=True)
class LatencyBreakdown:
    """Latency figures in seconds derived from a complete timeline."""
    time_to_first_byte: float
    total: float
    body_transfer: float


@dataclass(frozen=True, slots=True)
class ClockTimeline:
    """
    Three monotonic timestamps captured over the life of one request.

    Attributes:
        request_time: when the task was first resumed
        first_byte_time: when the response headers arrived
        completion_time: when the transport signalled completion

    Values come from [`anyio.current_time()`](https://anyio.readthedocs.io), so
    only differences between them are meaningful.
    """
    request_time: float | None = None
    first_byte_time: float | None = None
    completion_time: float | None = None

    def __post_init__(self):
        """Reject stamps that run backwards."""
        stamps = [
            t for t in (self.request_time, self.first_byte_time, self.completion_time)
            if t is not None
        ]
        if stamps != sorted(stamps):
            raise ValueError(
                f"Timeline stamps out of order: start={self.request_time}, "
                f"first_byte={self.first_byte_time}, completion={self.completion_time}"
            )

    @property
    def is_complete(self) -> bool:
        return None not in (self.request_time, self.first_byte_time, self.completion_time)

    def latency_breakdown(self) -> LatencyBreakdown:
        if not self.is_complete:
            raise IncompleteTimeline(
                "Latency breakdown needs start, first byte and completion stamps"
            )
        assert self.request_time is not None
        assert self.first_byte_time is not None
        assert self.completion_time is not None
        return LatencyBreakdown(
            time_to_first_byte=self.first_byte_time - self.request_time,
            total=self.completion_time - self.request_time,
            body_transfer=self.completion_time - self.first_byte_time,
        )
