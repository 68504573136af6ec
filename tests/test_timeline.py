"""Tests for ClockTimeline."""

import pytest

from fetchtask import ClockTimeline, IncompleteTimeline, LatencyBreakdown


class TestClockTimeline:
    """Test latency breakdown and stamp ordering."""

    def test_latency_breakdown(self):
        timeline = ClockTimeline(request_time=10.0, first_byte_time=10.25, completion_time=11.0)

        breakdown = timeline.latency_breakdown()

        assert breakdown == LatencyBreakdown(
            time_to_first_byte=0.25,
            total=1.0,
            body_transfer=0.75,
        )

    def test_equal_stamps_are_allowed(self):
        timeline = ClockTimeline(request_time=1.0, first_byte_time=1.0, completion_time=1.0)
        assert timeline.latency_breakdown().total == 0.0

    def test_empty_timeline_is_incomplete(self):
        timeline = ClockTimeline()
        assert not timeline.is_complete
        with pytest.raises(IncompleteTimeline):
            timeline.latency_breakdown()

    def test_missing_completion_fails_fast(self):
        timeline = ClockTimeline(request_time=1.0, first_byte_time=2.0)
        with pytest.raises(IncompleteTimeline, match="completion"):
            timeline.latency_breakdown()

    def test_missing_first_byte_fails_fast(self):
        timeline = ClockTimeline(request_time=1.0, completion_time=2.0)
        with pytest.raises(IncompleteTimeline):
            timeline.latency_breakdown()

    @pytest.mark.parametrize(
        "start, first_byte, completion",
        [
            (2.0, 1.0, 3.0),
            (1.0, 3.0, 2.0),
            (3.0, None, 2.0),
        ],
    )
    def test_out_of_order_stamps_rejected(self, start, first_byte, completion):
        with pytest.raises(ValueError, match="out of order"):
            ClockTimeline(request_time=start, first_byte_time=first_byte, completion_time=completion)

    def test_timeline_is_immutable(self):
        timeline = ClockTimeline(request_time=1.0)
        with pytest.raises(AttributeError):
            timeline.request_time = 2.0  # type: ignore[misc]
