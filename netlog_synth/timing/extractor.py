"""
Timing extraction for partial network records.

Pulls every known timestamp out of a record and checks that the ones that are
present agree with each other. Nothing is filled in here.
"""

from dataclasses import dataclass
from typing import Any

from netlog_synth.errors import MalformedFixtureError


def time_defined(time: float | None) -> bool:
    """False for a missing time and for the ``-1`` placeholder."""
    return time is not None and time != -1


def assert_timing_increases(values: dict[str, float | None]) -> None:
    """
    Check that every defined value is <= every later defined value.

    Order is the insertion order of ``values``; keys are only used for the
    error message.
    """
    steps = list(values.items())
    for i, (step, value) in enumerate(steps[:-1]):
        if not time_defined(value):
            continue
        for comparison, later in steps[i + 1 :]:
            if not time_defined(later):
                continue
            if value > later:
                raise MalformedFixtureError(
                    f"'{step}' ({value}) exceeds '{comparison}' ({later}) in test network record"
                )


@dataclass(frozen=True)
class ExtractedTiming:
    """Raw times of one record, all in ms. ``None`` or -1 when not given."""

    renderer_start_time: float | None
    start_time: float | None
    request_time: float | None
    receive_headers_end: float | None
    response_received_time: float | None
    end_time: float | None
    redirect_response_timestamp: float | None
    relative_timing_max: float


def extract_partial_timing(record: dict[str, Any]) -> ExtractedTiming:
    """Extract the timings found in ``record`` and check their consistency."""
    timing = dict(record.get("timing") or {})
    # In seconds; every other timing value is ms relative to it.
    request_time_s = timing.pop("requestTime", None)
    relative_values = [v for v in timing.values() if time_defined(v)]
    relative_timing_max = max(relative_values) if relative_values else 0

    renderer_start_time = record.get("rendererStartTime")
    start_time = record.get("startTime")
    response_received_time = record.get("responseReceivedTime")
    end_time = record.get("endTime")
    # Added when resolving redirects; only a fallback start time.
    redirect_response_timestamp = record.get("redirectResponseTimestamp")

    request_time = request_time_s * 1000 if time_defined(request_time_s) else None

    assert_timing_increases(
        {
            "rendererStartTime": renderer_start_time,
            "startTime": start_time,
            "requestTime": request_time,
            "responseReceivedTime": response_received_time,
            "endTime": end_time,
        }
    )

    if time_defined(start_time) and time_defined(request_time):
        if start_time != request_time:
            raise MalformedFixtureError(
                f"'startTime' ({start_time}) is not equal to 'timing.requestTime' "
                f"({request_time_s} seconds) in test network record"
            )

    # Request start plus any relative timing must fit before the response and end.
    defined_starts = [
        t for t in (renderer_start_time, start_time, request_time) if time_defined(t)
    ]
    max_start = max(defined_starts) if defined_starts else redirect_response_timestamp
    if time_defined(max_start):
        if (
            time_defined(response_received_time)
            and max_start + relative_timing_max > response_received_time
        ):
            raise MalformedFixtureError(
                f"request start ({max_start}) plus relative timing value "
                f"({relative_timing_max}) exceeds 'responseReceivedTime' "
                f"({response_received_time}) in test network record"
            )
        if time_defined(end_time) and max_start + relative_timing_max > end_time:
            raise MalformedFixtureError(
                f"request start ({max_start}) plus relative 'timing' value "
                f"({relative_timing_max}) exceeds 'endTime' ({end_time}) in test network record"
            )

    receive_headers_end = timing.get("receiveHeadersEnd")
    start = start_time if time_defined(start_time) else request_time
    if (
        time_defined(start)
        and time_defined(receive_headers_end)
        and time_defined(response_received_time)
        and start + receive_headers_end != response_received_time
    ):
        raise MalformedFixtureError(
            f"request start ({start}) plus 'receiveHeadersEnd' ({receive_headers_end}) "
            f"does not equal 'responseReceivedTime' ({response_received_time}) "
            "in test network record"
        )

    return ExtractedTiming(
        renderer_start_time=renderer_start_time,
        start_time=start_time,
        request_time=request_time,
        receive_headers_end=receive_headers_end,
        response_received_time=response_received_time,
        end_time=end_time,
        redirect_response_timestamp=redirect_response_timestamp,
        relative_timing_max=relative_timing_max,
    )
