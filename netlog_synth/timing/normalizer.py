"""
Fill in the missing timings of a partial network record.

Each resolved field is described by a rule: an ordered list of candidate
sources, each a pure function of the extracted timings and the fields resolved
so far, and a final fixed default. Rules are applied in table order, so a
record giving even a single absolute time gets everything else placed
relative to it. Only ``requestTime`` and ``receiveHeadersEnd`` of ``timing``
are computed; any other ``timing`` value is copied through as given.
"""

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from netlog_synth.config import SynthesisConfig
from netlog_synth.timing.extractor import (
    ExtractedTiming,
    extract_partial_timing,
    time_defined,
)


Candidate = Callable[[ExtractedTiming, dict[str, float]], float | None]
Default = Callable[[ExtractedTiming, dict[str, float], SynthesisConfig], float]


@dataclass(frozen=True)
class TimingRule:
    name: str
    candidates: tuple[Candidate, ...]
    default: Default
    # -1 counts as missing for most fields, but not for endTime.
    accept: Callable[[float | None], bool] = time_defined

    def resolve(
        self,
        extracted: ExtractedTiming,
        resolved: dict[str, float],
        config: SynthesisConfig,
    ) -> float:
        for candidate in self.candidates:
            value = candidate(extracted, resolved)
            if self.accept(value):
                return value
        return self.default(extracted, resolved, config)


def _headers_from_response(e: ExtractedTiming, r: dict[str, float]) -> float | None:
    if not time_defined(e.response_received_time):
        return None
    return e.response_received_time - r["request_time"]


def _headers_between_relative_and_end(
    e: ExtractedTiming, r: dict[str, float]
) -> float | None:
    # Halfway between the last given relative timing and endTime.
    if not time_defined(e.end_time):
        return None
    return (e.relative_timing_max + (e.end_time - r["request_time"])) / 2


TIMING_RULES: tuple[TimingRule, ...] = (
    TimingRule(
        "start_time",
        (
            lambda e, r: e.start_time,
            lambda e, r: e.request_time,
            lambda e, r: e.renderer_start_time,
            # Last resort, so a redirect may start before the redirect ends.
            lambda e, r: e.redirect_response_timestamp,
        ),
        lambda e, r, c: c.default_start,
    ),
    # Older fixtures assume requests start at startTime.
    TimingRule(
        "renderer_start_time",
        (lambda e, r: e.renderer_start_time,),
        lambda e, r, c: r["start_time"],
    ),
    TimingRule("request_time", (), lambda e, r, c: r["start_time"]),
    TimingRule(
        "receive_headers_end",
        (
            lambda e, r: e.receive_headers_end,
            _headers_from_response,
            _headers_between_relative_and_end,
        ),
        lambda e, r, c: max(e.relative_timing_max, c.default_timing_offset),
    ),
    TimingRule(
        "response_received_time",
        (lambda e, r: e.response_received_time,),
        lambda e, r, c: r["request_time"] + r["receive_headers_end"],
    ),
    TimingRule(
        "end_time",
        (lambda e, r: e.end_time,),
        lambda e, r, c: r["response_received_time"] + c.default_timing_offset,
        accept=lambda value: value is not None,
    ),
)


@dataclass(frozen=True)
class NormalizedTiming:
    """Complete timing for one record. Absolute times in ms."""

    renderer_start_time: float
    start_time: float
    response_received_time: float
    end_time: float
    timing: dict[str, Any] = field(default_factory=dict)


def seconds_from_ms(ms: float) -> float:
    """Convert ms to seconds, rounded to the microsecond."""
    return round(ms * 1_000) / 1_000_000


def normalize_request_timing(
    record: dict[str, Any], config: SynthesisConfig | None = None
) -> NormalizedTiming:
    """
    Derive a complete, monotonic timing set for ``record``.

    Raises MalformedFixtureError if the given timings contradict each other.
    """
    config = config or SynthesisConfig()
    extracted = extract_partial_timing(record)

    resolved: dict[str, float] = {}
    for rule in TIMING_RULES:
        resolved[rule.name] = rule.resolve(extracted, resolved, config)

    return NormalizedTiming(
        renderer_start_time=resolved["renderer_start_time"],
        start_time=resolved["start_time"],
        response_received_time=resolved["response_received_time"],
        end_time=resolved["end_time"],
        timing={
            **(record.get("timing") or {}),
            "requestTime": seconds_from_ms(resolved["request_time"]),
            "receiveHeadersEnd": resolved["receive_headers_end"],
        },
    )
