import pytest

from netlog_synth.config import SynthesisConfig
from netlog_synth.errors import MalformedFixtureError
from netlog_synth.timing.normalizer import normalize_request_timing, seconds_from_ms


def assert_monotonic(timing):
    request_time_ms = timing.timing["requestTime"] * 1000
    assert timing.renderer_start_time <= timing.start_time
    assert timing.start_time == pytest.approx(request_time_ms)
    assert request_time_ms <= timing.response_received_time
    if timing.end_time != -1:
        assert timing.response_received_time <= timing.end_time


def test_defaults_cascade_from_default_start():
    timing = normalize_request_timing({"url": "https://testingurl.com/", "statusCode": 404})

    assert timing.start_time == 1000
    assert timing.renderer_start_time == 1000
    assert timing.response_received_time == 2000
    assert timing.end_time == 3000
    assert timing.timing == {"requestTime": 1.0, "receiveHeadersEnd": 1000}


def test_fully_specified_timing_is_unchanged():
    record = {
        "rendererStartTime": 500,
        "startTime": 1000,
        "responseReceivedTime": 1500,
        "endTime": 2500,
        "timing": {"requestTime": 1, "receiveHeadersEnd": 500},
    }

    timing = normalize_request_timing(record)

    assert timing.renderer_start_time == 500
    assert timing.start_time == 1000
    assert timing.response_received_time == 1500
    assert timing.end_time == 2500
    assert timing.timing == {"requestTime": 1, "receiveHeadersEnd": 500}


@pytest.mark.parametrize(
    ("record", "expected"),
    [
        ({"startTime": 2000}, (2000, 2000, 3000, 4000)),
        ({"timing": {"requestTime": 2.5}}, (2500, 2500, 3500, 4500)),
        ({"rendererStartTime": 800}, (800, 800, 1800, 2800)),
        ({"rendererStartTime": 800, "startTime": 900}, (800, 900, 1900, 2900)),
        ({"redirectResponseTimestamp": 4000}, (4000, 4000, 5000, 6000)),
        ({"responseReceivedTime": 1500}, (1000, 1000, 1500, 2500)),
        ({"endTime": 5000}, (1000, 1000, 3000, 5000)),
        ({"startTime": 1000, "endTime": 1400, "timing": {"sendEnd": 200}}, (1000, 1000, 1300, 1400)),
    ],
)
def test_partial_timing_is_filled_in_order(record, expected):
    timing = normalize_request_timing(record)

    assert (
        timing.renderer_start_time,
        timing.start_time,
        timing.response_received_time,
        timing.end_time,
    ) == expected
    assert_monotonic(timing)


def test_start_prefers_start_time_over_redirect_timestamp():
    timing = normalize_request_timing(
        {"startTime": 1200, "redirectResponseTimestamp": 1100}
    )

    assert timing.start_time == 1200


def test_receive_headers_end_covers_relative_timings():
    timing = normalize_request_timing({"timing": {"sendStart": 1200, "sendEnd": 1500}})

    assert timing.timing["receiveHeadersEnd"] == 1500
    assert timing.response_received_time == 2500
    assert timing.end_time == 3500
    assert timing.timing["sendStart"] == 1200
    assert timing.timing["sendEnd"] == 1500


def test_incomplete_end_time_is_preserved():
    timing = normalize_request_timing({"endTime": -1})

    assert timing.end_time == -1
    assert timing.response_received_time == 2000
    assert_monotonic(timing)


def test_request_time_is_rounded_to_microseconds():
    timing = normalize_request_timing({"startTime": 1234.5674})

    assert timing.timing["requestTime"] == 1.234567
    assert seconds_from_ms(1000) == 1.0


def test_config_defaults_are_used():
    config = SynthesisConfig(default_start=5000, default_timing_offset=10)

    timing = normalize_request_timing({}, config)

    assert timing.start_time == 5000
    assert timing.response_received_time == 5010
    assert timing.end_time == 5020


def test_does_not_mutate_record():
    record = {"startTime": 1000, "timing": {"sendEnd": 10}}

    normalize_request_timing(record)

    assert record == {"startTime": 1000, "timing": {"sendEnd": 10}}


def test_contradictory_record_raises():
    with pytest.raises(MalformedFixtureError):
        normalize_request_timing({"startTime": 2000, "endTime": 1000})
