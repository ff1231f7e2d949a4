import pytest

from netlog_synth.errors import RoundTripMismatchError
from netlog_synth.verification import find_subset_mismatch, verify_round_trip


def test_subset_of_mapping():
    assert find_subset_mismatch({"a": 1}, {"a": 1, "b": 2}) is None
    assert find_subset_mismatch({}, {"a": 1}) is None


def test_nested_mismatch_path():
    mismatch = find_subset_mismatch(
        {"timing": {"sendEnd": 5}}, {"timing": {"sendEnd": 6, "sendStart": 1}}
    )

    assert mismatch == "timing.sendEnd: expected 5, got 6"


def test_missing_key():
    assert find_subset_mismatch({"a": 1}, {"b": 1}) == "a: missing, expected 1"


def test_lists_match_element_wise_and_by_length():
    assert find_subset_mismatch([{"a": 1}], [{"a": 1, "b": 2}]) is None
    assert find_subset_mismatch([1, 2], [1]) == "<root>: expected [1, 2], got [1]"
    assert find_subset_mismatch([{"a": 1}], [{"a": 2}]) == "[0].a: expected 1, got 2"


def test_type_mismatch():
    assert find_subset_mismatch({"a": {"b": 1}}, {"a": 3}) == "a: expected a mapping, got 3"


def test_numbers_compare_by_value():
    assert find_subset_mismatch({"t": 1}, {"t": 1.0}) is None


def test_verify_round_trip_raises():
    devtools_log = [
        {
            "method": "Network.requestWillBeSent",
            "params": {
                "requestId": "1",
                "request": {"url": "https://example.com/"},
                "timestamp": 1,
            },
        }
    ]

    verify_round_trip([{"requestId": "1", "url": "https://example.com/"}], devtools_log)
    with pytest.raises(RoundTripMismatchError, match="url: expected"):
        verify_round_trip([{"url": "https://other.example/"}], devtools_log)
