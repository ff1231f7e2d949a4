"""
Round-trip check: decode a synthesized devtools log and compare it with the
records it was built from.
"""

import logging
from collections.abc import Mapping
from typing import Any

from netlog_synth.config import SynthesisConfig
from netlog_synth.errors import RoundTripMismatchError
from netlog_synth.recorder import NetworkRecorder


logger = logging.getLogger(__name__)


def find_subset_mismatch(expected: Any, actual: Any, path: str = "") -> str | None:
    """
    Return a description of the first place ``expected`` is not contained in
    ``actual``, or None if it is.

    Mappings match when every expected key is present with a matching value;
    extra keys in ``actual`` are fine. Lists must have the same length and
    match element-wise. Anything else compares with ``==``.
    """
    if isinstance(expected, Mapping):
        if not isinstance(actual, Mapping):
            return f"{path or '<root>'}: expected a mapping, got {actual!r}"
        for key, value in expected.items():
            key_path = f"{path}.{key}" if path else str(key)
            if key not in actual:
                return f"{key_path}: missing, expected {value!r}"
            mismatch = find_subset_mismatch(value, actual[key], key_path)
            if mismatch:
                return mismatch
        return None

    if isinstance(expected, list | tuple):
        if not isinstance(actual, list | tuple) or len(actual) != len(expected):
            return f"{path or '<root>'}: expected {expected!r}, got {actual!r}"
        for i, (item, actual_item) in enumerate(zip(expected, actual, strict=True)):
            mismatch = find_subset_mismatch(item, actual_item, f"{path}[{i}]")
            if mismatch:
                return mismatch
        return None

    if expected != actual:
        return f"{path or '<root>'}: expected {expected!r}, got {actual!r}"
    return None


def verify_round_trip(
    network_records: list[dict[str, Any]],
    devtools_log: list[dict[str, Any]],
    config: SynthesisConfig | None = None,
) -> None:
    """Raise RoundTripMismatchError unless decoding ``devtools_log`` reproduces ``network_records``."""
    decoded = NetworkRecorder.records_from_log(devtools_log, config)
    mismatch = find_subset_mismatch(
        list(network_records), [request.to_dict() for request in decoded]
    )
    if mismatch:
        raise RoundTripMismatchError(
            f"devtools log does not round-trip to its network records: {mismatch}"
        )
    logger.debug(f"Verified round trip of {len(decoded)} network records")
