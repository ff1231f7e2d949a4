import functools

import pytest

from netlog_synth import records_to_devtools_log


@pytest.fixture
def devtools_log_from_records():
    """Synthesize with the round-trip check on, as fixtures in tests should be."""
    return functools.partial(records_to_devtools_log, verify=True)


@pytest.fixture
def methods():
    def _methods(devtools_log):
        return [event["method"] for event in devtools_log]

    return _methods
