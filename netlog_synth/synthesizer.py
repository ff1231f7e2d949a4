"""
Build a devtools log from partial network records.

Test fixtures only need to give the handful of fields a test cares about
(URL, status, a timing or two, cache and redirect flags); everything else is
filled in so the events are complete and the timings are in a valid order.
"""

import logging
from typing import Any

from netlog_synth.config import SynthesisConfig, SynthesisOptions
from netlog_synth.events import EventBuilder
from netlog_synth.redirects import RedirectGraph
from netlog_synth.timing.normalizer import normalize_request_timing
from netlog_synth.verification import verify_round_trip


class DevtoolsLogSynthesizer:
    """Turns an ordered list of network records into protocol events."""

    def __init__(self, config: SynthesisConfig | None = None):
        self.config = config or SynthesisConfig()
        self.events = EventBuilder(self.config)
        self.logger = logging.getLogger(__name__)

    def synthesize(
        self, network_records: list[dict[str, Any]]
    ) -> list[dict[str, Any]]:
        """
        Events for all records, concatenated in record order.

        Event order follows the order of the records, not their timestamps.
        """
        redirects = RedirectGraph.from_records(network_records, self.config)
        devtools_log = []

        for index, record in enumerate(network_records):
            record = redirects.add_redirect_response_if_needed(record)
            timing = normalize_request_timing(record, self.config)
            record_events = self.events.events_for_record(
                record,
                index,
                timing,
                will_be_redirected=redirects.will_be_redirected(record),
            )
            self.logger.debug(
                f"Record {index} ({self.events.request_id(record, index)}): "
                f"{len(record_events)} events"
            )
            devtools_log.extend(record_events)

        self.logger.info(
            f"Synthesized {len(devtools_log)} events from {len(network_records)} network records"
        )
        return devtools_log


def records_to_devtools_log(
    network_records: list[dict[str, Any]],
    options: SynthesisOptions | dict | None = None,
    *,
    verify: bool = False,
    config: SynthesisConfig | None = None,
) -> list[dict[str, Any]]:
    """
    Generate a devtools log that regenerates ``network_records`` when decoded.

    With ``verify``, the log is decoded again and every field given in
    ``network_records`` must come back unchanged; ``options.skip_verification``
    turns that check off for a single call.

    Raises MalformedFixtureError for contradictory records and
    RoundTripMismatchError when verification fails.
    """
    if not isinstance(options, SynthesisOptions):
        options = SynthesisOptions.from_dict(options)

    synthesizer = DevtoolsLogSynthesizer(config)
    devtools_log = synthesizer.synthesize(network_records)

    if verify and not options.skip_verification:
        verify_round_trip(network_records, devtools_log, synthesizer.config)

    return devtools_log
