"""
Redirect handling for network record fixtures.

A record whose requestId ends in the redirect suffix (``:redirect``) is the
continuation of the record whose id is the same string without one suffix.
Longer chains are repeated single hops: ``id``, ``id:redirect``,
``id:redirect:redirect``. The relationships are collected once per log into a
``RedirectGraph``.
"""

import logging
from typing import Any

from netlog_synth.config import SynthesisConfig
from netlog_synth.errors import MalformedFixtureError
from netlog_synth.events import EventBuilder
from netlog_synth.timing.normalizer import normalize_request_timing


class RedirectGraph:
    """Edges from an original requestId to the id of its redirect continuation."""

    def __init__(
        self,
        records: list[dict[str, Any]],
        config: SynthesisConfig | None = None,
    ):
        self.config = config or SynthesisConfig()
        self.logger = logging.getLogger(__name__)
        self.records_by_id: dict[str, dict[str, Any]] = {}
        self.continuations: dict[str, str] = {}
        self._events = EventBuilder(self.config)

        suffix = self.config.redirect_suffix
        for record in records:
            request_id = record.get("requestId")
            if not request_id:
                continue
            # First record wins for duplicated ids.
            self.records_by_id.setdefault(request_id, record)
            if request_id.endswith(suffix):
                self.continuations[request_id[: -len(suffix)]] = request_id

    @classmethod
    def from_records(
        cls, records: list[dict[str, Any]], config: SynthesisConfig | None = None
    ) -> "RedirectGraph":
        return cls(records, config)

    def original_id(self, record: dict[str, Any]) -> str | None:
        """The id this record is a redirect continuation of, if any."""
        request_id = record.get("requestId")
        suffix = self.config.redirect_suffix
        if not request_id or not request_id.endswith(suffix):
            return None
        return request_id[: -len(suffix)]

    def will_be_redirected(self, record: dict[str, Any]) -> bool:
        """True if another record continues this one after a redirect."""
        request_id = record.get("requestId")
        if not request_id:
            return False
        return request_id in self.continuations

    def add_redirect_response_if_needed(
        self, record: dict[str, Any]
    ) -> dict[str, Any]:
        """
        Give a redirect continuation the response of the request it came from.

        The original's timing is normalized and its would-be response is used
        as ``redirectResponse``, with its status (302 unless given). The
        original's endTime becomes ``redirectResponseTimestamp``. Returns a new
        record; records that are not continuations are returned unchanged.
        """
        original_id = self.original_id(record)
        if original_id is None:
            return record

        original = self.records_by_id.get(original_id)
        if original is None:
            raise MalformedFixtureError(
                f"redirect with id {record['requestId']} has no original request"
            )

        original_timing = normalize_request_timing(original, self.config)
        response_event = self._events.response_received(original, -1, original_timing)
        redirect_response = response_event["params"]["response"]
        redirect_response["status"] = (
            original.get("statusCode") or self.config.default_redirect_status
        )
        self.logger.debug(
            f"Resolved redirect {original_id} -> {record['requestId']} "
            f"(status {redirect_response['status']}, at {original_timing.end_time})"
        )

        return {
            **record,
            "redirectResponseTimestamp": original_timing.end_time,
            "redirectResponse": redirect_response,
        }
