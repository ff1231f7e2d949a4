"""
Builders for the ``Network.*`` protocol events of one network record.

Every builder fills the fields a record leaves out with fixed, realistic
defaults so the emitted events are complete even for a minimal record.
"""

import re
from typing import Any

from netlog_synth.config import SynthesisConfig
from netlog_synth.timing.normalizer import NormalizedTiming


REQUEST_WILL_BE_SENT = "Network.requestWillBeSent"
REQUEST_SERVED_FROM_CACHE = "Network.requestServedFromCache"
RESPONSE_RECEIVED = "Network.responseReceived"
DATA_RECEIVED = "Network.dataReceived"
LOADING_FINISHED = "Network.loadingFinished"
LOADING_FAILED = "Network.loadingFailed"


def get_base_request_id(
    record: dict[str, Any], config: SynthesisConfig | None = None
) -> str | None:
    """Return the record's requestId with every redirect marker stripped."""
    request_id = record.get("requestId")
    if not request_id:
        return None
    suffix = re.escape((config or SynthesisConfig()).redirect_suffix)
    match = re.fullmatch(rf"([\w.]+)(?:{suffix})*", request_id)
    return match.group(1) if match else None


def headers_array_to_headers_dict(
    headers_array: list[dict[str, str]] | None,
) -> dict[str, str]:
    """Turn ``[{name, value}, ...]`` into a mapping, joining repeated names with a newline."""
    headers = {}
    for header in headers_array or []:
        name = header["name"]
        if name in headers:
            headers[name] = headers[name] + "\n" + header["value"]
        else:
            headers[name] = header["value"]
    return headers


class EventBuilder:
    """Builds protocol events for records using the defaults of one config."""

    def __init__(self, config: SynthesisConfig | None = None):
        self.config = config or SynthesisConfig()

    def request_id(self, record: dict[str, Any], index: int) -> str:
        return get_base_request_id(
            record, self.config
        ) or self.config.request_id_for_index(index)

    def _encoded_data_length(self, record: dict[str, Any]) -> int:
        transfer_size = record.get("transferSize")
        return 0 if transfer_size is None else transfer_size

    def request_will_be_sent(
        self, record: dict[str, Any], index: int, timing: NormalizedTiming
    ) -> dict[str, Any]:
        initiator = dict(record.get("initiator") or {"type": "other"})

        return {
            "method": REQUEST_WILL_BE_SENT,
            "params": {
                "requestId": self.request_id(record, index),
                "documentURL": record.get("documentURL") or self.config.example_url,
                "request": {
                    "url": record.get("url") or self.config.example_url,
                    "method": record.get("requestMethod") or self.config.default_method,
                    # Outgoing request headers are not reconstructed.
                    "headers": {},
                    "initialPriority": record.get("priority")
                    or self.config.default_priority,
                    "isLinkPreload": record.get("isLinkPreload"),
                },
                "timestamp": timing.renderer_start_time / 1000,
                "wallTime": 0,
                "initiator": initiator,
                "type": record.get("resourceType")
                or self.config.default_resource_type,
                "frameId": record.get("frameId") or self.config.default_frame_id,
                "redirectResponse": record.get("redirectResponse"),
            },
        }

    def request_served_from_cache(
        self, record: dict[str, Any], index: int
    ) -> dict[str, Any]:
        return {
            "method": REQUEST_SERVED_FROM_CACHE,
            "params": {"requestId": self.request_id(record, index)},
        }

    def response_received(
        self, record: dict[str, Any], index: int, timing: NormalizedTiming
    ) -> dict[str, Any]:
        mime_type = record.get("mimeType")

        return {
            "method": RESPONSE_RECEIVED,
            "params": {
                "requestId": self.request_id(record, index),
                "timestamp": timing.response_received_time / 1000,
                "type": record.get("resourceType") or None,
                "response": {
                    "url": record.get("url") or self.config.example_url,
                    "status": record.get("statusCode") or self.config.default_status,
                    "headers": headers_array_to_headers_dict(
                        record.get("responseHeaders")
                    ),
                    "mimeType": mime_type
                    if isinstance(mime_type, str)
                    else self.config.default_mime_type,
                    "connectionReused": record.get("connectionReused") or False,
                    "connectionId": record.get("connectionId")
                    or self.config.default_connection_id,
                    "fromDiskCache": record.get("fromDiskCache") or False,
                    "fromServiceWorker": record.get("fetchedViaServiceWorker")
                    or False,
                    "encodedDataLength": self._encoded_data_length(record),
                    "timing": dict(timing.timing),
                    "protocol": record.get("protocol") or self.config.default_protocol,
                },
                "frameId": record.get("frameId") or self.config.default_frame_id,
            },
        }

    def data_received(self, record: dict[str, Any], index: int) -> dict[str, Any]:
        return {
            "method": DATA_RECEIVED,
            "params": {
                "requestId": self.request_id(record, index),
                "dataLength": record.get("resourceSize") or 0,
                "encodedDataLength": self._encoded_data_length(record),
            },
        }

    def loading_finished(
        self, record: dict[str, Any], index: int, timing: NormalizedTiming
    ) -> dict[str, Any]:
        return {
            "method": LOADING_FINISHED,
            "params": {
                "requestId": self.request_id(record, index),
                "timestamp": timing.end_time / 1000,
                "encodedDataLength": self._encoded_data_length(record),
            },
        }

    def loading_failed(
        self, record: dict[str, Any], index: int, timing: NormalizedTiming
    ) -> dict[str, Any]:
        return {
            "method": LOADING_FAILED,
            "params": {
                "requestId": self.request_id(record, index),
                "timestamp": timing.end_time / 1000,
                "errorText": record.get("localizedFailDescription")
                or self.config.default_fail_description,
            },
        }

    def events_for_record(
        self,
        record: dict[str, Any],
        index: int,
        timing: NormalizedTiming,
        will_be_redirected: bool = False,
    ) -> list[dict[str, Any]]:
        """
        Ordered events for one record.

        A record that is redirected away from only gets its request event; the
        continuation record owns the completion events.
        """
        events = [self.request_will_be_sent(record, index, timing)]
        if will_be_redirected:
            return events

        if record.get("fromMemoryCache"):
            events.append(self.request_served_from_cache(record, index))

        if record.get("failed"):
            events.append(self.loading_failed(record, index, timing))
            return events

        events.append(self.response_received(record, index, timing))
        events.append(self.data_received(record, index))
        events.append(self.loading_finished(record, index, timing))
        return events
