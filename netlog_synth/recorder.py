"""
Rebuild network requests from a devtools log.
"""

import logging
from typing import Any

from netlog_synth.config import SynthesisConfig
from netlog_synth.events import (
    DATA_RECEIVED,
    LOADING_FAILED,
    LOADING_FINISHED,
    REQUEST_SERVED_FROM_CACHE,
    REQUEST_WILL_BE_SENT,
    RESPONSE_RECEIVED,
)
from netlog_synth.network_request import NetworkRequest


def ms_from_seconds(seconds: float) -> float:
    """Protocol timestamps are seconds; records keep ms."""
    return round(seconds * 1000, 6)


def headers_dict_to_headers_array(headers: dict[str, str] | None) -> list[dict[str, str]]:
    return [{"name": name, "value": value} for name, value in (headers or {}).items()]


class NetworkRecorder:
    """Records network requests from ``Network.*`` protocol events"""

    def __init__(self, config: SynthesisConfig | None = None):
        self.config = config or SynthesisConfig()
        self.logger = logging.getLogger(__name__)
        self.records: list[NetworkRequest] = []
        # Protocol requestId -> latest hop of that request
        self.in_flight: dict[str, NetworkRequest] = {}
        self.handlers = {
            REQUEST_WILL_BE_SENT: self.on_request_will_be_sent,
            REQUEST_SERVED_FROM_CACHE: self.on_request_served_from_cache,
            RESPONSE_RECEIVED: self.on_response_received,
            DATA_RECEIVED: self.on_data_received,
            LOADING_FINISHED: self.on_loading_finished,
            LOADING_FAILED: self.on_loading_failed,
        }

    @classmethod
    def records_from_log(
        cls, devtools_log: list[dict[str, Any]], config: SynthesisConfig | None = None
    ) -> list[NetworkRequest]:
        """Decode a whole devtools log into requests, in order of first event."""
        recorder = cls(config)
        for event in devtools_log:
            recorder.dispatch(event)
        return recorder.records

    def dispatch(self, event: dict[str, Any]) -> None:
        method = event.get("method")
        handler = self.handlers.get(method)
        if handler is None:
            self.logger.debug(f"Ignoring unsupported event {method}")
            return
        handler(event.get("params", {}))

    def _lookup(self, params: dict[str, Any]) -> NetworkRequest | None:
        request_id = params.get("requestId")
        request = self.in_flight.get(request_id)
        if request is None:
            self.logger.warning(f"Event for unknown request {request_id}, skipping")
        return request

    def _apply_response(
        self,
        request: NetworkRequest,
        response: dict[str, Any],
        timestamp: float | None = None,
    ) -> None:
        request.url = response.get("url", request.url)
        request.status_code = response.get("status", request.status_code)
        request.response_headers = headers_dict_to_headers_array(
            response.get("headers")
        )
        request.mime_type = response.get("mimeType", request.mime_type)
        request.connection_reused = response.get("connectionReused", False)
        request.connection_id = response.get("connectionId", request.connection_id)
        request.from_disk_cache = response.get("fromDiskCache", False)
        request.fetched_via_service_worker = response.get("fromServiceWorker", False)
        request.transfer_size = response.get("encodedDataLength", 0)
        request.protocol = response.get("protocol", request.protocol)

        timing = response.get("timing")
        if timing is not None:
            request.timing = dict(timing)
            if timing.get("requestTime") is not None:
                request.start_time = round(timing["requestTime"] * 1000, 3)

        if timestamp is not None:
            request.response_received_time = ms_from_seconds(timestamp)
        elif timing and timing.get("receiveHeadersEnd") is not None:
            request.response_received_time = (
                request.start_time + timing["receiveHeadersEnd"]
            )

    def on_request_will_be_sent(self, params: dict[str, Any]) -> None:
        request_id = params.get("requestId")
        timestamp = ms_from_seconds(params.get("timestamp", 0))
        redirect_response = params.get("redirectResponse")
        previous = self.in_flight.get(request_id)

        record_id = request_id
        redirect_source = None
        if redirect_response and previous is not None:
            # The previous hop ends when the redirected request is sent.
            self._apply_response(previous, redirect_response)
            previous.end_time = timestamp
            previous.finished = True
            record_id = previous.request_id + self.config.redirect_suffix
            previous.redirect_destination = record_id
            redirect_source = previous.request_id

        request_data = params.get("request", {})
        request = NetworkRequest(
            request_id=record_id,
            url=request_data.get("url", ""),
            document_url=params.get("documentURL", ""),
            request_method=request_data.get("method", "GET"),
            priority=request_data.get("initialPriority"),
            is_link_preload=request_data.get("isLinkPreload"),
            resource_type=params.get("type"),
            frame_id=params.get("frameId"),
            initiator=dict(params.get("initiator") or {"type": "other"}),
            renderer_start_time=timestamp,
            start_time=timestamp,
            redirect_source=redirect_source,
        )
        self.records.append(request)
        self.in_flight[request_id] = request

    def on_request_served_from_cache(self, params: dict[str, Any]) -> None:
        request = self._lookup(params)
        if request is not None:
            request.from_memory_cache = True

    def on_response_received(self, params: dict[str, Any]) -> None:
        request = self._lookup(params)
        if request is None:
            return
        if params.get("type"):
            request.resource_type = params["type"]
        self._apply_response(request, params.get("response", {}), params.get("timestamp"))

    def on_data_received(self, params: dict[str, Any]) -> None:
        request = self._lookup(params)
        if request is None:
            return
        request.resource_size += params.get("dataLength", 0)
        encoded_data_length = params.get("encodedDataLength", -1)
        if encoded_data_length != -1:
            request.transfer_size += encoded_data_length

    def on_loading_finished(self, params: dict[str, Any]) -> None:
        request = self._lookup(params)
        if request is None:
            return
        request.end_time = ms_from_seconds(params.get("timestamp", 0))
        request.transfer_size = params.get("encodedDataLength", request.transfer_size)
        request.finished = True

    def on_loading_failed(self, params: dict[str, Any]) -> None:
        request = self._lookup(params)
        if request is None:
            return
        request.end_time = ms_from_seconds(params.get("timestamp", 0))
        request.failed = True
        request.finished = True
        request.localized_fail_description = params.get("errorText", "")
