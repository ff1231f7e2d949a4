"""
Data class for a network request rebuilt from a devtools log.
"""

from dataclasses import dataclass, field, fields
from typing import Any


# Attribute name -> field name used in fixtures and the devtools protocol.
WIRE_NAMES = {
    "request_id": "requestId",
    "url": "url",
    "document_url": "documentURL",
    "request_method": "requestMethod",
    "resource_type": "resourceType",
    "priority": "priority",
    "is_link_preload": "isLinkPreload",
    "frame_id": "frameId",
    "initiator": "initiator",
    "status_code": "statusCode",
    "response_headers": "responseHeaders",
    "mime_type": "mimeType",
    "transfer_size": "transferSize",
    "resource_size": "resourceSize",
    "connection_reused": "connectionReused",
    "connection_id": "connectionId",
    "from_disk_cache": "fromDiskCache",
    "fetched_via_service_worker": "fetchedViaServiceWorker",
    "from_memory_cache": "fromMemoryCache",
    "protocol": "protocol",
    "timing": "timing",
    "renderer_start_time": "rendererStartTime",
    "start_time": "startTime",
    "response_received_time": "responseReceivedTime",
    "end_time": "endTime",
    "finished": "finished",
    "failed": "failed",
    "localized_fail_description": "localizedFailDescription",
    "redirect_source": "redirectSource",
    "redirect_destination": "redirectDestination",
}


@dataclass
class NetworkRequest:
    """A single network request as seen through its protocol events"""

    request_id: str
    url: str = ""
    document_url: str = ""
    request_method: str = "GET"
    resource_type: str | None = None
    priority: str | None = None
    is_link_preload: bool | None = None
    frame_id: str | None = None
    initiator: dict[str, Any] = field(default_factory=lambda: {"type": "other"})
    status_code: int = -1
    response_headers: list[dict[str, str]] = field(default_factory=list)
    mime_type: str = ""
    transfer_size: int = 0
    resource_size: int = 0
    connection_reused: bool = False
    connection_id: int = 0
    from_disk_cache: bool = False
    fetched_via_service_worker: bool = False
    from_memory_cache: bool = False
    protocol: str = ""
    timing: dict[str, Any] | None = None
    # Absolute times in ms; -1 until known.
    renderer_start_time: float = -1
    start_time: float = -1
    response_received_time: float = -1
    end_time: float = -1
    finished: bool = False
    failed: bool = False
    localized_fail_description: str = ""
    # requestIds of the neighbouring hops of a redirect chain
    redirect_source: str | None = None
    redirect_destination: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Return the request keyed by fixture field names."""
        return {WIRE_NAMES[f.name]: getattr(self, f.name) for f in fields(self)}
