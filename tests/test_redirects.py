import pytest

from netlog_synth.errors import MalformedFixtureError
from netlog_synth.redirects import RedirectGraph


def test_graph_edges():
    records = [
        {"requestId": "1"},
        {"requestId": "1:redirect"},
        {"requestId": "1:redirect:redirect"},
        {"requestId": "2"},
        {"url": "https://example.com/no-id"},
    ]

    graph = RedirectGraph.from_records(records)

    assert graph.continuations == {"1": "1:redirect", "1:redirect": "1:redirect:redirect"}
    assert graph.will_be_redirected(records[0])
    assert graph.will_be_redirected(records[1])
    assert not graph.will_be_redirected(records[2])
    assert not graph.will_be_redirected(records[3])
    assert not graph.will_be_redirected(records[4])


def test_original_id():
    graph = RedirectGraph.from_records([])

    assert graph.original_id({"requestId": "1:redirect:redirect"}) == "1:redirect"
    assert graph.original_id({"requestId": "1"}) is None
    assert graph.original_id({}) is None


def test_non_redirect_passes_through_unchanged():
    record = {"requestId": "1", "url": "https://example.com/"}
    graph = RedirectGraph.from_records([record])

    assert graph.add_redirect_response_if_needed(record) is record


def test_redirect_response_defaults_to_302():
    original = {"requestId": "1", "url": "http://example.com/"}
    continuation = {"requestId": "1:redirect", "url": "https://example.com/"}
    graph = RedirectGraph.from_records([original, continuation])

    resolved = graph.add_redirect_response_if_needed(continuation)

    assert resolved is not continuation
    assert "redirectResponse" not in continuation
    assert resolved["url"] == "https://example.com/"
    assert resolved["redirectResponseTimestamp"] == 3000
    assert resolved["redirectResponse"]["status"] == 302
    assert resolved["redirectResponse"]["url"] == "http://example.com/"
    assert resolved["redirectResponse"]["timing"] == {
        "requestTime": 1.0,
        "receiveHeadersEnd": 1000,
    }


def test_redirect_response_uses_original_status_and_end():
    original = {"requestId": "1", "statusCode": 301, "endTime": 1500}
    continuation = {"requestId": "1:redirect"}
    graph = RedirectGraph.from_records([original, continuation])

    resolved = graph.add_redirect_response_if_needed(continuation)

    assert resolved["redirectResponse"]["status"] == 301
    assert resolved["redirectResponseTimestamp"] == 1500


def test_redirect_without_original():
    record = {"requestId": "2:redirect"}
    graph = RedirectGraph.from_records([record])

    with pytest.raises(MalformedFixtureError, match="2:redirect has no original request"):
        graph.add_redirect_response_if_needed(record)
