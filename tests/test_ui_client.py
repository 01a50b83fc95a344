import json

import httpx
import pytest

from apps.ui.client import PortalAPIError, PortalClient


def _client(handler, token=None):
    return PortalClient(base_url="http://api.test", token=token,
                        transport=httpx.MockTransport(handler))


def test_list_students_sends_filters_and_token():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["params"] = dict(request.url.params)
        seen["auth"] = request.headers.get("authorization")
        return httpx.Response(200, json={"success": True, "count": 1, "data": [{"_id": "1"}]})

    with _client(handler, token="tok") as api:
        rows = api.list_students(status="Pending", search=" alice ", show_disabled=True)

    assert rows == [{"_id": "1"}]
    assert seen["params"] == {"status": "Pending", "search": "alice", "showDisabled": "true"}
    assert seen["auth"] == "Bearer tok"


def test_all_status_is_not_sent():
    def handler(request: httpx.Request) -> httpx.Response:
        assert "status" not in request.url.params
        return httpx.Response(200, json={"success": True, "count": 0, "data": []})

    with _client(handler) as api:
        assert api.list_students() == []


def test_update_status_patches_the_record():
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.method == "PATCH"
        assert request.url.path == "/students/abc"
        assert json.loads(request.content) == {"status": "Rejected"}
        return httpx.Response(200, json={"success": True, "data": {"status": "Rejected"}})

    with _client(handler) as api:
        assert api.update_status("abc", "Rejected") == {"status": "Rejected"}


def test_envelope_message_is_surfaced():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(409, json={"success": False, "message": "NIC already registered"})

    with _client(handler) as api, pytest.raises(PortalAPIError) as exc:
        api.register_student({"nic": "N1"})
    assert exc.value.message == "NIC already registered"
    assert exc.value.status_code == 409


def test_non_json_error_falls_back_to_status():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(502, text="bad gateway")

    with _client(handler) as api, pytest.raises(PortalAPIError, match="HTTP 502"):
        api.list_categories()


def test_transport_failure_is_wrapped():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("refused", request=request)

    with _client(handler) as api, pytest.raises(PortalAPIError, match="unreachable"):
        api.verify()
