"""Tests for RedfishHttpClient and RedfishClientPool."""

import pytest
import requests

from bmc_redfish.client import Endpoint, RedfishClientPool, RedfishHttpClient, RetryPolicy
from bmc_redfish.errors import (
    AuthenticationError,
    JsonDeserializeError,
    NotFoundError,
    RemoteError,
    TransportError,
)
from bmc_redfish.model.system import ComputerSystem

from conftest import ROOT

SYSTEM = {"Id": "1", "PowerState": "On"}


def test_endpoint_base_url():
    endpoint = Endpoint(host="192.168.1.100", port=8443)
    assert endpoint.base_url == "https://192.168.1.100:8443/redfish/v1"


def test_endpoint_hides_password():
    endpoint = Endpoint(host="bmc", user="root", password="calvin")
    assert "calvin" not in repr(endpoint)


def test_url_strips_redfish_prefix(http):
    expected = "https://bmc.example.com:443/redfish/v1/Systems/1"
    assert http.url("Systems/1") == expected
    assert http.url("/redfish/v1/Systems/1") == expected
    assert http.url(" https://10.0.0.1/redfish/v1/Systems/1/ ") == expected


def test_client_options():
    endpoint = Endpoint(host="127.0.0.1", port=54321, verify_tls=False, host_header="bmc.example.com")
    with RedfishHttpClient(endpoint) as client:
        assert client.session.verify is False
        assert client.session.headers["Host"] == "bmc.example.com"


def test_get_decodes_model_with_basic_auth(http, requests_mock):
    requests_mock.get(f"{ROOT}/Systems/1", json=SYSTEM)

    status, system = http.get("Systems/1", ComputerSystem)

    assert status == 200
    assert isinstance(system, ComputerSystem)
    assert system.power_state.value == "On"
    assert requests_mock.last_request.headers["Authorization"].startswith("Basic ")


def test_get_without_model_returns_dict(http, requests_mock):
    requests_mock.get(f"{ROOT}/Systems/1", json=SYSTEM)
    _, body = http.get("Systems/1")
    assert body == SYSTEM


def test_session_created_on_401(http, requests_mock):
    requests_mock.get(f"{ROOT}/Systems/1", [{"status_code": 401}, {"json": SYSTEM}])
    sessions = requests_mock.post(
        f"{ROOT}/SessionService/Sessions",
        status_code=201,
        headers={"X-Auth-Token": "tok-1", "Location": f"{ROOT}/SessionService/Sessions/42"},
        json={},
    )

    _, system = http.get("Systems/1", ComputerSystem)

    assert system.id == "1"
    assert sessions.call_count == 1
    assert sessions.last_request.json() == {"UserName": "root", "Password": "calvin"}
    # root:calvin
    assert sessions.last_request.headers["Authorization"] == "Basic cm9vdDpjYWx2aW4="
    retried = requests_mock.request_history[-1]
    assert retried.headers["X-Auth-Token"] == "tok-1"
    assert "Authorization" not in retried.headers

    # Later requests reuse the token
    requests_mock.get(f"{ROOT}/Managers", json={"Members": []})
    http.get("Managers")
    assert requests_mock.last_request.headers["X-Auth-Token"] == "tok-1"


def test_second_401_is_authentication_error(http, requests_mock):
    get = requests_mock.get(f"{ROOT}/Systems/1", status_code=401)
    requests_mock.post(f"{ROOT}/SessionService/Sessions", status_code=201, headers={"X-Auth-Token": "tok"})

    with pytest.raises(AuthenticationError) as exc_info:
        http.get("Systems/1")

    assert exc_info.value.status_code == 401
    assert get.call_count == 2


def test_403_is_not_retried(http, requests_mock):
    get = requests_mock.get(f"{ROOT}/Systems/1", status_code=403)
    sessions = requests_mock.post(f"{ROOT}/SessionService/Sessions", status_code=201)

    with pytest.raises(AuthenticationError):
        http.get("Systems/1")

    assert get.call_count == 1
    assert sessions.call_count == 0


def test_rejected_session_is_authentication_error(http, requests_mock):
    requests_mock.get(f"{ROOT}/Systems/1", status_code=401)
    requests_mock.post(f"{ROOT}/SessionService/Sessions", status_code=401)

    with pytest.raises(AuthenticationError):
        http.get("Systems/1")


def test_sessions_disabled(requests_mock):
    endpoint = Endpoint(host="bmc.example.com", user="root", password="calvin", use_sessions=False)
    client = RedfishHttpClient(endpoint)
    requests_mock.get(f"{ROOT}/Systems/1", status_code=401)
    sessions = requests_mock.post(f"{ROOT}/SessionService/Sessions", status_code=201)

    with pytest.raises(AuthenticationError):
        client.get("Systems/1")

    assert sessions.call_count == 0


def test_close_deletes_session(http, requests_mock):
    requests_mock.get(f"{ROOT}/Systems/1", [{"status_code": 401}, {"json": SYSTEM}])
    requests_mock.post(
        f"{ROOT}/SessionService/Sessions",
        status_code=201,
        headers={"X-Auth-Token": "tok", "Location": f"{ROOT}/SessionService/Sessions/42"},
    )
    delete = requests_mock.delete(f"{ROOT}/SessionService/Sessions/42", status_code=204)

    http.get("Systems/1")
    http.close()

    assert delete.call_count == 1
    assert delete.last_request.headers["X-Auth-Token"] == "tok"


def test_close_without_session_sends_nothing(http, requests_mock):
    http.close()
    assert requests_mock.call_count == 0


def test_get_retries_server_errors(http, requests_mock, sleeps):
    get = requests_mock.get(f"{ROOT}/Systems/1", [{"status_code": 503}, {"status_code": 502}, {"json": SYSTEM}])

    _, system = http.get("Systems/1", ComputerSystem)

    assert system.id == "1"
    assert get.call_count == 3
    assert sleeps == [0.5, 1.0]


def test_get_gives_up_after_max_retries(http, requests_mock, sleeps):
    get = requests_mock.get(f"{ROOT}/Systems/1", status_code=500)

    with pytest.raises(RemoteError) as exc_info:
        http.get("Systems/1")

    assert exc_info.value.status_code == 500
    assert get.call_count == 4
    assert sleeps == [0.5, 1.0, 2.0]


def test_post_is_not_retried_on_server_error(http, requests_mock, sleeps):
    post = requests_mock.post(f"{ROOT}/Systems/1/Actions/ComputerSystem.Reset", status_code=500)

    with pytest.raises(RemoteError):
        http.post("Systems/1/Actions/ComputerSystem.Reset", {"ResetType": "On"})

    assert post.call_count == 1
    assert sleeps == []


def test_patch_is_sent_once_on_server_error(http, requests_mock, sleeps):
    patch = requests_mock.patch(f"{ROOT}/Systems/1", status_code=503)

    with pytest.raises(RemoteError) as exc_info:
        http.patch("Systems/1", {"AssetTag": "rack-12"})

    assert exc_info.value.status_code == 503
    assert patch.call_count == 1
    assert sleeps == []


def test_delete_is_sent_once_on_server_error(http, requests_mock, sleeps):
    delete = requests_mock.delete(f"{ROOT}/AccountService/Accounts/3", status_code=503)

    with pytest.raises(RemoteError) as exc_info:
        http.delete("AccountService/Accounts/3")

    assert exc_info.value.status_code == 503
    assert delete.call_count == 1
    assert sleeps == []


def test_post_is_retried_on_transport_error(http, requests_mock, sleeps):
    post = requests_mock.post(
        f"{ROOT}/Systems/1/Actions/ComputerSystem.Reset",
        [{"exc": requests.exceptions.ConnectionError}, {"status_code": 204}],
    )

    status, body = http.post("Systems/1/Actions/ComputerSystem.Reset", {"ResetType": "On"})

    assert status == 204
    assert body is None
    assert post.call_count == 2
    assert post.last_request.json() == {"ResetType": "On"}
    assert sleeps == [0.5]


def test_transport_error_after_retries(http, requests_mock):
    requests_mock.get(f"{ROOT}/Systems/1", exc=requests.exceptions.ConnectTimeout)

    with pytest.raises(TransportError) as exc_info:
        http.get("Systems/1")

    assert isinstance(exc_info.value.source, requests.exceptions.ConnectTimeout)


def test_retry_stops_at_deadline(endpoint, requests_mock):
    times = iter([0.0, 121.0])
    client = RedfishHttpClient(endpoint, sleep=lambda s: None, clock=lambda: next(times))
    get = requests_mock.get(f"{ROOT}/Systems/1", status_code=503)

    with pytest.raises(RemoteError):
        client.get("Systems/1")

    assert get.call_count == 1


def test_backoff_is_capped():
    policy = RetryPolicy(backoff_factor=0.5, max_backoff=8.0)
    assert [policy.backoff(n) for n in (1, 2, 3, 4, 5, 10)] == [0.5, 1.0, 2.0, 4.0, 8.0, 8.0]


def test_404_is_not_found(http, requests_mock):
    requests_mock.get(f"{ROOT}/Chassis/Missing", status_code=404)
    with pytest.raises(NotFoundError):
        http.get("Chassis/Missing")


def test_remote_error_keeps_redfish_error(http, requests_mock):
    body = {
        "error": {
            "code": "Base.1.8.GeneralError",
            "message": "A general error has occurred.",
            "@Message.ExtendedInfo": [
                {"MessageId": "Base.1.8.PropertyValueNotInList", "Message": "The value Foo is not allowed."}
            ],
        }
    }
    requests_mock.patch(f"{ROOT}/Systems/1", status_code=400, json=body)

    with pytest.raises(RemoteError) as exc_info:
        http.patch("Systems/1", {"Boot": {"BootSourceOverrideTarget": "Foo"}})

    error = exc_info.value
    assert error.status_code == 400
    assert error.redfish_error.error.code == "Base.1.8.GeneralError"
    assert error.messages == ["The value Foo is not allowed."]
    assert "A general error has occurred." in str(error)


def test_undecodable_body(http, requests_mock):
    requests_mock.get(f"{ROOT}/Systems/1", text="<html>oops</html>")
    with pytest.raises(JsonDeserializeError) as exc_info:
        http.get("Systems/1", ComputerSystem)
    assert exc_info.value.body == "<html>oops</html>"


def test_schema_mismatch(http, requests_mock):
    requests_mock.get(f"{ROOT}/Systems/1", json={"PowerState": "Sideways", "Id": "1"})
    with pytest.raises(JsonDeserializeError):
        http.get("Systems/1", ComputerSystem)


def test_post_with_location(http, requests_mock):
    requests_mock.post(
        f"{ROOT}/Managers/bmc/Jobs",
        status_code=202,
        headers={"Location": f"{ROOT}/Managers/bmc/Jobs/JID_1"},
    )

    status, location, body = http.post_with_location("Managers/bmc/Jobs", {"TargetSettingsURI": "x"})

    assert status == 202
    assert location == f"{ROOT}/Managers/bmc/Jobs/JID_1"
    assert body is None


def test_multipart_update(http, requests_mock, tmp_path):
    image = tmp_path / "bmc.fwpkg"
    image.write_bytes(b"\x00firmware\xff")
    push = requests_mock.post(
        f"{ROOT}/UpdateService/upload",
        status_code=202,
        json={"Id": "7", "TaskState": "Running"},
        headers={"Location": f"{ROOT}/TaskService/Tasks/7"},
    )

    with open(image, "rb") as f:
        status, location, body = http.multipart_update(
            str(image), f, '{"Targets": []}', "/redfish/v1/UpdateService/upload", True, 600
        )

    assert status == 202
    assert location == f"{ROOT}/TaskService/Tasks/7"
    assert '"TaskState": "Running"' in body or '"TaskState":"Running"' in body
    request = push.last_request
    assert request.headers["Content-Type"].startswith("multipart/form-data")
    assert b'name="UpdateParameters"' in request.body
    assert b'name="UpdateFile"; filename="bmc.fwpkg"' in request.body
    assert b"\x00firmware\xff" in request.body
    assert b'{"Targets": []}' in request.body


def test_pool_shares_client_per_endpoint():
    pool = RedfishClientPool(max_in_flight=2)
    a = Endpoint(host="10.0.0.1", user="root", password="x")
    b = Endpoint(host="10.0.0.2", user="root", password="x")

    assert pool.client_for(a) is pool.client_for(Endpoint(host="10.0.0.1", user="root", password="x"))
    assert pool.client_for(a) is not pool.client_for(b)
    pool.close()
