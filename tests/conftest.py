"""Shared fixtures: a mocked BMC reachable through requests-mock."""

import pytest

from bmc_redfish.client import Endpoint, RedfishHttpClient, RetryPolicy
from bmc_redfish.standard import RedfishStandard

ROOT = "/redfish/v1"


def members(*urls):
    """A Redfish collection body linking to ``urls`` (relative to the Redfish root)."""
    return {
        "Members": [{"@odata.id": f"{ROOT}/{url}"} for url in urls],
        "Members@odata.count": len(urls),
    }


def link(url):
    return {"@odata.id": f"{ROOT}/{url}"}


@pytest.fixture
def endpoint():
    return Endpoint(host="bmc.example.com", user="root", password="calvin")


@pytest.fixture
def sleeps():
    """Records every backoff sleep instead of sleeping."""
    return []


@pytest.fixture
def http(endpoint, sleeps):
    client = RedfishHttpClient(
        endpoint,
        retry=RetryPolicy(max_retries=3, backoff_factor=0.5, max_backoff=8.0, total_timeout=120.0),
        sleep=sleeps.append,
    )
    yield client
    client.session.close()


@pytest.fixture
def standard(http):
    return RedfishStandard(http, system_id="1", manager_id="bmc")


def register_boot_options(requests_mock, system_id, options, boot_order=None):
    """
    Serve a system with ``options`` (id -> (display name, device path)) in its
    boot order.
    """
    order = boot_order or list(options)
    requests_mock.get(
        f"{ROOT}/Systems/{system_id}",
        json={"Id": system_id, "Boot": {"BootOrder": order}},
    )
    for boot_id, (display_name, device_path) in options.items():
        body = {"Id": boot_id, "DisplayName": display_name}
        if device_path is not None:
            body["UefiDevicePath"] = device_path
        requests_mock.get(f"{ROOT}/Systems/{system_id}/BootOptions/{boot_id}", json=body)


def writes(requests_mock, start=0):
    """(method, path, body) of every non-GET request from ``start`` on."""
    return [
        (r.method, r.url.split("/redfish/v1/")[1], r.json() if r.body else None)
        for r in requests_mock.request_history[start:]
        if r.method != "GET"
    ]
