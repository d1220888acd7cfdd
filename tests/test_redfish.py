"""Tests for vendor detection, backend selection and the Redfish facade."""

from unittest.mock import Mock

import pytest

from bmc_redfish.client import Endpoint, RedfishClientPool
from bmc_redfish.common import Boot
from bmc_redfish.dell import DellBmc
from bmc_redfish.errors import NotFoundError, NotSupportedError
from bmc_redfish.lenovo import LenovoBmc
from bmc_redfish.model.manager import Manager
from bmc_redfish.model.service_root import ServiceRoot
from bmc_redfish.nvidia import NvidiaBmc
from bmc_redfish.nvidia_gbx00 import Gbx00Bmc
from bmc_redfish.redfish import Redfish, Vendor, backend_for, detect_vendor
from bmc_redfish.standard import RedfishStandard

from conftest import ROOT, members


def manager(**fields):
    return Manager.model_validate({"Id": "bmc", **fields})


@pytest.mark.parametrize(
    "root,mgr,vendor",
    [
        ({}, {"Manufacturer": "Dell Inc."}, Vendor.Dell),
        ({}, {"Manufacturer": "Lenovo"}, Vendor.Lenovo),
        ({}, {"Manufacturer": "NVIDIA"}, Vendor.Nvidia),
        ({}, {"Manufacturer": "NVIDIA", "Model": "GB200 NVL"}, Vendor.NvidiaGbx00),
        ({}, {"Model": "P3809 Bianca"}, Vendor.NvidiaGbx00),
        ({"Vendor": "Dell"}, {}, Vendor.Dell),
        ({"Product": "Lenovo XClarity Controller"}, {}, Vendor.Lenovo),
        ({"Oem": {"Lenovo": {}}}, {}, Vendor.Lenovo),
        ({"Oem": {"Dell": {}}}, {"Manufacturer": "Contoso"}, Vendor.Dell),
        ({"Vendor": "AMI"}, {"Manufacturer": "Contoso"}, Vendor.Standard),
        ({}, {}, Vendor.Standard),
    ],
)
def test_detect_vendor(root, mgr, vendor):
    assert detect_vendor(ServiceRoot.model_validate(root), manager(**mgr)) is vendor


def test_manager_manufacturer_wins_over_service_root():
    root = ServiceRoot.model_validate({"Vendor": "Lenovo"})
    assert detect_vendor(root, manager(Manufacturer="Dell Inc.")) is Vendor.Dell


@pytest.mark.parametrize(
    "vendor,cls",
    [
        (Vendor.Dell, DellBmc),
        (Vendor.Lenovo, LenovoBmc),
        (Vendor.Nvidia, NvidiaBmc),
        (Vendor.NvidiaGbx00, Gbx00Bmc),
    ],
)
def test_backend_for_vendor(standard, vendor, cls):
    backend = backend_for(vendor, standard)
    assert isinstance(backend, cls)
    assert backend.s is standard


def test_backend_for_standard(standard):
    assert backend_for(Vendor.Standard, standard) is standard


def test_vendor_backend_forwards_unknown_operations(standard):
    backend = DellBmc(standard)
    assert backend.get_systems == standard.get_systems
    with pytest.raises(AttributeError):
        backend.no_such_operation


def test_facade_forwards_arguments_and_results():
    backend = Mock()
    backend.get_ports.return_value = ["Port0"]
    redfish = Redfish(backend)

    assert redfish.get_ports("Chassis_0", "NIC_0") == ["Port0"]
    backend.get_ports.assert_called_once_with("Chassis_0", "NIC_0")

    redfish.boot_first(Boot.Pxe)
    backend.boot_first.assert_called_once_with(Boot.Pxe)


def test_facade_does_not_wrap_errors():
    backend = Mock()
    error = NotSupportedError("GB200 doesn't have Systems EthernetInterface")
    backend.get_system_ethernet_interface.side_effect = error
    redfish = Redfish(backend)

    with pytest.raises(NotSupportedError) as exc_info:
        redfish.get_system_ethernet_interface("1")

    assert exc_info.value is error


def test_facade_ids():
    backend = Mock(system_id="System.Embedded.1", manager_id="iDRAC.Embedded.1")
    redfish = Redfish(backend)
    assert redfish.system_id == "System.Embedded.1"
    assert redfish.manager_id == "iDRAC.Embedded.1"


def serve_bmc(requests_mock, manager_body, system_id="1", manager_id="bmc", root=None):
    requests_mock.get(f"{ROOT}/", json=root or {"Id": "RootService", "RedfishVersion": "1.15.0"})
    requests_mock.get(f"{ROOT}/Systems", json=members(f"Systems/{system_id}"))
    requests_mock.get(f"{ROOT}/Managers", json=members(f"Managers/{manager_id}"))
    requests_mock.get(f"{ROOT}/Managers/{manager_id}", json={"Id": manager_id, **manager_body})


def test_create_client_detects_dell(requests_mock):
    serve_bmc(requests_mock, {"Manufacturer": "Dell Inc."}, "System.Embedded.1", "iDRAC.Embedded.1")

    with RedfishClientPool() as pool:
        redfish = pool.create_client(Endpoint(host="10.0.0.5", user="root", password="calvin"))

    assert isinstance(redfish.backend, DellBmc)
    assert redfish.system_id == "System.Embedded.1"
    assert redfish.manager_id == "iDRAC.Embedded.1"


def test_create_client_detects_gb200(requests_mock):
    serve_bmc(requests_mock, {"Manufacturer": "NVIDIA", "Model": "GB200 NVL"}, "System_0", "BMC_0")

    with RedfishClientPool() as pool:
        redfish = pool.create_client(Endpoint(host="10.0.0.6", user="root", password="0penBmc"))

    assert isinstance(redfish.backend, Gbx00Bmc)
    assert redfish.system_id == "System_0"


def test_create_standard_client_skips_detection(requests_mock):
    serve_bmc(requests_mock, {"Manufacturer": "Dell Inc."})
    with RedfishClientPool() as pool:
        redfish = pool.create_standard_client(Endpoint(host="10.0.0.7"))
    assert isinstance(redfish.backend, RedfishStandard)
    assert not any(r.path == "/redfish/v1/managers/bmc" for r in requests_mock.request_history)


def test_create_client_without_systems(requests_mock):
    requests_mock.get(f"{ROOT}/Systems", json=members())
    requests_mock.get(f"{ROOT}/Managers", json=members("Managers/bmc"))

    with RedfishClientPool() as pool:
        with pytest.raises(NotFoundError):
            pool.create_client(Endpoint(host="10.0.0.8"))
