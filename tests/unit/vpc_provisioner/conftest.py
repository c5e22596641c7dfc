"""Fixtures shared by the provisioner unit tests."""

from __future__ import annotations

from typing import Any, Callable, Dict, List
from unittest.mock import MagicMock

import pytest

from tests.helpers.fakes import FakeCatalog, FakeEms, FakeSource, FakeTemplate
from vpc_provisioner.providers.sdk import SdkGateway


@pytest.fixture
def gateway() -> MagicMock:
    return MagicMock(spec=SdkGateway)


@pytest.fixture
def template() -> FakeTemplate:
    return FakeTemplate(id=42, name="ibm-ubuntu-22-04", ems_ref="r006-image-0001")


@pytest.fixture
def ems(gateway: MagicMock) -> FakeEms:
    return FakeEms(gateway=gateway)


@pytest.fixture
def source(ems: FakeEms) -> FakeSource:
    return FakeSource(ext_management_system=ems)


@pytest.fixture
def catalog(template: FakeTemplate) -> FakeCatalog:
    return FakeCatalog(template)


@pytest.fixture
def options() -> Dict[str, Any]:
    return {
        "vm_target_name": "web-01",
        "guest_access_key_pair": ["r006-key-0001", "deploy-key"],
        "src_vm_id": [42, "ibm-ubuntu-22-04"],
        "placement_availability_zone": [0, "us-south-1"],
        "sys_type": [3, "bx2-2x8"],
        "cloud_subnet": ["0717-subnet-0001", "web-subnet"],
        "storage_type": [1, "general-purpose"],
    }


@pytest.fixture
def signals() -> List[str]:
    return []


@pytest.fixture
def record_signal(signals: List[str]) -> Callable[[str], None]:
    return signals.append
