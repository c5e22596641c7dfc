"""Tests for VPC connection settings."""

from __future__ import annotations

from pathlib import Path

import pytest

from vpc_common.api import ConfigurationError
from vpc_provisioner.config import DEFAULT_REGION, VpcSettings


pytestmark = pytest.mark.unit_provisioner


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for name in (
        "IBMCLOUD_API_KEY",
        "VPC_REGION",
        "VPC_API_VERSION",
        "VPC_IAM_ENDPOINT",
        "VPC_SERVICE_URL",
        "VPC_REQUEST_TIMEOUT",
    ):
        monkeypatch.delenv(name, raising=False)


def test_from_env_defaults(monkeypatch):
    monkeypatch.setenv("IBMCLOUD_API_KEY", "secret-key")

    settings = VpcSettings.from_env()

    assert settings.api_key.get_secret_value() == "secret-key"
    assert settings.region == DEFAULT_REGION
    assert settings.resolved_service_url == "https://us-south.iaas.cloud.ibm.com/v1"
    assert settings.request_timeout is None
    assert "secret-key" not in repr(settings)


def test_from_env_overrides(monkeypatch):
    monkeypatch.setenv("IBMCLOUD_API_KEY", "k")
    monkeypatch.setenv("VPC_REGION", "eu-de")
    monkeypatch.setenv("VPC_REQUEST_TIMEOUT", "30")
    monkeypatch.setenv("VPC_SERVICE_URL", "https://private.eu-de.iaas.cloud.ibm.com/v1")

    settings = VpcSettings.from_env()

    assert settings.region == "eu-de"
    assert settings.request_timeout == 30
    assert settings.resolved_service_url == "https://private.eu-de.iaas.cloud.ibm.com/v1"


def test_from_env_without_api_key():
    with pytest.raises(ConfigurationError, match="Invalid VPC settings"):
        VpcSettings.from_env()


def test_from_file(tmp_path: Path):
    config = tmp_path / "vpc.yml"
    config.write_text("vpc:\n  api_key: abc\n  region: jp-tok\n")

    settings = VpcSettings.from_file(config)

    assert settings.region == "jp-tok"
    assert settings.resolved_service_url == "https://jp-tok.iaas.cloud.ibm.com/v1"


def test_from_file_missing(tmp_path: Path):
    with pytest.raises(ConfigurationError, match="not found"):
        VpcSettings.from_file(tmp_path / "absent.yml")


def test_from_file_rejects_non_mapping(tmp_path: Path):
    config = tmp_path / "vpc.yml"
    config.write_text("- just\n- a list\n")

    with pytest.raises(ConfigurationError, match="mapping"):
        VpcSettings.from_file(config)


def test_blank_region_is_rejected():
    with pytest.raises(ConfigurationError):
        VpcSettings.from_mapping({"api_key": "k", "region": "  "})
