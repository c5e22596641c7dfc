"""Connection settings for the IBM Cloud VPC API."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import BaseModel, Field, SecretStr, ValidationError, field_validator

from vpc_common.api import ConfigurationError, parse_int_env

DEFAULT_REGION = "us-south"
DEFAULT_API_VERSION = "2024-04-30"
DEFAULT_IAM_ENDPOINT = "https://iam.cloud.ibm.com"


class VpcSettings(BaseModel):
    """Credentials and endpoint selection for one VPC region."""

    api_key: SecretStr
    region: str = DEFAULT_REGION
    api_version: str = DEFAULT_API_VERSION
    iam_endpoint: str = DEFAULT_IAM_ENDPOINT
    service_url: Optional[str] = None
    request_timeout: Optional[int] = Field(default=None, gt=0)

    @field_validator("region")
    @classmethod
    def _validate_region(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("region must not be empty")
        return value

    @property
    def resolved_service_url(self) -> str:
        return self.service_url or f"https://{self.region}.iaas.cloud.ibm.com/v1"

    @classmethod
    def from_mapping(cls, data: dict[str, Any]) -> "VpcSettings":
        try:
            return cls.model_validate(data)
        except ValidationError as exc:
            raise ConfigurationError(
                "Invalid VPC settings", context={"errors": exc.errors()}, cause=exc
            ) from exc

    @classmethod
    def from_env(cls) -> "VpcSettings":
        """Load settings from ``IBMCLOUD_API_KEY`` and ``VPC_*`` variables."""
        data: dict[str, Any] = {"api_key": os.environ.get("IBMCLOUD_API_KEY")}
        for env_name, key in (
            ("VPC_REGION", "region"),
            ("VPC_API_VERSION", "api_version"),
            ("VPC_IAM_ENDPOINT", "iam_endpoint"),
            ("VPC_SERVICE_URL", "service_url"),
        ):
            value = os.environ.get(env_name)
            if value:
                data[key] = value
        timeout = parse_int_env(os.environ.get("VPC_REQUEST_TIMEOUT"))
        if timeout is not None:
            data["request_timeout"] = timeout
        return cls.from_mapping(data)

    @classmethod
    def from_file(cls, config_path: Path) -> "VpcSettings":
        """Load settings from the ``vpc`` section of a YAML file."""
        if not config_path.exists():
            raise ConfigurationError(
                f"Configuration file not found: {config_path}",
                context={"path": config_path},
            )
        data = yaml.safe_load(config_path.read_text()) or {}
        if not isinstance(data, dict):
            raise ConfigurationError("Config file must contain a mapping at the top level.")
        section = data.get("vpc", {}) or {}
        if not isinstance(section, dict):
            raise ConfigurationError("Config section 'vpc' must be a mapping.")
        return cls.from_mapping(section)
