"""IBM Cloud VPC provisioning provider."""

from vpc_common.api import configure_logging as _configure_logging

_configure_logging()

from vpc_provisioner.api import (  # noqa: F401,E402
    ProvisionError,
    ProvisionStep,
    ProvisionWorkflow,
    VpcProvision,
    VpcSettings,
    connect,
)

__all__ = [
    "ProvisionError",
    "ProvisionStep",
    "ProvisionWorkflow",
    "VpcProvision",
    "VpcSettings",
    "connect",
]
