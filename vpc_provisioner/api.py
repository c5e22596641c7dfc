"""Public provisioning API surface."""

from vpc_common.api import (
    DecodingError,
    ProviderCommunicationError,
    ProvisionError,
    ResolutionError,
)
from vpc_provisioner.config import VpcSettings
from vpc_provisioner.engine.cloning import (
    CompletionPoller,
    PayloadBuilder,
    ProvisionSubmitter,
)
from vpc_provisioner.engine.options import OptionsResolver
from vpc_provisioner.engine.service import VpcProvision
from vpc_provisioner.engine.state import (
    PreProvisionSequencer,
    ProvisionStep,
    next_step,
)
from vpc_provisioner.models.types import (
    InstanceReference,
    OptionStore,
    ProvisionRequest,
    ProvisionStatus,
)
from vpc_provisioner.providers.sdk import SdkGateway, VpcSdkGateway, connect
from vpc_provisioner.workflow.dropdowns import ListingResult, ProvisionWorkflow

__all__ = [
    "CompletionPoller",
    "DecodingError",
    "InstanceReference",
    "ListingResult",
    "OptionStore",
    "OptionsResolver",
    "PayloadBuilder",
    "PreProvisionSequencer",
    "ProviderCommunicationError",
    "ProvisionError",
    "ProvisionRequest",
    "ProvisionStatus",
    "ProvisionStep",
    "ProvisionSubmitter",
    "ProvisionWorkflow",
    "ResolutionError",
    "SdkGateway",
    "VpcProvision",
    "VpcSdkGateway",
    "VpcSettings",
    "connect",
    "next_step",
]
