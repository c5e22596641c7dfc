"""Host-facing provision task for IBM Cloud VPC instances."""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Mapping, Optional, Tuple

from vpc_common.api import ResolutionError
from vpc_provisioner.engine.cloning import (
    CompletionPoller,
    PayloadBuilder,
    ProvisionSubmitter,
)
from vpc_provisioner.engine.options import OptionsResolver
from vpc_provisioner.engine.state import PreProvisionSequencer, ProvisionStep
from vpc_provisioner.models.host import SourceTemplate, TemplateCatalog
from vpc_provisioner.models.types import InstanceReference, ProvisionRequest
from vpc_provisioner.providers.sdk import SdkGateway

logger = logging.getLogger(__name__)


class VpcProvision:
    """Implements the callbacks the host state machine calls during provisioning.

    The host owns sequencing, retries and the polling cadence; this object
    only answers one callback at a time. ``signal`` receives the name of the
    next step the host should run.
    """

    def __init__(
        self,
        options: Mapping[str, Any],
        source: SourceTemplate,
        templates: TemplateCatalog,
        signal: Callable[[str], None],
        gateway: Optional[SdkGateway] = None,
    ) -> None:
        self.resolver = OptionsResolver(
            options, source, templates, component=type(self).__name__
        )
        self._signal = signal
        self._sequencer = PreProvisionSequencer(signal)
        self._gateway = gateway

    @property
    def gateway(self) -> SdkGateway:
        """SDK gateway of the source template's management system, opened lazily."""
        if self._gateway is None:
            ems = self.resolver.source.ext_management_system
            if ems is None:
                raise ResolutionError(
                    "The source template is not attached to a management system"
                )
            self._gateway = ems.connect()
        return self._gateway

    @property
    def step(self) -> ProvisionStep:
        return self._sequencer.step

    def cloud_instance_id(self) -> str:
        return self.resolver.cloud_instance_id()

    # Pre-provision steps.

    def create_destination(self) -> None:
        self._sequencer.create_destination()

    def prepare_volumes(self) -> None:
        self._sequencer.prepare_volumes()

    def prepare_networks(self) -> None:
        self._sequencer.prepare_networks()

    # Provision.

    def build_request(self) -> ProvisionRequest:
        return PayloadBuilder(self.resolver).build()

    def prepare_for_clone_task(self) -> Dict[str, Any]:
        """The instance prototype that ``start_clone`` will send."""
        return self.build_request().to_document()

    def log_clone_options(self, clone_options: Mapping[str, Any]) -> None:
        self.resolver.log_message(
            "log_clone_options", f"IBM SERVER PROVISIONING OPTIONS: {dict(clone_options)}"
        )

    def start_clone(
        self, clone_options: ProvisionRequest | Mapping[str, Any] | None = None
    ) -> InstanceReference:
        """Submit the instance prototype and return the id of the new instance."""
        return ProvisionSubmitter(self.gateway).submit(clone_options or self.build_request())

    def do_clone_task_check(self, clone_task_ref: str) -> Tuple[bool, str]:
        self.resolver.log_message("do_clone_task_check", f"checking {clone_task_ref}")
        return CompletionPoller(self.gateway).check(clone_task_ref)

    def customize_destination(self) -> None:
        """Standard host hook; nothing to customize for VPC instances."""
        self._signal(ProvisionStep.POST_CREATE_DESTINATION.value)
