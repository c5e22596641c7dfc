"""Build, submit and track the instance-creation request."""

from __future__ import annotations

import logging
from typing import Any, Mapping, Tuple

from vpc_common.api import ProviderCommunicationError, ProvisionError
from vpc_provisioner.engine.options import OptionsResolver
from vpc_provisioner.models.types import (
    InstanceReference,
    ProvisionRequest,
    ProvisionStatus,
)
from vpc_provisioner.providers.documents import InstanceDocument, decode
from vpc_provisioner.providers.sdk import SdkGateway

logger = logging.getLogger(__name__)

IN_PROGRESS_MESSAGE = "The server is being provisioned."
COMPLETE_MESSAGE = "The server has been provisioned."
FAILED_MESSAGE = "An error occurred while provisioning the instance."


class PayloadBuilder:
    """Turn the dialog options into a ``ProvisionRequest``.

    Values are copied as collected; the dialog is responsible for validation.
    """

    def __init__(self, resolver: OptionsResolver) -> None:
        self._resolver = resolver

    def build(self) -> ProvisionRequest:
        resolver = self._resolver
        image = resolver.vm_image()
        target_name = resolver.get_option("vm_target_name")
        return ProvisionRequest(
            name=target_name,
            key_id=resolver.get_option("guest_access_key_pair"),
            image_id=image.ems_ref if image is not None else None,
            zone_name=resolver.get_option_last("placement_availability_zone"),
            profile_name=resolver.get_option_last("sys_type"),
            subnet_id=resolver.get_option("cloud_subnet"),
            storage_profile=resolver.get_option_last("storage_type"),
            boot_volume_name=f"{target_name}_boot" if target_name else None,
        )


class ProvisionSubmitter:
    """Send one instance prototype to the provider."""

    def __init__(self, gateway: SdkGateway) -> None:
        self._gateway = gateway

    def submit(self, request: ProvisionRequest | Mapping[str, Any]) -> InstanceReference:
        """Create the instance and return the provider-assigned id.

        ``request`` is either a ``ProvisionRequest`` or an already rendered
        instance prototype.
        """
        if isinstance(request, ProvisionRequest):
            document = request.to_document()
        else:
            document = dict(request)
        name = document.get("name")
        logger.debug("Submitting instance prototype: %s", document)
        try:
            result = self._gateway.request("create_instance", instance_prototype=document)
            instance = decode(InstanceDocument, result, operation="create_instance")
        except ProviderCommunicationError as exc:
            raise ProvisionError(
                str(exc), context={"instance_name": name}, cause=exc
            ) from exc
        logger.info("Instance %s requested as %s", name, instance.id)
        return InstanceReference(instance.id)


class CompletionPoller:
    """Classify the current state of a submitted instance.

    The host decides how often to call ``check`` and when to give up.
    """

    def __init__(self, gateway: SdkGateway) -> None:
        self._gateway = gateway

    def check(self, instance_ref: str) -> Tuple[bool, str]:
        try:
            result = self._gateway.request("get_instance", id=instance_ref)
            instance = decode(InstanceDocument, result, operation="get_instance")
        except ProviderCommunicationError as exc:
            raise ProvisionError(
                str(exc), context={"instance_id": instance_ref}, cause=exc
            ) from exc

        status = ProvisionStatus.classify(instance.status)
        if status is ProvisionStatus.COMPLETE:
            return True, COMPLETE_MESSAGE
        if status is ProvisionStatus.FAILED:
            raise ProvisionError(FAILED_MESSAGE, context={"instance_id": instance_ref})
        if status is ProvisionStatus.IN_PROGRESS:
            return False, IN_PROGRESS_MESSAGE

        shown = instance.status or ""
        message = f"Unknown server state received from the cloud API: '{shown}'"
        logger.warning(message)
        return False, message
