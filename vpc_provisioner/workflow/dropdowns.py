"""Selectable values for the VPC provision request dialog."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Hashable, Iterable, Mapping, Optional, Tuple

from pydantic import BaseModel

from vpc_common.api import ProviderCommunicationError, ProvisionError
from vpc_provisioner.models.host import ManagementSystem
from vpc_provisioner.providers.documents import (
    InventoryItem,
    KeyDocument,
    ResourceGroupDocument,
    VolumeProfileDocument,
    decode_all,
)
from vpc_provisioner.providers.sdk import SdkGateway
from vpc_provisioner.utils import log_message
from vpc_provisioner.workflow.validators import (
    validate_entitled_processors,
    validate_ip_address,
)

logger = logging.getLogger(__name__)

DEFAULT_DIALOG_FILE = "miq_provision_vpc_dialogs"
VOLUME_DIALOG_KEYS = ("name", "size", "shareable")

ERROR_KEY = "Error"
ERROR_LABEL = "Provider experienced error"
NONE_ENTRY = "None"

Entries = Dict[Hashable, Any]


@dataclass
class ListingResult:
    """Outcome of one dropdown fetch: the entries, or why they are missing."""

    entries: Entries = field(default_factory=dict)
    error: Optional[Exception] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, entries: Entries) -> "ListingResult":
        return cls(entries=entries)

    @classmethod
    def failure(cls, error: Exception) -> "ListingResult":
        return cls(error=error)

    def render(self, add_none: bool = False) -> Entries:
        """Entries for the form; failures become the inline error marker."""
        values: Entries = dict(self.entries) if self.ok else {ERROR_KEY: ERROR_LABEL}
        if add_none:
            values[NONE_ENTRY] = NONE_ENTRY
        return values


def string_entries(
    items: Iterable[BaseModel], key: str = "ems_ref", value: str = "name"
) -> Entries:
    """Map one attribute of each item onto another, keeping input order."""
    return {getattr(item, key): getattr(item, value) for item in items}


def index_entries(items: Iterable[BaseModel], value: str = "name") -> Dict[int, Any]:
    """Number the items from zero in input order."""
    return {index: getattr(item, value) for index, item in enumerate(items)}


class ProvisionWorkflow:
    """Dropdown producers and field validators for one request dialog.

    Zone, flavor, storage and key lists are fetched once per workflow object;
    a failed fetch is not remembered so the next render retries it.
    """

    def __init__(
        self, ems: Optional[ManagementSystem], gateway: Optional[SdkGateway] = None
    ) -> None:
        self._ems = ems
        self._gateway = gateway
        self._memo: Dict[str, Entries] = {}

    @staticmethod
    def default_dialog_file() -> str:
        return DEFAULT_DIALOG_FILE

    def volume_dialog_keys(self) -> Tuple[str, ...]:
        return VOLUME_DIALOG_KEYS

    @property
    def ems(self) -> ManagementSystem:
        if self._ems is None:
            error = ProvisionError("A server-side error occurred in the provisioning workflow")
            self._log_error("ems", "no management system selected", error)
            raise error
        return self._ems

    @property
    def sdk(self) -> SdkGateway:
        if self._gateway is None:
            ems = self.ems
            try:
                self._gateway = ems.connect()
            except ProviderCommunicationError:
                raise
            except Exception as exc:
                self._log_error("sdk", "Error received while getting SDK object.", exc)
                raise ProviderCommunicationError(
                    "Unable to connect to the VPC API", cause=exc
                ) from exc
        return self._gateway

    def allowed_placement_availability_zone(
        self, _options: Mapping[str, Any] | None = None
    ) -> Entries:
        ems = self.ems
        return self._memoized(
            "allowed_placement_availability_zone",
            lambda: index_entries(_inventory(ems.availability_zones, "availability_zones")),
        )

    def allowed_sys_type(self, _options: Mapping[str, Any] | None = None) -> Entries:
        ems = self.ems
        return self._memoized(
            "allowed_sys_type",
            lambda: index_entries(_inventory(ems.flavors, "flavors")),
        )

    def allowed_storage_type(self, _options: Mapping[str, Any] | None = None) -> Entries:
        return self._memoized(
            "allowed_storage_type",
            lambda: index_entries(
                decode_all(
                    VolumeProfileDocument,
                    self.sdk.collection("list_volume_profiles"),
                    operation="list_volume_profiles",
                )
            ),
        )

    def allowed_guest_access_key_pairs(
        self, _options: Mapping[str, Any] | None = None
    ) -> Entries:
        return self._memoized(
            "allowed_guest_access_key_pairs",
            lambda: string_entries(
                decode_all(KeyDocument, self.sdk.collection("list_keys"), operation="list_keys"),
                key="id",
            ),
        )

    def allowed_cloud_networks(self, _options: Mapping[str, Any] | None = None) -> Entries:
        # TODO: filter on the selected zone once it is part of the options.
        ems = self.ems
        return self._fetch(
            "allowed_cloud_networks",
            lambda: string_entries(_inventory(ems.cloud_networks, "cloud_networks")),
        ).render(add_none=True)

    def allowed_subnets(self, _options: Mapping[str, Any] | None = None) -> Entries:
        # TODO: filter on the selected VPC once it is part of the options.
        ems = self.ems
        return self._fetch(
            "allowed_subnets",
            lambda: string_entries(_inventory(ems.cloud_subnets, "cloud_subnets")),
        ).render(add_none=True)

    def allowed_cloud_volumes(self, _options: Mapping[str, Any] | None = None) -> Entries:
        """Volumes that can be attached: multi-attach or currently available."""
        ems = self.ems
        return self._fetch(
            "allowed_cloud_volumes",
            lambda: string_entries(
                item
                for item in _inventory(ems.cloud_volumes, "cloud_volumes")
                if item.attachable
            ),
        ).render()

    def allowed_resource_group(self, _options: Mapping[str, Any] | None = None) -> Entries:
        return self._fetch(
            "allowed_resource_group",
            lambda: string_entries(
                decode_all(
                    ResourceGroupDocument,
                    self.sdk.resource_groups(),
                    operation="list_resource_groups",
                ),
                key="id",
            ),
        ).render()

    def validate_entitled_processors(
        self, _field: Any, values: Mapping[str, Any], _dlg: Any, _fld: Any, value: Any
    ) -> Optional[str]:
        log_message(logger, type(self).__name__, "validate_entitled_processors")
        return validate_entitled_processors(values, value)

    def validate_ip_address(
        self, _field: Any, _values: Mapping[str, Any], _dlg: Any, _fld: Any, value: Any
    ) -> Optional[str]:
        log_message(logger, type(self).__name__, "validate_ip_address")
        return validate_ip_address(value)

    def _memoized(self, operation: str, producer: Callable[[], Entries]) -> Entries:
        if operation in self._memo:
            return dict(self._memo[operation])
        result = self._fetch(operation, producer)
        if result.ok:
            self._memo[operation] = result.entries
        return result.render()

    def _fetch(self, operation: str, producer: Callable[[], Entries]) -> ListingResult:
        try:
            return ListingResult.success(producer())
        except ProviderCommunicationError as exc:
            self._log_error(operation, "listing failed", exc)
            return ListingResult.failure(exc)

    def _log_error(self, method: str, msg: str, exception: BaseException) -> None:
        log_message(logger, type(self).__name__, method, msg, exception)


def _inventory(records: Iterable[Any], operation: str) -> list[InventoryItem]:
    return decode_all(InventoryItem, records, operation=operation)
