"""Shared provisioning types and value objects."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Mapping, NewType, Optional

InstanceReference = NewType("InstanceReference", str)

TRANSITIONAL_STATUSES = frozenset(
    {"pausing", "pending", "restarting", "resuming", "starting", "stopping"}
)


class ProvisionStatus(str, Enum):
    """Classification of the provider-reported instance state."""

    IN_PROGRESS = "in_progress"
    COMPLETE = "complete"
    FAILED = "failed"
    UNKNOWN = "unknown"

    @classmethod
    def classify(cls, status: str | None) -> "ProvisionStatus":
        """Map a raw provider status string, case-insensitively."""
        normalized = (status or "").strip().lower()
        if normalized in TRANSITIONAL_STATUSES:
            return cls.IN_PROGRESS
        if normalized == "running":
            return cls.COMPLETE
        if normalized == "failed":
            return cls.FAILED
        return cls.UNKNOWN


class OptionStore:
    """Read access to the options collected by the request dialog.

    Dialog fields are usually stored as ``[id, label]`` pairs; free-text
    fields are stored as scalars.
    """

    def __init__(self, values: Mapping[str, Any] | None = None) -> None:
        self._values: Dict[str, Any] = dict(values or {})

    def get(self, key: str) -> Any:
        """Return the first element of a pair value, or the scalar itself."""
        value = self._values.get(key)
        if isinstance(value, (list, tuple)):
            return value[0] if value else None
        return value

    def get_last(self, key: str) -> Any:
        """Return the last element of a pair value, or the scalar itself."""
        value = self._values.get(key)
        if isinstance(value, (list, tuple)):
            return value[-1] if value else None
        return value


@dataclass
class ProvisionRequest:
    """Everything needed to ask the provider for one new instance."""

    name: Optional[str]
    key_id: Optional[str]
    image_id: Optional[str]
    zone_name: Optional[str]
    profile_name: Optional[str]
    subnet_id: Optional[str]
    storage_profile: Optional[str]
    boot_volume_name: Optional[str]
    delete_volume_on_instance_delete: bool = True
    vpc_id: Optional[str] = None
    primary_ipv4_address: Optional[str] = None
    security_group_ids: List[str] = field(default_factory=list)

    def to_document(self) -> Dict[str, Any]:
        """Render the instance prototype understood by ``create_instance``."""
        interface: Dict[str, Any] = {"subnet": {"id": self.subnet_id}}
        if self.primary_ipv4_address:
            interface["primary_ipv4_address"] = self.primary_ipv4_address
        if self.security_group_ids:
            interface["security_groups"] = [{"id": sg} for sg in self.security_group_ids]

        document: Dict[str, Any] = {
            "keys": [{"id": self.key_id}],
            "name": self.name,
            "profile": {"name": self.profile_name},
            "image": {"id": self.image_id},
            "zone": {"name": self.zone_name},
            "primary_network_interface": interface,
            "boot_volume_attachment": {
                "volume": {
                    "name": self.boot_volume_name,
                    "profile": {"name": self.storage_profile},
                },
                "delete_volume_on_instance_delete": self.delete_volume_on_instance_delete,
            },
        }
        if self.vpc_id:
            document["vpc"] = {"id": self.vpc_id}
        return document
