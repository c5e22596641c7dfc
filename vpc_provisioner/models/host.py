"""Protocols for the host platform objects this provider reads."""

from __future__ import annotations

from typing import Any, Iterable, Optional, Protocol

from vpc_provisioner.providers.sdk import SdkGateway


class ManagementSystem(Protocol):
    """The managed cloud account (EMS) and its cached inventory."""

    uid_ems: str
    availability_zones: Iterable[Any]
    flavors: Iterable[Any]
    cloud_networks: Iterable[Any]
    cloud_subnets: Iterable[Any]
    cloud_volumes: Iterable[Any]

    def connect(self) -> SdkGateway:
        ...


class SourceTemplate(Protocol):
    """The template record a provision request was started from."""

    ext_management_system: Optional[ManagementSystem]


class TemplateRecord(Protocol):
    id: Any
    name: str
    ems_ref: Optional[str]


class TemplateCatalog(Protocol):
    """Lookup of image templates known to the host inventory."""

    def find_by_id(self, template_id: Any) -> Optional[TemplateRecord]:
        ...
