"""Typed views of the documents returned by the SDK and the host inventory."""

from __future__ import annotations

from typing import Any, Iterable, List, Optional, Type, TypeVar

from pydantic import BaseModel, ConfigDict, ValidationError

from vpc_common.api import DecodingError


class _Document(BaseModel):
    model_config = ConfigDict(extra="ignore", from_attributes=True)


class InstanceDocument(_Document):
    """Subset of ``create_instance``/``get_instance`` results."""

    id: str
    name: Optional[str] = None
    status: Optional[str] = None


class KeyDocument(_Document):
    id: str
    name: str


class VolumeProfileDocument(_Document):
    name: str
    family: Optional[str] = None


class ResourceGroupDocument(_Document):
    id: str
    name: str


class InventoryItem(_Document):
    """A record from the host's cached inventory (zone, flavor, network...)."""

    ems_ref: Optional[str] = None
    name: str
    status: Optional[str] = None
    multi_attachment: Optional[bool] = None

    @property
    def attachable(self) -> bool:
        return bool(self.multi_attachment) or self.status == "available"


D = TypeVar("D", bound=_Document)


def decode(model: Type[D], payload: Any, *, operation: str) -> D:
    """Validate one document, raising ``DecodingError`` on a shape mismatch."""
    try:
        return model.model_validate(payload)
    except ValidationError as exc:
        raise DecodingError(
            f"{operation} returned an unexpected {model.__name__}",
            context={"operation": operation, "errors": exc.errors()},
            cause=exc,
        ) from exc


def decode_all(model: Type[D], payloads: Iterable[Any], *, operation: str) -> List[D]:
    if isinstance(payloads, (str, bytes, dict)) or not isinstance(payloads, Iterable):
        raise DecodingError(
            f"{operation} did not return a list",
            context={"operation": operation, "result_type": type(payloads).__name__},
        )
    return [decode(model, item, operation=operation) for item in payloads]
