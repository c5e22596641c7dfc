"""Thin gateway over the IBM Cloud VPC SDK."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Protocol
from urllib.parse import parse_qs, urlparse

import requests
from ibm_cloud_sdk_core import ApiException
from ibm_cloud_sdk_core.authenticators import IAMAuthenticator
from ibm_vpc import VpcV1

from vpc_common.api import DecodingError, ProviderCommunicationError, wrap_error
from vpc_provisioner.config import VpcSettings

logger = logging.getLogger(__name__)


class SdkGateway(Protocol):
    """Calls the provider exposes to this plugin."""

    def request(self, operation: str, **params: Any) -> Any:
        ...

    def collection(self, operation: str, **params: Any) -> List[Any]:
        ...

    def resource_groups(self) -> List[Any]:
        ...


def _page_items(page: Any, operation: str) -> List[Any]:
    """Return the resource list of one page of a ``list_*`` response."""
    if isinstance(page, list):
        return page
    if isinstance(page, dict):
        for value in page.values():
            if isinstance(value, list):
                return value
    raise DecodingError(
        f"Unexpected result returned by {operation}",
        context={"operation": operation, "result_type": type(page).__name__},
    )


def _next_start(page: Any) -> Optional[str]:
    if not isinstance(page, dict):
        return None
    href = (page.get("next") or {}).get("href")
    if not href:
        return None
    return parse_qs(urlparse(href).query).get("start", [None])[0]


class VpcSdkGateway:
    """Route plugin calls to a ``VpcV1`` client and unwrap its results.

    SDK exceptions never leave this class: they are raised again as
    ``ProviderCommunicationError`` with the operation name in the context.
    """

    def __init__(self, client: VpcV1, resource_manager: Any | None = None) -> None:
        self._client = client
        self._resource_manager = resource_manager

    def request(self, operation: str, **params: Any) -> Any:
        """Invoke one SDK operation and return its decoded JSON result."""
        method = getattr(self._client, operation, None)
        if not callable(method):
            raise ProviderCommunicationError(
                f"Unknown VPC SDK operation: {operation}",
                context={"operation": operation},
            )
        return self._call(operation, method, **params)

    def collection(self, operation: str, **params: Any) -> List[Any]:
        """Invoke a paginated ``list_*`` operation and return every item."""
        items: List[Any] = []
        start: Optional[str] = None
        while True:
            call_params: Dict[str, Any] = dict(params)
            if start:
                call_params["start"] = start
            page = self.request(operation, **call_params)
            items.extend(_page_items(page, operation))
            start = _next_start(page)
            if not start:
                return items

    def resource_groups(self) -> List[Any]:
        """List account resource groups, or nothing without a resource manager."""
        if self._resource_manager is None:
            logger.info("No resource manager configured; skipping resource groups")
            return []
        result = self._call(
            "list_resource_groups", self._resource_manager.list_resource_groups
        )
        return _page_items(result, "list_resource_groups")

    def _call(self, operation: str, method: Any, **params: Any) -> Any:
        try:
            response = method(**params)
        except ApiException as exc:
            raise ProviderCommunicationError(
                str(exc),
                context={"operation": operation, "status_code": exc.code},
                cause=exc,
            ) from exc
        except requests.exceptions.RequestException as exc:
            raise wrap_error(
                ProviderCommunicationError,
                f"{operation} failed: {exc}",
                context={"operation": operation, "transport_error": type(exc).__name__},
                cause=exc,
            ) from exc
        return response.get_result()


def connect(settings: VpcSettings, resource_manager: Any | None = None) -> VpcSdkGateway:
    """Build an authenticated gateway for the configured region."""
    authenticator = IAMAuthenticator(
        settings.api_key.get_secret_value(), url=settings.iam_endpoint
    )
    client = VpcV1(version=settings.api_version, authenticator=authenticator)
    client.set_service_url(settings.resolved_service_url)
    if settings.request_timeout:
        client.set_http_config({"timeout": settings.request_timeout})
    logger.info("Connected VPC client to %s", settings.resolved_service_url)
    return VpcSdkGateway(client, resource_manager=resource_manager)
