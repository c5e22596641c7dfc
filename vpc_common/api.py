"""Public API surface for vpc_common."""

from vpc_common.config import parse_bool_env, parse_int_env
from vpc_common.errors import (
    ConfigurationError,
    DecodingError,
    ProviderCommunicationError,
    ProvisionError,
    ResolutionError,
    VPCError,
    error_to_payload,
    wrap_error,
)
from vpc_common.logging import configure_logging

__all__ = [
    "configure_logging",
    "ConfigurationError",
    "DecodingError",
    "ProviderCommunicationError",
    "ProvisionError",
    "ResolutionError",
    "VPCError",
    "error_to_payload",
    "parse_bool_env",
    "parse_int_env",
    "wrap_error",
]
