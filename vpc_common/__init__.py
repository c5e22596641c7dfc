"""Shared helpers for the IBM VPC provisioner."""

from vpc_common.api import VPCError, configure_logging

__all__ = ["configure_logging", "VPCError"]
