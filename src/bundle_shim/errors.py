"""Exception hierarchy for legacy bundle loading and conversion."""

from __future__ import annotations


class BundleShimError(RuntimeError):
    """Base error for bundle shim failures."""

    exit_code = 1


class NotFoundError(BundleShimError):
    """Raised when an export directory or one of its artifacts is missing."""

    exit_code = 2


class DependencyError(BundleShimError):
    """Raised when an optional runtime dependency is not installed."""

    exit_code = 3


class LoadConfigError(BundleShimError):
    """Raised when load parameters fail validation."""

    exit_code = 4
