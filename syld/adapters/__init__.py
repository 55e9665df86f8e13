"""Adapters — read-only bindings to the system's package managers.

Public re-exports for convenient access.
"""

from syld.adapters.base import Backend, BackendUnavailable
from syld.adapters.mock import MockBackend
from syld.adapters.registry import BackendRegistry, default_registry

__all__ = [
    "Backend",
    "BackendRegistry",
    "BackendUnavailable",
    "MockBackend",
    "default_registry",
]
