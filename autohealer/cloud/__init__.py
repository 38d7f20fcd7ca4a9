"""Cloud backend abstraction for autohealer.

Backends register themselves with a CloudProviderRegistry owned by the
controller, which builds the configured one by name at start-up.
"""

from .base import (
    AuthenticationError,
    CloudProvider,
    CloudProviderError,
    CloudProviderFactory,
    CloudType,
    ConfigError,
    EndpointAvailability,
    EndpointNotFoundError,
    EndpointOptions,
    UnknownProviderError,
)
from .cloudtype import CLOUD_TYPE_ENV, detect_cloud_type
from .registry import BackendConstructor, CloudProviderRegistry, default_registry

__all__ = [
    "AuthenticationError",
    "BackendConstructor",
    "CLOUD_TYPE_ENV",
    "CloudProvider",
    "CloudProviderError",
    "CloudProviderFactory",
    "CloudProviderRegistry",
    "CloudType",
    "ConfigError",
    "EndpointAvailability",
    "EndpointNotFoundError",
    "EndpointOptions",
    "UnknownProviderError",
    "default_registry",
    "detect_cloud_type",
]
