"""
Autohealer: cloud backend bootstrap for a Kubernetes node healing controller.

This library provides tools for:
- Registering cloud backends and selecting one by name at start-up
- Authenticating against OpenStack and resolving per-API service clients
- Picking block storage API versions per cloud deployment flavor
- Loading the controller configuration from YAML
"""

from .cloud import CloudProviderRegistry, default_registry, detect_cloud_type
from .config import HealerConfig, OpenStackConfig

__version__ = "0.1.0"
__author__ = "Autohealer Team"

__all__ = [
    "CloudProviderRegistry",
    "HealerConfig",
    "OpenStackConfig",
    "default_registry",
    "detect_cloud_type",
]
