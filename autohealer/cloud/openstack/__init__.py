"""OpenStack provider for autohealer."""

from .auth import ProviderClient, authenticate
from .blockstorage import new_block_storage, rewrite_v1_endpoint
from .client import ServiceClient
from .provider import (
    PROVIDER_NAME,
    OpenStackCloudProvider,
    OpenStackProviderFactory,
    register,
)
from .services import (
    new_block_storage_v1,
    new_block_storage_v3,
    new_compute_v2,
    new_container_infra_v1,
    new_key_manager_v1,
    new_load_balancer_v2,
    new_network_v2,
    new_orchestration_v1,
)

__all__ = [
    "PROVIDER_NAME",
    "OpenStackCloudProvider",
    "OpenStackProviderFactory",
    "ProviderClient",
    "ServiceClient",
    "authenticate",
    "new_block_storage",
    "new_block_storage_v1",
    "new_block_storage_v3",
    "new_compute_v2",
    "new_container_infra_v1",
    "new_key_manager_v1",
    "new_load_balancer_v2",
    "new_network_v2",
    "new_orchestration_v1",
    "register",
    "rewrite_v1_endpoint",
]
