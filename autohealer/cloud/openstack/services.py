"""Service client factories, one per OpenStack API family.

Each factory looks the API up in the provider's service catalog for the
requested region and interface and binds a ServiceClient to it. Nothing is
retried here; the caller decides what a missing endpoint means.
"""

from __future__ import annotations

import logging

from ..base import EndpointNotFoundError, EndpointOptions
from .auth import ProviderClient
from .client import ServiceClient

logger = logging.getLogger(__name__)


def _new_service_client(
    provider: ProviderClient,
    opts: EndpointOptions,
    family: str,
    version: str,
    service_type: str,
    resource_path: str = "",
) -> ServiceClient:
    urls = provider.endpoints_for(service_type, opts)
    if not urls:
        raise EndpointNotFoundError(
            family,
            version,
            opts.region,
            availability=opts.availability.value,
            reason=f"no '{service_type}' entry in the service catalog",
        )
    if len(urls) > 1:
        raise EndpointNotFoundError(
            family,
            version,
            opts.region,
            availability=opts.availability.value,
            reason=f"multiple '{service_type}' endpoints found: {urls}",
        )
    logger.debug(f"Resolved {family} {version} endpoint {urls[0]}")
    return ServiceClient(provider, urls[0], service_type, resource_path=resource_path)


def new_network_v2(provider: ProviderClient, opts: EndpointOptions) -> ServiceClient:
    """Client for the Neutron v2 API."""
    return _new_service_client(provider, opts, "network", "v2", "network", "v2.0/")


def new_compute_v2(provider: ProviderClient, opts: EndpointOptions) -> ServiceClient:
    """Client for the Nova v2 API."""
    return _new_service_client(provider, opts, "compute", "v2", "compute")


def new_orchestration_v1(provider: ProviderClient, opts: EndpointOptions) -> ServiceClient:
    """Client for the Heat v1 API."""
    return _new_service_client(provider, opts, "orchestration", "v1", "orchestration")


def new_container_infra_v1(provider: ProviderClient, opts: EndpointOptions) -> ServiceClient:
    """Client for the Magnum v1 API, pinned to the latest microversion."""
    client = _new_service_client(
        provider, opts, "container-infra", "v1", "container-infra"
    )
    client.microversion = "latest"
    return client


def new_block_storage_v1(provider: ProviderClient, opts: EndpointOptions) -> ServiceClient:
    """Client for the Cinder v1 API."""
    return _new_service_client(provider, opts, "block-storage", "v1", "volume")


def new_block_storage_v3(provider: ProviderClient, opts: EndpointOptions) -> ServiceClient:
    """Client for the Cinder v3 API."""
    return _new_service_client(provider, opts, "block-storage", "v3", "volumev3")


def new_load_balancer_v2(provider: ProviderClient, opts: EndpointOptions) -> ServiceClient:
    """Client for the Octavia v2 API."""
    return _new_service_client(
        provider, opts, "load-balancer", "v2", "load-balancer", "v2.0/"
    )


def new_key_manager_v1(provider: ProviderClient, opts: EndpointOptions) -> ServiceClient:
    """Client for the Barbican v1 API."""
    return _new_service_client(provider, opts, "key-manager", "v1", "key-manager", "v1/")
