"""OpenStack cloud provider combining compute, orchestration, container-infra and block storage."""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List, Optional, Tuple

from ..base import CloudProvider, CloudProviderFactory, EndpointNotFoundError, EndpointOptions
from ..registry import CloudProviderRegistry
from .auth import ProviderClient, authenticate
from .blockstorage import new_block_storage
from .client import ServiceClient
from .services import (
    new_compute_v2,
    new_container_infra_v1,
    new_network_v2,
    new_orchestration_v1,
)

logger = logging.getLogger(__name__)

PROVIDER_NAME = "openstack"
USER_AGENT = "magnum-auto-healer"

ServiceFactory = Callable[[ProviderClient, EndpointOptions], ServiceClient]


class OpenStackCloudProvider(CloudProvider):
    """OpenStack backend for the node healing controller."""

    def __init__(
        self,
        kube_client: Any,
        config: Any,
        compute: ServiceClient,
        orchestration: ServiceClient,
        container_infra: ServiceClient,
        block_storage: ServiceClient,
        network: Optional[ServiceClient] = None,
    ):
        self._kube_client = kube_client
        self._config = config
        self._compute = compute
        self._orchestration = orchestration
        self._container_infra = container_infra
        self._block_storage = block_storage
        self._network = network

    @property
    def name(self) -> str:
        return PROVIDER_NAME

    @property
    def kube_client(self) -> Any:
        return self._kube_client

    @property
    def config(self) -> Any:
        return self._config

    @property
    def compute(self) -> ServiceClient:
        """Nova client."""
        return self._compute

    @property
    def orchestration(self) -> ServiceClient:
        """Heat client."""
        return self._orchestration

    @property
    def container_infra(self) -> ServiceClient:
        """Magnum client."""
        return self._container_infra

    @property
    def block_storage(self) -> ServiceClient:
        """Cinder client."""
        return self._block_storage

    @property
    def network(self) -> Optional[ServiceClient]:
        """Neutron client, if it was requested."""
        return self._network

    def endpoints(self) -> Dict[str, Optional[str]]:
        return {
            "compute": self._compute.endpoint,
            "orchestration": self._orchestration.endpoint,
            "container_infra": self._container_infra.endpoint,
            "block_storage": self._block_storage.endpoint,
            "network": self._network.endpoint if self._network else None,
        }


class OpenStackProviderFactory(CloudProviderFactory):
    """Builds OpenStackCloudProvider from the controller configuration."""

    def __init__(self, user_agent: str = USER_AGENT):
        self.user_agent = user_agent

    @property
    def name(self) -> str:
        return PROVIDER_NAME

    def _pipeline(self, config: Any) -> List[Tuple[str, str, ServiceFactory]]:
        """Ordered (attribute, service, factory) steps; the first failure stops the build."""
        steps: List[Tuple[str, str, ServiceFactory]] = [
            ("compute", "Nova", new_compute_v2),
            ("orchestration", "Heat", new_orchestration_v1),
            ("container_infra", "Magnum", new_container_infra_v1),
        ]
        if config.openstack.resolve_network:
            steps.append(("network", "Neutron", new_network_v2))
        steps.append(("block_storage", "Cinder", new_block_storage))
        return steps

    def construct(self, config: Any, kube_client: Any) -> OpenStackCloudProvider:
        """Authenticate once and resolve every service client.

        Raises:
            ConfigError: If the OpenStack section is incomplete.
            AuthenticationError: If Keystone authentication fails.
            EndpointNotFoundError: If a service has no endpoint in the region.
        """
        provider = authenticate(config.openstack, user_agent=self.user_agent)
        opts = config.openstack.endpoint_options()

        clients: Dict[str, ServiceClient] = {}
        for attr, service, factory in self._pipeline(config):
            try:
                clients[attr] = factory(provider, opts)
            except EndpointNotFoundError as exc:
                logger.error(f"Failed to find {service} service endpoint in the region {opts.region}")
                raise exc.for_service(service) from exc

        return OpenStackCloudProvider(kube_client=kube_client, config=config, **clients)


def register(registry: CloudProviderRegistry) -> None:
    """Register the OpenStack backend with a registry."""
    registry.register_factory(OpenStackProviderFactory())
