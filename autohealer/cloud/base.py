"""Abstract interfaces, value types and errors for cloud backends."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Any, List, Optional


class CloudProviderError(Exception):
    """Base class for cloud backend bootstrap failures."""


class ConfigError(CloudProviderError):
    """Invalid or incomplete backend configuration."""


class AuthenticationError(CloudProviderError):
    """Identity service rejected the credentials or could not be reached."""


class EndpointNotFoundError(CloudProviderError):
    """Service catalog has no usable endpoint for an API family."""

    def __init__(
        self,
        family: str,
        version: str,
        region: str,
        availability: str = "public",
        service: Optional[str] = None,
        reason: Optional[str] = None,
    ):
        self.family = family
        self.version = version
        self.region = region
        self.availability = availability
        self.service = service
        self.reason = reason
        super().__init__(self._format())

    def _format(self) -> str:
        what = f"{self.family} {self.version}"
        if self.service:
            what = f"{self.service} ({what})"
        msg = f"failed to find {what} {self.availability} endpoint in region {self.region or '<any>'}"
        if self.reason:
            msg = f"{msg}: {self.reason}"
        return msg

    def for_service(self, service: str) -> "EndpointNotFoundError":
        """Copy of this error tagged with the service that needed the endpoint."""
        return EndpointNotFoundError(
            self.family,
            self.version,
            self.region,
            availability=self.availability,
            service=service,
            reason=self.reason,
        )


class UnknownProviderError(CloudProviderError):
    """No backend is registered under the configured provider name."""

    def __init__(self, name: str, available: Optional[List[str]] = None):
        self.name = name
        self.available = sorted(available or [])
        super().__init__(
            f"Unknown cloud provider: {name}. Available: {self.available}"
        )


class EndpointAvailability(Enum):
    """Catalog interface an endpoint is published on."""
    PUBLIC = "public"
    INTERNAL = "internal"
    ADMIN = "admin"

    @classmethod
    def parse(cls, value: Optional[str]) -> "EndpointAvailability":
        """Parse a configured endpoint type; empty means public."""
        if not value:
            return cls.PUBLIC
        key = value.strip().lower()
        if key.endswith("url"):
            key = key[:-3]
        for member in cls:
            if member.value == key:
                return member
        raise ConfigError(
            f"Unknown endpoint type: {value}. "
            f"Expected one of {[m.value for m in cls]}"
        )


@dataclass(frozen=True)
class EndpointOptions:
    """Region and interface used to pick an endpoint from the catalog."""
    region: str = ""
    availability: EndpointAvailability = EndpointAvailability.PUBLIC


class CloudType(Enum):
    STANDARD = "standard"
    OSPC = "ospc"


class CloudProvider(ABC):
    """Assembled cloud backend handed to the healing controller."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Provider name (e.g., 'openstack')."""
        ...

    @property
    @abstractmethod
    def kube_client(self) -> Any:
        """Kubernetes client the backend was constructed with."""
        ...

    @property
    @abstractmethod
    def config(self) -> Any:
        """Configuration the backend was constructed from."""
        ...


class CloudProviderFactory(ABC):
    """Backend implementation that can be registered by name."""

    @property
    @abstractmethod
    def name(self) -> str:
        ...

    @abstractmethod
    def construct(self, config: Any, kube_client: Any) -> CloudProvider:
        """Authenticate and build a fully populated provider, or raise."""
        ...
