"""YAML-based controller configuration."""

from __future__ import annotations

import os
from dataclasses import asdict, dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from .cloud.base import ConfigError, EndpointAvailability, EndpointOptions


def _normalize_keys(d: Dict[str, Any], section: str = "config") -> Dict[str, Any]:
    """Accept kebab-case keys as written in the controller's config file."""
    if d and not isinstance(d, dict):
        raise ConfigError(f"{section} must be a mapping, got {type(d).__name__}")
    return {k.replace("-", "_"): v for k, v in (d or {}).items()}


def _known_fields(cls, d: Dict[str, Any]) -> Dict[str, Any]:
    names = {f.name for f in fields(cls)}
    unknown = set(d) - names
    if unknown:
        raise ConfigError(f"Unknown {cls.__name__} keys: {sorted(unknown)}")
    return d


@dataclass
class OpenStackConfig:
    auth_url: str = ""
    username: str = ""
    password: str = ""
    user_domain_name: str = "Default"
    project_id: str = ""
    project_name: str = ""
    project_domain_id: str = "default"
    application_credential_id: str = ""
    application_credential_secret: str = ""
    region: str = ""
    endpoint_type: str = "public"
    ca_file: Optional[str] = None
    tls_insecure: bool = False
    timeout: Optional[float] = None
    # Resolve a network v2 client alongside the required services
    resolve_network: bool = False

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "OpenStackConfig":
        d = _normalize_keys(d, "openstack")
        # Older config files used tenant naming
        if "tenant_id" in d:
            d.setdefault("project_id", d.pop("tenant_id"))
        if "tenant_name" in d:
            d.setdefault("project_name", d.pop("tenant_name"))
        if "domain_name" in d:
            d.setdefault("user_domain_name", d.pop("domain_name"))
        cfg = cls(**_known_fields(cls, d))
        if not cfg.password:
            cfg.password = os.environ.get("OS_PASSWORD", "")
        if cfg.application_credential_id and not cfg.application_credential_secret:
            cfg.application_credential_secret = os.environ.get(
                "OS_APPLICATION_CREDENTIAL_SECRET", ""
            )
        return cfg

    @property
    def uses_application_credential(self) -> bool:
        return bool(self.application_credential_id)

    def endpoint_options(self) -> EndpointOptions:
        return EndpointOptions(
            region=self.region,
            availability=EndpointAvailability.parse(self.endpoint_type),
        )

    def validate(self) -> None:
        """Check that enough is set to authenticate."""
        if not self.auth_url:
            raise ConfigError("openstack.auth_url is required")
        EndpointAvailability.parse(self.endpoint_type)
        if self.uses_application_credential:
            if not self.application_credential_secret:
                raise ConfigError(
                    "openstack.application_credential_secret is required "
                    "with application_credential_id"
                )
            return
        if not self.username:
            raise ConfigError("openstack.username is required")
        if not self.password:
            raise ConfigError("openstack.password is required (or set OS_PASSWORD)")

    def to_dict(self, redact: bool = False) -> Dict[str, Any]:
        d = asdict(self)
        for secret in ("password", "application_credential_secret"):
            if redact and d[secret]:
                d[secret] = "******"
        return d


@dataclass
class HealerConfig:
    cluster_name: str = ""
    cloud_provider: str = "openstack"
    dry_run: bool = False
    openstack: OpenStackConfig = field(default_factory=OpenStackConfig)

    @classmethod
    def from_yaml(cls, path: Path) -> "HealerConfig":
        try:
            with open(path) as f:
                raw = yaml.safe_load(f)
        except OSError as exc:
            raise ConfigError(f"cannot read config file {path}: {exc}") from exc
        except yaml.YAMLError as exc:
            raise ConfigError(f"invalid YAML in {path}: {exc}") from exc
        return cls.from_dict(raw or {})

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "HealerConfig":
        d = _normalize_keys(d)
        openstack = OpenStackConfig.from_dict(d.pop("openstack", {}) or {})
        return cls(**_known_fields(cls, d), openstack=openstack)

    def to_yaml(self, path: Path) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w") as f:
            yaml.dump(self.to_dict(), f, default_flow_style=False, sort_keys=False)

    def to_dict(self, redact: bool = False) -> Dict[str, Any]:
        return {
            "cluster_name": self.cluster_name,
            "cloud_provider": self.cloud_provider,
            "dry_run": self.dry_run,
            "openstack": self.openstack.to_dict(redact=redact),
        }
