"""Keystone authentication and the shared provider client."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

import libcloud.security
import requests
from libcloud.common.exceptions import BaseHTTPError
from libcloud.common.openstack_identity import (
    OpenStackIdentityEndpointType,
    OpenStackServiceCatalog,
    get_class_for_auth_version,
)
from libcloud.common.types import LibcloudError

from ..base import AuthenticationError, EndpointAvailability, EndpointOptions

logger = logging.getLogger(__name__)

PASSWORD_AUTH = "3.x_password"
APPCRED_AUTH = "3.x_appcred"

_ENDPOINT_TYPES: Dict[EndpointAvailability, str] = {
    EndpointAvailability.PUBLIC: OpenStackIdentityEndpointType.EXTERNAL,
    EndpointAvailability.INTERNAL: OpenStackIdentityEndpointType.INTERNAL,
    EndpointAvailability.ADMIN: OpenStackIdentityEndpointType.ADMIN,
}

_DEFAULT_CA_CERTS_PATH = libcloud.security.CA_CERTS_PATH


def normalize_url(url: str) -> str:
    return url.rstrip("/") + "/"


class ProviderClient:
    """Authenticated session shared by every service client of one cloud.

    Holds the identity connection (token), the parsed service catalog and
    the HTTP session the service clients send requests through.
    """

    def __init__(
        self,
        identity: Any,
        catalog: OpenStackServiceCatalog,
        user_agent: Optional[str] = None,
        verify: Any = True,
        timeout: Optional[float] = None,
    ):
        self.identity = identity
        self.catalog = catalog
        self.timeout = timeout
        self.session = requests.Session()
        self.session.verify = verify
        if user_agent:
            self.session.headers["User-Agent"] = (
                f"{user_agent} {requests.utils.default_user_agent()}"
            )

    @property
    def token(self) -> str:
        return self.identity.auth_token

    def endpoints_for(self, service_type: str, opts: EndpointOptions) -> List[str]:
        """Distinct catalog URLs for a service type matching region and interface."""
        wanted = _ENDPOINT_TYPES[opts.availability]
        urls: List[str] = []
        for endpoint in self.catalog.get_endpoints(service_type=service_type):
            if opts.region and endpoint.region != opts.region:
                continue
            if endpoint.endpoint_type != wanted or not endpoint.url:
                continue
            url = normalize_url(endpoint.url)
            if url not in urls:
                urls.append(url)
        return urls


def _identity_base_url(auth_url: str) -> str:
    # libcloud appends the /v3/... path itself
    base = auth_url.rstrip("/")
    for suffix in ("/v3", "/v2.0"):
        if base.endswith(suffix):
            return base[: -len(suffix)]
    return base


def _build_identity(opts, auth_version: str):
    identity_cls = get_class_for_auth_version(auth_version)
    base_url = _identity_base_url(opts.auth_url)
    if auth_version == APPCRED_AUTH:
        return identity_cls(
            auth_url=base_url,
            user_id=opts.application_credential_id,
            key=opts.application_credential_secret,
            timeout=opts.timeout,
        )
    # libcloud sends the user and project by name, never by id
    return identity_cls(
        auth_url=base_url,
        user_id=opts.username,
        key=opts.password,
        tenant_name=opts.project_name or opts.project_id or None,
        domain_name=opts.user_domain_name or "Default",
        tenant_domain_id=opts.project_domain_id or "default",
        timeout=opts.timeout,
    )


def authenticate(opts, user_agent: Optional[str] = None) -> ProviderClient:
    """Authenticate once against Keystone v3.

    Args:
        opts: OpenStackConfig with credentials and TLS settings
        user_agent: Token prepended to the HTTP User-Agent

    The TLS settings are written to libcloud.security, which is process-wide;
    the last call decides them for every libcloud connection.

    Raises:
        ConfigError: If the credentials are incomplete.
        AuthenticationError: If the identity service rejects or cannot be reached.
    """
    opts.validate()
    auth_version = APPCRED_AUTH if opts.uses_application_credential else PASSWORD_AUTH

    # libcloud reads TLS settings from module state; reset them on every call
    libcloud.security.VERIFY_SSL_CERT = not opts.tls_insecure
    libcloud.security.CA_CERTS_PATH = opts.ca_file or _DEFAULT_CA_CERTS_PATH

    try:
        identity = _build_identity(opts, auth_version)
        if user_agent:
            identity.user_agent_append(user_agent)
        identity.authenticate()
    except (
        LibcloudError,
        BaseHTTPError,
        requests.RequestException,
        OSError,
        ValueError,
    ) as exc:
        raise AuthenticationError(
            f"failed to authenticate against {opts.auth_url}: {exc}"
        ) from exc

    if not identity.urls:
        raise AuthenticationError(
            f"token from {opts.auth_url} carries no service catalog; "
            "check the project scope of the credentials"
        )

    catalog = OpenStackServiceCatalog(service_catalog=identity.urls, auth_version=auth_version)
    logger.info(f"Authenticated against {opts.auth_url} ({auth_version})")

    if opts.tls_insecure:
        verify: Any = False
    else:
        verify = opts.ca_file or True
    return ProviderClient(
        identity,
        catalog,
        user_agent=user_agent,
        verify=verify,
        timeout=opts.timeout,
    )
