"""Service client bound to one resolved catalog endpoint."""

from __future__ import annotations

from typing import Any, Optional

import requests

from .auth import ProviderClient, normalize_url


class ServiceClient:
    """Client for one OpenStack API at one endpoint.

    Several service clients share a single ProviderClient; the provider
    must outlive every client derived from it.
    """

    def __init__(
        self,
        provider: ProviderClient,
        endpoint: str,
        service_type: str,
        resource_path: str = "",
        microversion: Optional[str] = None,
    ):
        self.provider = provider
        self.service_type = service_type
        self.microversion = microversion
        self._resource_path = resource_path
        self.endpoint = normalize_url(endpoint)

    @property
    def endpoint(self) -> str:
        return self._endpoint

    @endpoint.setter
    def endpoint(self, value: str) -> None:
        self._endpoint = normalize_url(value)
        self.resource_base = self._endpoint + self._resource_path

    def rebind(self, endpoint: str) -> None:
        """Point the client at a different endpoint URL."""
        self.endpoint = endpoint

    def service_url(self, *parts: str) -> str:
        return self.resource_base + "/".join(p.strip("/") for p in parts)

    def _headers(self, extra: Optional[dict] = None) -> dict:
        headers = {"X-Auth-Token": self.provider.token, "Accept": "application/json"}
        if self.microversion:
            headers["OpenStack-API-Version"] = f"{self.service_type} {self.microversion}"
        if extra:
            headers.update(extra)
        return headers

    def request(self, method: str, path: str, **kwargs: Any) -> requests.Response:
        """Send a request relative to the resource base.

        Raises:
            requests.HTTPError: On a 4xx/5xx response.
        """
        headers = self._headers(kwargs.pop("headers", None))
        kwargs.setdefault("timeout", self.provider.timeout)
        response = self.provider.session.request(
            method, self.service_url(path), headers=headers, **kwargs
        )
        response.raise_for_status()
        return response

    def get(self, path: str, **kwargs: Any) -> requests.Response:
        return self.request("GET", path, **kwargs)

    def post(self, path: str, json: Any = None, **kwargs: Any) -> requests.Response:
        return self.request("POST", path, json=json, **kwargs)

    def patch(self, path: str, json: Any = None, **kwargs: Any) -> requests.Response:
        return self.request("PATCH", path, json=json, **kwargs)

    def delete(self, path: str, **kwargs: Any) -> requests.Response:
        return self.request("DELETE", path, **kwargs)

    def __repr__(self) -> str:
        version = f", microversion={self.microversion}" if self.microversion else ""
        return f"ServiceClient({self.service_type} @ {self.endpoint}{version})"
