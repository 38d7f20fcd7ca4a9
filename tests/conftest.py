"""
Autohealer Test Fixtures
========================

Shared fixtures for all test modules.
"""

import json
import threading
from http.server import BaseHTTPRequestHandler, HTTPServer
from unittest.mock import MagicMock

import pytest
from libcloud.common.openstack_identity import OpenStackServiceCatalog

from autohealer.cloud.base import EndpointAvailability, EndpointOptions
from autohealer.cloud.openstack.auth import ProviderClient
from autohealer.config import HealerConfig


# ============================================
# SERVICE CATALOG
# ============================================

def _endpoints(url, region="RegionOne"):
    """Public, internal and admin endpoints for one service."""
    return [
        {"region": region, "region_id": region, "interface": "public", "url": url},
        {"region": region, "region_id": region, "interface": "internal",
         "url": url.replace("https://", "http://internal.")},
        {"region": region, "region_id": region, "interface": "admin",
         "url": url.replace("https://", "http://admin.")},
    ]


def build_catalog(exclude=()):
    """Keystone v3 token catalog with every service the healer uses."""
    services = {
        "compute": "https://compute.example.com/v2.1/tenantid",
        "orchestration": "https://orchestration.example.com/v1/tenantid",
        "container-infra": "https://magnum.example.com/v1",
        "volume": "https://block.example.com/v1/tenantid",
        "volumev3": "https://block.example.com/v3/tenantid",
        "network": "https://network.example.com",
        "load-balancer": "https://octavia.example.com",
        "key-manager": "https://barbican.example.com",
    }
    return [
        {"type": service_type, "name": service_type, "endpoints": _endpoints(url)}
        for service_type, url in services.items()
        if service_type not in exclude
    ]


def make_provider_client(catalog):
    identity = MagicMock()
    identity.auth_token = "test-token"
    identity.urls = catalog
    return ProviderClient(
        identity,
        OpenStackServiceCatalog(service_catalog=catalog, auth_version="3.x_password"),
    )


@pytest.fixture
def catalog():
    return build_catalog()


@pytest.fixture
def provider_client(catalog):
    return make_provider_client(catalog)


@pytest.fixture
def make_provider():
    return make_provider_client


@pytest.fixture
def provider_client_without():
    """Build a provider client whose catalog lacks the given service types."""
    def _make(*service_types):
        return make_provider_client(build_catalog(exclude=service_types))
    return _make


@pytest.fixture
def endpoint_opts():
    return EndpointOptions(region="RegionOne", availability=EndpointAvailability.PUBLIC)


# ============================================
# FAKE KEYSTONE
# ============================================

class FakeKeystone:
    """Local Keystone v3 token endpoint answering with a canned response.

    Every POSTed JSON body is kept in ``requests`` so tests can inspect what
    the identity connection sent.
    """

    def __init__(self):
        self.status = 201
        self.token = "fake-token"
        self.body = {
            "token": {
                "expires_at": "2099-01-01T00:00:00.000000Z",
                "methods": ["password"],
                "roles": [{"id": "r1", "name": "member"}],
                "catalog": build_catalog(),
            }
        }
        self.requests = []
        self.server = HTTPServer(("127.0.0.1", 0), self._handler())
        self.url = f"http://127.0.0.1:{self.server.server_port}"
        self._thread = threading.Thread(target=self.server.serve_forever, daemon=True)

    def _handler(self):
        keystone = self

        class Handler(BaseHTTPRequestHandler):
            def do_POST(self):
                length = int(self.headers.get("Content-Length", 0))
                keystone.requests.append(
                    {"path": self.path, "body": json.loads(self.rfile.read(length) or b"{}")}
                )
                payload = json.dumps(keystone.body).encode()
                self.send_response(keystone.status)
                self.send_header("Content-Type", "application/json")
                self.send_header("Content-Length", str(len(payload)))
                if keystone.status in (200, 201):
                    self.send_header("X-Subject-Token", keystone.token)
                self.end_headers()
                self.wfile.write(payload)

            def log_message(self, format, *args):
                pass

        return Handler

    def reject(self, status, message):
        self.status = status
        self.body = {"error": {"code": status, "message": message}}

    def start(self):
        self._thread.start()

    def stop(self):
        self.server.shutdown()
        self.server.server_close()


@pytest.fixture
def keystone(monkeypatch):
    """Running fake Keystone; requests to it bypass any configured proxy."""
    for var in ("HTTP_PROXY", "http_proxy", "HTTPS_PROXY", "https_proxy", "ALL_PROXY", "all_proxy"):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.setenv("NO_PROXY", "127.0.0.1")
    server = FakeKeystone()
    server.start()
    yield server
    server.stop()


# ============================================
# CONFIG
# ============================================

@pytest.fixture
def healer_config():
    """Controller configuration with dummy credentials."""
    return HealerConfig.from_dict({
        "cluster-name": "test-cluster",
        "cloud-provider": "openstack",
        "openstack": {
            "auth-url": "https://keystone.example.com:5000/v3",
            "username": "healer",
            "password": "secret",
            "project-name": "k8s",
            "region": "RegionOne",
            "endpoint-type": "public",
        },
    })


# ============================================
# ENVIRONMENT
# ============================================

@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep the host environment out of cloud type detection and secrets."""
    for var in ("OS_CLOUD_TYPE", "OS_PASSWORD", "OS_APPLICATION_CREDENTIAL_SECRET"):
        monkeypatch.delenv(var, raising=False)
