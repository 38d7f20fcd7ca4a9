"""
Tests for Block Storage Client Selection
========================================

Tests the OSPC v1->v2 endpoint rewrite and the standard v3 path.
"""

import pytest

from autohealer.cloud.base import CloudType, EndpointNotFoundError
from autohealer.cloud.cloudtype import CLOUD_TYPE_ENV
from autohealer.cloud.openstack.blockstorage import new_block_storage, rewrite_v1_endpoint


class TestRewriteV1Endpoint:

    def test_rewrites_version_segment(self):
        assert (
            rewrite_v1_endpoint("https://block.example.com/v1/tenantid")
            == "https://block.example.com/v2/tenantid"
        )

    def test_only_first_segment(self):
        assert (
            rewrite_v1_endpoint("https://block.example.com/v1/v1/")
            == "https://block.example.com/v2/v1/"
        )

    def test_minor_version(self):
        assert (
            rewrite_v1_endpoint("https://block.example.com:8776/v1.0/abc")
            == "https://block.example.com:8776/v2.0/abc"
        )

    def test_host_and_tenant_left_alone(self):
        """A 'v1' inside the host name or tenant ID is not a version segment."""
        assert (
            rewrite_v1_endpoint("https://cinder-v1.example.com/v1/tenantv1x")
            == "https://cinder-v1.example.com/v2/tenantv1x"
        )

    def test_no_version_segment_unchanged(self):
        url = "https://v1block.example.com/volume/tenantid"
        assert rewrite_v1_endpoint(url) == url


class TestNewBlockStorage:

    def test_ospc_uses_v1_rewritten_to_v2(self, provider_client, endpoint_opts):
        client = new_block_storage(provider_client, endpoint_opts, cloud_type=CloudType.OSPC)
        assert client.service_type == "volume"
        assert client.endpoint == "https://block.example.com/v2/tenantid/"
        assert client.resource_base == "https://block.example.com/v2/tenantid/"

    def test_standard_uses_v3(self, provider_client, endpoint_opts):
        client = new_block_storage(provider_client, endpoint_opts, cloud_type=CloudType.STANDARD)
        assert client.service_type == "volumev3"
        assert client.endpoint == "https://block.example.com/v3/tenantid/"

    def test_detects_cloud_type_from_env(self, monkeypatch, provider_client, endpoint_opts):
        monkeypatch.setenv(CLOUD_TYPE_ENV, "OSPC")
        client = new_block_storage(provider_client, endpoint_opts)
        assert client.endpoint == "https://block.example.com/v2/tenantid/"

    def test_default_is_v3(self, provider_client, endpoint_opts):
        client = new_block_storage(provider_client, endpoint_opts)
        assert client.service_type == "volumev3"

    def test_ospc_failure_names_v1(self, provider_client_without, endpoint_opts):
        provider = provider_client_without("volume")
        with pytest.raises(EndpointNotFoundError) as exc_info:
            new_block_storage(provider, endpoint_opts, cloud_type=CloudType.OSPC)
        assert exc_info.value.version == "v1"

    def test_standard_failure_names_v3(self, provider_client_without, endpoint_opts):
        provider = provider_client_without("volumev3")
        with pytest.raises(EndpointNotFoundError) as exc_info:
            new_block_storage(provider, endpoint_opts, cloud_type=CloudType.STANDARD)
        assert exc_info.value.version == "v3"
        assert "block-storage v3" in str(exc_info.value)

