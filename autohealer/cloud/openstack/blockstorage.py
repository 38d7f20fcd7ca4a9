"""Block storage client selection by cloud flavor."""

from __future__ import annotations

import logging
import re
from typing import Optional
from urllib.parse import urlsplit, urlunsplit

from ..base import CloudType, EndpointOptions
from ..cloudtype import detect_cloud_type
from .auth import ProviderClient
from .client import ServiceClient
from .services import new_block_storage_v1, new_block_storage_v3

logger = logging.getLogger(__name__)

_V1_SEGMENT = re.compile(r"^v1(\.\d+)?$")


def rewrite_v1_endpoint(url: str) -> str:
    """Replace the first 'v1' path segment of an endpoint with 'v2'.

    Only a whole path segment ('v1' or 'v1.<minor>') is rewritten, so a
    'v1' inside the host name or a project ID is left alone.
    """
    parts = urlsplit(url)
    segments = parts.path.split("/")
    for i, segment in enumerate(segments):
        if _V1_SEGMENT.match(segment):
            segments[i] = "v2" + segment[2:]
            return urlunsplit(parts._replace(path="/".join(segments)))
    logger.warning(f"No v1 path segment in block storage endpoint {url}; leaving it unchanged")
    return url


def new_block_storage(
    provider: ProviderClient,
    opts: EndpointOptions,
    cloud_type: Optional[CloudType] = None,
) -> ServiceClient:
    """Get a Cinder client for the API version the cloud flavor supports.

    OSPC clouds only advertise a v1 volume endpoint, but the service answers
    on the v2 path of the same host, so the v1 endpoint is rewritten to v2.
    Other clouds use v3 directly.
    """
    if cloud_type is None:
        cloud_type = detect_cloud_type()

    if cloud_type == CloudType.OSPC:
        logger.info("Creating blockstorage client v1 for OSPC cloud")
        client = new_block_storage_v1(provider, opts)
        client.rebind(rewrite_v1_endpoint(client.endpoint))
        return client

    return new_block_storage_v3(provider, opts)
