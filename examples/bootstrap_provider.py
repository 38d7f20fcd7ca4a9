#!/usr/bin/env python3
"""
Bootstrap example: build the configured cloud backend and list its servers.
"""

import sys
from pathlib import Path

# Add parent directory to path for development
sys.path.insert(0, str(Path(__file__).parent.parent))

from autohealer import HealerConfig, default_registry
from autohealer.cloud import CloudProviderError


def main():
    """Construct the backend from a config file and query Nova."""
    config_file = sys.argv[1] if len(sys.argv) > 1 else "examples/config.yaml"

    if not Path(config_file).exists():
        print(f"Config file not found: {config_file}")
        return 1

    config = HealerConfig.from_yaml(config_file)
    registry = default_registry()
    print(f"Registered providers: {registry.list_providers()}")

    try:
        provider = registry.construct(config.cloud_provider, config, None)
    except CloudProviderError as e:
        print(f"Failed to build {config.cloud_provider} provider: {e}")
        return 1

    for service, endpoint in provider.endpoints().items():
        print(f"  {service:16s} {endpoint or '-'}")

    servers = provider.compute.get("servers").json().get("servers", [])
    print(f"\n{len(servers)} servers in {config.openstack.region or 'all regions'}")
    for server in servers:
        print(f"  {server['id']}  {server['name']}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
