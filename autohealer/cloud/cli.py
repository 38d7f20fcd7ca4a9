#!/usr/bin/env python3
"""CLI for checking cloud backend bootstrap."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from ..config import HealerConfig
from .base import CloudProviderError
from .cloudtype import CLOUD_TYPE_ENV, detect_cloud_type
from .registry import default_registry


def _load_config(args) -> HealerConfig:
    if args.config:
        return HealerConfig.from_yaml(args.config)
    return HealerConfig()


def cmd_providers(args, registry) -> int:
    """List registered cloud backends."""
    for name in sorted(registry.list_providers()):
        print(name)
    return 0


def cmd_cloud_type(args, registry) -> int:
    """Print the detected cloud flavor."""
    print(f"{CLOUD_TYPE_ENV}: {detect_cloud_type().value}")
    return 0


def cmd_check(args, registry) -> int:
    """Build the configured backend and print its resolved endpoints."""
    try:
        config = _load_config(args)
        name = args.provider or config.cloud_provider
        provider = registry.construct(name, config, None)
    except CloudProviderError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1

    result = {"provider": provider.name}
    if hasattr(provider, "endpoints"):
        result["endpoints"] = provider.endpoints()
    if args.show_config:
        result["config"] = config.to_dict(redact=True)
    print(json.dumps(result, indent=2))
    return 0


def main(argv=None) -> int:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    registry = default_registry()

    parser = argparse.ArgumentParser(description="autohealer cloud CLI")
    parser.add_argument("--config", type=Path, help="Controller config YAML")
    parser.add_argument("--provider", choices=registry.list_providers(),
                        help="Cloud provider (default: cloud_provider from config)")
    parser.add_argument("--debug", action="store_true", help="Debug logging")

    subparsers = parser.add_subparsers(dest="command", required=True)

    providers_parser = subparsers.add_parser("providers", help="List cloud providers")
    providers_parser.set_defaults(func=cmd_providers)

    type_parser = subparsers.add_parser("cloud-type", help="Show detected cloud flavor")
    type_parser.set_defaults(func=cmd_cloud_type)

    check_parser = subparsers.add_parser("check", help="Resolve all service endpoints")
    check_parser.add_argument("--show-config", action="store_true",
                              help="Include the (redacted) configuration")
    check_parser.set_defaults(func=cmd_check)

    args = parser.parse_args(argv)
    if args.debug:
        logging.getLogger().setLevel(logging.DEBUG)
    return args.func(args, registry)


if __name__ == "__main__":
    sys.exit(main())
