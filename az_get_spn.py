#!/usr/bin/env python3
"""
Azure Service Principal Lookup Script

Finds existing service principals by exact display name, application (client) ID,
or a display name wildcard such as 'ci-*'. Exactly one lookup switch is required.
"""

import argparse
import asyncio
import sys

from msgraph import GraphServiceClient

from spn_scripts import az_login
from spn_scripts.config import DEFAULT_CONFIG_FILE, load_config
from spn_scripts.console import configure_logging, print_failure, print_status
from spn_scripts.identity_provider import GraphIdentityProvider


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Find Azure AD service principals")
    parser.add_argument("--config", default=DEFAULT_CONFIG_FILE, help="Path to config YAML file")
    lookup = parser.add_mutually_exclusive_group(required=True)
    lookup.add_argument("--name", help="Exact display name")
    lookup.add_argument("--app-id", help="Application (client) ID")
    lookup.add_argument("--wildcard", help="Display name pattern, e.g. 'ci-*'")
    return parser.parse_args(argv)


async def find_service_principals(provider, args) -> list:
    """Dispatch to the lookup selected on the command line"""
    if args.app_id:
        sp = await provider.lookup_by_app_id(args.app_id)
        return [sp] if sp else []
    if args.wildcard:
        return await provider.lookup_by_wildcard(args.wildcard)
    return await provider.lookup_by_name(args.name)


async def async_main(argv=None) -> int:
    """Main async lookup function"""

    args = parse_args(argv)

    print_status("Azure Service Principal Lookup", "header")

    try:
        config = load_config(args.config)
        configure_logging(config["LOG_LEVEL"])

        print_status("Azure Authentication", "section")
        credential = az_login.azure_login(config.get("TENANT_ID"))
        graph_client = GraphServiceClient(credentials=credential)

        service_principals = await find_service_principals(GraphIdentityProvider(graph_client), args)

    except Exception as e:
        print_failure("Lookup failed!", e)
        return 1

    if not service_principals:
        print_status("No matching service principal found", "section")
        return 0

    print_status(f"Found {len(service_principals)} service principal(s)", "section")
    for sp in service_principals:
        print_status(f"{sp.display_name}  App ID: {sp.app_id}  Object ID: {sp.id}")
    return 0


def main():
    """Synchronous main function that runs the async lookup"""
    sys.exit(asyncio.run(async_main()))


if __name__ == "__main__":
    main()
