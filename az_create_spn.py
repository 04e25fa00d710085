#!/usr/bin/env python3
"""
Azure Service Principal Batch Creation Script

Creates one service principal per requested display name:
- App registration
- Service principal linked to the app registration
- Client secret valid until the configured expiry
- Default IAM role assignment for every principal created in the run

Names come from --name (repeatable), --input-file (one name per line),
or SP_NAME / SP_NAMES_FILE in the configuration file.
A failure for one name is reported and the remaining names are still created.
"""

import argparse
import asyncio
import sys

from msgraph import GraphServiceClient

from spn_scripts import az_login
from spn_scripts.config import DEFAULT_CONFIG_FILE, load_config, password_window_factory, require, role_scope
from spn_scripts.console import configure_logging, print_failure, print_status
from spn_scripts.create.batch_create import BatchPrincipalCreator, read_principal_names, summarize
from spn_scripts.create.create_iam import IamRoleAssigner
from spn_scripts.errors import EmptyInputError
from spn_scripts.identity_provider import GraphIdentityProvider


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Create Azure AD service principals in batch")
    parser.add_argument("--config", default=DEFAULT_CONFIG_FILE, help="Path to config YAML file")
    source = parser.add_mutually_exclusive_group()
    source.add_argument("--input-file", help="Text file with one display name per line")
    source.add_argument("--name", dest="names", action="append", help="Display name to create (repeatable)")
    parser.add_argument("--show-secrets", action="store_true", default=None, help="Print generated secrets at the end of the run")
    return parser.parse_args(argv)


def resolve_names(args, config: dict) -> list:
    """Display names to create; command line wins over configuration"""
    if args.names:
        return list(args.names)
    if args.input_file:
        return read_principal_names(args.input_file)
    if config.get("SP_NAMES_FILE"):
        return read_principal_names(config["SP_NAMES_FILE"])

    sp_name = config.get("SP_NAME")
    if isinstance(sp_name, list):
        return [str(name) for name in sp_name]
    if sp_name:
        return [str(sp_name)]

    raise EmptyInputError("No display names supplied: use --name, --input-file, SP_NAME or SP_NAMES_FILE")


def build_creator(config: dict, credential, graph_client, window_factory=None) -> BatchPrincipalCreator:
    role_assigner = IamRoleAssigner(
        credential=credential,
        az_subscription=require(config, "SUBSCRIPTION"),
        role=config["DEFAULT_ROLE"],
        scope=role_scope(config),
    )
    timeout = config.get("CREATE_TIMEOUT_SECONDS")
    return BatchPrincipalCreator(
        identity_provider=GraphIdentityProvider(graph_client),
        role_assigner=role_assigner,
        window_factory=window_factory or password_window_factory(config),
        secret_name=config["SECRET_NAME"],
        create_timeout=float(timeout) if timeout else None,
    )


def print_report(outcome, show_secrets: bool):
    print_status(summarize(outcome), "header")

    if outcome.created:
        print_status("Created service principals:", "section")
        print("-" * 50)
        for principal in outcome.created:
            print_status(f"{principal.display_name}  App ID: {principal.app_id}  Object ID: {principal.object_id}")
            if principal.end:
                print_status(f"   Secret expires: {principal.end.isoformat()}")
            if show_secrets:
                print_status(f"   Secret: {principal.secret}")
        print("-" * 50)
        if not show_secrets:
            print_status("Secrets are not shown; rerun with --show-secrets to print them for new principals")

    if outcome.failures:
        print_status("Failed display names:", "section")
        for failure in outcome.failures:
            print_status(f"{failure.display_name}: {failure.message}")

    if outcome.assignment_error:
        print_status("Default role assignment failed:", "section")
        print_status(f"   {outcome.assignment_error}")


async def async_main(argv=None) -> int:
    """Main async orchestration function"""

    args = parse_args(argv)

    print_status("Azure Service Principal Batch Creation", "header")

    try:
        print_status("Loading configuration...", "section")
        config = load_config(args.config)
        configure_logging(config["LOG_LEVEL"])
        show_secrets = args.show_secrets if args.show_secrets is not None else bool(config.get("SHOW_SECRETS"))

        names = resolve_names(args, config)
        print_status(f"{len(names)} display name(s) to create")
        window_factory = password_window_factory(config)

        print_status("Azure Authentication", "section")
        credential = az_login.azure_login(config.get("TENANT_ID"))

        print_status("Initializing Microsoft Graph Client", "section")
        graph_client = GraphServiceClient(credentials=credential)
        creator = build_creator(config, credential, graph_client, window_factory)

        print_status("Service Principal Creation", "section")
        outcome = await creator.create_batch(names)

    except Exception as e:
        print_failure("Batch creation failed!", e)
        return 1

    print_report(outcome, show_secrets)
    return 0


def main():
    """Synchronous main function that runs the async orchestration"""
    sys.exit(asyncio.run(async_main()))


if __name__ == "__main__":
    main()
