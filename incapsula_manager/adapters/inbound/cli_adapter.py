"""CLI Adapter - Command-line interface for the Incapsula manager."""
import sys

import click

from incapsula_manager import __version__
from incapsula_manager.adapters.inbound.plan_loader import load_planned_resources
from incapsula_manager.adapters.outbound import ConsoleLogger, JsonLogger
from incapsula_manager.adapters.outbound.site_client import describe_site
from incapsula_manager.application import (
    create_association_resource,
    create_http_client,
    create_policy_client,
    create_site_client,
    validate_unique_waf_assets,
)
from incapsula_manager.config import IncapsulaConfig
from incapsula_manager.domain.entities import AssociationState
from incapsula_manager.domain.exceptions import SiteStatusError
from incapsula_manager.domain.value_objects import AssetType

ASSET_TYPE_CHOICES = [at.value for at in AssetType]


@click.group()
@click.version_option(version=__version__, prog_name="incapsula-manager")
@click.option("--api-id", default=None, help="Incapsula API id. Default: $INCAPSULA_API_ID.")
@click.option("--api-key", default=None, help="Incapsula API key. Default: $INCAPSULA_API_KEY.")
@click.option("--base-url", default=None, help="Provisioning API base URL. Default: $INCAPSULA_BASE_URL.")
@click.option("--base-url-api", default=None, help="API base URL. Default: $INCAPSULA_BASE_URL_API.")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output (DEBUG level logging).")
@click.option("--quiet", "-q", is_flag=True, help="Suppress all output except errors.")
@click.option("--json-logs", is_flag=True, help="Write logs as JSON lines.")
@click.pass_context
def cli(
    ctx: click.Context,
    api_id: str | None,
    api_key: str | None,
    base_url: str | None,
    base_url_api: str | None,
    verbose: bool,
    quiet: bool,
    json_logs: bool,
) -> None:
    """
    Incapsula Manager - Manage Incapsula sites and policy asset associations.

    Credentials and endpoints are read from the environment and can be
    overridden with the options above.
    """
    config = IncapsulaConfig.from_env().with_overrides(
        api_id=api_id,
        api_key=api_key,
        base_url=base_url,
        base_url_api=base_url_api,
    )
    log_level = "DEBUG" if verbose else ("ERROR" if quiet else config.log_level)
    if json_logs:
        logger = JsonLogger(level=log_level)
        logger.set_context(command=ctx.invoked_subcommand)
    else:
        logger = ConsoleLogger(level=log_level)

    ctx.obj = {"config": config, "logger": logger}


@cli.group()
def site() -> None:
    """Manage Incapsula sites."""


@site.command("add")
@click.argument("domain")
@click.option("--ref-id", default="", help="Customer reference id.")
@click.option("--send-site-setup-emails", default="", help="'true' to send setup emails.")
@click.option("--site-ip", default="", help="Origin server IP or CNAME.")
@click.option("--force-ssl", default="", help="'true' to force SSL towards the origin.")
@click.option("--account-id", type=int, default=0, help="Sub-account to create the site in.")
@click.option("--naked-domain-san", is_flag=True, help="Add the naked domain as a SAN.")
@click.option("--wildcard-san", is_flag=True, help="Use a wildcard SAN.")
@click.option("--logs-account-id", default="", help="Account that receives the site logs.")
@click.pass_obj
def site_add(
    obj: dict,
    domain: str,
    ref_id: str,
    send_site_setup_emails: str,
    site_ip: str,
    force_ssl: str,
    account_id: int,
    naked_domain_san: bool,
    wildcard_san: bool,
    logs_account_id: str,
) -> None:
    """
    Add a site.

    Examples:

        incapsula-manager site add www.example.com --site-ip 203.0.113.10
    """
    logger = obj["logger"]
    try:
        with create_http_client(obj["config"], logger) as http:
            response = create_site_client(http, logger).add_site(
                domain,
                ref_id=ref_id,
                send_site_setup_emails=send_site_setup_emails,
                site_ip=site_ip,
                force_ssl=force_ssl,
                account_id=account_id,
                naked_domain_san=naked_domain_san,
                wildcard_san=wildcard_san,
                logs_account_id=logs_account_id,
            )
        click.echo(f"Site ID: {response.site_id}")
    except Exception as e:
        logger.error(f"Adding site failed: {e}", exception=e)
        sys.exit(1)


@site.command("status")
@click.argument("domain")
@click.argument("site_id", type=int)
@click.pass_obj
def site_status(obj: dict, domain: str, site_id: int) -> None:
    """Show the status of a site."""
    logger = obj["logger"]
    try:
        with create_http_client(obj["config"], logger) as http:
            status = create_site_client(http, logger).site_status(domain, site_id)
        for key, value in describe_site(status).items():
            click.echo(f"{key}: {value}")
    except SiteStatusError as e:
        logger.error(
            f"Getting site status failed: {e}",
            exception=e,
            exception_id=e.response.exception_id if e.response else None,
        )
        sys.exit(1)
    except Exception as e:
        logger.error(f"Getting site status failed: {e}", exception=e)
        sys.exit(1)


@site.command("update")
@click.argument("site_id")
@click.argument("param")
@click.argument("value")
@click.pass_obj
def site_update(obj: dict, site_id: str, param: str, value: str) -> None:
    """Set a single site parameter."""
    logger = obj["logger"]
    try:
        with create_http_client(obj["config"], logger) as http:
            create_site_client(http, logger).update_site(site_id, param, value)
        click.echo(f"Updated {param} on site {site_id}")
    except Exception as e:
        logger.error(f"Updating site failed: {e}", exception=e)
        sys.exit(1)


@site.command("delete")
@click.argument("domain")
@click.argument("site_id", type=int)
@click.pass_obj
def site_delete(obj: dict, domain: str, site_id: int) -> None:
    """Delete a site without grace period."""
    logger = obj["logger"]
    try:
        with create_http_client(obj["config"], logger) as http:
            create_site_client(http, logger).delete_site(domain, site_id)
        click.echo(f"Deleted site {site_id} ({domain})")
    except Exception as e:
        logger.error(f"Deleting site failed: {e}", exception=e)
        sys.exit(1)


@cli.group()
def association() -> None:
    """Manage policy asset associations."""


def _association_options(func):
    func = click.option(
        "--account-id", type=int, default=0, help="Account of the asset (default: the API key's account)."
    )(func)
    func = click.option(
        "--asset-type",
        type=click.Choice(ASSET_TYPE_CHOICES, case_sensitive=False),
        default=AssetType.WEBSITE.value,
        show_default=True,
        help="Type of the asset.",
    )(func)
    func = click.argument("asset_id")(func)
    func = click.argument("policy_id")(func)
    return func


def _print_state(state: AssociationState) -> None:
    if not state.exists:
        click.echo("Association not found")
        return
    for key, value in state.to_dict().items():
        click.echo(f"{key}: {value}")


@association.command("create")
@_association_options
@click.pass_obj
def association_create(obj: dict, policy_id: str, asset_id: str, asset_type: str, account_id: int) -> None:
    """Associate a policy with an asset."""
    logger = obj["logger"]
    state = AssociationState(
        policy_id=policy_id, asset_id=asset_id, asset_type=asset_type.upper(), account_id=account_id
    )
    try:
        with create_http_client(obj["config"], logger) as http:
            create_association_resource(http, logger).create(state)
        _print_state(state)
    except Exception as e:
        logger.error(f"Creating association failed: {e}", exception=e)
        sys.exit(1)


@association.command("read")
@_association_options
@click.pass_obj
def association_read(obj: dict, policy_id: str, asset_id: str, asset_type: str, account_id: int) -> None:
    """Check whether a policy is associated with an asset."""
    logger = obj["logger"]
    state = AssociationState(
        policy_id=policy_id, asset_id=asset_id, asset_type=asset_type.upper(), account_id=account_id
    )
    state.id = state.to_association().synthetic_id
    try:
        with create_http_client(obj["config"], logger) as http:
            create_association_resource(http, logger).read(state)
        _print_state(state)
    except Exception as e:
        logger.error(f"Reading association failed: {e}", exception=e)
        sys.exit(1)


@association.command("delete")
@_association_options
@click.pass_obj
def association_delete(obj: dict, policy_id: str, asset_id: str, asset_type: str, account_id: int) -> None:
    """Remove a policy from an asset."""
    logger = obj["logger"]
    state = AssociationState(
        policy_id=policy_id, asset_id=asset_id, asset_type=asset_type.upper(), account_id=account_id
    )
    try:
        with create_http_client(obj["config"], logger) as http:
            create_association_resource(http, logger).delete(state)
        click.echo(f"Deleted association {policy_id}/{asset_id}/{asset_type.upper()}")
    except Exception as e:
        logger.error(f"Deleting association failed: {e}", exception=e)
        sys.exit(1)


@association.command("import")
@click.argument("association_id")
@click.option("--account-id", type=int, default=0, help="Current account context.")
@click.pass_obj
def association_import(obj: dict, association_id: str, account_id: int) -> None:
    """Import an association by its policy_id/asset_id/asset_type id."""
    logger = obj["logger"]
    try:
        with create_http_client(obj["config"], logger) as http:
            state = create_association_resource(http, logger).import_state(
                association_id, ambient_account_id=account_id
            )
    except Exception as e:
        logger.error(f"Importing association failed: {e}", exception=e)
        sys.exit(1)
    if not state.exists:
        logger.error(f"Cannot import non-existent association {association_id}")
        sys.exit(1)
    _print_state(state)


@cli.command("validate-plan")
@click.argument("plan_file", type=click.Path(exists=True, dir_okay=False))
@click.option("--account-id", type=int, default=0, help="Account context for policy lookups.")
@click.pass_obj
def validate_plan(obj: dict, plan_file: str, account_id: int) -> None:
    """
    Check a JSON plan for assets with more than one WAF policy.

    PLAN_FILE is the output of `terraform show -json <planfile>`.
    """
    logger = obj["logger"]
    try:
        planned_resources = load_planned_resources(plan_file)
        with create_http_client(obj["config"], logger) as http:
            validate_unique_waf_assets(
                planned_resources,
                create_policy_client(http, logger),
                logger,
                account_id=account_id or None,
            )
        click.echo("Plan OK: no asset has more than one WAF policy")
    except Exception as e:
        logger.error(f"Plan validation failed: {e}", exception=e)
        sys.exit(1)


@cli.command()
def list_asset_types() -> None:
    """
    List the asset types a policy can be associated with.
    """
    click.echo("Supported asset types:\n")
    for at in AssetType:
        click.echo(f"  {at.value}")
        click.echo(f"    Display name: {at.display_name}")


def main() -> None:
    """Entry point for the CLI."""
    cli()


if __name__ == "__main__":
    main()
