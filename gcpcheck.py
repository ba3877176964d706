#!/usr/bin/env python
import logging
import sys

import click

from gcelib import __version__
from gcelib.config_loader import load_accounts, load_config, load_document
from gcelib.deploy_validator import validate_deploy_description
from gcelib.exceptions import ConfigurationError, GceLibError, MalformedIdentifierError
from gcelib.load_balancing import is_load_balancer_disabled
from gcelib.model import (
    HttpLoadBalancer,
    InternalLoadBalancer,
    ServerGroup,
    ServerGroupType,
    SslLoadBalancer,
)
from gcelib.utils.url_utils import (
    local_name,
    region_from_group_url,
    server_group_placement_type,
    zone_from_group_url,
)

LOAD_BALANCER_MODELS = {
    "http": HttpLoadBalancer,
    "internal": InternalLoadBalancer,
    "ssl": SslLoadBalancer,
}


def _configure_logging(debug: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _fail(error: GceLibError, debug: bool) -> None:
    if debug:
        raise error
    click.echo(click.style(f"\nERROR: {error}\n", fg="red", bold=True), err=True)
    sys.exit(2)


def _load_mapping(path: str, what: str) -> dict:
    document = load_document(path)
    if not isinstance(document, dict):
        raise ConfigurationError(f"{what} document must be a mapping", context={"path": path})
    return document


def describe_url(url: str) -> dict:
    """Derive placement facts from a server group URL."""
    placement = server_group_placement_type(url)
    return {
        "name": local_name(url),
        "placement": placement.value,
        "region": region_from_group_url(url),
        "zone": zone_from_group_url(url) if placement == ServerGroupType.ZONAL else None,
    }


@click.version_option(version=__version__, prog_name="gcpcheck")
@click.group()
def cli():
    """
    gcpcheck validates deploy requests and classifies compute resources

    For help with a specific command type:

    gcpcheck [COMMAND] --help

    """
    pass


@cli.command()
@click.option("--debug", is_flag=True, default=False, help="Verbose logging and tracebacks")
@click.option("--config", "config_path", required=True, help="Accounts configuration (YAML)")
@click.option("--request", "request_path", required=True, help="Deploy request (YAML or JSON)")
@click.option("--decorator", default=None, help="Field path prefix for reported errors")
def validate(debug, config_path, request_path, decorator):
    """Validates a deploy request and lists every problem found"""
    _configure_logging(debug)
    try:
        config = load_config(config_path)
        description = _load_mapping(request_path, "Request")
    except GceLibError as e:
        _fail(e, debug)
        return
    errors = validate_deploy_description(
        description,
        load_accounts(config),
        decorator=decorator or config["decorator"],
    )
    if not errors.has_errors:
        click.echo(click.style("Request is valid", fg="green"))
        return
    for rejection in errors:
        click.echo(click.style(f"  {rejection.field_path}: ", fg="yellow") + rejection.message)
    sys.exit(1)


@cli.command()
@click.option("--debug", is_flag=True, default=False, help="Verbose logging and tracebacks")
@click.argument("url")
def describe(debug, url):
    """Shows name, placement, region and zone of a server group URL"""
    _configure_logging(debug)
    try:
        facts = describe_url(url)
    except MalformedIdentifierError as e:
        _fail(e, debug)
        return
    for key, value in facts.items():
        click.echo(f"{key}: {value if value is not None else '-'}")


@cli.command(name="lb-status")
@click.option("--debug", is_flag=True, default=False, help="Verbose logging and tracebacks")
@click.option("--load-balancer", "lb_path", required=True, help="Load balancer (YAML or JSON)")
@click.option("--server-group", "sg_path", required=True, help="Server group (YAML or JSON)")
@click.option(
    "--type",
    "lb_type",
    type=click.Choice(sorted(LOAD_BALANCER_MODELS)),
    default="http",
    help="Load balancer type",
)
def lb_status(debug, lb_path, sg_path, lb_type):
    """Reports whether a load balancer is disabled for a server group"""
    _configure_logging(debug)
    try:
        load_balancer = LOAD_BALANCER_MODELS[lb_type].from_dict(_load_mapping(lb_path, "Load balancer"))
        server_group = ServerGroup.from_dict(_load_mapping(sg_path, "Server group"))
        disabled = is_load_balancer_disabled(load_balancer, server_group)
    except KeyError as e:
        _fail(ConfigurationError("Missing required field", context={"field": e.args[0]}), debug)
        return
    except GceLibError as e:
        _fail(e, debug)
        return
    click.echo("disabled" if disabled else "enabled")


if __name__ == "__main__":
    cli()
