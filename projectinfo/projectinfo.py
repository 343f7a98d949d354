# /projectinfo/projectinfo.py
#!/usr/bin/env python3
"""
projectinfo - Resolve docker-compose container aliases to IP addresses.
"""
import sys
import logging
from pathlib import Path
from typing import Optional

import click
from rich.console import Console

from projectinfo import __version__
from projectinfo.core.config import ProjectInfoConfig, load_config
from projectinfo.core.docker import CommandRunner, DockerExecutable
from projectinfo.core.exceptions import ProjectInfoError
from projectinfo.core.listing import get_docker_version, select_listing_format
from projectinfo.core.mappings import ProjectInfoMappings
from projectinfo.core.project import ProjectName
from projectinfo.core.project_info import ProjectInfo
from projectinfo.core.utils import setup_logging
from projectinfo.ui.console import ConsoleUI

VERSION = __version__
console = Console()
ui = ConsoleUI(console)
logger = logging.getLogger(__name__)


class ProjectInfoCtl:
    """Main projectinfo application class."""

    def __init__(self, config: ProjectInfoConfig, docker: Optional[CommandRunner] = None):
        """Initialize with the loaded configuration and a docker runner."""
        self.config = config
        self.docker = docker or DockerExecutable(config.docker_binary, config.docker_host)

    def resolve(self, project: str) -> ProjectInfoMappings:
        """Resolve the mappings of one project."""
        return ProjectInfo(self.docker, ProjectName.from_string(project), self.config).get()

    def docker_version(self) -> str:
        return get_docker_version(self.docker, self.config.version_timeout)


def get_ctl(ctx: click.Context) -> ProjectInfoCtl:
    """Get a ProjectInfoCtl for the current invocation with error handling."""
    try:
        return ProjectInfoCtl(ctx.obj['CONFIG'], ctx.obj.get('DOCKER'))
    except ProjectInfoError as e:
        ui.print_error(e)
        sys.exit(1)


def resolve_or_exit(ctx: click.Context, project: str) -> ProjectInfoMappings:
    ctl = get_ctl(ctx)
    try:
        return ctl.resolve(project)
    except ProjectInfoError as e:
        logger.error(f"Resolving project {project} failed: {e}")
        ui.print_error(e, show_traceback=ctx.obj['DEBUG'])
        sys.exit(1)


# CLI Commands
@click.group()
@click.version_option(version=VERSION)
@click.option('--debug', is_flag=True, help='Enable debug logging')
@click.option('--config', 'config_path', type=click.Path(dir_okay=False, path_type=Path),
              help='YAML configuration file')
@click.option('--docker', 'docker_binary', help='Path of the docker executable')
@click.pass_context
def cli(ctx, debug, config_path, docker_binary):
    """projectinfo - Map docker-compose container aliases to IP addresses"""
    ctx.ensure_object(dict)
    try:
        config = load_config(config_path)
    except ProjectInfoError as e:
        ui.print_error(e)
        sys.exit(1)
    if docker_binary:
        config.docker_binary = docker_binary

    setup_logging(debug, config.log_dir)

    # Store settings in context for subcommands
    ctx.obj['DEBUG'] = debug
    ctx.obj['CONFIG'] = config

    if debug:
        logger.debug("Debug mode enabled")
        logger.debug(f"Configuration: {config}")


@cli.command()
@click.argument('project')
@click.option('--format', 'output_format', type=click.Choice(['table', 'json', 'hosts']),
              default='table', show_default=True, help='Output format')
@click.pass_context
def resolve(ctx, project: str, output_format: str):
    """Show every alias of PROJECT's containers with its address"""
    mappings = resolve_or_exit(ctx, project)
    if output_format == 'json':
        ui.display_json(mappings)
    elif output_format == 'hosts':
        ui.display_hosts(mappings)
    else:
        ui.display_mappings(mappings, project)


@cli.command()
@click.argument('project')
@click.argument('alias')
@click.pass_context
def lookup(ctx, project: str, alias: str):
    """Print the address of ALIAS in PROJECT"""
    mappings = resolve_or_exit(ctx, project)
    ip = mappings.ip_for(alias)
    if ip is None:
        ui.print_error(f"Unknown alias '{alias}' in project {project}")
        sys.exit(1)
    ui.display_values([ip])


@cli.command()
@click.argument('project')
@click.argument('address')
@click.pass_context
def aliases(ctx, project: str, address: str):
    """Print every alias in PROJECT sharing ADDRESS"""
    mappings = resolve_or_exit(ctx, project)
    hosts = mappings.hosts_for(address)
    if not hosts:
        ui.print_error(f"No container in project {project} has address {address}")
        sys.exit(1)
    ui.display_values(sorted(hosts))


@cli.command(name='docker-version')
@click.pass_context
def docker_version(ctx):
    """Show the docker client version and the listing format it needs"""
    ctl = get_ctl(ctx)
    try:
        version = ctl.docker_version()
    except ProjectInfoError as e:
        ui.print_error(e, show_traceback=ctx.obj['DEBUG'])
        sys.exit(1)
    ui.display_docker_version(version, select_listing_format(version))


if __name__ == '__main__':
    cli()
