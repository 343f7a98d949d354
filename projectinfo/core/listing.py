"""
Docker version probing and project container listing.
"""
import logging
from enum import Enum
from typing import List

from .docker import CommandRunner, execute_checked, only_line
from .exceptions import OutputParseError
from .project import ProjectName

logger = logging.getLogger('projectinfo.listing')

PROJECT_LABEL = 'com.docker.compose.project'
SERVICE_LABEL = 'com.docker.compose.service'

# docker 1.13.0 cannot interpolate .Label in ps templates (docker/docker#30291)
LEGACY_DOCKER_VERSION = '1.13.0'

VERSION_TIMEOUT = 5
PS_TIMEOUT = 10


class ListingFormat(Enum):
    """Template used for ``docker ps --format``."""
    STANDARD = '{{ .ID }},{{ .Names }},{{.Label "%s"}}' % SERVICE_LABEL
    LEGACY = '{{ .ID }},{{ .Names }}'

    @property
    def template(self) -> str:
        return self.value

    @property
    def min_fields(self) -> int:
        """Number of comma separated fields every listed line carries."""
        return 2 if self is ListingFormat.LEGACY else 3


def get_docker_version(docker: CommandRunner, timeout: float = VERSION_TIMEOUT) -> str:
    """
    Get the docker client version.

    Raises:
        CommandExecutionError: If docker could not report its version
        OutputParseError: If the output is not exactly one line
    """
    lines = execute_checked(
        docker, 'version', '--format', '{{ .Client.Version }}',
        timeout=timeout,
        failure_message="Couldn't get docker version"
    )
    version = only_line(lines)
    if version is None:
        raise OutputParseError(
            f"Expected exactly one line from 'docker version', got {len(lines)}: {lines!r}"
        )
    version = version.strip()
    logger.debug(f"Docker client version: {version}")
    return version


def select_listing_format(docker_version: str) -> ListingFormat:
    """Pick the ps template supported by the given client version."""
    if docker_version == LEGACY_DOCKER_VERSION:
        return ListingFormat.LEGACY
    return ListingFormat.STANDARD


def list_containers(docker: CommandRunner, project_name: ProjectName,
                    listing_format: ListingFormat, timeout: float = PS_TIMEOUT) -> List[str]:
    """
    List the containers of a compose project.

    Args:
        docker: Execution capability
        project_name: Project whose containers are listed
        listing_format: Template to render each container with
        timeout: Seconds allowed for ``docker ps``

    Returns:
        One non-empty line per container
    """
    lines = execute_checked(
        docker,
        'ps',
        '--filter', f'label={PROJECT_LABEL}={project_name.as_string()}',
        '--format', listing_format.template,
        timeout=timeout
    )
    lines = [line for line in lines if line.strip()]
    logger.debug(f"Found {len(lines)} containers for project {project_name}")
    return lines
