# projectinfo/core/project_info.py

import logging
from typing import Optional, Union

from .addresses import resolve_container_ips
from .aliases import check_no_duplicate_aliases, group_aliases
from .config import ProjectInfoConfig
from .docker import CommandRunner
from .listing import get_docker_version, list_containers, select_listing_format
from .mappings import ProjectInfoMappings, build_mappings
from .project import ProjectName

logger = logging.getLogger('projectinfo.project_info')


class ProjectInfo:
    """
    Resolves the alias to address mappings of one compose project.

    Every call to ``get`` queries docker afresh: the client version picks
    the listing template, the listed containers are grouped by ID, checked
    for ambiguous aliases and inspected for their addresses. Any failure
    aborts the whole resolution; no partial mapping is returned.

    Attributes:
        docker: Execution capability used for every docker command
        project_name (ProjectName): Project whose containers are resolved
        config (ProjectInfoConfig): Timeouts and worker settings

    Example:
        >>> info = ProjectInfo(DockerExecutable(), ProjectName('demo'))
        >>> mappings = info.get()
        >>> mappings.host_to_ip['web']
        '172.18.0.3'
    """

    def __init__(self, docker: CommandRunner, project_name: ProjectName,
                 config: Optional[ProjectInfoConfig] = None):
        self.docker = docker
        self.project_name = project_name
        self.config = config or ProjectInfoConfig()

    def get(self) -> ProjectInfoMappings:
        """
        Resolve the project's mappings.

        Returns:
            ProjectInfoMappings for every alias of every project container

        Raises:
            ProjectInfoError: On any docker failure, malformed output,
                ambiguous alias or invalid address
        """
        docker_version = get_docker_version(self.docker, self.config.version_timeout)
        listing_format = select_listing_format(docker_version)
        logger.debug(f"Using {listing_format.name.lower()} ps format for docker {docker_version}")

        lines = list_containers(self.docker, self.project_name, listing_format, self.config.ps_timeout)
        index = group_aliases(lines, self.project_name, listing_format)
        check_no_duplicate_aliases(index)

        container_ips = resolve_container_ips(
            self.docker, index.keys(),
            timeout=self.config.inspect_timeout,
            max_workers=self.config.max_workers
        )
        mappings = build_mappings(index, container_ips)
        logger.info(
            f"Resolved {len(mappings.host_to_ip)} aliases to {len(mappings.ip_to_hosts)} "
            f"addresses for project {self.project_name}"
        )
        return mappings


def resolve_project_mappings(docker: CommandRunner, project_name: Union[str, ProjectName],
                             config: Optional[ProjectInfoConfig] = None) -> ProjectInfoMappings:
    """Resolve the mappings of ``project_name`` in a single call."""
    if not isinstance(project_name, ProjectName):
        project_name = ProjectName.from_string(project_name)
    return ProjectInfo(docker, project_name, config).get()
