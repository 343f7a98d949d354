from .project import ProjectName
from .docker import CommandResult, CommandRunner, DockerExecutable
from .mappings import ProjectInfoMappings
from .project_info import ProjectInfo, resolve_project_mappings

from .exceptions import (
    ProjectInfoError,
    CommandTimeoutError,
    CommandExecutionError,
    OutputParseError,
    ValidationError,
    DuplicateAliasError,
    InvalidAddressError
)
