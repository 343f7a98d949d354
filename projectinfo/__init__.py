"""
projectinfo
Resolves docker-compose container aliases to container IP addresses.
"""

# Version information
__version__ = "1.0.0"

# Make key components available at package level
from .core.project import ProjectName
from .core.docker import DockerExecutable
from .core.mappings import ProjectInfoMappings
from .core.project_info import ProjectInfo, resolve_project_mappings
from .core.exceptions import ProjectInfoError, ValidationError
