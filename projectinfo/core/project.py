"""
Compose project name value object.
"""
import re
import secrets
import string
from dataclasses import dataclass
from typing import List

from .exceptions import InvalidProjectNameError

# docker-compose rewrites any other character when normalising a name
ILLEGAL_CHARACTERS = re.compile(r'[^a-z0-9]')
RANDOM_NAME_LENGTH = 8


@dataclass(frozen=True)
class ProjectName:
    """
    Name of a docker-compose project.

    Only names that docker-compose would use unmodified are accepted, so
    the value can be matched against the ``com.docker.compose.project``
    label and used as the container name prefix.
    """
    name: str

    def __post_init__(self):
        if not self.name.strip():
            raise InvalidProjectNameError(self.name, "ProjectName must not be blank.")
        if ILLEGAL_CHARACTERS.search(self.name):
            raise InvalidProjectNameError(
                self.name,
                f"ProjectName '{self.name}' not allowed, "
                "please use lowercase letters and numbers only."
            )

    @classmethod
    def from_string(cls, name: str) -> 'ProjectName':
        return cls(name)

    @classmethod
    def random(cls) -> 'ProjectName':
        """Generate a fresh, valid project name."""
        alphabet = string.ascii_lowercase + string.digits
        return cls(''.join(secrets.choice(alphabet) for _ in range(RANDOM_NAME_LENGTH)))

    def as_string(self) -> str:
        return self.name

    def compose_args(self) -> List[str]:
        """Arguments selecting this project on a docker-compose command line."""
        return ["--project-name", self.name]

    def __str__(self) -> str:
        return self.name
