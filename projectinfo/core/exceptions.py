# projectinfo/core/exceptions.py

from typing import List, Optional, Sequence


class ProjectInfoError(Exception):
    """Base exception for all projectinfo errors"""
    pass


class ConfigurationError(ProjectInfoError):
    """Raised when the configuration cannot be loaded or is invalid"""
    pass


class DockerNotFoundError(ProjectInfoError):
    """Raised when the docker executable cannot be located"""
    def __init__(self, binary: str = "docker"):
        self.binary = binary
        super().__init__(f"Could not find docker executable: {binary}")


class CommandTimeoutError(ProjectInfoError):
    """Raised when a docker command does not finish within its bound"""
    def __init__(self, args: Sequence[str], timeout: float, message: Optional[str] = None):
        self.command = list(args)
        self.timeout = timeout
        reason = f"'docker {' '.join(self.command[:1])}' timed out after {timeout:g} seconds"
        super().__init__(f"{message}: {reason}" if message else reason)


class CommandExecutionError(ProjectInfoError):
    """Raised when a docker command exits with a non-zero status"""
    def __init__(self, args: Sequence[str], returncode: int,
                 stderr: str = "", message: Optional[str] = None):
        self.command = list(args)
        self.returncode = returncode
        self.stderr = stderr
        if message is None:
            message = f"'docker {' '.join(self.command)}' exited with status {returncode}"
        if stderr:
            message = f"{message}: {stderr.strip()}"
        super().__init__(message)


class OutputParseError(ProjectInfoError):
    """Raised when docker output does not have the expected shape"""
    pass


class ValidationError(ProjectInfoError):
    """Raised when resolved data fails validation"""
    def __init__(self, errors: List[str]):
        self.errors = errors
        super().__init__("\n".join(errors))


class DuplicateAliasError(ValidationError):
    """Raised when one alias belongs to more than one container"""
    def __init__(self, aliases: Sequence[str]):
        self.aliases = sorted(aliases)
        super().__init__([
            f"Duplicate container IDs/names found: {', '.join(self.aliases)}"
        ])


class InvalidAddressError(ValidationError):
    """Raised when a container's address is missing or malformed"""
    def __init__(self, container_id: str, value: str, reason: str = "IP address is not valid"):
        self.container_id = container_id
        self.value = value
        super().__init__([
            f"{reason} for container ID {container_id}: {value!r}"
        ])


class InvalidProjectNameError(ValidationError):
    """Raised for project names docker-compose would rewrite"""
    def __init__(self, name: str, reason: str):
        self.name = name
        super().__init__([reason])


def handle_error(error: ProjectInfoError) -> str:
    """
    Convert an error to a user-friendly message.

    Args:
        error: The error to handle

    Returns:
        A formatted error message
    """
    if isinstance(error, DuplicateAliasError):
        return ("Ambiguous aliases, found on more than one container:\n"
                + "\n".join(f"  • {alias}" for alias in error.aliases))
    elif isinstance(error, InvalidAddressError):
        return (f"Invalid address for container {error.container_id}:\n"
                f"  Raw value: {error.value!r}")
    elif isinstance(error, ValidationError):
        return "Validation errors:\n" + "\n".join(f"  • {e}" for e in error.errors)
    elif isinstance(error, CommandTimeoutError):
        return f"Docker did not respond in time: {error}"
    elif isinstance(error, CommandExecutionError):
        return f"Docker command failed: {error}"
    else:
        return str(error)
