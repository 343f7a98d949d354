"""
Docker command execution.
"""
import os
import shutil
import logging
import subprocess
from pathlib import Path
from typing import List, NamedTuple, Optional, Protocol, Sequence, Tuple

from .exceptions import (
    CommandExecutionError,
    CommandTimeoutError,
    DockerNotFoundError,
    OutputParseError
)

logger = logging.getLogger('projectinfo.docker')

# Checked in order when docker is not on PATH
DOCKER_LOCATIONS = [
    Path('/usr/local/bin/docker'),
    Path('/usr/bin/docker'),
]


class CommandResult(NamedTuple):
    """Outcome of a finished docker command."""
    args: Tuple[str, ...]
    returncode: int
    lines: List[str]
    stderr: str = ""


class CommandRunner(Protocol):
    """Anything able to run a docker command and report its outcome."""

    def execute(self, *args: str, timeout: float) -> CommandResult:
        ...


class DockerExecutable:
    """
    Runs docker CLI commands as subprocesses.

    Each call owns its process for the duration of the call: output pipes
    are closed and the process is reaped before ``execute`` returns or
    raises. A command that outlives its timeout is killed.

    Attributes:
        binary (str): Path of the docker executable
        docker_host (Optional[str]): Daemon address passed as DOCKER_HOST
    """

    def __init__(self, binary: Optional[str] = None, docker_host: Optional[str] = None):
        self.binary = self._locate(binary)
        self.docker_host = docker_host

    @staticmethod
    def _locate(binary: Optional[str]) -> str:
        """Find the docker executable."""
        found = shutil.which(binary or 'docker')
        if found:
            return found
        if binary is None:
            for location in DOCKER_LOCATIONS:
                if location.exists():
                    return str(location)
        raise DockerNotFoundError(binary or 'docker')

    def _env(self) -> dict:
        env_dict = os.environ.copy()
        if self.docker_host:
            env_dict['DOCKER_HOST'] = self.docker_host
        return env_dict

    def execute(self, *args: str, timeout: float) -> CommandResult:
        """
        Run ``docker <args>`` and wait for it to finish.

        Args:
            *args: Arguments passed to the docker executable
            timeout: Seconds to wait before the command is considered failed

        Returns:
            CommandResult with the exit status and the stdout lines

        Raises:
            CommandTimeoutError: If the command did not finish in time
            DockerNotFoundError: If the executable disappeared
            OutputParseError: If the output is not valid UTF-8
        """
        cmd = [self.binary, *args]
        logger.debug(f"Running: {' '.join(cmd)} (timeout {timeout:g}s)")
        try:
            result = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                encoding='utf-8',
                env=self._env(),
                timeout=timeout
            )
        except subprocess.TimeoutExpired as e:
            logger.error(f"Command timed out after {timeout:g}s: {' '.join(cmd)}")
            raise CommandTimeoutError(args, timeout) from e
        except UnicodeDecodeError as e:
            logger.error(f"Undecodable output from: {' '.join(cmd)}")
            raise OutputParseError(
                f"'docker {args[0]}' produced output that is not valid UTF-8"
            ) from e
        except FileNotFoundError as e:
            raise DockerNotFoundError(self.binary) from e

        logger.debug(f"Exit status {result.returncode}: {' '.join(cmd)}")
        return CommandResult(tuple(args), result.returncode, result.stdout.splitlines(), result.stderr)


def execute_checked(runner: CommandRunner, *args: str, timeout: float,
                    failure_message: Optional[str] = None) -> List[str]:
    """
    Run a command and return its output lines, failing on a non-zero exit.

    Args:
        runner: Execution capability to use
        *args: Docker arguments
        timeout: Seconds allowed for the command
        failure_message: Message used instead of the default on failure

    Returns:
        The command's stdout lines

    Raises:
        CommandExecutionError: If the command exited with a non-zero status
        CommandTimeoutError: If the command did not finish in time
    """
    try:
        result = runner.execute(*args, timeout=timeout)
    except CommandTimeoutError as e:
        if failure_message is None:
            raise
        raise CommandTimeoutError(args, timeout, failure_message) from e
    if result.returncode != 0:
        logger.error(f"'docker {args[0]}' exited with status {result.returncode}")
        raise CommandExecutionError(args, result.returncode, result.stderr, failure_message)
    return result.lines


def only_line(lines: Sequence[str]) -> Optional[str]:
    """Return the single element of ``lines``, or None for any other count."""
    if len(lines) != 1:
        return None
    return lines[0]
