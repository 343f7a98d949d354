#!/usr/bin/env python3
"""
Pytest configuration and fixtures for the projectinfo tests.

Docker is never called: the fixtures provide a runner answering each
expected command with canned output.
"""

import sys
import pytest
from pathlib import Path
from typing import Dict, Iterable, List, Tuple, Union

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from projectinfo.core.config import ProjectInfoConfig
from projectinfo.core.docker import CommandResult
from projectinfo.core.listing import ListingFormat
from projectinfo.core.addresses import IP_ADDRESS_FORMAT
from projectinfo.core.project import ProjectName


class FakeDocker:
    """Command runner returning canned results for known argument vectors."""

    def __init__(self):
        self.responses: Dict[Tuple[str, ...], Union[CommandResult, Exception]] = {}
        self.calls: List[Tuple[Tuple[str, ...], float]] = []

    def add(self, args: Iterable[str], lines: Iterable[str] = (), returncode: int = 0,
            stderr: str = "", error: Exception = None) -> 'FakeDocker':
        args = tuple(args)
        self.responses[args] = error or CommandResult(args, returncode, list(lines), stderr)
        return self

    def version(self, version: str = "20.10.7", **kwargs) -> 'FakeDocker':
        return self.add(('version', '--format', '{{ .Client.Version }}'), [version], **kwargs)

    def ps(self, project: str, lines: Iterable[str],
           listing_format: ListingFormat = ListingFormat.STANDARD, **kwargs) -> 'FakeDocker':
        return self.add(
            ('ps', '--filter', f'label=com.docker.compose.project={project}',
             '--format', listing_format.template),
            lines, **kwargs
        )

    def inspect(self, container_id: str, lines: Iterable[str], **kwargs) -> 'FakeDocker':
        return self.add(('inspect', '--format', IP_ADDRESS_FORMAT, container_id), lines, **kwargs)

    def execute(self, *args: str, timeout: float) -> CommandResult:
        self.calls.append((args, timeout))
        if args not in self.responses:
            raise AssertionError(f"Unexpected docker command: {args}")
        response = self.responses[args]
        if isinstance(response, Exception):
            raise response
        return response

    def commands(self, name: str) -> List[Tuple[str, ...]]:
        """Argument vectors of every recorded call to ``docker <name>``."""
        return [args for args, _ in self.calls if args[0] == name]


@pytest.fixture
def fake_docker():
    """An empty FakeDocker"""
    return FakeDocker()


@pytest.fixture
def demo_project():
    return ProjectName('demo')


@pytest.fixture
def demo_docker(fake_docker):
    """Two containers of project 'demo' listed with the standard format"""
    return (fake_docker
            .version('20.10.7')
            .ps('demo', ['id1,demo_web_1,web', 'id2,demo_db_1,db'])
            .inspect('id1', ['172.18.0.2'])
            .inspect('id2', ['172.18.0.3']))


@pytest.fixture
def test_config(tmp_path):
    """Configuration writing logs below the test's temporary directory"""
    return ProjectInfoConfig(log_dir=tmp_path / 'logs')
