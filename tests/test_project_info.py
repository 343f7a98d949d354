#!/usr/bin/env python3
"""
End to end tests of the project resolution pipeline against canned docker output.
"""

import pytest

from projectinfo.core.config import ProjectInfoConfig
from projectinfo.core.exceptions import (
    CommandExecutionError,
    CommandTimeoutError,
    DuplicateAliasError,
    InvalidAddressError,
    InvalidProjectNameError,
    ValidationError
)
from projectinfo.core.listing import ListingFormat
from projectinfo.core.project_info import ProjectInfo, resolve_project_mappings


class TestProjectInfo:
    """Test ProjectInfo.get()"""

    def test_standard_format_scenario(self, demo_docker, demo_project):
        mappings = ProjectInfo(demo_docker, demo_project).get()

        assert dict(mappings.host_to_ip) == {
            'id1': '172.18.0.2', 'demo_web_1': '172.18.0.2', 'web': '172.18.0.2',
            'id2': '172.18.0.3', 'demo_db_1': '172.18.0.3', 'db': '172.18.0.3',
        }
        assert len(mappings.ip_to_hosts) == 2
        assert mappings.ip_to_hosts['172.18.0.2'] == frozenset({'id1', 'demo_web_1', 'web'})
        assert mappings.ip_to_hosts['172.18.0.3'] == frozenset({'id2', 'demo_db_1', 'db'})

    def test_round_trip_closure(self, demo_docker, demo_project):
        mappings = ProjectInfo(demo_docker, demo_project).get()
        for alias, ip in mappings.host_to_ip.items():
            assert alias in mappings.ip_to_hosts[ip]

    def test_command_sequence(self, demo_docker, demo_project):
        ProjectInfo(demo_docker, demo_project).get()
        assert [args[0] for args, _ in demo_docker.calls] == ['version', 'ps', 'inspect', 'inspect']
        assert [timeout for _, timeout in demo_docker.calls] == [5, 10, 5, 5]

    def test_legacy_docker_scenario(self, fake_docker, demo_project):
        (fake_docker
            .version('1.13.0')
            .ps('demo', ['abc123,demo_cache_1'], ListingFormat.LEGACY)
            .inspect('abc123', ['172.18.0.5']))

        mappings = ProjectInfo(fake_docker, demo_project).get()

        assert fake_docker.commands('ps')[0][-1] == '{{ .ID }},{{ .Names }}'
        assert mappings.ip_to_hosts['172.18.0.5'] == frozenset({'abc123', 'demo_cache_1', 'cache'})
        assert mappings.host_to_ip['cache'] == '172.18.0.5'

    def test_empty_project(self, fake_docker, demo_project):
        fake_docker.version().ps('demo', [])
        mappings = ProjectInfo(fake_docker, demo_project).get()
        assert dict(mappings.host_to_ip) == {}
        assert dict(mappings.ip_to_hosts) == {}
        assert fake_docker.commands('inspect') == []

    def test_duplicate_alias_aborts_before_inspect(self, fake_docker, demo_project):
        fake_docker.version().ps('demo', ['id1,demo_web_1,web', 'id2,demo_web_2,web'])
        with pytest.raises(DuplicateAliasError) as exc_info:
            ProjectInfo(fake_docker, demo_project).get()
        assert exc_info.value.aliases == ['web']
        assert fake_docker.commands('inspect') == []

    def test_invalid_address_aborts(self, demo_docker, demo_project):
        demo_docker.inspect('id2', ['300.1.1.1'])
        with pytest.raises(ValidationError) as exc_info:
            ProjectInfo(demo_docker, demo_project).get()
        assert isinstance(exc_info.value, InvalidAddressError)
        assert exc_info.value.container_id == 'id2'

    def test_multi_line_address_aborts(self, demo_docker, demo_project):
        demo_docker.inspect('id1', ['172.18.0.2', '10.0.0.2'])
        with pytest.raises(ValidationError, match='id1'):
            ProjectInfo(demo_docker, demo_project).get()

    def test_failed_inspect_aborts(self, demo_docker, demo_project):
        demo_docker.inspect('id2', [], returncode=1)
        with pytest.raises(CommandExecutionError, match='container ID id2'):
            ProjectInfo(demo_docker, demo_project).get()

    def test_failed_version_probe_aborts(self, demo_docker, demo_project):
        demo_docker.version('', returncode=1)
        with pytest.raises(CommandExecutionError):
            ProjectInfo(demo_docker, demo_project).get()
        assert demo_docker.commands('ps') == []

    def test_listing_timeout_aborts_before_inspect(self, fake_docker, demo_project):
        ps_args = (
            'ps',
            '--filter', 'label=com.docker.compose.project=demo',
            '--format', ListingFormat.STANDARD.template
        )
        fake_docker.version().add(ps_args, error=CommandTimeoutError(ps_args, 10))
        with pytest.raises(CommandTimeoutError):
            ProjectInfo(fake_docker, demo_project).get()
        assert fake_docker.commands('inspect') == []

    def test_config_timeouts_and_workers(self, demo_docker, demo_project):
        config = ProjectInfoConfig(version_timeout=1, ps_timeout=2, inspect_timeout=3, max_workers=2)
        mappings = ProjectInfo(demo_docker, demo_project, config).get()
        assert len(mappings.host_to_ip) == 6
        assert sorted(timeout for _, timeout in demo_docker.calls) == [1, 2, 3, 3]

    def test_each_call_queries_docker_again(self, demo_docker, demo_project):
        info = ProjectInfo(demo_docker, demo_project)
        first = info.get()
        demo_docker.inspect('id1', ['172.18.0.9'])
        second = info.get()
        assert first.host_to_ip['web'] == '172.18.0.2'
        assert second.host_to_ip['web'] == '172.18.0.9'


def test_resolve_project_mappings_accepts_string(demo_docker):
    mappings = resolve_project_mappings(demo_docker, 'demo')
    assert mappings.host_to_ip['db'] == '172.18.0.3'


def test_resolve_project_mappings_rejects_invalid_name(fake_docker):
    with pytest.raises(InvalidProjectNameError):
        resolve_project_mappings(fake_docker, 'Demo_Project')
    assert fake_docker.calls == []
