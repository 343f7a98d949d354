"""
Alias to address mappings of a compose project.
"""
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, FrozenSet, Mapping, Optional, Set

from .aliases import AliasIndex


@dataclass(frozen=True)
class ProjectInfoMappings:
    """
    Bidirectional index between container aliases and IP addresses.

    ``host_to_ip`` maps every alias of every container to the container's
    address. ``ip_to_hosts`` is derived from it and maps each address to
    all aliases sharing it. Both are read-only.

    Example:
        >>> mappings = ProjectInfoMappings.from_host_to_ip({'web': '172.17.0.2'})
        >>> mappings.ip_to_hosts['172.17.0.2']
        frozenset({'web'})
    """
    host_to_ip: Mapping[str, str]
    ip_to_hosts: Mapping[str, FrozenSet[str]] = field(repr=False)

    @classmethod
    def from_host_to_ip(cls, host_to_ip: Mapping[str, str]) -> 'ProjectInfoMappings':
        ip_to_hosts: Dict[str, Set[str]] = {}
        for host, ip in host_to_ip.items():
            ip_to_hosts.setdefault(ip, set()).add(host)
        return cls(
            host_to_ip=MappingProxyType(dict(host_to_ip)),
            ip_to_hosts=MappingProxyType(
                {ip: frozenset(hosts) for ip, hosts in ip_to_hosts.items()}
            )
        )

    def ip_for(self, host: str) -> Optional[str]:
        return self.host_to_ip.get(host)

    def hosts_for(self, ip: str) -> FrozenSet[str]:
        return self.ip_to_hosts.get(ip, frozenset())

    def to_dict(self) -> dict:
        """Plain, JSON serialisable representation with sorted alias lists."""
        return {
            'host_to_ip': dict(sorted(self.host_to_ip.items())),
            'ip_to_hosts': {ip: sorted(hosts) for ip, hosts in sorted(self.ip_to_hosts.items())},
        }


def build_mappings(index: AliasIndex, container_ips: Mapping[str, str]) -> ProjectInfoMappings:
    """
    Pair every alias of each container with the container's address.

    Args:
        index: Container ID to aliases
        container_ips: Container ID to resolved address

    Returns:
        The assembled mappings

    Raises:
        KeyError: If a container of the index has no resolved address
    """
    host_to_ip: Dict[str, str] = {}
    for container_id in sorted(index):
        ip = container_ips[container_id]
        for alias in index[container_id]:
            host_to_ip[alias] = ip
    return ProjectInfoMappings.from_host_to_ip(host_to_ip)
