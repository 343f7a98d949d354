"""
Container IP address resolution.
"""
import logging
import ipaddress
from concurrent.futures import ThreadPoolExecutor
from typing import Dict, Iterable

from .docker import CommandRunner, execute_checked
from .exceptions import InvalidAddressError

logger = logging.getLogger('projectinfo.addresses')

INSPECT_TIMEOUT = 5
IP_ADDRESS_FORMAT = '{{ range .NetworkSettings.Networks }}{{ .IPAddress }}{{ end }}'


def is_ip_address(value: str) -> bool:
    """Check whether ``value`` is an IPv4 or IPv6 literal."""
    try:
        ipaddress.ip_address(value)
        return True
    except ValueError:
        return False


def get_container_ip(docker: CommandRunner, container_id: str,
                     timeout: float = INSPECT_TIMEOUT) -> str:
    """
    Get the address of a container on its network.

    Args:
        docker: Execution capability
        container_id: ID of the container to inspect
        timeout: Seconds allowed for ``docker inspect``

    Returns:
        The container's IP address

    Raises:
        CommandExecutionError: If docker could not inspect the container
        CommandTimeoutError: If docker did not answer in time
        InvalidAddressError: If the output is not a single valid IP address
    """
    lines = execute_checked(
        docker, 'inspect', '--format', IP_ADDRESS_FORMAT, container_id,
        timeout=timeout,
        failure_message=f"Could not resolve address for container ID {container_id}"
    )
    raw = '\n'.join(lines)
    if len(lines) != 1:
        logger.error(f"Expected one address line for {container_id}, got {len(lines)}")
        raise InvalidAddressError(
            container_id, raw,
            reason=f"Expected a single address line, got {len(lines)}"
        )

    ip = lines[0].strip()
    if not is_ip_address(ip):
        logger.error(f"Invalid address for {container_id}: {ip!r}")
        raise InvalidAddressError(container_id, ip)
    logger.debug(f"Container {container_id} has address {ip}")
    return ip


def resolve_container_ips(docker: CommandRunner, container_ids: Iterable[str],
                          timeout: float = INSPECT_TIMEOUT,
                          max_workers: int = 1) -> Dict[str, str]:
    """
    Resolve the address of every container, one inspect call each.

    With ``max_workers`` above one the calls run on a bounded thread pool.
    Either way the result is keyed in sorted container ID order and the
    first failure is raised once outstanding calls have finished.

    Returns:
        Mapping of container ID to IP address
    """
    ids = sorted(set(container_ids))
    if max_workers <= 1 or len(ids) <= 1:
        return {container_id: get_container_ip(docker, container_id, timeout) for container_id in ids}

    logger.debug(f"Resolving {len(ids)} addresses with {max_workers} workers")
    with ThreadPoolExecutor(max_workers=max_workers) as executor:
        futures = [
            (container_id, executor.submit(get_container_ip, docker, container_id, timeout))
            for container_id in ids
        ]
        return {container_id: future.result() for container_id, future in futures}
