"""
Grouping of container aliases and ambiguity checks.

Every container listed for a project is known by several aliases: its
ID, its name(s) and its compose service name. The ID is always the
first field of a listed line and keys the container's group.
"""
import logging
from collections import Counter
from typing import Dict, Iterable, List, Optional, Set

from .exceptions import DuplicateAliasError, OutputParseError
from .listing import ListingFormat
from .project import ProjectName

logger = logging.getLogger('projectinfo.aliases')

AliasIndex = Dict[str, List[str]]


def derive_service_name(aliases: Iterable[str], project_name: ProjectName) -> Optional[str]:
    """
    Derive the compose service name from a ``<project>_<service>_<n>`` name.

    Returns:
        The service segment of the first matching alias, or None
    """
    prefix = f"{project_name.as_string()}_"
    for alias in aliases:
        if alias.startswith(prefix):
            service = alias.split('_')[1]
            return service or None
    return None


def parse_aliases(line: str, project_name: ProjectName,
                  listing_format: ListingFormat) -> List[str]:
    """
    Parse one ``docker ps`` line into the container's aliases.

    Raises:
        OutputParseError: If the line lacks an ID or has too few fields
    """
    fields = [field.strip() for field in line.split(',')]
    if len(fields) < listing_format.min_fields or not fields[0]:
        raise OutputParseError(
            f"Unexpected 'docker ps' line for {listing_format.name.lower()} format: {line!r}"
        )

    if listing_format is ListingFormat.LEGACY:
        service = derive_service_name(fields, project_name)
        if service is not None:
            fields.append(service)

    # Containers without the service label render an empty field; dropping
    # it keeps two unlabelled containers from sharing the alias ""
    return [field for field in fields if field]


def group_aliases(lines: Iterable[str], project_name: ProjectName,
                  listing_format: ListingFormat) -> AliasIndex:
    """
    Build the index from container ID to every alias of that container.

    Args:
        lines: Output lines of ``docker ps``
        project_name: Project the containers belong to
        listing_format: Template the lines were rendered with

    Returns:
        Ordered mapping of container ID to its aliases, ID included
    """
    index: AliasIndex = {}
    for line in lines:
        aliases = parse_aliases(line, project_name, listing_format)
        index.setdefault(aliases[0], []).extend(aliases)
    logger.debug(f"Grouped aliases for {len(index)} containers")
    return index


def find_duplicate_aliases(index: AliasIndex) -> Set[str]:
    """Aliases that belong to more than one container."""
    counts = Counter()
    for aliases in index.values():
        counts.update(set(aliases))
    return {alias for alias, count in counts.items() if count > 1}


def check_no_duplicate_aliases(index: AliasIndex) -> None:
    """
    Ensure every alias addresses exactly one container.

    Raises:
        DuplicateAliasError: Naming every alias shared between containers
    """
    duplicates = find_duplicate_aliases(index)
    if duplicates:
        logger.error(f"Duplicate container IDs/names found: {sorted(duplicates)}")
        raise DuplicateAliasError(duplicates)
