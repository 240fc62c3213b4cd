"""
Plain-text rendering of dependency records.

A record renders as one ``Label: value`` line per populated field, in a
fixed order, joined with ``\\n`` and without a trailing newline.
"""

from typing import Any, Iterable, List, Mapping, Set, Union

from .dependency import DependencyRecord, parse_dependency
from .person import format_person
from .structured_logging import log_record_skipped

EOL = "\n"
CONTRIBUTOR_INDENT = "  "
DEFAULT_SEPARATOR = f"{EOL}{EOL}---{EOL}{EOL}"
NO_DEPENDENCIES_TEXT = "No third parties dependencies"

DependencyLike = Union[DependencyRecord, Mapping[str, Any]]


def _as_record(dependency: DependencyLike) -> DependencyRecord:
    if isinstance(dependency, DependencyRecord):
        return dependency
    return parse_dependency(dependency)


def format_dependency(
    dependency: DependencyLike,
    prefix: str = "",
    suffix: str = "",
    joiner: str = EOL,
) -> str:
    """
    Format one dependency as a multi-line text block.

    Args:
        dependency: A DependencyRecord or a dependency-shaped mapping
        prefix: Text prepended to every line, e.g. a comment marker
        suffix: Text appended to every line
        joiner: Text placed between lines

    Returns:
        str: The formatted block

    Raises:
        InvalidRecordError: If a mapping lacks name, version or license
    """
    record = _as_record(dependency)
    lines: List[str] = [
        f"Name: {record.name}",
        f"Version: {record.version}",
        f"License: {record.license}",
        f"Private: {'true' if record.private else 'false'}",
    ]

    if record.description:
        lines.append(f"Description: {record.description}")

    if record.repository:
        lines.append(f"Repository: {record.repository.url}")

    if record.homepage:
        lines.append(f"Homepage: {record.homepage}")

    if record.author:
        lines.append(f"Author: {format_person(record.author)}")

    if record.contributors:
        lines.append("Contributors:")
        lines.extend(
            f"{CONTRIBUTOR_INDENT}{format_person(contributor)}"
            for contributor in record.contributors
        )

    return joiner.join(f"{prefix}{line}{suffix}" for line in lines)


def select_dependencies(
    dependencies: Iterable[DependencyLike], include_private: bool = False
) -> List[DependencyRecord]:
    """
    Pick the records that belong in a notice, in input order.

    Only the first record seen for a given name is kept, and private
    records are dropped unless ``include_private`` is set.
    """
    seen: Set[str] = set()
    selected = []
    for dependency in dependencies:
        record = _as_record(dependency)
        if record.name in seen:
            log_record_skipped(record.name, "duplicate")
            continue
        seen.add(record.name)
        if record.private and not include_private:
            log_record_skipped(record.name, "private")
            continue
        selected.append(record)
    return selected


def format_dependencies(
    dependencies: Iterable[DependencyLike],
    separator: str = DEFAULT_SEPARATOR,
    include_private: bool = False,
) -> str:
    """
    Format several dependencies into a single third-party notice.

    A notice with nothing to show reads ``No third parties dependencies``.
    """
    blocks = [
        format_dependency(record)
        for record in select_dependencies(dependencies, include_private)
    ]
    return separator.join(blocks) or NO_DEPENDENCIES_TEXT
