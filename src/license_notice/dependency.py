from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, Tuple

from .error_handling import InvalidRecordError
from .person import Person

REQUIRED_FIELDS = ("name", "version", "license")

# Keys read from an incoming record, everything else is ignored.
KNOWN_FIELDS = (
    "name",
    "version",
    "license",
    "licenses",
    "private",
    "description",
    "homepage",
    "repository",
    "author",
    "contributors",
    "maintainers",
)


@dataclass(frozen=True)
class Repository:
    """Source repository of a dependency. Only ``url`` is ever rendered."""

    url: str
    type: Optional[str] = None

    @classmethod
    def from_value(cls, value: Any) -> "Repository":
        if isinstance(value, Repository):
            return value
        if isinstance(value, str):
            return cls(url=value)
        if isinstance(value, Mapping):
            url = value.get("url")
            if not url:
                raise InvalidRecordError(
                    "Repository entry has no url", missing_fields=["repository.url"]
                )
            return cls(url=str(url), type=value.get("type"))
        raise InvalidRecordError(
            f"Cannot build a repository from {type(value).__name__}"
        )


@dataclass(frozen=True)
class DependencyRecord:
    """
    A unified, immutable description of one dependency's metadata.

    Maintainers are kept for callers but are not part of the rendered block.
    """

    name: str
    version: str
    license: str
    private: bool = False
    description: Optional[str] = None
    homepage: Optional[str] = None
    repository: Optional[Repository] = None
    author: Optional[Person] = None
    contributors: Tuple[Person, ...] = ()
    maintainers: Tuple[Person, ...] = ()

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "DependencyRecord":
        return parse_dependency(data)

    def text(self, prefix: str = "", suffix: str = "", joiner: str = "\n") -> str:
        """Serialize the record as a notice block, decorating every line."""
        from .formatter import format_dependency

        return format_dependency(self, prefix=prefix, suffix=suffix, joiner=joiner)


def _merge_licenses(licenses: Any) -> str:
    """Map the deprecated ``licenses`` list to an SPDX ``(A OR B)`` expression."""
    if isinstance(licenses, (str, Mapping)):
        licenses = [licenses]

    types = []
    for entry in licenses:
        if isinstance(entry, Mapping):
            types.append(str(entry.get("type") or entry))
        else:
            types.append(str(entry))
    return f"({' OR '.join(types)})"


def _parse_people(value: Any) -> Tuple[Person, ...]:
    if value is None:
        return ()
    if isinstance(value, (str, Mapping, Person)):
        value = [value]
    return tuple(Person.from_value(person) for person in value)


def parse_dependency(data: Mapping[str, Any]) -> DependencyRecord:
    """
    Build a DependencyRecord from a dependency-shaped mapping.

    Args:
        data: Mapping with at least name, version and license keys

    Returns:
        DependencyRecord: The normalized record

    Raises:
        InvalidRecordError: If the mapping is missing required fields
    """
    if not isinstance(data, Mapping):
        raise InvalidRecordError(
            f"Dependency record must be a mapping, got {type(data).__name__}"
        )

    picked: Dict[str, Any] = {key: data[key] for key in KNOWN_FIELDS if key in data}

    if not picked.get("license") and picked.get("licenses"):
        picked["license"] = _merge_licenses(picked["licenses"])

    missing: List[str] = [key for key in REQUIRED_FIELDS if picked.get(key) is None]
    if missing:
        name = picked.get("name")
        label = f"'{name}'" if name is not None else "record"
        raise InvalidRecordError(
            f"Dependency {label} is missing required field(s): {', '.join(missing)}",
            missing_fields=missing,
            record_name=name,
        )

    repository = picked.get("repository")
    author = picked.get("author")

    return DependencyRecord(
        name=str(picked["name"]),
        version=str(picked["version"]),
        license=str(picked["license"]),
        private=bool(picked.get("private", False)),
        description=picked.get("description") or None,
        homepage=picked.get("homepage") or None,
        repository=Repository.from_value(repository) if repository else None,
        author=Person.from_value(author) if author else None,
        contributors=_parse_people(picked.get("contributors")),
        maintainers=_parse_people(picked.get("maintainers")),
    )
