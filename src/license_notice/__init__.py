"""Render third-party license notices from dependency metadata records."""

__version__ = "1.0.0"

from .dependency import DependencyRecord, Repository, parse_dependency  # noqa: E402
from .error_handling import InvalidRecordError, LicenseNoticeError  # noqa: E402
from .formatter import (  # noqa: E402
    DEFAULT_SEPARATOR,
    NO_DEPENDENCIES_TEXT,
    format_dependencies,
    format_dependency,
    select_dependencies,
)
from .person import Person, format_person, parse_person  # noqa: E402

__all__ = [
    "DEFAULT_SEPARATOR",
    "NO_DEPENDENCIES_TEXT",
    "DependencyRecord",
    "InvalidRecordError",
    "LicenseNoticeError",
    "Person",
    "Repository",
    "format_dependencies",
    "format_dependency",
    "format_person",
    "parse_dependency",
    "parse_person",
    "select_dependencies",
]
