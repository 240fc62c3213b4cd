"""People attached to a dependency: authors and contributors."""

from dataclasses import dataclass
from typing import Any, Mapping, Optional

from .error_handling import InvalidRecordError


@dataclass(frozen=True)
class Person:
    """A named individual, optionally with an email address and a URL."""

    name: str
    email: Optional[str] = None
    url: Optional[str] = None

    @classmethod
    def from_value(cls, value: Any) -> "Person":
        """Build a person from a Person, a ``NAME <EMAIL> (URL)`` string or a mapping."""
        if isinstance(value, Person):
            return value
        if isinstance(value, str):
            return parse_person(value)
        if isinstance(value, Mapping):
            name = value.get("name")
            if not name:
                raise InvalidRecordError(
                    "Person entry has no name", missing_fields=["name"]
                )
            return cls(
                name=str(name),
                email=value.get("email") or None,
                url=value.get("url") or None,
            )
        raise InvalidRecordError(
            f"Cannot build a person from {type(value).__name__}"
        )

    def text(self, prefix: str = "", suffix: str = "") -> str:
        return f"{prefix}{format_person(self)}{suffix}"


def parse_person(text: str) -> Person:
    """
    Parse a person string of the form ``NAME <EMAIL> (URL)``.

    Email and URL are optional. ``<`` starts the email, ``(`` starts the URL
    and the closing brackets are dropped.
    """
    if not text or not text.strip():
        raise InvalidRecordError("Person string is empty", missing_fields=["name"])

    parts = {"name": "", "email": "", "url": ""}
    current = "name"
    for character in text:
        if character == "<":
            current = "email"
        elif character == "(":
            current = "url"
        elif character not in ")>":
            parts[current] += character

    name = parts["name"].strip()
    if not name:
        raise InvalidRecordError(
            f"Person string has no name: {text!r}", missing_fields=["name"]
        )

    return Person(
        name=name,
        email=parts["email"].strip() or None,
        url=parts["url"].strip() or None,
    )


def format_person(person: Person) -> str:
    """Render ``name`` with an ``<email>`` suffix when an email is known."""
    if person.email:
        return f"{person.name} <{person.email}>"
    return person.name
