"""Collection schemas — composable rules over entry metadata.

Each rule is a callable with the signature::

    def rule(value: Any) -> str | None:
        '''Return error message, or None if valid.'''

Parameterized rules are factory functions that return a rule::

    schema = CollectionSchema({
        "title": [required, string, max_length(120)],
        "date": [required, date],
        "tags": [string_list],
        "lang": [one_of("en", "fr")],
    })

A missing optional field is skipped: only ``required`` sees ``None``.
"""

import datetime as dt
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any

from petrel.content.entry import ContentEntry

type Rule = Callable[[Any], str | None]


# ---------------------------------------------------------------------------
# Presence
# ---------------------------------------------------------------------------


def required(value: Any) -> str | None:
    """Field must be present and non-empty."""
    if value is None or (isinstance(value, str) and not value.strip()):
        return "This field is required"
    return None


# ---------------------------------------------------------------------------
# Types
# ---------------------------------------------------------------------------


def string(value: Any) -> str | None:
    """Value must be a string."""
    if not isinstance(value, str):
        return "Must be a string"
    return None


def date(value: Any) -> str | None:
    """Value must be a date (TOML date/datetime or ISO ``YYYY-MM-DD`` string)."""
    if isinstance(value, dt.date):
        return None
    if isinstance(value, str):
        try:
            dt.date.fromisoformat(value)
        except ValueError:
            return "Must be a valid date (YYYY-MM-DD)"
        return None
    return "Must be a valid date (YYYY-MM-DD)"


def string_list(value: Any) -> str | None:
    """Value must be a list of strings."""
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        return "Must be a list of strings"
    return None


# ---------------------------------------------------------------------------
# Constraints
# ---------------------------------------------------------------------------


def max_length(n: int) -> Rule:
    """String must be at most *n* characters."""

    def check(value: Any) -> str | None:
        if isinstance(value, str) and len(value) > n:
            return f"Must be at most {n} characters"
        return None

    return check


def one_of(*choices: str) -> Rule:
    """Value must be one of the given choices.

    A list value passes when every item is one of the choices.
    """
    allowed = frozenset(choices)

    def accepted(item: Any) -> bool:
        try:
            return item in allowed
        except TypeError:
            return False

    def check(value: Any) -> str | None:
        items = value if isinstance(value, list | tuple) else [value]
        if not all(accepted(item) for item in items):
            options = ", ".join(sorted(allowed))
            return f"Must be one of: {options}"
        return None

    return check


# ---------------------------------------------------------------------------
# Schema
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class CollectionSchema:
    """Field rules for every entry of a collection."""

    fields: Mapping[str, Sequence[Rule]] = field(default_factory=dict)

    def check(self, entry: ContentEntry) -> dict[str, list[str]]:
        """Return ``{field: [messages]}`` for every failing field."""
        errors: dict[str, list[str]] = {}
        for name, rules in self.fields.items():
            value = entry.get(name)
            field_errors: list[str] = []
            for rule in rules:
                if value is None and rule is not required:
                    continue
                error = rule(value)
                if error is not None:
                    field_errors.append(error)
                    # Nothing else to check on a missing value
                    if rule is required:
                        break
            if field_errors:
                errors[name] = field_errors
        return errors
