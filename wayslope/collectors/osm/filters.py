"""
Tag filters

Decides which ways are selected, from a user string such as
"highway" or "highway=primary,surface=paved".
"""

from typing import Mapping, Optional, Tuple, Union
from dataclasses import dataclass

from ...errors import FilterSpecError


@dataclass(frozen=True)
class HasKey:
    """Matches when the key is present, whatever its value"""
    key: str


@dataclass(frozen=True)
class KeyEquals:
    """Matches when the key is present with exactly this value"""
    key: str
    value: str


Condition = Union[HasKey, KeyEquals]
FilterSpec = Tuple[Condition, ...]

DEFAULT_FILTER: FilterSpec = (HasKey("highway"),)


def condition_matches(tags: Mapping[str, str], condition: Condition) -> bool:
    if isinstance(condition, KeyEquals):
        return tags.get(condition.key) == condition.value
    return condition.key in tags


def matches(tags: Mapping[str, str], spec: FilterSpec) -> bool:
    """True if any condition in the spec holds; False for an empty spec"""
    return any(condition_matches(tags, c) for c in spec)


def parse_filter(text: Optional[str]) -> FilterSpec:
    """
    Parse a comma-separated list of `key` or `key=value` tokens

    Each token is split on its first "=", so values may themselves contain
    "=". A present but empty value ("surface=") matches only an empty tag
    value. Whitespace is kept as typed.

    Args:
        text: Filter string, or None for the default (highway present)

    Returns:
        Tuple of HasKey / KeyEquals conditions, in input order

    Raises:
        FilterSpecError: If any token has an empty key
    """
    if text is None:
        return DEFAULT_FILTER

    conditions = []
    for position, token in enumerate(text.split(","), 1):
        key, sep, value = token.partition("=")
        if not key:
            raise FilterSpecError(
                f"Invalid filter {text!r}: condition {position} ({token!r}) has an empty key"
            )
        conditions.append(KeyEquals(key, value) if sep else HasKey(key))
    return tuple(conditions)


def describe_filter(spec: FilterSpec) -> str:
    """Render a spec back into its command-line form"""
    return ",".join(
        f"{c.key}={c.value}" if isinstance(c, KeyEquals) else c.key
        for c in spec
    )
