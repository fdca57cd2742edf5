"""
Privacy-tagged metadata values and the redaction policy.

Every metadata value carries a privacy tier that decides how it is rendered:

- public: always visible
- private: visible outside production, replaced by ``<private>`` in production
- sensitive: always replaced by ``<sensitive>``

Placeholders are fixed strings and never derived from the raw value.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping

PRIVATE_PLACEHOLDER = "<private>"
SENSITIVE_PLACEHOLDER = "<sensitive>"


class Privacy(Enum):
    """Privacy tier of a logged value."""

    PUBLIC = "public"
    PRIVATE = "private"
    SENSITIVE = "sensitive"


@dataclass(frozen=True, slots=True)
class PrivacyValue:
    """A string value tagged with a privacy tier."""

    value: str
    privacy: Privacy

    def __post_init__(self) -> None:
        if not isinstance(self.privacy, Privacy):
            raise TypeError(f"privacy must be a Privacy member, got {self.privacy!r}")

    def __str__(self) -> str:
        return self.value

    @classmethod
    def public(cls, value: Any) -> PrivacyValue:
        return cls(str(value), Privacy.PUBLIC)

    @classmethod
    def private(cls, value: Any) -> PrivacyValue:
        return cls(str(value), Privacy.PRIVATE)

    @classmethod
    def sensitive(cls, value: Any) -> PrivacyValue:
        return cls(str(value), Privacy.SENSITIVE)

    def redacted(self, is_production: bool) -> str:
        return redact(self, is_production)


def redact(value: PrivacyValue, is_production: bool) -> str:
    """Render a value for output according to its tier and the environment."""
    if value.privacy is Privacy.PUBLIC:
        return value.value
    if value.privacy is Privacy.PRIVATE:
        return PRIVATE_PLACEHOLDER if is_production else value.value
    return SENSITIVE_PLACEHOLDER


def public(value: Any) -> PrivacyValue:
    return PrivacyValue.public(value)


def private(value: Any) -> PrivacyValue:
    return PrivacyValue.private(value)


def sensitive(value: Any) -> PrivacyValue:
    return PrivacyValue.sensitive(value)


def coerce_metadata(
    metadata: Mapping[Any, Any] | None,
    default_privacy: Privacy = Privacy.PRIVATE,
) -> dict[str, PrivacyValue]:
    """Tag plain metadata values with ``default_privacy``.

    Values that already are ``PrivacyValue`` keep their tier. Used for log calls
    that come from outside the facade and carry untagged values.
    """
    if not metadata:
        return {}
    result: dict[str, PrivacyValue] = {}
    for key, value in metadata.items():
        if isinstance(value, PrivacyValue):
            result[str(key)] = value
        else:
            result[str(key)] = PrivacyValue(str(value), default_privacy)
    return result


def format_metadata(metadata: Mapping[str, PrivacyValue], is_production: bool) -> str:
    """Join metadata as ``key=value, key=value`` with every value redacted."""
    return ", ".join(f"{key}={redact(value, is_production)}" for key, value in metadata.items())


__all__ = [
    "PRIVATE_PLACEHOLDER",
    "SENSITIVE_PLACEHOLDER",
    "Privacy",
    "PrivacyValue",
    "coerce_metadata",
    "format_metadata",
    "private",
    "public",
    "redact",
    "sensitive",
]
