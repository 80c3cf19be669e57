"""Property sources that feed raw values into SimulationConfig."""

from dataclasses import dataclass
from datetime import date, datetime
from pathlib import Path
from typing import Any, Mapping, Optional, Protocol, Union, runtime_checkable

import yaml

from ..errors import IllegalConfigurationError
from ..parsing.dates import format_datetime

_TRUE_LITERALS = frozenset({"true", "yes", "on", "1"})
_FALSE_LITERALS = frozenset({"false", "no", "off", "0"})


@runtime_checkable
class PropertySource(Protocol):
    """Raw key -> value lookups consumed by configuration groups."""

    def get_optional_property(self, key: str) -> Optional[str]:
        ...

    def get_boolean(self, key: str, default: bool) -> bool:
        ...


@dataclass(frozen=True)
class MappingPropertySource:
    """Property source backed by a flat dotted-key mapping."""

    properties: dict[str, Any]

    @classmethod
    def create(cls, mapping: Optional[Mapping[str, Any]] = None) -> "MappingPropertySource":
        """
        Create a source from a flat or nested mapping.

        {"simulation": {"start": "2020"}} and {"simulation.start": "2020"} are equivalent.
        """
        return cls(properties=cls._flatten(mapping or {}))

    @classmethod
    def from_yaml_string(cls, text: str) -> "MappingPropertySource":
        """Create a source from a YAML document."""
        document = yaml.safe_load(text)

        if document is None:
            return cls.create({})
        if not isinstance(document, Mapping):
            raise IllegalConfigurationError(
                f"Expected a mapping at the top of the YAML document, got {type(document).__name__}"
            )
        return cls.create(document)

    @classmethod
    def from_yaml(cls, path: Union[str, Path]) -> "MappingPropertySource":
        """Create a source from a YAML file."""
        with open(path) as f:
            return cls.from_yaml_string(f.read())

    def get_optional_property(self, key: str) -> Optional[str]:
        """Raw string value of `key`, or None when absent or blank."""
        value = self.properties.get(key)

        if value is None:
            return None
        if isinstance(value, bool):
            return "true" if value else "false"
        if isinstance(value, datetime):
            if value.tzinfo is not None:
                value = value.astimezone().replace(tzinfo=None)
            if value.second == 0 and value.microsecond == 0:
                return format_datetime(value)
            return value.isoformat(sep=" ")
        if isinstance(value, date):
            return value.isoformat()
        if isinstance(value, (list, tuple, set)):
            raise IllegalConfigurationError(
                f"Property '{key}' must be a single value, got a {type(value).__name__}",
                property_name=key,
                raw_value=repr(value),
            )

        text = str(value)
        return text if text.strip() else None

    def get_boolean(self, key: str, default: bool) -> bool:
        """Boolean value of `key`, or `default` when absent."""
        value = self.properties.get(key)

        if value is None:
            return default
        if isinstance(value, bool):
            return value
        if isinstance(value, int) and value in (0, 1):
            return bool(value)

        text = str(value).strip().lower()
        if not text:
            return default
        if text in _TRUE_LITERALS:
            return True
        if text in _FALSE_LITERALS:
            return False

        raise IllegalConfigurationError(
            f"Invalid boolean '{value}' defined in property '{key}'",
            property_name=key,
            raw_value=str(value),
        )

    @classmethod
    def _flatten(cls, mapping: Mapping[str, Any], prefix: str = "") -> dict[str, Any]:
        """Flatten nested mappings into dotted keys."""
        result = {}

        for key, value in mapping.items():
            dotted = f"{prefix}.{key}" if prefix else str(key)
            if isinstance(value, Mapping):
                result.update(cls._flatten(value, dotted))
            else:
                result[dotted] = value

        return result
