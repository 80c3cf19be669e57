"""
Symbol-keyed settings encoded in a single string.

A grouped setting such as ``[USDT]2000.0,[ADA;ETH]100.0`` assigns a value to
every symbol listed in the brackets of each comma separated group. A group
without brackets applies to the reference key (the empty string), which
stands for the account's base currency.

Grammar::

    spec  := group (',' group)*
    group := ('[' symbol (';' symbol)* ']')? value

Later groups overwrite earlier ones for a shared symbol.
"""

import threading
from typing import Callable, Generic, Iterator, Mapping, Optional, TypeVar

from ..errors import IllegalConfigurationError, InvalidGroupedValueError
from .numbers import parse_decimal

T = TypeVar("T")

REFERENCE_KEY = ""


class GroupedSetting(Generic[T]):
    """Thread-safe mapping from symbol to value."""

    def __init__(self, values: Optional[Mapping[str, T]] = None):
        self._values: dict[str, T] = dict(values or {})
        self._lock = threading.RLock()

    def get(self, symbol: str, default: Optional[T] = None) -> Optional[T]:
        with self._lock:
            return self._values.get(symbol, default)

    def put(self, symbol: str, value: T) -> None:
        with self._lock:
            self._values[symbol] = value

    def put_all(self, value: T, *symbols: str) -> None:
        """Store `value` under every symbol, or under the reference key when none are given."""
        with self._lock:
            if not symbols:
                self._values[REFERENCE_KEY] = value
            for symbol in symbols:
                self._values[symbol] = value

    def remove(self, symbol: str) -> Optional[T]:
        with self._lock:
            return self._values.pop(symbol, None)

    def clear(self) -> None:
        with self._lock:
            self._values.clear()

    def snapshot(self) -> dict[str, T]:
        """Point-in-time copy of the stored values."""
        with self._lock:
            return dict(self._values)

    def as_mapping(self) -> Mapping[str, T]:
        """Live read-only view, later writes to the store show through it."""
        return GroupedSettingView(self)

    def copy(self) -> "GroupedSetting[T]":
        return GroupedSetting(self.snapshot())

    def __contains__(self, symbol: object) -> bool:
        with self._lock:
            return symbol in self._values

    def __len__(self) -> int:
        with self._lock:
            return len(self._values)

    def __iter__(self) -> Iterator[str]:
        return iter(self.snapshot())

    def __eq__(self, other: object) -> bool:
        if isinstance(other, GroupedSetting):
            return self.snapshot() == other.snapshot()
        if isinstance(other, Mapping):
            return self.snapshot() == dict(other)
        return NotImplemented

    def __repr__(self) -> str:
        return f"GroupedSetting({self.snapshot()!r})"


class GroupedSettingView(Mapping[str, T]):
    """Read-only Mapping over a GroupedSetting. Iteration walks a snapshot of the keys."""

    def __init__(self, store: GroupedSetting[T]):
        self._store = store

    def __getitem__(self, symbol: str) -> T:
        with self._store._lock:
            return self._store._values[symbol]

    def __contains__(self, symbol: object) -> bool:
        return symbol in self._store

    def __len__(self) -> int:
        return len(self._store)

    def __iter__(self) -> Iterator[str]:
        return iter(self._store)

    def __repr__(self) -> str:
        return f"GroupedSettingView({self._store.snapshot()!r})"


def _malformed(message: str, group: str, spec: str, property_name: Optional[str]) -> InvalidGroupedValueError:
    where = f" of property '{property_name}'" if property_name else ""
    return InvalidGroupedValueError(
        f"{message} in group '{group}' of value '{spec}'{where}",
        group=group,
        property_name=property_name,
        raw_value=spec,
    )


def split_groups(spec: str, property_name: Optional[str] = None) -> list[str]:
    """Split a grouped-setting string on the commas that sit outside brackets."""
    groups = []
    current = []
    in_brackets = False

    for char in spec:
        if char == "[":
            if in_brackets:
                raise _malformed("Nested '['", "".join(current) + char, spec, property_name)
            in_brackets = True
        elif char == "]":
            in_brackets = False
        elif char == "," and not in_brackets:
            groups.append("".join(current))
            current = []
            continue
        current.append(char)

    groups.append("".join(current))
    return groups


def parse_group(group: str, spec: str = "", property_name: Optional[str] = None) -> tuple[tuple[str, ...], str]:
    """
    Split one group into its symbols and its raw value.

    Returns:
        (symbols, value) where symbols is empty for a bare value

    Raises:
        InvalidGroupedValueError: If the brackets are unbalanced or list an empty symbol
    """
    text = group.strip()
    symbols: tuple[str, ...] = ()

    if text.startswith("["):
        close = text.find("]")
        if close < 0:
            raise _malformed("Missing ']'", group, spec or group, property_name)
        symbols = tuple(symbol.strip() for symbol in text[1:close].split(";"))
        if any(not symbol for symbol in symbols):
            raise _malformed("Empty symbol", group, spec or group, property_name)
        text = text[close + 1:].strip()

    if "[" in text or "]" in text:
        raise _malformed("Unexpected bracket", group, spec or group, property_name)

    return symbols, text


def parse_grouped_setting(spec: Optional[str], convert: Callable[[str], T],
                          property_name: Optional[str] = None,
                          into: Optional[GroupedSetting[T]] = None) -> GroupedSetting[T]:
    """
    Parse a grouped-setting string into a symbol -> value store.

    Args:
        spec: Raw setting such as "[USDT]2000.0,[ADA;ETH]100.0"; None or blank yields no entries
        convert: Converts the raw value of each group
        property_name: Property the spec was read from, used in error messages
        into: Existing store to write into; a new one is created when omitted

    Returns:
        The store holding the parsed values

    Raises:
        InvalidGroupedValueError: If a group is malformed or `convert` rejects its value
        IllegalConfigurationError: Raised by `convert` itself, passed through unchanged
    """
    target: GroupedSetting[T] = into if into is not None else GroupedSetting()
    if spec is None or not spec.strip():
        return target

    for group in split_groups(spec, property_name):
        if not group.strip():
            continue

        symbols, raw_value = parse_group(group, spec, property_name)
        try:
            value = convert(raw_value)
        except IllegalConfigurationError as e:
            if e.property_name is None:
                e.property_name = property_name
            raise
        except (ValueError, TypeError) as e:
            where = f" defined in property '{property_name}'" if property_name else ""
            raise InvalidGroupedValueError(
                f"Invalid value '{raw_value}' in group '{group.strip()}'{where}",
                group=group.strip(),
                property_name=property_name,
                raw_value=spec,
                cause=e,
            ) from e

        target.put_all(value, *symbols)

    return target


def parse_amount(text: str) -> float:
    """Standard converter for amount-valued grouped settings."""
    return parse_decimal(text)
