"""
Trading fee models and resolution of fee specifications.

A fee specification is a single string. Digit-led values are numeric: a
trailing '%' makes a percentage rate, anything else is a fixed amount per
trade. Any other value names a custom fee strategy that the host application
registered with a FeeStrategyRegistry.
"""

import string
import threading
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Callable, Optional

import structlog

from ..errors import FeeStrategyInstantiationError, InvalidFeeAmountError
from .numbers import parse_decimal

logger = structlog.get_logger(__name__)

FeeFactory = Callable[[], "TradingFees"]


class TradingFees(ABC):
    """Capability shared by every fee strategy."""

    @abstractmethod
    def fees_on_amount(self, amount: float) -> float:
        """
        Fees charged on a trade of the given amount.

        Args:
            amount: Total trade amount in the quote currency

        Returns:
            Fee to deduct, in the quote currency
        """
        pass

    def take_fee(self, amount: float) -> float:
        """Amount left after deducting the fees of a trade."""
        return amount - self.fees_on_amount(amount)


@dataclass(frozen=True)
class PercentageFee(TradingFees):
    """Fee proportional to the trade amount, `rate` expressed in percent."""
    rate: float

    def fees_on_amount(self, amount: float) -> float:
        return amount * self.rate / 100.0


@dataclass(frozen=True)
class FixedAmountFee(TradingFees):
    """Flat fee charged on every trade."""
    amount: float

    def fees_on_amount(self, amount: float) -> float:
        return self.amount


class FeeStrategyRegistry:
    """Thread-safe name -> factory registry for custom fee strategies."""

    def __init__(self):
        self._factories: dict[str, FeeFactory] = {}
        self._lock = threading.RLock()

    def register(self, name: str, factory: FeeFactory) -> FeeFactory:
        """Register a zero-argument factory (typically a class) under `name`."""
        if not name or not name.strip():
            raise ValueError("Fee strategy name must not be blank")
        with self._lock:
            self._factories[name.strip()] = factory
        logger.debug("Fee strategy registered", strategy_name=name)
        return factory

    def unregister(self, name: str) -> None:
        with self._lock:
            self._factories.pop(name.strip(), None)

    def names(self) -> list[str]:
        with self._lock:
            return sorted(self._factories)

    def __contains__(self, name: str) -> bool:
        with self._lock:
            return name in self._factories

    def lookup(self, name: str) -> FeeFactory:
        """
        Find the factory for a strategy name.

        An exact match wins. Otherwise the last dotted segment of `name` is
        compared with the last segment of every registered name, so
        "com.example.MyFees" finds a strategy registered as "MyFees".

        Raises:
            LookupError: If no strategy, or more than one, matches
        """
        with self._lock:
            if name in self._factories:
                return self._factories[name]

            simple_name = name.rsplit(".", 1)[-1]
            candidates = [
                registered for registered in self._factories
                if registered.rsplit(".", 1)[-1] == simple_name
            ]
            if len(candidates) == 1:
                return self._factories[candidates[0]]

        if candidates:
            raise LookupError(f"Fee strategy name '{name}' is ambiguous, candidates: {sorted(candidates)}")
        raise LookupError(f"No fee strategy registered under '{name}'")

    def create(self, name: str, property_name: Optional[str] = None) -> TradingFees:
        """
        Instantiate the strategy registered under `name`.

        Raises:
            FeeStrategyInstantiationError: If lookup or construction fails, or the
                factory does not produce a TradingFees
        """
        where = f" defined in property '{property_name}'" if property_name else ""
        try:
            factory = self.lookup(name)
            fees = factory()
        except Exception as e:
            raise FeeStrategyInstantiationError(
                f"Error instantiating fee strategy '{name}'{where}: {e}",
                strategy_name=name,
                property_name=property_name,
                raw_value=name,
                cause=e,
            ) from e

        if not isinstance(fees, TradingFees):
            raise FeeStrategyInstantiationError(
                f"Fee strategy '{name}'{where} produced {type(fees).__name__}, "
                f"which does not implement TradingFees",
                strategy_name=name,
                property_name=property_name,
                raw_value=name,
            )
        return fees


default_registry = FeeStrategyRegistry()


def register_fee_strategy(name: Optional[str] = None,
                          registry: Optional[FeeStrategyRegistry] = None) -> Callable[[type], type]:
    """
    Class decorator registering a fee strategy.

    Without a name the class is registered under its module-qualified name,
    which also makes it resolvable by its bare class name.
    """
    target = registry if registry is not None else default_registry

    def decorator(cls: type) -> type:
        target.register(name or f"{cls.__module__}.{cls.__qualname__}", cls)
        return cls

    return decorator


def _parse_fee_number(text: str) -> float:
    if not text[:1] or text[0] not in string.digits:
        raise ValueError(f"Fee amount must start with a digit: '{text}'")
    return parse_decimal(text)


def resolve_trading_fees(spec: Optional[str], property_name: Optional[str] = None,
                         registry: Optional[FeeStrategyRegistry] = None) -> Optional[TradingFees]:
    """
    Resolve a fee specification into a TradingFees instance.

    Args:
        spec: "0.1%", "1.5" or a registered strategy name; None or blank means no fees
        property_name: Property the spec was read from, used in error messages
        registry: Strategy registry for named strategies, defaults to the global one

    Returns:
        The resolved fee strategy, or None when no fee is configured

    Raises:
        InvalidFeeAmountError: If a numeric spec cannot be parsed
        FeeStrategyInstantiationError: If a named strategy cannot be created
    """
    if spec is None or not spec.strip():
        return None

    text = spec.strip()
    is_numeric = text[0] in string.digits or text.endswith("%")

    if not is_numeric:
        return (registry if registry is not None else default_registry).create(text, property_name)

    try:
        if text.endswith("%"):
            return PercentageFee(_parse_fee_number(text[:-1].strip()))
        return FixedAmountFee(_parse_fee_number(text))
    except ValueError as e:
        where = f" defined in property '{property_name}'" if property_name else ""
        raise InvalidFeeAmountError(
            f"Error processing trading fees '{spec}'{where}",
            property_name=property_name,
            raw_value=spec,
            cause=e,
        ) from e
