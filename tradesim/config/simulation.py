"""
Simulation configuration group.

SimulationConfig derives the parameters of a backtest run (time window,
trading fees, starting balance per symbol and the candle cache flag) from a
PropertySource. A load is a single pass over the simulation properties that
aborts on the first malformed value; whatever was set before the failing key
is kept.
"""

from datetime import datetime
from typing import Any, Mapping, Optional, Union

from ..errors import IllegalConfigurationError
from ..logging.config import get_config_logger, log_property_resolved
from ..parsing.dates import DateInput, parse_datetime, to_local_datetime
from ..parsing.fees import (
    FeeStrategyRegistry,
    FixedAmountFee,
    PercentageFee,
    TradingFees,
    resolve_trading_fees,
)
from ..parsing.grouped import REFERENCE_KEY, GroupedSetting, parse_amount, parse_grouped_setting
from ..utils.time import window_end_or_default, window_start_or_default
from .defaults import PROPERTY_KEYS, SimulationDefaults, get_default_config
from .sources import PropertySource


class SimulationConfig:
    """Simulation parameters loaded from a property source."""

    def __init__(self, defaults: Optional[SimulationDefaults] = None,
                 fee_registry: Optional[FeeStrategyRegistry] = None):
        self._defaults = defaults or get_default_config().simulation
        self._fee_registry = fee_registry
        self._trading_fees: Optional[TradingFees] = None
        self._simulation_start: Optional[datetime] = None
        self._simulation_end: Optional[datetime] = None
        self._cache_candles = self._defaults.cache_candles
        self._initial_funds: GroupedSetting[float] = GroupedSetting()
        self._loaded = False

    def load_from(self, source: PropertySource) -> "SimulationConfig":
        """
        Read every simulation property from `source`.

        Loading again re-runs the same pass: present properties overwrite
        the current values, initial funds only for the symbols they name.

        Args:
            source: Provider of raw property values

        Returns:
            This configuration, for chaining

        Raises:
            IllegalConfigurationError: On the first malformed property value
        """
        keys = PROPERTY_KEYS
        logger = get_config_logger(__name__)

        try:
            raw_fees = source.get_optional_property(keys.trade_fees)
            self._trading_fees = resolve_trading_fees(raw_fees, keys.trade_fees, self._fee_registry)
            log_property_resolved(logger, keys.trade_fees, raw_fees, self._trading_fees)

            raw_start = source.get_optional_property(keys.start)
            self._simulation_start = parse_datetime(raw_start, keys.start)
            log_property_resolved(logger, keys.start, raw_start, self._simulation_start)

            raw_end = source.get_optional_property(keys.end)
            self._simulation_end = parse_datetime(raw_end, keys.end)
            log_property_resolved(logger, keys.end, raw_end, self._simulation_end)

            raw_cache = source.get_optional_property(keys.cache_candles)
            self._cache_candles = source.get_boolean(keys.cache_candles, self._defaults.cache_candles)
            log_property_resolved(logger, keys.cache_candles, raw_cache, self._cache_candles)

            raw_funds = source.get_optional_property(keys.initial_funds)
            parse_grouped_setting(raw_funds, parse_amount, keys.initial_funds, into=self._initial_funds)
            log_property_resolved(logger, keys.initial_funds, raw_funds, self._initial_funds)

        except IllegalConfigurationError as e:
            logger.error(
                "Simulation configuration load failed",
                property_name=e.property_name,
                raw_value=e.raw_value,
                error=str(e),
            )
            raise

        self._loaded = True
        logger.info(
            "Simulation configuration loaded",
            trading_fees=repr(self._trading_fees),
            simulation_start=self._simulation_start,
            simulation_end=self._simulation_end,
            cache_candles=self._cache_candles,
            symbols=sorted(self._initial_funds),
        )
        return self

    @property
    def is_loaded(self) -> bool:
        return self._loaded

    @property
    def simulation_start(self) -> datetime:
        """Configured start, or one lookback period before now when unset."""
        return window_start_or_default(self._simulation_start, self._defaults.lookback_years)

    @simulation_start.setter
    def simulation_start(self, value: DateInput) -> None:
        self._simulation_start = to_local_datetime(value)

    @property
    def simulation_end(self) -> datetime:
        """Configured end, or now when unset."""
        return window_end_or_default(self._simulation_end)

    @simulation_end.setter
    def simulation_end(self, value: DateInput) -> None:
        self._simulation_end = to_local_datetime(value)

    @property
    def trading_fees(self) -> Optional[TradingFees]:
        return self._trading_fees

    @trading_fees.setter
    def trading_fees(self, value: Union[None, str, TradingFees]) -> None:
        if value is None or isinstance(value, TradingFees):
            self._trading_fees = value
        elif isinstance(value, str):
            self._trading_fees = resolve_trading_fees(value, registry=self._fee_registry)
        else:
            raise TypeError(f"Unsupported trading fees value: {value!r}")

    def use_fee_amount(self, amount_per_trade: float) -> "SimulationConfig":
        self._trading_fees = FixedAmountFee(amount_per_trade)
        return self

    def use_fee_percentage(self, percentage_per_trade: float) -> "SimulationConfig":
        self._trading_fees = PercentageFee(percentage_per_trade)
        return self

    @property
    def cache_candles(self) -> bool:
        return self._cache_candles

    @cache_candles.setter
    def cache_candles(self, value: bool) -> None:
        self._cache_candles = bool(value)

    @property
    def initial_funds(self) -> float:
        """Starting balance of the reference currency."""
        return self.initial_amount(REFERENCE_KEY)

    @initial_funds.setter
    def initial_funds(self, amount: float) -> None:
        self._initial_funds.put(REFERENCE_KEY, amount)

    def initial_amount(self, symbol: str) -> float:
        """Starting balance of `symbol`, 0.0 when none is configured."""
        return self._initial_funds.get(symbol, self._defaults.initial_amount)

    def set_initial_amount(self, symbol: str, amount: float) -> "SimulationConfig":
        self._initial_funds.put(symbol, amount)
        return self

    @property
    def initial_amounts(self) -> Mapping[str, float]:
        """Read-only view of every configured starting balance."""
        return self._initial_funds.as_mapping()

    def is_configured(self) -> bool:
        return self._trading_fees is not None and len(self._initial_funds) > 0

    def copy(self) -> "SimulationConfig":
        """Independent copy; the initial funds store is duplicated, not shared."""
        clone = self.__class__.__new__(self.__class__)
        clone.__dict__.update(self.__dict__)
        clone._initial_funds = self._initial_funds.copy()
        return clone

    def __copy__(self) -> "SimulationConfig":
        return self.copy()

    def __deepcopy__(self, memo: dict[int, Any]) -> "SimulationConfig":
        return self.copy()

    def __repr__(self) -> str:
        return (
            f"SimulationConfig(start={self._simulation_start!r}, end={self._simulation_end!r}, "
            f"trading_fees={self._trading_fees!r}, cache_candles={self._cache_candles!r}, "
            f"initial_funds={self._initial_funds.snapshot()!r})"
        )
