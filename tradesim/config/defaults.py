"""Default values and property keys for simulation configuration."""

from dataclasses import dataclass


@dataclass(frozen=True)
class PropertyKeys:
    """Property names read by SimulationConfig.load_from."""
    trade_fees: str = "simulation.trade.fees"          # "0.1%", "1.5" or a strategy name
    start: str = "simulation.start"                    # one of the supported date patterns
    end: str = "simulation.end"
    cache_candles: str = "simulation.cache.candles"    # boolean literal
    initial_funds: str = "simulation.initial.funds"    # "[USDT]2000.0,[ADA;ETH]100.0"


@dataclass(frozen=True)
class SimulationDefaults:
    """Values used when a property is absent."""
    lookback_years: int = 1              # start = now minus this many years
    cache_candles: bool = False
    initial_amount: float = 0.0          # balance of a symbol with no configured funds


@dataclass(frozen=True)
class DefaultConfig:
    """Complete default configuration."""
    keys: PropertyKeys
    simulation: SimulationDefaults


PROPERTY_KEYS = PropertyKeys()


def get_default_config() -> DefaultConfig:
    """Get the default configuration instance."""
    return DefaultConfig(
        keys=PROPERTY_KEYS,
        simulation=SimulationDefaults(),
    )
