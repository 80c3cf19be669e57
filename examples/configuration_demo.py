#!/usr/bin/env python3
"""
Configuration Demo - tradesim simulation settings

This script demonstrates the simulation configuration, showing how to:
- Load settings from a nested mapping or a YAML document
- Express trading fees as a percentage, a fixed amount or a custom strategy
- Give starting balances to several symbols with one grouped setting
- Override values programmatically and take independent copies

Run: python examples/configuration_demo.py
"""

from tradesim.config import MappingPropertySource, SimulationConfig
from tradesim.errors import IllegalConfigurationError
from tradesim.parsing import TradingFees, register_fee_strategy


@register_fee_strategy("demo.TieredFees")
class TieredFees(TradingFees):
    """0.1% below 10k, 0.05% above."""

    def fees_on_amount(self, amount: float) -> float:
        rate = 0.1 if amount < 10_000 else 0.05
        return amount * rate / 100.0


def demonstrate_mapping_source():
    """Load from a nested mapping."""
    print("⚙️ MAPPING SOURCE")
    print("=" * 50)

    source = MappingPropertySource.create({
        "simulation": {
            "start": "2022-06",
            "trade": {"fees": "0.1%"},
            "initial": {"funds": "[USDT]2000.0,[ADA;ETH]100.0"},
        }
    })
    config = SimulationConfig().load_from(source)

    print(f"   start:  {config.simulation_start}")
    print(f"   end:    {config.simulation_end} (defaults to now)")
    print(f"   fees:   {config.trading_fees}")
    print(f"   funds:  {dict(config.initial_amounts)}")
    print(f"   fee on 1000 USDT: {config.trading_fees.fees_on_amount(1000.0)}")
    print()


def demonstrate_yaml_source():
    """Load from YAML, with a custom fee strategy."""
    print("📄 YAML SOURCE")
    print("=" * 50)

    document = """
simulation:
  start: 2021
  end: "2021-12-31 23:59"
  trade:
    fees: com.example.TieredFees
  cache:
    candles: yes
  initial:
    funds: "5000"
"""
    config = SimulationConfig().load_from(MappingPropertySource.from_yaml_string(document))

    print(f"   window: {config.simulation_start} -> {config.simulation_end}")
    print(f"   fees:   {type(config.trading_fees).__name__}")
    print(f"   cache:  {config.cache_candles}")
    print(f"   reference currency funds: {config.initial_funds}")
    print()


def demonstrate_overrides_and_copies():
    """Programmatic overrides never leak into copies."""
    print("🧬 OVERRIDES AND COPIES")
    print("=" * 50)

    config = SimulationConfig().use_fee_amount(1.5).set_initial_amount("BTC", 0.5)
    copy = config.copy()
    copy.set_initial_amount("BTC", 2.0)

    print(f"   original BTC: {config.initial_amount('BTC')}")
    print(f"   copy BTC:     {copy.initial_amount('BTC')}")
    print()


def demonstrate_errors():
    """Malformed values abort the load."""
    print("❌ MALFORMED VALUES")
    print("=" * 50)

    for key, value in [
        ("simulation.start", "abc-def"),
        ("simulation.trade.fees", "abc%"),
        ("simulation.trade.fees", "com.example.Unknown"),
        ("simulation.initial.funds", "[USDT]lots"),
        ("simulation.initial.funds", "[]100"),
    ]:
        try:
            SimulationConfig().load_from(MappingPropertySource.create({key: value}))
        except IllegalConfigurationError as e:
            print(f"   {type(e).__name__}: {e}")
    print()


if __name__ == "__main__":
    demonstrate_mapping_source()
    demonstrate_yaml_source()
    demonstrate_overrides_and_copies()
    demonstrate_errors()
