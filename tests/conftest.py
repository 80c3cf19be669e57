"""Pytest configuration and shared fixtures."""

import pytest
from datetime import datetime
from typing import Dict, Any

from tradesim.config.sources import MappingPropertySource
from tradesim.parsing.fees import FeeStrategyRegistry, TradingFees


class FlatRebateFees(TradingFees):
    """Custom strategy charging a flat 1.5 per trade."""

    def fees_on_amount(self, amount: float) -> float:
        return 1.5


@pytest.fixture
def sample_properties() -> Dict[str, Any]:
    """Complete set of simulation properties."""
    return {
        "simulation.trade.fees": "0.1%",
        "simulation.start": "2023-01-01",
        "simulation.end": "2023-12-31 23:59",
        "simulation.cache.candles": "true",
        "simulation.initial.funds": "[USDT]2000.0,[ADA;ETH]100.0",
    }


@pytest.fixture
def property_source(sample_properties: Dict[str, Any]) -> MappingPropertySource:
    """Property source over the sample properties."""
    return MappingPropertySource.create(sample_properties)


@pytest.fixture
def fee_registry() -> FeeStrategyRegistry:
    """Isolated registry holding one custom strategy."""
    registry = FeeStrategyRegistry()
    registry.register("com.example.FlatRebateFees", FlatRebateFees)
    return registry


@pytest.fixture
def fixed_now() -> datetime:
    """Wall-clock time used when patching tradesim.utils.time.datetime."""
    return datetime(2024, 3, 15, 10, 30)
