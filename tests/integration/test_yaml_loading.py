"""Integration tests: YAML files through SimulationConfig."""

from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest

from tradesim.config.simulation import SimulationConfig
from tradesim.config.sources import MappingPropertySource
from tradesim.errors import InvalidGroupedValueError
from tradesim.parsing.fees import PercentageFee

SAMPLE_CONFIG = Path(__file__).resolve().parents[2] / "config" / "simulation.yaml"


class TestSampleConfiguration:
    """Test the sample configuration shipped with the project."""

    def test_sample_file_loads(self):
        config = SimulationConfig().load_from(MappingPropertySource.from_yaml(SAMPLE_CONFIG))

        assert config.simulation_start == datetime(2023, 1, 1)
        assert config.simulation_end == datetime(2023, 12, 31, 23, 59)
        assert config.trading_fees == PercentageFee(0.1)
        assert config.cache_candles is True
        assert dict(config.initial_amounts) == {"USDT": 2000.0, "ADA": 100.0, "ETH": 100.0}
        assert config.is_configured()


class TestYamlLoading:
    """Test YAML specific value handling."""

    def test_unquoted_scalars(self, tmp_path):
        """YAML ints, dates and booleans resolve like their string forms."""
        path = tmp_path / "simulation.yaml"
        path.write_text(
            "simulation:\n"
            "  start: 2021\n"
            "  end: 2021-06-30\n"
            "  trade:\n"
            "    fees: 2\n"
            "  cache:\n"
            "    candles: off\n"
            "  initial:\n"
            "    funds: 1500\n"
        )

        config = SimulationConfig().load_from(MappingPropertySource.from_yaml(path))

        assert config.simulation_start == datetime(2021, 1, 1)
        assert config.simulation_end == datetime(2021, 6, 30)
        assert config.trading_fees.fees_on_amount(100.0) == 2.0
        assert config.cache_candles is False
        assert config.initial_funds == 1500.0

    def test_offset_timestamp_matches_setter(self):
        """An offset timestamp loads to the same local time as assigning it directly."""
        source = MappingPropertySource.from_yaml_string("simulation.start: 2021-03-04 05:06:00+05:00\n")
        config = SimulationConfig().load_from(source)

        direct = SimulationConfig()
        direct.simulation_start = datetime(2021, 3, 4, 5, 6, tzinfo=timezone(timedelta(hours=5)))

        assert config.simulation_start == direct.simulation_start

    def test_malformed_grouped_value(self, tmp_path):
        path = tmp_path / "simulation.yaml"
        path.write_text('simulation.initial.funds: "[USDT]2000.0,[]100.0"\n')

        with pytest.raises(InvalidGroupedValueError) as exc_info:
            SimulationConfig().load_from(MappingPropertySource.from_yaml(path))
        assert exc_info.value.property_name == "simulation.initial.funds"
