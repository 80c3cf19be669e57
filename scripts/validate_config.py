#!/usr/bin/env python3
"""Configuration validation script.

Usage: python scripts/validate_config.py [path/to/simulation.yaml ...]
"""

import sys
from pathlib import Path
from typing import List

# Add the project root to the Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from tradesim.config.simulation import SimulationConfig
from tradesim.config.sources import MappingPropertySource
from tradesim.errors import IllegalConfigurationError
from tradesim.logging import configure_logging


def validate_file(path: Path) -> SimulationConfig:
    """Load a YAML file and resolve every simulation property."""
    source = MappingPropertySource.from_yaml(path)
    return SimulationConfig().load_from(source)


def describe(config: SimulationConfig) -> List[str]:
    """Human-readable lines describing a loaded configuration."""
    lines = [
        f"  • simulation start: {config.simulation_start:%Y-%m-%d %H:%M}",
        f"  • simulation end:   {config.simulation_end:%Y-%m-%d %H:%M}",
        f"  • trading fees:     {config.trading_fees!r}",
        f"  • cache candles:    {config.cache_candles}",
    ]
    for symbol, amount in sorted(config.initial_amounts.items()):
        label = symbol or "<reference currency>"
        lines.append(f"  • initial funds {label}: {amount}")
    return lines


def main():
    """Main validation function."""
    configure_logging(level="WARNING")

    paths = [Path(arg) for arg in sys.argv[1:]] or [project_root / "config" / "simulation.yaml"]
    print("🔍 Validating simulation configuration...")

    all_valid = True

    for path in paths:
        print(f"\n📄 Validating {path}...")

        try:
            config = validate_file(path)
        except IllegalConfigurationError as e:
            print(f"❌ {e}")
            if e.cause is not None:
                print(f"  • cause: {e.cause}")
            all_valid = False
            continue
        except OSError as e:
            print(f"❌ Cannot read {path}: {e}")
            all_valid = False
            continue

        for line in describe(config):
            print(line)
        if not config.is_configured():
            print("⚠️ Trading fees or initial funds are missing")
        print(f"✅ {path.name} configuration is valid")

    if all_valid:
        print(f"\n🎉 All configuration validation passed!")
        sys.exit(0)
    else:
        print(f"\n❌ Configuration validation failed!")
        sys.exit(1)


if __name__ == "__main__":
    main()
