"""
Simulation configuration: defaults, property sources and the SimulationConfig group.
"""

from .defaults import PROPERTY_KEYS, DefaultConfig, PropertyKeys, SimulationDefaults, get_default_config
from .simulation import SimulationConfig
from .sources import MappingPropertySource, PropertySource

__all__ = [
    "PROPERTY_KEYS",
    "DefaultConfig",
    "PropertyKeys",
    "SimulationDefaults",
    "get_default_config",
    "SimulationConfig",
    "MappingPropertySource",
    "PropertySource",
]
