"""
tradesim - Simulation configuration for backtesting engines

Derives the parameters of a simulation run (time window, trading fee model,
starting balance per symbol, candle caching) from a property source, parsing
date strings, fee specifications and symbol-keyed grouped settings.
"""

__version__ = "0.1.0"
__author__ = "tradesim Team"
