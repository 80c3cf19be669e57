"""
Utility functions module.

Time Semantics:
- Simulation timestamps are naive local datetimes
- An absent window start defaults to one year before the current time
- An absent window end defaults to the current time
- Defaults are computed on every read and never stored
"""
