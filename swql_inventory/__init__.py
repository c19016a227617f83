"""SWQL node inventory query tool.

Builds filtered SWQL queries against a SolarWinds Orion information
service, executes them, and enriches each returned node row with
derived hardware and firmware dates.
"""

__version__ = "1.0.0"
