"""Diagnostics package.

- validate_reference: Sun/Moon series against a JPL kernel
  (requires the diagnostics and ephemeris extras)
"""

__all__ = ["validate_reference"]
