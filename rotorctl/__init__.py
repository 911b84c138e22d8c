"""Antenna rotator controller support: buffered character display, LCD drivers and magnetometer drivers."""

__version__ = "0.1.0"