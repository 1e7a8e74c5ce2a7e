"""Vibration field synthesis for ODS and shaft-orbit visualization."""

__version__ = "0.1.0"
