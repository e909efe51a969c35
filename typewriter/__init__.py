"""Typewriter: paginated writing surface with faithful raster export."""

__version__ = "0.3.0"
