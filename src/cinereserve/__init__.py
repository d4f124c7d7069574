"""CineReserve: cinema catalog and seat reservation API."""

__version__ = "0.1.0"
