"""Moon House: simulation core of a turn-based room-navigation horror adventure."""

__version__ = "0.1.0"
