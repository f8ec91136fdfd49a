"""Game engine core: event channels, frame timing and layered input actions."""

__version__ = "0.1.0"