"""Speed Rush: a turn-based fuel and time management race simulation."""

__version__ = "1.0.0"
