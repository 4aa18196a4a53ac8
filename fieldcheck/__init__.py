"""fieldcheck — field-driven validation dispatcher."""

__version__ = "1.0.0"
