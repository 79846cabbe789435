"""Resource availability and timeline service."""

__version__ = "1.0.0"
