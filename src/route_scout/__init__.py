"""Route Scout — suggest new walking loops around previously recorded GPS tracks."""

__version__ = "0.1.0"
