"""TimeJoy: personal time tracking and reflection."""

__version__ = "1.0.0"
