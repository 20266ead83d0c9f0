"""Safe Relay - sponsored Safe transaction preparation."""

__version__ = "0.1.0"
