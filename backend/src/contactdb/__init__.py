"""contactdb - contact database with quiet notice-time updates."""

__version__ = "0.1.0"
