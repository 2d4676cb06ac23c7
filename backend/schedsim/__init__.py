"""CPU scheduling simulator: engine plus FastAPI service."""

__version__ = "0.1.0"
