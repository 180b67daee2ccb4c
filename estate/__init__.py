"""Real-estate listings API and client."""

__version__ = "1.0.0"
