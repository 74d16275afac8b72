"""Studio site API: contact pipeline and project catalog."""

__version__ = "1.0.0"
