"""Decoder, data sources and terminal viewer for ThinkGear EEG packet streams."""

__version__ = "1.0.0"
__all__ = ["__version__"]