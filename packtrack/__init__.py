"""PackTrack - packing record tracker and dashboard service."""

__version__ = "0.1.0"
