"""club-collector: fetch, normalize, and export club listings."""

__version__ = "0.1.0"
