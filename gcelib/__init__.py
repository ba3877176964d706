"""gcelib: request attribute validation and compute resource URL classification."""

__version__ = "0.1"
