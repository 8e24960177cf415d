"""Storage hub: job and box lifecycle tracking backed by a single synced document."""

__version__ = "0.1.0"
