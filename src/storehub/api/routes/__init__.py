"""Route group exports."""

from . import customers, health, jobs, recovery, system

__all__ = ["jobs", "recovery", "customers", "health", "system"]
