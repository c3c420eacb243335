"""Core services: catalog aggregation, session persistence, scanning, saves."""
from retrohost.core.catalog import aggregate
from retrohost.core.session import SessionController

__all__ = ["SessionController", "aggregate"]
