"""Application layer - the container that orchestrates resolution."""

from di_engine.application.container import Container

__all__ = [
    "Container",
]
