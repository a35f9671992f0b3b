"""Application layer - interfaces consumed by the execution layer."""

from .interfaces import IIntegrationRegistry

__all__ = ["IIntegrationRegistry"]
