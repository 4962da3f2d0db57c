"""Remote persistence integration for Massing Studio."""

from .client import PersistenceClient

__all__ = ["PersistenceClient"]
