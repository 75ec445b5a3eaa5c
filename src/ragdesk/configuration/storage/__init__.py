"""Storage configurations."""

from ragdesk.configuration.storage.local import LocalStorage

__all__ = ["LocalStorage"]
