# src/ragdesk/loaders/registry.py
"""Loader registry for auto-selecting file loaders."""

from ragdesk.exceptions import ValidationError
from ragdesk.loaders.base import Loader
from ragdesk.loaders.pypdf_loader import PyPDFLoader
from ragdesk.loaders.text import TextLoader


class LoaderRegistry:
    """Registry for file loaders.

    Automatically selects the appropriate loader based on file extension.
    """

    def __init__(self) -> None:
        """Initialize an empty registry."""
        self._loaders: list[Loader] = []

    def register(self, loader: Loader) -> None:
        """Register a loader."""
        self._loaders.append(loader)

    def find_loader(self, path: str) -> Loader | None:
        """Find a loader that supports the given path."""
        for loader in self._loaders:
            if loader.supports(path):
                return loader
        return None

    def _require_loader(self, path: str) -> Loader:
        loader = self.find_loader(path)
        if loader is None:
            raise ValidationError(f"Unsupported file type: {path}")
        return loader

    def load_text(self, path: str) -> str:
        """Read and decode a file from disk.

        Raises:
            ValidationError: If no loader supports the file type
            FileNotFoundError: If the file does not exist
        """
        return self._require_loader(path).load_text(path)

    def decode(self, data: bytes, filename: str) -> str:
        """Decode uploaded bytes using the loader matching filename.

        Raises:
            ValidationError: If no loader supports the file type
        """
        return self._require_loader(filename).decode(data, filename)

    @classmethod
    def default(cls) -> "LoaderRegistry":
        """Create a registry with the text and PDF loaders registered."""
        registry = cls()
        registry.register(TextLoader())
        registry.register(PyPDFLoader())
        return registry
