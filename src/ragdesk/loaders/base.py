# src/ragdesk/loaders/base.py
"""Loader abstract base class."""

from abc import ABC, abstractmethod
from pathlib import Path


class Loader(ABC):
    """Abstract base class for turning files into text."""

    SUPPORTED_EXTENSIONS: set[str] = set()

    def supports(self, path: str) -> bool:
        """Check if this loader supports the given file name or path."""
        return Path(path).suffix.lower() in self.SUPPORTED_EXTENSIONS

    @abstractmethod
    def decode(self, data: bytes, filename: str) -> str:
        """Decode raw file bytes into text.

        Args:
            data: File content
            filename: Original file name, used for error messages

        Returns:
            The document text (may be empty)
        """
        ...

    def load_text(self, path: str) -> str:
        """Read a file from disk and decode it.

        Raises:
            FileNotFoundError: If the file does not exist
        """
        file_path = Path(path)
        if not file_path.exists():
            raise FileNotFoundError(f"File not found: {path}")
        return self.decode(file_path.read_bytes(), file_path.name)
