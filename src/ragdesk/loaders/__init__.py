# src/ragdesk/loaders/__init__.py
"""File loaders that decode uploaded documents into plain text."""

from ragdesk.loaders.base import Loader
from ragdesk.loaders.pypdf_loader import PyPDFLoader
from ragdesk.loaders.registry import LoaderRegistry
from ragdesk.loaders.text import TextLoader

__all__ = ["Loader", "LoaderRegistry", "PyPDFLoader", "TextLoader"]
