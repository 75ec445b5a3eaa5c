# src/ragdesk/embedder/__init__.py
"""Embedding functionality for ragdesk."""

from ragdesk.embedder.base import Embedder
from ragdesk.embedder.client import ClientEmbedder

__all__ = ["Embedder", "ClientEmbedder"]
