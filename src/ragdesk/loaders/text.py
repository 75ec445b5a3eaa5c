# src/ragdesk/loaders/text.py
"""Text and Markdown file loader."""

from ragdesk.loaders.base import Loader


class TextLoader(Loader):
    """Decode plain text and markdown files as UTF-8.

    Undecodable bytes are replaced rather than rejected; a byte-order mark
    is dropped.
    """

    SUPPORTED_EXTENSIONS = {".txt", ".md", ".markdown", ".text"}

    def decode(self, data: bytes, filename: str) -> str:
        return data.decode("utf-8-sig", errors="replace")
