# src/ragdesk/chunker.py
"""Recursive, overlap-aware text chunking."""

from collections.abc import Iterator, Sequence

from ragdesk.exceptions import ValidationError

DEFAULT_CHUNK_SIZE = 800
DEFAULT_CHUNK_OVERLAP = 100

# Paragraph, line, word, character
DEFAULT_SEPARATORS: tuple[str, ...] = ("\n\n", "\n", " ", "")


class TextChunker:
    """Split text into overlapping windows of at most chunk_size characters.

    Splitting prefers natural boundaries: the text is cut on the first
    separator it contains, the pieces are merged back greedily up to
    chunk_size, and any piece that is still too long is split again with the
    next separator. The last separator is the empty string, so the worst case
    is a cut between two characters.

    Adjacent chunks share up to chunk_overlap characters: after a chunk is
    emitted, its leading pieces are dropped until the remaining tail fits in
    the overlap budget, and that tail opens the next chunk.

    Example:
        chunker = TextChunker(chunk_size=10, chunk_overlap=2)
        chunker.split("Alpha beta gamma delta.")
        # ['Alpha beta', 'gamma', 'delta.']
    """

    def __init__(
        self,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
        chunk_overlap: int = DEFAULT_CHUNK_OVERLAP,
        separators: Sequence[str] = DEFAULT_SEPARATORS,
    ) -> None:
        """Initialize the chunker.

        Args:
            chunk_size: Maximum characters per chunk
            chunk_overlap: Characters shared between adjacent chunks

        Raises:
            ValidationError: If chunk_size is not positive, chunk_overlap is
                negative, or chunk_overlap >= chunk_size
        """
        if chunk_size <= 0:
            raise ValidationError(f"chunk_size must be positive, got {chunk_size}")
        if chunk_overlap < 0:
            raise ValidationError(f"chunk_overlap must not be negative, got {chunk_overlap}")
        if chunk_overlap >= chunk_size:
            raise ValidationError(
                f"chunk_overlap ({chunk_overlap}) must be less than chunk_size ({chunk_size})"
            )
        self.chunk_size = chunk_size
        self.chunk_overlap = chunk_overlap
        self.separators = tuple(separators) or DEFAULT_SEPARATORS

    def split(self, text: str) -> list[str]:
        """Split text into a list of chunks, in document order."""
        return list(self.iter_chunks(text))

    def iter_chunks(self, text: str) -> Iterator[str]:
        """Lazily yield chunks in document order.

        Each call starts a fresh pass over the text.
        """
        if not text or not text.strip():
            return
        yield from self._split_recursive(text, self.separators)

    def _split_recursive(self, text: str, separators: Sequence[str]) -> Iterator[str]:
        separator = separators[-1]
        remaining: Sequence[str] = ()
        for i, candidate in enumerate(separators):
            if candidate == "":
                separator = candidate
                break
            if candidate in text:
                separator = candidate
                remaining = separators[i + 1 :]
                break

        pieces = text.split(separator) if separator else list(text)
        pieces = [p for p in pieces if p]

        fitting: list[str] = []
        for piece in pieces:
            if len(piece) <= self.chunk_size:
                fitting.append(piece)
                continue
            if fitting:
                yield from self._merge(fitting, separator)
                fitting = []
            if remaining:
                yield from self._split_recursive(piece, remaining)
            else:
                # Only reachable with a custom separator list lacking "".
                stripped = piece.strip()
                if stripped:
                    yield stripped

        if fitting:
            yield from self._merge(fitting, separator)

    def _merge(self, pieces: list[str], separator: str) -> Iterator[str]:
        """Greedily merge small pieces into chunks, carrying an overlap tail."""
        sep_len = len(separator)
        window: list[str] = []
        total = 0

        for piece in pieces:
            piece_len = len(piece)
            joined_len = total + piece_len + (sep_len if window else 0)
            if joined_len > self.chunk_size and window:
                chunk = separator.join(window).strip()
                if chunk:
                    yield chunk
                # Shrink to the overlap budget, and further if the next piece still won't fit
                while total > self.chunk_overlap or (
                    total > 0 and total + piece_len + (sep_len if window else 0) > self.chunk_size
                ):
                    total -= len(window[0]) + (sep_len if len(window) > 1 else 0)
                    window.pop(0)
            window.append(piece)
            total += piece_len + (sep_len if len(window) > 1 else 0)

        chunk = separator.join(window).strip()
        if chunk:
            yield chunk
