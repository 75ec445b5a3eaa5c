"""PDF loader using pypdf - lightweight, pure Python."""

import io

from pypdf import PdfReader
from pypdf.errors import PyPdfError

from ragdesk.exceptions import ValidationError
from ragdesk.loaders.base import Loader


class PyPDFLoader(Loader):
    """Extract the text layer of PDF files using pypdf.

    Pages are joined with blank lines so the chunker treats each page
    boundary as a paragraph boundary. Scanned PDFs without a text layer
    decode to an empty string.
    """

    SUPPORTED_EXTENSIONS = {".pdf"}

    def decode(self, data: bytes, filename: str) -> str:
        """Return the text of every page that has any.

        Raises:
            ValidationError: If pypdf cannot parse the file
        """
        try:
            reader = PdfReader(io.BytesIO(data))
            pages = []
            for page in reader.pages:
                text = page.extract_text() or ""
                if text.strip():
                    pages.append(text.strip())
        except PyPdfError as e:
            raise ValidationError(f"Unreadable PDF {filename}: {e}") from e
        return "\n\n".join(pages)
