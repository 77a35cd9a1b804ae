"""
Text extraction boundary.

Turning uploaded document bytes into text is delegated to an extractor
callable. The engine only relies on its contract: return text, or raise
``TextExtractionError``.
"""

from typing import Callable

TextExtractor = Callable[[bytes], str]


class TextExtractionError(ValueError):
    """Raised when a document cannot be turned into text."""


def decode_text_document(data: bytes) -> str:
    """Default extractor: plain UTF-8 documents (a leading BOM is dropped)."""
    if not isinstance(data, (bytes, bytearray)):
        raise TextExtractionError(f"Expected document bytes, got {type(data).__name__}")
    try:
        return bytes(data).decode("utf-8-sig")
    except UnicodeDecodeError as e:
        raise TextExtractionError(f"Document is not valid UTF-8 text: {e}") from e
