"""Paragraph-respecting text chunker for the RAG ingestion pipeline."""

import re

DEFAULT_MAX_CHUNK_CHARS = 800  # ~200 tokens (rough 4:1 char-to-token ratio)
PARAGRAPH_SEPARATOR = "\n\n"

# A blank line: newline, optional horizontal/vertical whitespace, newline.
_BLANK_LINE = re.compile(r"\n\s*\n")


def split_paragraphs(text: str) -> list[str]:
    """Split text on blank lines, returning trimmed non-empty paragraphs."""
    if not text:
        return []
    normalized = text.replace("\r\n", "\n").replace("\r", "\n")
    return [p.strip() for p in _BLANK_LINE.split(normalized) if p.strip()]


def split_into_chunks(text: str, max_chars: int = DEFAULT_MAX_CHUNK_CHARS) -> list[str]:
    """Group paragraphs into chunks of at most ``max_chars`` characters.

    Paragraphs are accumulated into a buffer joined by a blank line. When the
    next paragraph would push the buffer past ``max_chars`` the buffer is
    emitted and a new one starts with that paragraph.

    A single paragraph longer than ``max_chars`` is emitted whole as its own
    chunk; paragraphs are never cut.

    Pure and deterministic: the same input always yields the same chunks.
    """
    if max_chars <= 0:
        raise ValueError(f"max_chars must be positive, got {max_chars}")

    chunks: list[str] = []
    current = ""

    for paragraph in split_paragraphs(text):
        candidate = f"{current}{PARAGRAPH_SEPARATOR}{paragraph}" if current else paragraph
        if len(candidate) > max_chars and current:
            chunks.append(current.strip())
            current = paragraph
        else:
            current = candidate

    if current.strip():
        chunks.append(current.strip())
    return chunks
