"""Text Cleanup - post-processing applied to every provider response.

Invariants:
    - Empty or None input is returned unchanged by every function
    - Quotes are never entity-encoded on output; only < and > are escaped
    - postprocess_enhancement order: decode -> escape -> strip markdown -> restore quotes
"""

import html
import re

# Order matters: bold before italic, so "**x**" is not read as two italics.
_MARKDOWN_EMPHASIS = (
    re.compile(r"\*\*(.*?)\*\*"),
    re.compile(r"\*(.*?)\*"),
    re.compile(r"__(.*?)__"),
    re.compile(r"_(.*?)_"),
)

_ENCODED_QUOTES = (
    ("&quot;", '"'),
    ("&#039;", "'"),
    ("&apos;", "'"),
)


def clean_markdown_formatting(text: str | None) -> str | None:
    """Remove bold/italic emphasis markers, keeping the emphasized text."""
    if not text:
        return text
    for pattern in _MARKDOWN_EMPHASIS:
        text = pattern.sub(r"\1", text)
    return text


def decode_html_entities(text: str | None) -> str | None:
    """Decode named, decimal and hex entities (single pass)."""
    if not text:
        return text
    return html.unescape(text)


def escape_angle_brackets(text: str | None) -> str | None:
    if not text:
        return text
    return text.replace("<", "&lt;").replace(">", "&gt;")


def restore_quotes(text: str | None) -> str | None:
    if not text:
        return text
    for encoded, plain in _ENCODED_QUOTES:
        text = text.replace(encoded, plain)
    return text


def postprocess_enhancement(text: str | None) -> str:
    """Full cleanup pipeline for a raw provider response."""
    text = decode_html_entities(text)
    text = escape_angle_brackets(text)
    text = clean_markdown_formatting(text)
    text = restore_quotes(text)
    return text or ""
