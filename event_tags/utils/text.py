"""Text helpers shared by the tag grammar and the assembler."""

import re
import unicodedata

_SPACE_RUN = re.compile(r"(?<=\S)[ \t]{2,}")
_TRAILING_SPACE = re.compile(r"[ \t]+$", re.MULTILINE)
_BLANK_LINES = re.compile(r"\n{3,}")
_SLUG_SEPARATORS = re.compile(r"[^a-z0-9]+")


def strip_accents(text: str) -> str:
    """Remove combining marks: "Trégueux" -> "Tregueux"."""
    decomposed = unicodedata.normalize("NFKD", text)
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch))


def fold_token(text: str) -> str:
    """Case-, accent- and spacing-insensitive key for a tag token."""
    return " ".join(strip_accents(text).upper().split())


def slugify(text: str) -> str:
    slug = _SLUG_SEPARATORS.sub("-", strip_accents(text).lower())
    return slug.strip("-")


def collapse_whitespace(text: str) -> str:
    """Tidy whitespace left behind after tag removal.

    Runs of spaces inside a line become one space (leading indentation is
    kept), trailing spaces are dropped, and blank lines collapse so that at
    most one empty line separates paragraphs.
    """
    text = text.replace("\r\n", "\n")
    text = _SPACE_RUN.sub(" ", text)
    text = _TRAILING_SPACE.sub("", text)
    text = _BLANK_LINES.sub("\n\n", text)
    return text.strip()
