"""Names for exported files and displayed layer text."""

from __future__ import annotations

_HTML_ESCAPES = str.maketrans(
    {"<": "&lt;", ">": "&gt;", '"': "&quot;", "&": "&amp;"}
)
_IDEAL_FILE_UNSAFE = str.maketrans({c: "_" for c in '/\\:?*<>|"#&'})
_PNG_FILE_UNSAFE = str.maketrans({c: "_" for c in "/\\:?*><"})


def to_safe_html(text: str) -> str:
    """Escape the characters that cannot appear as-is in HTML text."""
    return text.translate(_HTML_ESCAPES)


def to_ideal_file_name(name: str, index: int) -> str:
    """Make a unique PNG file name from a layer name and its number."""
    return f"{name.translate(_IDEAL_FILE_UNSAFE)}.{index}.png"


def png_file_name(name: str) -> str:
    """Make a PNG file name from a layer name."""
    return name.translate(_PNG_FILE_UNSAFE) + ".png"


def indent_name(name: str, level: int) -> str:
    """Prefix ``name`` with ``level`` spaces."""
    return " " * max(level, 0) + name