"""Dotted path splitting."""

from __future__ import annotations

__all__ = ["split_path"]


def split_path(path: str, delimiter: str = ".") -> list[str]:
    """Split a dotted path into its segments.

    Every delimiter closes the current segment, even an empty one. The
    trailing segment is kept unless the path ends with the delimiter, so
    ``"a."`` gives ``["a"]`` while ``".a"`` gives ``["", "a"]``. An empty
    path gives ``[""]``: a path always has at least one segment.

    Args:
        path: The dotted path, e.g. ``"graphics.window.width"``.
        delimiter: Single-character separator.

    Returns:
        The ordered list of segments.

    Raises:
        ValueError: If delimiter is not exactly one character.
    """
    if len(delimiter) != 1:
        raise ValueError(f"delimiter must be a single character, got {delimiter!r}")
    if not path:
        return [""]

    segments: list[str] = []
    current: list[str] = []
    for char in path:
        if char == delimiter:
            segments.append("".join(current))
            current = []
        else:
            current.append(char)

    if path[-1] != delimiter:
        segments.append("".join(current))
    return segments
