"""
Line editor primitives — the only place registry files are pattern-matched.

Registries and templates are edited as lists of lines that keep their line
endings (``str.splitlines(keepends=True)``), so content outside an edited
range is written back byte-for-byte.
"""

from __future__ import annotations

from typing import Callable, List, Optional, Tuple

LinePredicate = Callable[[str], bool]


def split_lines(text: str) -> List[str]:
    return text.splitlines(keepends=True)


def join_lines(lines: List[str]) -> str:
    return "".join(lines)


def is_blank(line: str) -> bool:
    return not line.strip()


def is_top_level(line: str) -> bool:
    """A non-blank line that starts in column 0."""
    return bool(line) and not is_blank(line) and not line[0].isspace()


def ensure_newline(line: str) -> str:
    return line if line.endswith("\n") else line + "\n"


def find_line(lines: List[str], predicate: LinePredicate, start: int = 0) -> Optional[int]:
    """Index of the first line at or after *start* matching *predicate*."""
    for i in range(start, len(lines)):
        if predicate(lines[i]):
            return i
    return None


def find_last_line(lines: List[str], predicate: LinePredicate) -> Optional[int]:
    for i in range(len(lines) - 1, -1, -1):
        if predicate(lines[i]):
            return i
    return None


def insert_before(lines: List[str], index: int, new_lines: List[str]) -> List[str]:
    """Return a copy of *lines* with *new_lines* inserted before *index*."""
    result = list(lines)
    if index > 0:
        # The line we insert after must be terminated
        result[index - 1] = ensure_newline(result[index - 1])
    return result[:index] + [ensure_newline(l) for l in new_lines] + result[index:]


def append_block(lines: List[str], new_lines: List[str], blank_lines: int = 2) -> List[str]:
    """
    Append *new_lines* at the end, separated from existing content by exactly
    *blank_lines* blank lines (none when the file is empty).
    """
    body = list(lines)
    while body and is_blank(body[-1]):
        body.pop()
    if body:
        body[-1] = ensure_newline(body[-1])
        body.extend(["\n"] * blank_lines)
    body.extend(ensure_newline(l) for l in new_lines)
    return body


def block_bounds(lines: List[str], header_index: int) -> Tuple[int, int]:
    """
    Bounds ``[start, end)`` of the top-level block whose header is at
    *header_index*.

    The block starts at the decorator lines directly above the header and
    runs up to, not including, the next top-level line. Trailing blank lines
    belong to the block.
    """
    start = header_index
    while start > 0 and lines[start - 1].startswith("@"):
        start -= 1
    end = find_line(lines, is_top_level, header_index + 1)
    if end is None:
        end = len(lines)
    return start, end


def remove_range(lines: List[str], start: int, end: int) -> List[str]:
    """
    Remove ``lines[start:end]``. When the removed range reaches end of file,
    blank lines left dangling before it are dropped too.
    """
    result = lines[:start] + lines[end:]
    if end >= len(lines):
        while result and is_blank(result[-1]):
            result.pop()
    return result


def replace_in_range(lines: List[str], start: int, end: int, old: str, new: str) -> int:
    """Replace *old* with *new* in ``lines[start:end]`` in place. Returns lines changed."""
    changed = 0
    for i in range(start, end):
        if old in lines[i]:
            lines[i] = lines[i].replace(old, new)
            changed += 1
    return changed


def marker_bounds(lines: List[str], start_marker: str, end_marker: str) -> Optional[Tuple[int, int]]:
    """Indices of the start and end marker lines, or None if either is missing."""
    start = find_line(lines, lambda l: l.strip() == start_marker)
    if start is None:
        return None
    end = find_line(lines, lambda l: l.strip() == end_marker, start + 1)
    if end is None:
        return None
    return start, end


def replace_region(text: str, start_marker: str, end_marker: str, body: str) -> Optional[str]:
    """
    Replace everything strictly between the marker lines with *body*.

    Returns the new text, or None when the markers are not both present.
    Lines outside the markers, the marker lines included, are untouched.
    """
    lines = split_lines(text)
    bounds = marker_bounds(lines, start_marker, end_marker)
    if bounds is None:
        return None
    start, end = bounds
    head = lines[: start + 1]
    head[-1] = ensure_newline(head[-1])
    inner = split_lines(body)
    if inner:
        inner[-1] = ensure_newline(inner[-1])
    return join_lines(head + inner + lines[end:])


def leading_whitespace(line: str) -> str:
    return line[: len(line) - len(line.lstrip())]
