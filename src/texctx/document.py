#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/texctx/document.py
"""In-memory text document with line queries and scoped writes.

The document is the only mutable state the converters touch. Reads are
unsynchronized snapshots; writes run under a re-entrant lock and bump the
document version, which lets an edit computed against an older snapshot be
detected and rejected instead of being applied at shifted offsets.

Examples
--------
    >>> doc = TextDocument("a\\n  b\\n")
    >>> doc.get_line_indentation(1)
    '  '
    >>> edit = TextEdit(0, 1, "x", expected_text="a", document_version=doc.version)
    >>> doc.apply_edit(edit)
    >>> doc.text
    'x\\n  b\\n'

"""

from __future__ import annotations

import bisect
import logging
import threading
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Iterator, Optional

from texctx.exceptions import StaleEditError, ValidationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TextEdit:
    """A single range replacement.

    Parameters
    ----------
    start : int
        Start offset of the replaced range
    end : int
        End offset (exclusive) of the replaced range
    replacement : str
        New text for the range
    expected_text : str or None, default = None
        Text the range held when the edit was computed. Checked before applying.
    document_version : int or None, default = None
        Document version the edit was computed against. Checked before applying.

    """

    start: int
    end: int
    replacement: str
    expected_text: Optional[str] = None
    document_version: Optional[int] = None

    def __post_init__(self) -> None:
        """Validate the range."""
        if self.start < 0 or self.end < self.start:
            raise ValidationError(
                f"Invalid edit range [{self.start}, {self.end})",
                parameter_name="range",
                parameter_value=(self.start, self.end),
            )


class TextDocument:
    """Mutable text buffer.

    Parameters
    ----------
    text : str, default ""
        Initial content

    """

    def __init__(self, text: str = ""):
        """Initialize the document."""
        self._text = text
        self._version = 0
        self._lock = threading.RLock()
        self._line_starts = self._compute_line_starts(text)

    @staticmethod
    def _compute_line_starts(text: str) -> list[int]:
        starts = [0]
        index = text.find("\n")
        while index != -1:
            starts.append(index + 1)
            index = text.find("\n", index + 1)
        return starts

    @property
    def text(self) -> str:
        """Current content."""
        return self._text

    @property
    def version(self) -> int:
        """Number of writes applied so far."""
        return self._version

    @property
    def line_count(self) -> int:
        """Number of lines; a trailing newline starts an empty last line."""
        return len(self._line_starts)

    def __len__(self) -> int:
        """Return the content length."""
        return len(self._text)

    def _clamp(self, offset: int) -> int:
        return max(0, min(offset, len(self._text)))

    def get_line_number(self, offset: int) -> int:
        """Return the zero-based line containing ``offset`` (clamped to the document)."""
        return bisect.bisect_right(self._line_starts, self._clamp(offset)) - 1

    def get_line_start_offset(self, line: int) -> int:
        """Return the offset of the first character of ``line``.

        Raises
        ------
        ValidationError
            If the line does not exist

        """
        self._check_line(line)
        return self._line_starts[line]

    def get_line_end_offset(self, line: int) -> int:
        """Return the offset just before the line break ending ``line``.

        Raises
        ------
        ValidationError
            If the line does not exist

        """
        self._check_line(line)
        if line + 1 < len(self._line_starts):
            return self._line_starts[line + 1] - 1
        return len(self._text)

    def _check_line(self, line: int) -> None:
        if not 0 <= line < len(self._line_starts):
            raise ValidationError(
                f"Line {line} out of range (document has {len(self._line_starts)} lines)",
                parameter_name="line",
                parameter_value=line,
            )

    def get_line_indentation(self, line: int) -> str:
        """Return the leading spaces and tabs of ``line``; empty past the last line."""
        if not 0 <= line < len(self._line_starts):
            return ""
        start = self._line_starts[line]
        end = self.get_line_end_offset(line)
        content = self._text[start:end]
        return content[: len(content) - len(content.lstrip(" \t"))]

    def line_indentation_by_offset(self, offset: int) -> str:
        """Return the indentation of the line containing ``offset``."""
        return self.get_line_indentation(self.get_line_number(offset))

    def get_text(self, start: int = 0, end: Optional[int] = None) -> str:
        """Return the text between two offsets, clamped to the document."""
        if end is None:
            end = len(self._text)
        return self._text[self._clamp(start) : self._clamp(end)]

    @contextmanager
    def write_action(self) -> Iterator[TextDocument]:
        """Hold the write lock for a group of reads and writes."""
        with self._lock:
            yield self

    def replace_range(self, start: int, end: int, text: str) -> None:
        """Replace ``[start, end)`` with ``text`` as one write.

        Raises
        ------
        ValidationError
            If the range lies outside the document

        """
        with self._lock:
            if not 0 <= start <= end <= len(self._text):
                raise ValidationError(
                    f"Range [{start}, {end}) outside document of length {len(self._text)}",
                    parameter_name="range",
                    parameter_value=(start, end),
                )
            self._text = self._text[:start] + text + self._text[end:]
            self._line_starts = self._compute_line_starts(self._text)
            self._version += 1
            logger.debug(f"Replaced [{start}, {end}) with {len(text)} characters (version {self._version})")

    def apply_edit(self, edit: TextEdit) -> None:
        """Apply an edit after checking it still matches the document.

        Parameters
        ----------
        edit : TextEdit
            Edit to apply

        Raises
        ------
        StaleEditError
            If the document changed since the edit was computed. Nothing is
            modified; the caller should recompute from a fresh snapshot.

        """
        with self.write_action():
            if edit.document_version is not None and edit.document_version != self._version:
                raise StaleEditError(
                    f"Edit computed against version {edit.document_version}, document is at version {self._version}"
                )
            if edit.end > len(self._text):
                raise StaleEditError(f"Edit range [{edit.start}, {edit.end}) no longer fits the document")
            if edit.expected_text is not None:
                actual = self._text[edit.start : edit.end]
                if actual != edit.expected_text:
                    raise StaleEditError(
                        "Text in the edit range changed since the edit was computed",
                        expected_text=edit.expected_text,
                        actual_text=actual,
                    )
            self.replace_range(edit.start, edit.end, edit.replacement)


__all__ = ["TextDocument", "TextEdit"]
