#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/texctx/utils/encoding.py
"""Character encoding detection for LaTeX sources.

Older LaTeX sources are frequently latin-1 or cp1252 encoded
(``\\usepackage[latin1]{inputenc}``). Bytes are decoded with a chardet guess
first and a list of fallback encodings after that.
"""

from __future__ import annotations

import logging
from pathlib import Path

import chardet

logger = logging.getLogger(__name__)

DEFAULT_FALLBACK_ENCODINGS = ("utf-8", "utf-8-sig", "latin-1")


def detect_encoding(data: bytes, sample_size: int = 8192, confidence_threshold: float = 0.7) -> str | None:
    """Detect the character encoding of binary data using chardet.

    Parameters
    ----------
    data : bytes
        Binary data to analyze
    sample_size : int, default 8192
        Number of bytes to sample for detection
    confidence_threshold : float, default 0.7
        Minimum confidence (0.0-1.0) required to trust the guess

    Returns
    -------
    str | None
        Detected encoding name, or None when detection fails or the
        confidence is below the threshold

    """
    result = chardet.detect(data[:sample_size])
    if not result or not result.get("encoding"):
        logger.debug("chardet: No encoding detected")
        return None

    encoding = result["encoding"]
    confidence = result.get("confidence") or 0.0
    logger.debug(f"chardet detected encoding: {encoding} (confidence: {confidence:.2f})")

    if confidence >= confidence_threshold:
        return encoding
    logger.debug(f"chardet confidence {confidence:.2f} below threshold {confidence_threshold}")
    return None


def read_text_with_encoding_detection(data: bytes, fallback_encodings: tuple[str, ...] | None = None) -> str:
    """Decode binary data as text.

    Parameters
    ----------
    data : bytes
        Binary data to decode
    fallback_encodings : tuple of str or None, default None
        Encodings to try in order after the chardet guess. Defaults to
        utf-8, utf-8-sig and latin-1.

    Returns
    -------
    str
        Decoded text

    Examples
    --------
    >>> read_text_with_encoding_detection(b"\\\\section{Intro}")
    '\\\\section{Intro}'

    """
    detected_encoding = detect_encoding(data)
    if detected_encoding:
        try:
            return data.decode(detected_encoding)
        except (UnicodeDecodeError, LookupError) as e:
            logger.debug(f"Failed to decode with chardet-detected encoding {detected_encoding}: {e}")

    for encoding in fallback_encodings or DEFAULT_FALLBACK_ENCODINGS:
        try:
            return data.decode(encoding)
        except UnicodeDecodeError as e:
            logger.debug(f"Failed to decode with {encoding}: {e}")
        except LookupError as e:
            logger.debug(f"Unknown encoding {encoding}: {e}")

    logger.warning("All encoding attempts failed, using utf-8 with error replacement")
    return data.decode("utf-8", errors="replace")


def read_latex_file(path: str | Path) -> str:
    """Read a LaTeX file with encoding detection."""
    with open(path, "rb") as f:
        return read_text_with_encoding_detection(f.read())


__all__ = ["detect_encoding", "read_latex_file", "read_text_with_encoding_detection"]
