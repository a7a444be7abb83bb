#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/texctx/utils/__init__.py
"""Utility modules for the texctx package."""

from texctx.utils.encoding import read_latex_file, read_text_with_encoding_detection

__all__ = ["read_latex_file", "read_text_with_encoding_detection"]
